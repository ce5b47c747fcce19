"""
Shared fakes for the verification tests.

FakeDouble stands in for a real test double: it records invocations into a
CallHistory and exposes them through all_recorded_calls(). Eq and AnyArg are
the minimal argument matchers the tests need.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mockverify.primitives.invocation import CallHistory, Invocation, MethodSignature
from mockverify.verification.gateway import VerificationGateway


class FakeDouble:
    def __init__(self, name: str) -> None:
        self.name = name
        self.history = CallHistory()

    def call(self, method: MethodSignature, *args: Any) -> Invocation:
        return self.history.record(Invocation.create(self, method, *args))

    def all_recorded_calls(self) -> tuple[Invocation, ...]:
        return self.history.all_recorded_calls()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FakeDouble({self.name!r})"


class Eq:
    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def match(self, value: Any) -> bool:
        return value == self.expected

    def __str__(self) -> str:
        return f"eq({self.expected!r})"


class AnyArg:
    def match(self, value: Any) -> bool:
        return True

    def __str__(self) -> str:
        return "any()"


@pytest.fixture
def make_double() -> Callable[[str], FakeDouble]:
    return FakeDouble


@pytest.fixture
def eq() -> type[Eq]:
    return Eq


@pytest.fixture
def any_arg() -> AnyArg:
    return AnyArg()


@pytest.fixture
def gateway() -> VerificationGateway:
    return VerificationGateway()
