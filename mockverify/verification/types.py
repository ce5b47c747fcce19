"""
mockverify — Verification Types

Value types shared by the orchestrator and the matching strategies:
  - Ordering: which matching discipline a verification uses
  - ArgumentMatcher / InvocationMatcher: the expected-call predicates
  - Call: one expected call (matcher + representative invocation)
  - Bounds: the count range for unordered verification
  - VerificationResult: verdict produced by a strategy

Argument matchers are supplied by the caller. Only their match() and
str() are used here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mockverify.primitives.common import MockVerifyBaseModel
from mockverify.primitives.invocation import Invocation, MethodSignature

DEFAULT_AT_LEAST = 1


class Ordering(enum.StrEnum):
    """Matching discipline for a verification block."""

    UNORDERED = "unordered"
    ORDERED = "ordered"
    SEQUENCE = "sequence"


@runtime_checkable
class ArgumentMatcher(Protocol):
    """Predicate over a single argument value. str() describes it."""

    def match(self, value: Any) -> bool: ...


@dataclass(frozen=True, slots=True)
class InvocationMatcher:
    """Matches invocations on one double, one method, and per-position arguments."""

    target: Any
    method: MethodSignature
    args: tuple[ArgumentMatcher, ...] = ()

    def match(self, invocation: Invocation) -> bool:
        if invocation.target is not self.target:
            return False
        if invocation.method != self.method:
            return False
        if len(invocation.args) != len(self.args):
            return False
        return all(m.match(a) for m, a in zip(self.args, invocation.args, strict=True))

    def __str__(self) -> str:
        rendered = ", ".join(str(m) for m in self.args)
        return f"{self.target}.{self.method.name}({rendered})"


@dataclass(frozen=True, slots=True)
class Call:
    """
    One expected call of a verification block.

    The invocation is the representative call captured while the block was
    recorded; it is used only to find the targeted double and method.
    """

    matcher: InvocationMatcher
    invocation: Invocation

    @property
    def target(self) -> Any:
        return self.invocation.target

    @classmethod
    def of(cls, target: Any, method: MethodSignature, *args: ArgumentMatcher) -> Call:
        """Build a call whose representative invocation mirrors the matcher."""
        return cls(
            matcher=InvocationMatcher(target=target, method=method, args=tuple(args)),
            invocation=Invocation.create(target, method, *args),
        )


class Bounds(MockVerifyBaseModel):
    """
    Count range for UNORDERED verification.

    at_most=None means unbounded; exactly, when set, pins both ends.
    """

    model_config = {"frozen": True}

    at_least: int = DEFAULT_AT_LEAST
    at_most: int | None = None
    exactly: int | None = None

    @property
    def is_default(self) -> bool:
        return self.at_least == DEFAULT_AT_LEAST and self.at_most is None and self.exactly is None

    @property
    def minimum(self) -> int:
        return self.exactly if self.exactly is not None else self.at_least

    @property
    def maximum(self) -> int | None:
        return self.exactly if self.exactly is not None else self.at_most

    def contains(self, n: int) -> bool:
        if n < self.minimum:
            return False
        return self.maximum is None or n <= self.maximum


class VerificationResult(MockVerifyBaseModel):
    """Verdict of one strategy run. Terminal; never mutated."""

    model_config = {"frozen": True}

    matches: bool
    message: str | None = None

    @classmethod
    def passed(cls) -> VerificationResult:
        return cls(matches=True)

    @classmethod
    def failed(cls, message: str) -> VerificationResult:
        return cls(matches=False, message=message)
