"""
mockverify — Invocation Primitives

The read-only inputs of verification: method signatures, recorded
invocations, and the per-double call history the engine folds over.

Invariants:
  - Invocation is immutable once created
  - Timestamps come from one process-wide counter, so they are unique and
    strictly increasing in creation order
  - CallHistory is append-only; all_recorded_calls() returns a snapshot
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

_timestamps = itertools.count(1)


def next_timestamp() -> int:
    """Next value of the process-wide invocation clock."""
    return next(_timestamps)


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """Name plus parameter type names; equality is structural."""

    name: str
    param_types: tuple[str, ...] = ()

    def to_str(self) -> str:
        return f"{self.name}({', '.join(self.param_types)})"

    def __str__(self) -> str:
        return self.to_str()


@dataclass(frozen=True, slots=True)
class Invocation:
    """One recorded call against a test double."""

    target: Any
    method: MethodSignature
    args: tuple[Any, ...] = ()
    timestamp: int = field(default_factory=next_timestamp)

    @classmethod
    def create(cls, target: Any, method: MethodSignature, *args: Any) -> Invocation:
        return cls(target=target, method=method, args=tuple(args))

    def __str__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"{self.target}.{self.method.name}({rendered})"


@runtime_checkable
class MockInstance(Protocol):
    """A test double that exposes its recorded calls in timestamp order."""

    def all_recorded_calls(self) -> Sequence[Invocation]: ...


class CallHistory:
    """
    Append-only, timestamp-ordered log of invocations for one double.

    Doubles own their history; the verification engine only reads the
    snapshots handed out by all_recorded_calls().
    """

    def __init__(self) -> None:
        self._calls: list[Invocation] = []

    def record(self, invocation: Invocation) -> Invocation:
        if self._calls and invocation.timestamp <= self._calls[-1].timestamp:
            raise ValueError(
                f"Invocation timestamp {invocation.timestamp} is not after "
                f"the last recorded timestamp {self._calls[-1].timestamp}"
            )
        self._calls.append(invocation)
        return invocation

    def all_recorded_calls(self) -> tuple[Invocation, ...]:
        return tuple(self._calls)

    def __len__(self) -> int:
        return len(self._calls)
