"""
mockverify — Call History Access

Read-only views over the doubles' recorded calls, taken once per
verification.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mockverify.primitives.invocation import Invocation, MockInstance
from mockverify.verification.errors import VerificationConfigError
from mockverify.verification.types import Call


def recorded_calls(target: Any) -> Sequence[Invocation]:
    """Snapshot of one double's history."""
    if not isinstance(target, MockInstance):
        raise VerificationConfigError(
            f"{target!r} is not a test double: it does not expose all_recorded_calls()"
        )
    return target.all_recorded_calls()


def all_calls(calls: Sequence[Call]) -> list[Invocation]:
    """
    Chronological union of the histories of every double the calls target.

    Doubles are deduplicated by identity, not equality, so two equal doubles
    both contribute while one double named twice contributes once.
    """
    targets: dict[int, Any] = {}
    for call in calls:
        targets.setdefault(id(call.target), call.target)

    merged: list[Invocation] = []
    for target in targets.values():
        merged.extend(recorded_calls(target))
    return sorted(merged, key=lambda inv: inv.timestamp)
