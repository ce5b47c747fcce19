"""
mockverify — Unordered Call Verifier

Counted matching: each expected call is checked independently against its
own double's history and must match a number of recorded calls inside the
bounds. Order in the block only numbers the calls in diagnostics.

Failure messages distinguish four situations:
  - the double was never touched
  - the double was used, but not through this method
  - the method was called, but with other arguments
  - matching calls exist, but not the required number of them

A range that admits zero (at_least=0 or exactly=0) passes whenever nothing
matches, including when the method was never called.
"""

from __future__ import annotations

from collections.abc import Sequence

from mockverify.primitives.invocation import Invocation
from mockverify.verification.formatting import (
    at_most_msg,
    describe_argument_difference,
    format_calls,
)
from mockverify.verification.history import recorded_calls
from mockverify.verification.types import Bounds, Call, VerificationResult


class UnorderedCallVerifier:
    def __init__(self, max_listed_calls: int | None = None) -> None:
        self._limit = max_listed_calls

    def verify(self, calls: Sequence[Call], bounds: Bounds) -> VerificationResult:
        for i, call in enumerate(calls):
            result = self._match_call(call, bounds, f"call {i + 1} of {len(calls)}.")
            if not result.matches:
                return result
        return VerificationResult.passed()

    def _match_call(self, call: Call, bounds: Bounds, call_idx_msg: str) -> VerificationResult:
        target = call.target
        method = call.matcher.method
        all_for_mock = recorded_calls(target)
        same_method = [inv for inv in all_for_mock if inv.method == method]

        if not same_method:
            if bounds.contains(0):
                return VerificationResult.passed()
            if not all_for_mock:
                return VerificationResult.failed(
                    f"{call_idx_msg} No calls for {target}/{method.to_str()}"
                )
            return VerificationResult.failed(
                f"{call_idx_msg} No calls for {target}/{method.to_str()}.\n"
                f"Calls to same mock:\n{format_calls(all_for_mock, self._limit)}"
            )

        if len(same_method) == 1:
            return self._match_only_call(call, same_method[0], bounds, call_idx_msg)

        n = sum(1 for inv in same_method if call.matcher.match(inv))
        if bounds.contains(n):
            return VerificationResult.passed()
        if n == 0:
            return VerificationResult.failed(
                f"{call_idx_msg} No matching calls found.\n"
                f"Calls to same method:\n{format_calls(same_method, self._limit)}"
            )
        return VerificationResult.failed(
            f"{call_idx_msg} {n} matching calls found, "
            f"but needs at least {bounds.minimum}{at_most_msg(bounds.maximum)} calls"
        )

    def _match_only_call(
        self,
        call: Call,
        only_call: Invocation,
        bounds: Bounds,
        call_idx_msg: str,
    ) -> VerificationResult:
        if not call.matcher.match(only_call):
            if bounds.contains(0):
                return VerificationResult.passed()
            return VerificationResult.failed(
                f"{call_idx_msg} Only one matching call to "
                f"{call.target}/{call.matcher.method.to_str()} happened, "
                "but arguments are not matching:\n"
                + describe_argument_difference(call.matcher, only_call)
            )
        if bounds.contains(1):
            return VerificationResult.passed()
        return VerificationResult.failed(
            f"{call_idx_msg} One matching call found, "
            f"but needs at least {bounds.minimum}{at_most_msg(bounds.maximum)} calls"
        )
