"""
mockverify — Ordered Call Verifier

Subsequence matching: every expected call must match a distinct recorded
call, in the order given, across the merged history of all doubles the
block touches. Unrelated calls may be interleaved anywhere.

The check is a longest-common-subsequence pass where equality is replaced
by matcher acceptance. Two rolling rows of length len(calls) are swapped
after each recorded call, so memory is O(len(calls)) and time is
O(len(calls) * len(history)).
"""

from __future__ import annotations

from collections.abc import Sequence

from mockverify.verification.formatting import report_calls
from mockverify.verification.history import all_calls
from mockverify.verification.types import Call, VerificationResult


class OrderedCallVerifier:
    def __init__(self, max_listed_calls: int | None = None) -> None:
        self._limit = max_listed_calls

    def verify(self, calls: Sequence[Call]) -> VerificationResult:
        history = all_calls(calls)

        if len(calls) > len(history):
            return VerificationResult.failed(
                "less calls happened than demanded by order verification sequence. "
                + report_calls(calls, history, self._limit)
            )

        matchers = [c.matcher for c in calls]
        prev = [0] * len(matchers)
        curr = [0] * len(matchers)
        for invocation in history:
            for j, matcher in enumerate(matchers):
                if matcher.match(invocation):
                    curr[j] = 1 if j == 0 else prev[j - 1] + 1
                else:
                    curr[j] = max(prev[j], 0 if j == 0 else curr[j - 1])
            prev, curr = curr, prev

        # every matcher consumed, in order
        if not matchers or prev[-1] == len(matchers):
            return VerificationResult.passed()
        return VerificationResult.failed(
            "calls are not in verification order" + report_calls(calls, history, self._limit)
        )
