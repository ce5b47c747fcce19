"""
mockverify — Sequence Call Verifier

Exact matching: the merged history of the touched doubles must have
exactly one recorded call per expected call, position for position. No
gaps and no extra calls to those doubles. The length check runs before any
matcher is evaluated.
"""

from __future__ import annotations

from collections.abc import Sequence

from mockverify.verification.formatting import report_calls
from mockverify.verification.history import all_calls
from mockverify.verification.types import Call, VerificationResult


class SequenceCallVerifier:
    def __init__(self, max_listed_calls: int | None = None) -> None:
        self._limit = max_listed_calls

    def verify(self, calls: Sequence[Call]) -> VerificationResult:
        history = all_calls(calls)

        if len(history) != len(calls):
            return VerificationResult.failed(
                "number of calls happened not matching exact number of verification sequence"
                + report_calls(calls, history, self._limit)
            )

        for call, invocation in zip(calls, history, strict=True):
            if not call.matcher.match(invocation):
                return VerificationResult.failed(
                    "calls are not exactly matching verification sequence"
                    + report_calls(calls, history, self._limit)
                )

        return VerificationResult.passed()
