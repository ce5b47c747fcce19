"""
mockverify — Verification Error Hierarchy

All exceptions raised by the verification engine.

Two families that must never be mixed:
  MockVerifyError subclasses       -> the test setup is broken
  VerificationFailedError subclasses -> the assertion itself failed

VerificationFailedError derives from AssertionError so test runners report
it as a failed assertion rather than an error.

Codes:
  InvalidBoundsError              invalid_bounds
  SessionStateError               session_state
  VerificationSetupError          setup_failed
  VerificationFailedError         verification_failed
  InverseVerificationFailedError  inverse_verification_failed
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mockverify.verification.types import Ordering, VerificationResult


class MockVerifyError(RuntimeError):
    """Base for engine errors that are not assertion failures."""

    code = "mockverify_error"


class VerificationConfigError(MockVerifyError):
    """A verification call was configured inconsistently. Never retried."""

    code = "config_error"


class InvalidBoundsError(VerificationConfigError):
    """
    Count bounds that cannot apply to the requested verification.

    Raised for at_least/at_most/exactly under ORDERED or SEQUENCE, for
    negative bounds, and for at_most below at_least. Always raised before
    the session starts recording.
    """

    code = "invalid_bounds"


class SessionStateError(MockVerifyError):
    """A session was driven through a transition its state does not allow."""

    code = "session_state"


class VerificationSetupError(MockVerifyError):
    """
    The expectation block failed for environmental reasons.

    Wraps import-time failures raised while building expectations; the
    original exception is kept as __cause__.
    """

    code = "setup_failed"


class VerificationFailedError(AssertionError):
    """The recorded calls do not satisfy the expectation."""

    code = "verification_failed"
    prefix = "Verification failed"

    def __init__(self, result: VerificationResult, ordering: Ordering) -> None:
        explanation = f": {result.message}" if result.message is not None else ""
        super().__init__(f"{self.prefix}{explanation}")
        self.result = result
        self.ordering = ordering


class InverseVerificationFailedError(VerificationFailedError):
    """The recorded calls satisfy an expectation that was required to fail."""

    code = "inverse_verification_failed"
    prefix = "Inverse verification failed"
