"""
mockverify — Call Verification Engine

Decides whether the recorded calls on test doubles satisfy a set of
expected calls under one of three orderings:

  UNORDERED  each expected call matched a bounded number of times
  ORDERED    expected calls appear as a subsequence of the merged history
  SEQUENCE   the merged history is exactly the expected calls, in order
"""

from mockverify.verification.api import verify, verify_not, verify_order, verify_sequence
from mockverify.verification.errors import (
    InvalidBoundsError,
    InverseVerificationFailedError,
    MockVerifyError,
    SessionStateError,
    VerificationConfigError,
    VerificationFailedError,
    VerificationSetupError,
)
from mockverify.verification.gateway import (
    VerificationGateway,
    default_gateway,
    set_default_gateway,
)
from mockverify.verification.orchestrator import Verifier
from mockverify.verification.ordered import OrderedCallVerifier
from mockverify.verification.sequence import SequenceCallVerifier
from mockverify.verification.session import SessionState, VerificationSession
from mockverify.verification.types import (
    ArgumentMatcher,
    Bounds,
    Call,
    InvocationMatcher,
    Ordering,
    VerificationResult,
)
from mockverify.verification.unordered import UnorderedCallVerifier

__all__ = [
    "ArgumentMatcher",
    "Bounds",
    "Call",
    "InvalidBoundsError",
    "InverseVerificationFailedError",
    "InvocationMatcher",
    "MockVerifyError",
    "OrderedCallVerifier",
    "Ordering",
    "SequenceCallVerifier",
    "SessionState",
    "SessionStateError",
    "UnorderedCallVerifier",
    "VerificationConfigError",
    "VerificationFailedError",
    "VerificationGateway",
    "VerificationResult",
    "VerificationSession",
    "VerificationSetupError",
    "Verifier",
    "default_gateway",
    "set_default_gateway",
    "verify",
    "verify_not",
    "verify_order",
    "verify_sequence",
]
