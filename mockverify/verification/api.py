"""
mockverify — Public Verification API

Module-level entry points over the default gateway:

    verify([Call.of(repo, SAVE, Eq(user))], exactly=1)
    verify_order([Call.of(repo, OPEN), Call.of(repo, CLOSE)])
    verify_sequence(lambda s: s.expect(Call.of(repo, OPEN)))
    verify_not([Call.of(repo, DELETE, Anything())])
"""

from __future__ import annotations

from mockverify.verification.gateway import VerificationGateway, default_gateway
from mockverify.verification.orchestrator import Expectations
from mockverify.verification.types import DEFAULT_AT_LEAST, Ordering


def verify(
    expectations: Expectations,
    *,
    inverse: bool = False,
    at_least: int = DEFAULT_AT_LEAST,
    at_most: int | None = None,
    exactly: int | None = None,
    ordering: Ordering = Ordering.UNORDERED,
    gateway: VerificationGateway | None = None,
) -> None:
    """Verify the expected calls; counted matching unless another ordering is given."""
    (gateway or default_gateway()).verifier.verify(
        ordering,
        expectations,
        inverse=inverse,
        at_least=at_least,
        at_most=at_most,
        exactly=exactly,
    )


def verify_order(
    expectations: Expectations,
    *,
    inverse: bool = False,
    gateway: VerificationGateway | None = None,
) -> None:
    """The expected calls happened in this order, other calls interleaved or not."""
    verify(expectations, inverse=inverse, ordering=Ordering.ORDERED, gateway=gateway)


def verify_sequence(
    expectations: Expectations,
    *,
    inverse: bool = False,
    gateway: VerificationGateway | None = None,
) -> None:
    """The touched doubles received exactly these calls, in exactly this order."""
    verify(expectations, inverse=inverse, ordering=Ordering.SEQUENCE, gateway=gateway)


def verify_not(
    expectations: Expectations,
    *,
    ordering: Ordering = Ordering.UNORDERED,
    gateway: VerificationGateway | None = None,
) -> None:
    """Inverse verification: passes only when the expectation is not met."""
    verify(expectations, inverse=True, ordering=ordering, gateway=gateway)
