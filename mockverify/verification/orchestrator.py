"""
mockverify — Verification Orchestrator

Runs one verification call end to end:
  1. validate the count bounds against the ordering (before anything else)
  2. open a session and record the expected calls
  3. run the strategy selected by the ordering
  4. turn the verdict into a no-op or an assertion failure, honouring inverse

Invariants:
  - Bounds other than the defaults are only accepted for UNORDERED
  - The session is IDLE with no declared calls when verify() returns or raises
  - Failure messages are built only on failing paths
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import structlog

from mockverify.verification.errors import (
    InvalidBoundsError,
    InverseVerificationFailedError,
    VerificationFailedError,
    VerificationSetupError,
)
from mockverify.verification.session import VerificationSession
from mockverify.verification.types import (
    DEFAULT_AT_LEAST,
    Bounds,
    Call,
    Ordering,
    VerificationResult,
)

if TYPE_CHECKING:
    from mockverify.verification.gateway import VerificationGateway

# Lazy proxy: each bind() picks up the structlog config current at call time.
logger = structlog.get_logger(system="mockverify.verification.orchestrator")

# Either the expected calls themselves, or a block that declares them on the
# session via session.expect(...).
Expectations = Iterable[Call] | Callable[[VerificationSession], object]


class Verifier:
    def __init__(self, gateway: VerificationGateway) -> None:
        self._gateway = gateway
        self._log = logger

    def verify(
        self,
        ordering: Ordering,
        expectations: Expectations,
        *,
        inverse: bool = False,
        at_least: int = DEFAULT_AT_LEAST,
        at_most: int | None = None,
        exactly: int | None = None,
    ) -> None:
        """
        Verify the expected calls against the recorded history.

        Raises:
            InvalidBoundsError: bounds unsupported by the ordering, or inconsistent.
            VerificationSetupError: the expectation block hit an import failure.
            VerificationFailedError: the history does not satisfy the expectation.
            InverseVerificationFailedError: inverse=True and the history satisfies it.
        """
        ordering = Ordering(ordering)
        bounds = _check_bounds(ordering, at_least, at_most, exactly)

        session = self._gateway.new_session()
        log = self._log.bind(session_id=session.session_id, ordering=ordering.value)

        with session.scope():
            session.start_verification()
            self._record(session, expectations, log)
            calls = session.begin_matching()
            try:
                outcome = self._run(ordering, calls, bounds)
                if self._gateway.config.log_outcomes:
                    log.debug(
                        "verification_done",
                        calls=len(calls),
                        matches=outcome.matches,
                        inverse=inverse,
                    )
                if outcome.matches == inverse:
                    log.info("verification_failed", inverse=inverse)
                _fail_if_not_passed(outcome, inverse, ordering)
            finally:
                session.done_verification()

    def _record(
        self,
        session: VerificationSession,
        expectations: Expectations,
        log: Any,
    ) -> None:
        if not callable(expectations):
            for call in expectations:
                session.expect(call)
            return

        try:
            expectations(session)
        except ImportError as exc:
            log.warning("verification_setup_failed", error=str(exc))
            raise VerificationSetupError(
                f"Could not build the verification block: {exc}. "
                "Check that every module the block touches is importable."
            ) from exc

    def _run(self, ordering: Ordering, calls: tuple[Call, ...], bounds: Bounds) -> VerificationResult:
        if ordering is Ordering.UNORDERED:
            return self._gateway.unordered.verify(calls, bounds)
        return self._gateway.positional_verifier(ordering).verify(calls)


def _check_bounds(
    ordering: Ordering,
    at_least: int,
    at_most: int | None,
    exactly: int | None,
) -> Bounds:
    bounds = Bounds(at_least=at_least, at_most=at_most, exactly=exactly)

    if ordering is not Ordering.UNORDERED and not bounds.is_default:
        raise InvalidBoundsError(
            "at_least, at_most, exactly is only allowed in unordered verify block"
        )
    if at_least < 0 or (at_most is not None and at_most < 0) or (exactly is not None and exactly < 0):
        raise InvalidBoundsError(
            f"Bounds must not be negative: at_least={at_least}, "
            f"at_most={at_most}, exactly={exactly}"
        )
    if exactly is None and at_most is not None and at_most < at_least:
        raise InvalidBoundsError(f"at_most ({at_most}) is below at_least ({at_least})")
    return bounds


def _fail_if_not_passed(outcome: VerificationResult, inverse: bool, ordering: Ordering) -> None:
    if inverse:
        if outcome.matches:
            raise InverseVerificationFailedError(outcome, ordering)
    elif not outcome.matches:
        raise VerificationFailedError(outcome, ordering)
