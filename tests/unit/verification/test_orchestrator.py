"""
Unit tests for the Verifier orchestrator.

Tests bounds validation per ordering, the pass/fail decision with and
without inverse, expectation blocks, and that the session is released on
every exit path.
"""

from __future__ import annotations

import pytest

from mockverify.primitives.invocation import MethodSignature
from mockverify.verification.errors import (
    InvalidBoundsError,
    InverseVerificationFailedError,
    VerificationConfigError,
    VerificationFailedError,
    VerificationSetupError,
)
from mockverify.verification.session import SessionState, VerificationSession
from mockverify.verification.types import Call, Ordering

OPEN = MethodSignature("open", ("int",))
CLOSE = MethodSignature("close")


# ── Helpers ──────────────────────────────────────────────────────────────────


def _track_sessions(gateway, monkeypatch) -> list[VerificationSession]:
    """Record every session the gateway hands out."""
    created: list[VerificationSession] = []
    original = gateway.new_session

    def _new_session() -> VerificationSession:
        session = original()
        created.append(session)
        return session

    monkeypatch.setattr(gateway, "new_session", _new_session)
    return created


# ── TestBoundsValidation ─────────────────────────────────────────────────────


class TestBoundsValidation:
    @pytest.mark.parametrize("ordering", [Ordering.ORDERED, Ordering.SEQUENCE])
    @pytest.mark.parametrize(
        "bounds",
        [{"exactly": 1}, {"at_least": 2}, {"at_least": 0}, {"at_most": 3}],
    )
    def test_bounds_rejected_outside_unordered(
        self, gateway, make_double, monkeypatch, ordering, bounds
    ):
        repo = make_double("repo")
        repo.call(CLOSE)
        sessions = _track_sessions(gateway, monkeypatch)

        with pytest.raises(InvalidBoundsError, match="only allowed in unordered verify block"):
            gateway.verifier.verify(ordering, [Call.of(repo, CLOSE)], **bounds)

        assert sessions == []

    def test_bounds_error_even_when_inverse(self, gateway, make_double):
        repo = make_double("repo")

        with pytest.raises(InvalidBoundsError):
            gateway.verifier.verify(
                Ordering.SEQUENCE, [Call.of(repo, CLOSE)], inverse=True, exactly=0
            )

    @pytest.mark.parametrize(
        "bounds",
        [{"at_least": -1}, {"at_most": -1, "at_least": 0}, {"exactly": -2}],
    )
    def test_negative_bounds_rejected(self, gateway, make_double, bounds):
        repo = make_double("repo")

        with pytest.raises(InvalidBoundsError, match="must not be negative"):
            gateway.verifier.verify(Ordering.UNORDERED, [Call.of(repo, CLOSE)], **bounds)

    def test_inverted_range_rejected(self, gateway, make_double):
        repo = make_double("repo")

        with pytest.raises(InvalidBoundsError, match="below at_least"):
            gateway.verifier.verify(
                Ordering.UNORDERED, [Call.of(repo, CLOSE)], at_least=3, at_most=2
            )

    def test_exactly_overrides_range(self, gateway, make_double):
        repo = make_double("repo")
        repo.call(CLOSE)
        repo.call(CLOSE)

        gateway.verifier.verify(
            Ordering.UNORDERED, [Call.of(repo, CLOSE)], at_least=5, at_most=9, exactly=2
        )

    def test_invalid_bounds_is_config_error(self):
        assert issubclass(InvalidBoundsError, VerificationConfigError)


# ── TestDecision ─────────────────────────────────────────────────────────────


class TestDecision:
    def test_pass_returns_none(self, gateway, make_double, eq):
        repo = make_double("repo")
        repo.call(OPEN, 1)

        assert gateway.verifier.verify(Ordering.UNORDERED, [Call.of(repo, OPEN, eq(1))]) is None

    def test_failure_carries_strategy_message(self, gateway, make_double, eq):
        repo = make_double("repo")

        with pytest.raises(VerificationFailedError) as excinfo:
            gateway.verifier.verify(Ordering.UNORDERED, [Call.of(repo, OPEN, eq(1))])

        err = excinfo.value
        assert str(err) == "Verification failed: call 1 of 1. No calls for repo/open(int)"
        assert isinstance(err, AssertionError)
        assert err.code == "verification_failed"
        assert err.ordering is Ordering.UNORDERED
        assert err.result.matches is False

    def test_inverse_passes_when_expectation_unmet(self, gateway, make_double, eq):
        repo = make_double("repo")

        gateway.verifier.verify(Ordering.UNORDERED, [Call.of(repo, OPEN, eq(1))], inverse=True)

    def test_inverse_fails_when_expectation_met(self, gateway, make_double, eq):
        repo = make_double("repo")
        repo.call(OPEN, 1)

        with pytest.raises(InverseVerificationFailedError) as excinfo:
            gateway.verifier.verify(
                Ordering.UNORDERED, [Call.of(repo, OPEN, eq(1))], inverse=True
            )

        assert str(excinfo.value) == "Inverse verification failed"
        assert excinfo.value.code == "inverse_verification_failed"

    def test_ordering_accepts_plain_string(self, gateway, make_double):
        repo = make_double("repo")
        repo.call(CLOSE)

        gateway.verifier.verify("sequence", [Call.of(repo, CLOSE)])

    @pytest.mark.parametrize("ordering", list(Ordering))
    @pytest.mark.parametrize("history", [[], [1], [2, 1], [1, 2], [1, 2, 1]])
    def test_inverse_symmetry(self, gateway, make_double, eq, ordering, history):
        repo = make_double("repo")
        for value in history:
            repo.call(OPEN, value)
        calls = [Call.of(repo, OPEN, eq(1)), Call.of(repo, OPEN, eq(2))]

        def _passes(inverse: bool) -> bool:
            try:
                gateway.verifier.verify(ordering, calls, inverse=inverse)
            except VerificationFailedError:
                return False
            return True

        assert _passes(inverse=True) is not _passes(inverse=False)


# ── TestScenarios ────────────────────────────────────────────────────────────


class TestScenarios:
    def test_ordered_passes_and_sequence_fails_on_extra_call(self, gateway, make_double, eq):
        repo = make_double("repo")
        repo.call(OPEN, 1)
        repo.call(CLOSE)
        repo.call(OPEN, 1)
        calls = [Call.of(repo, OPEN, eq(1)), Call.of(repo, CLOSE)]

        gateway.verifier.verify(Ordering.ORDERED, calls)
        with pytest.raises(VerificationFailedError, match="number of calls happened not matching"):
            gateway.verifier.verify(Ordering.SEQUENCE, calls)

    def test_ordered_reports_wrong_order(self, gateway, make_double, eq):
        repo = make_double("repo")
        repo.call(CLOSE)
        repo.call(OPEN, 1)

        with pytest.raises(VerificationFailedError, match="not in verification order"):
            gateway.verifier.verify(
                Ordering.ORDERED, [Call.of(repo, OPEN, eq(1)), Call.of(repo, CLOSE)]
            )


# ── TestSessionLifecycle ─────────────────────────────────────────────────────


class TestSessionLifecycle:
    def test_block_declares_calls(self, gateway, make_double, eq, monkeypatch):
        repo = make_double("repo")
        repo.call(OPEN, 1)
        sessions = _track_sessions(gateway, monkeypatch)

        gateway.verifier.verify(
            Ordering.UNORDERED, lambda s: s.expect(Call.of(repo, OPEN, eq(1)))
        )

        assert sessions[0].state is SessionState.IDLE
        assert sessions[0].calls == ()

    def test_session_idle_after_failure(self, gateway, make_double, eq, monkeypatch):
        repo = make_double("repo")
        sessions = _track_sessions(gateway, monkeypatch)

        with pytest.raises(VerificationFailedError):
            gateway.verifier.verify(Ordering.UNORDERED, [Call.of(repo, OPEN, eq(1))])

        assert sessions[0].state is SessionState.IDLE
        assert sessions[0].calls == ()

    def test_block_error_reraised_and_session_cancelled(self, gateway, make_double, monkeypatch):
        repo = make_double("repo")
        sessions = _track_sessions(gateway, monkeypatch)
        boom = ValueError("broken fixture")

        def _block(session: VerificationSession) -> None:
            session.expect(Call.of(repo, CLOSE))
            raise boom

        with pytest.raises(ValueError) as excinfo:
            gateway.verifier.verify(Ordering.UNORDERED, _block)

        assert excinfo.value is boom
        assert sessions[0].state is SessionState.IDLE
        assert sessions[0].calls == ()

    def test_import_error_wrapped(self, gateway, monkeypatch):
        sessions = _track_sessions(gateway, monkeypatch)

        def _block(session: VerificationSession) -> None:
            raise ModuleNotFoundError("No module named 'missing_dependency'")

        with pytest.raises(VerificationSetupError, match="missing_dependency") as excinfo:
            gateway.verifier.verify(Ordering.ORDERED, _block)

        assert isinstance(excinfo.value.__cause__, ImportError)
        assert excinfo.value.code == "setup_failed"
        assert sessions[0].state is SessionState.IDLE

    def test_next_verification_unaffected_by_failed_one(self, gateway, make_double, eq):
        repo = make_double("repo")
        repo.call(CLOSE)

        with pytest.raises(VerificationFailedError):
            gateway.verifier.verify(Ordering.SEQUENCE, [Call.of(repo, OPEN, eq(1))])

        gateway.verifier.verify(Ordering.SEQUENCE, [Call.of(repo, CLOSE)])
