"""
mockverify — Verification Session

Explicit recording session for one verification call. Replaces ambient
per-thread recorder state: the orchestrator creates a session, drives it
through its phases, and releases it on every exit path.

States:
  IDLE       no expectations held
  RECORDING  the expectation block is declaring calls
  VERIFYING  a strategy is matching the declared calls

Transitions:
  IDLE      -> RECORDING  start_verification()
  RECORDING -> VERIFYING  begin_matching()
  VERIFYING -> IDLE       done_verification()
  any       -> IDLE       cancel()   (idempotent, drops declared calls)
"""

from __future__ import annotations

import contextlib
import enum
from collections.abc import Iterator
from datetime import datetime

import structlog

from mockverify.primitives.common import new_id, utc_now
from mockverify.verification.errors import SessionStateError
from mockverify.verification.types import Call

logger = structlog.get_logger(system="mockverify.verification.session")


class SessionState(enum.StrEnum):
    IDLE = "idle"
    RECORDING = "recording"
    VERIFYING = "verifying"


class VerificationSession:
    def __init__(self) -> None:
        self.session_id = new_id()
        self.started_at: datetime | None = None
        self._state = SessionState.IDLE
        self._calls: list[Call] = []
        self._log = logger.bind(session_id=self.session_id)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def calls(self) -> tuple[Call, ...]:
        return tuple(self._calls)

    def start_verification(self) -> None:
        self._require(SessionState.IDLE, "start_verification")
        self._state = SessionState.RECORDING
        self.started_at = utc_now()
        self._log = logger.bind(
            session_id=self.session_id, started_at=self.started_at.isoformat()
        )

    def expect(self, call: Call) -> Call:
        """Declare one expected call. Only valid inside the expectation block."""
        self._require(SessionState.RECORDING, "expect")
        self._calls.append(call)
        return call

    def begin_matching(self) -> tuple[Call, ...]:
        self._require(SessionState.RECORDING, "begin_matching")
        self._state = SessionState.VERIFYING
        return tuple(self._calls)

    def done_verification(self) -> None:
        self._require(SessionState.VERIFYING, "done_verification")
        self._reset()

    def cancel(self) -> None:
        if self._state is not SessionState.IDLE:
            self._log.debug("session_cancelled", state=self._state.value, calls=len(self._calls))
        self._reset()

    @contextlib.contextmanager
    def scope(self) -> Iterator[VerificationSession]:
        """Yield the session; cancel it if anything escapes the block."""
        try:
            yield self
        except BaseException:
            self.cancel()
            raise

    def _require(self, expected: SessionState, operation: str) -> None:
        if self._state is not expected:
            raise SessionStateError(
                f"Cannot {operation} while session {self.session_id} is "
                f"{self._state.value}; expected {expected.value}"
            )

    def _reset(self) -> None:
        self._state = SessionState.IDLE
        self._calls.clear()
