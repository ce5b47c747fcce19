"""
mockverify — Verification Gateway

Wires the engine together: one instance of each matching strategy, the
orchestrator, and a factory for per-call sessions. Strategies are resolved
from the ordering through a lookup table.

The gateway holds no per-verification state, so one instance can serve
every thread. default_gateway() lazily builds the process-wide instance
from load_config() and applies its logging level.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Protocol

import structlog

from mockverify.config import VerificationConfig, load_config
from mockverify.telemetry.logging import apply_log_level
from mockverify.verification.orchestrator import Verifier
from mockverify.verification.ordered import OrderedCallVerifier
from mockverify.verification.sequence import SequenceCallVerifier
from mockverify.verification.session import VerificationSession
from mockverify.verification.types import Call, Ordering, VerificationResult
from mockverify.verification.unordered import UnorderedCallVerifier

logger = structlog.get_logger(system="mockverify.verification.gateway")

CallVerifier = UnorderedCallVerifier | OrderedCallVerifier | SequenceCallVerifier


class PositionalCallVerifier(Protocol):
    """Strategy that matches by position and takes no count bounds."""

    def verify(self, calls: Sequence[Call]) -> VerificationResult: ...


class VerificationGateway:
    def __init__(self, config: VerificationConfig | None = None) -> None:
        self.config = config or VerificationConfig()
        limit = self.config.max_listed_calls
        self.unordered = UnorderedCallVerifier(max_listed_calls=limit)
        self.ordered = OrderedCallVerifier(max_listed_calls=limit)
        self.sequence = SequenceCallVerifier(max_listed_calls=limit)
        self._positional: dict[Ordering, PositionalCallVerifier] = {
            Ordering.ORDERED: self.ordered,
            Ordering.SEQUENCE: self.sequence,
        }
        self.verifier = Verifier(self)
        logger.debug("gateway_created", max_listed_calls=limit)

    def verifier_for(self, ordering: Ordering) -> CallVerifier:
        ordering = Ordering(ordering)
        if ordering is Ordering.UNORDERED:
            return self.unordered
        return self.ordered if ordering is Ordering.ORDERED else self.sequence

    def positional_verifier(self, ordering: Ordering) -> PositionalCallVerifier:
        """Strategy for ORDERED or SEQUENCE. UNORDERED needs bounds; use .unordered."""
        ordering = Ordering(ordering)
        if ordering not in self._positional:
            raise ValueError(f"{ordering.value} verification is not positional")
        return self._positional[ordering]

    def new_session(self) -> VerificationSession:
        return VerificationSession()


_default: VerificationGateway | None = None
_default_lock = threading.Lock()


def default_gateway() -> VerificationGateway:
    global _default
    with _default_lock:
        if _default is None:
            config = load_config()
            apply_log_level(config.logging)
            _default = VerificationGateway(config.verification)
        return _default


def set_default_gateway(gateway: VerificationGateway | None) -> None:
    """Replace the process-wide gateway; None rebuilds it on next use."""
    global _default
    with _default_lock:
        _default = gateway
