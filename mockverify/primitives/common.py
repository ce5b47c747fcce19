"""
mockverify — Common Primitives

Shared base classes and utilities used across the verification engine.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel
from ulid import ULID


def new_id() -> str:
    """Generate a new ULID string. Time-sortable, globally unique."""
    return str(ULID())


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


# ─── Base Models ──────────────────────────────────────────────────


class MockVerifyBaseModel(BaseModel):
    """Base model for all mockverify value types."""

    model_config = {"populate_by_name": True, "from_attributes": True}
