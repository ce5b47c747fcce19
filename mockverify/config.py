"""
mockverify — Configuration System

All configuration is Pydantic-validated and loaded from:
1. a YAML file (optional)
2. Environment variables (overrides), prefixed MOCKVERIFY_

Example:
    MOCKVERIFY_LOGGING__LEVEL=DEBUG
    MOCKVERIFY_VERIFICATION__MAX_LISTED_CALLS=50
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ─── Sub-configs ──────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"


class VerificationConfig(BaseModel):
    # Emit a debug event for every verdict.
    log_outcomes: bool = True
    # Truncate call listings in failure messages. None keeps full listings.
    max_listed_calls: int | None = Field(default=None, ge=1)


# ─── Root ─────────────────────────────────────────────────────────


class MockVerifyConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOCKVERIFY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path | None = None) -> MockVerifyConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.

    A missing file is not an error; defaults apply.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    # Init kwargs outrank env vars in pydantic-settings; re-inject overrides
    # so the environment wins over the YAML file.
    import os

    if level := os.environ.get("MOCKVERIFY_LOGGING__LEVEL"):
        raw.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("MOCKVERIFY_LOGGING__FORMAT"):
        raw.setdefault("logging", {})["format"] = fmt
    if log_outcomes := os.environ.get("MOCKVERIFY_VERIFICATION__LOG_OUTCOMES"):
        raw.setdefault("verification", {})["log_outcomes"] = (
            log_outcomes.lower() in ("true", "1", "yes")
        )
    if max_listed := os.environ.get("MOCKVERIFY_VERIFICATION__MAX_LISTED_CALLS"):
        raw.setdefault("verification", {})["max_listed_calls"] = int(max_listed)

    return MockVerifyConfig(**raw)
