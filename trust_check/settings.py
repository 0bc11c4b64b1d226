"""Runtime configuration read from environment variables.

Recognised variables:

- ``TRUST_CHECK_ASSESSMENT_VERSION`` – version tag stamped on payloads (default ``v5``)
- ``TRUST_CHECK_INCLUDE_RAW_DATA``   – echo raw responses in payloads (default ``true``)
- ``TRUST_CHECK_LOG_LEVEL``          – root log level for the dashboard (default ``INFO``)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class EngineSettings(BaseModel):
    """Settings shared by the payload formatter and the dashboard."""

    assessment_version: str = Field(default="v5", min_length=1, max_length=20)
    include_raw_data: bool = True
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LEVELS)}")
        return level


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "")
    if not raw:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_settings() -> EngineSettings:
    """Build :class:`EngineSettings` from the environment.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    settings = EngineSettings(
        assessment_version=os.getenv("TRUST_CHECK_ASSESSMENT_VERSION", "") or "v5",
        include_raw_data=_env_bool("TRUST_CHECK_INCLUDE_RAW_DATA", True),
        log_level=os.getenv("TRUST_CHECK_LOG_LEVEL", "") or "INFO",
    )
    logger.debug(
        "Settings: version=%s include_raw_data=%s log_level=%s",
        settings.assessment_version,
        settings.include_raw_data,
        settings.log_level,
    )
    return settings


def configure_logging(settings: EngineSettings) -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level))
