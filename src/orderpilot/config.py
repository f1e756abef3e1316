"""
OrderPilot Configuration

Environment-driven settings and logging setup.

Variables:
    ORDERPILOT_LOG_LEVEL            Level for configure_logging() (default WARNING)
    ORDERPILOT_LAW_SAMPLE_LIMIT     Max samples used by transitivity checks (default 64)
    ORDERPILOT_STRICT_PACK_VERSION  Reject rule packs with another major schema
                                    version (default true)

The library itself installs no log handlers. Applications that want the
structured JSON log lines call configure_logging() once at startup.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = "orderpilot"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LAW_SAMPLE_LIMIT = 64
DEFAULT_STRICT_PACK_VERSION = True


# =============================================================================
# Settings
# =============================================================================

@dataclass(frozen=True)
class OrderPilotConfig:
    """Resolved settings."""
    log_level: str = DEFAULT_LOG_LEVEL
    law_sample_limit: int = DEFAULT_LAW_SAMPLE_LIMIT
    strict_pack_version: bool = DEFAULT_STRICT_PACK_VERSION


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(LOGGER_NAME).warning(
            "Ignoring %s=%r (not an integer), using %d", name, raw, default
        )
        return default
    # Transitivity needs at least three samples to mean anything
    return max(value, 3)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> OrderPilotConfig:
    """Read settings from the current environment."""
    return OrderPilotConfig(
        log_level=os.getenv("ORDERPILOT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        law_sample_limit=_env_int("ORDERPILOT_LAW_SAMPLE_LIMIT", DEFAULT_LAW_SAMPLE_LIMIT),
        strict_pack_version=_env_bool(
            "ORDERPILOT_STRICT_PACK_VERSION", DEFAULT_STRICT_PACK_VERSION
        ),
    )


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        if hasattr(record, "rule_id"):
            log_entry["rule_id"] = record.rule_id
        if hasattr(record, "pack_path"):
            log_entry["pack_path"] = record.pack_path
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a JSON stream handler to the orderpilot logger.

    Safe to call more than once: the handler is only added the first time,
    later calls just update the level.

    Args:
        level: Level name; defaults to ORDERPILOT_LOG_LEVEL

    Returns:
        The configured "orderpilot" logger
    """
    level_name = (level or load_config().log_level).upper()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    if not any(getattr(h, "_orderpilot", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        handler._orderpilot = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
