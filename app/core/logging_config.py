"""Logging setup aligned with uvicorn's default formatters."""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from app.core.config import get_settings

_PLANNER_LOGGER = "app"


def _resolve_log_level(level: str | None = None) -> str:
    if level:
        return level.upper()
    return (get_settings().LOG_LEVEL or "INFO").upper()


def build_logging_config(level: str | None = None) -> dict[str, Any]:
    """Build a dictConfig payload reusing uvicorn's handlers and formatters."""
    log_level = _resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["root"] = {"handlers": ["default"], "level": log_level}

    config["loggers"]["uvicorn"]["level"] = log_level
    config["loggers"]["uvicorn.error"]["level"] = log_level
    config["loggers"]["uvicorn.access"]["level"] = log_level
    config["loggers"][_PLANNER_LOGGER] = {"level": log_level, "propagate": True}

    return config


def configure_logging(level: str | None = None) -> None:
    """Apply the logging configuration through dictConfig."""
    logging.config.dictConfig(build_logging_config(level))
