"""Application settings and logging setup."""

from __future__ import annotations
import logging
import os
from typing import Mapping

from pydantic import BaseModel, field_validator

from roomshell.models import RoomSettings

DEFAULT_BOOLEAN_ENGINE = "roomshell.core.csg:subtract"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppSettings(BaseModel):
    """Process-level settings, read once at startup."""
    log_level: str = "INFO"
    boolean_engine: str = DEFAULT_BOOLEAN_ENGINE  # "module:callable"; empty = no door cuts
    corner_angle: float = 165.0
    room: RoomSettings = RoomSettings()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if "ROOMSHELL_LOG_LEVEL" in env:
            values["log_level"] = env["ROOMSHELL_LOG_LEVEL"]
        if "ROOMSHELL_BOOLEAN_ENGINE" in env:
            values["boolean_engine"] = env["ROOMSHELL_BOOLEAN_ENGINE"]
        if "ROOMSHELL_CORNER_ANGLE" in env:
            values["corner_angle"] = env["ROOMSHELL_CORNER_ANGLE"]
        return cls.model_validate(values)


_handler: logging.Handler | None = None


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger. Safe to call again."""
    global _handler
    logger = logging.getLogger("roomshell")
    logger.setLevel(level.upper())
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
