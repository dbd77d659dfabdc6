import logging
import os
from dataclasses import dataclass

from otl_engine.time_budget import SessionTimeLimits

_LOG_FORMATS = ("json", "text")


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Config:
    log_format: str = "text"
    log_level: str = "WARNING"
    session_min_minutes: int = 45
    session_max_minutes: int = 90
    session_target_minutes: int = 60

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("OTL_LOG_FORMAT", "text").lower()
        if log_format not in _LOG_FORMATS:
            raise RuntimeError(f"OTL_LOG_FORMAT must be one of {', '.join(_LOG_FORMATS)}")

        log_level = os.environ.get("OTL_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"OTL_LOG_LEVEL is not a logging level: {log_level}")

        minimum = _int_env("OTL_SESSION_MIN_MINUTES", 45)
        maximum = _int_env("OTL_SESSION_MAX_MINUTES", 90)
        target = _int_env("OTL_SESSION_TARGET_MINUTES", 60)
        if maximum < minimum:
            raise RuntimeError("OTL_SESSION_MAX_MINUTES must not be below OTL_SESSION_MIN_MINUTES")

        return cls(
            log_format=log_format,
            log_level=log_level,
            session_min_minutes=minimum,
            session_max_minutes=maximum,
            session_target_minutes=target,
        )

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    @property
    def session_limits(self) -> SessionTimeLimits:
        return SessionTimeLimits(
            minimum=self.session_min_minutes,
            maximum=self.session_max_minutes,
            target=self.session_target_minutes,
        )
