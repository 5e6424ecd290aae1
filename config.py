"""Configuration for the phishing/spam detection tool."""

from dataclasses import dataclass
import logging.config
import os
from typing import Optional


@dataclass(frozen=True)
class Settings:
    request_timeout: float = 6.0
    user_agent: str = "PhishDetector/1.0 (+https://example.com)"
    service_url: str = "http://127.0.0.1:5000"
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    history_db: str = "detections.db"
    history_enabled: bool = True
    stats_limit: int = 100
    cors_origins: str = "*"
    log_level: str = "INFO"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    """Load settings from environment variables with safe defaults."""
    return Settings(
        request_timeout=_env_float("PHISH_REQUEST_TIMEOUT", Settings.request_timeout),
        user_agent=os.getenv("PHISH_USER_AGENT", Settings.user_agent),
        service_url=os.getenv("PHISH_SERVICE_URL", Settings.service_url),
        api_host=os.getenv("PHISH_API_HOST", Settings.api_host),
        api_port=_env_int("PHISH_API_PORT", Settings.api_port),
        history_db=os.getenv("PHISH_HISTORY_DB", Settings.history_db),
        history_enabled=_env_bool("PHISH_HISTORY_ENABLED", Settings.history_enabled),
        stats_limit=_env_int("PHISH_STATS_LIMIT", Settings.stats_limit),
        cors_origins=os.getenv("PHISH_CORS_ORIGINS", Settings.cors_origins),
        log_level=os.getenv("PHISH_LOG_LEVEL", Settings.log_level).upper(),
    )


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": True,
        },
    },
}


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the LOGGING dict, optionally overriding the root level."""
    config = dict(LOGGING)
    config["loggers"] = {"": dict(LOGGING["loggers"][""])}
    config["loggers"][""]["level"] = (level or get_settings().log_level).upper()
    logging.config.dictConfig(config)
