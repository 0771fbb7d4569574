"""Startup-time helpers for safe config logging."""

from payorder.common.config import Settings
from payorder.common.logging import logger

SECRET_MARKERS = ("KEY", "SECRET", "PASSWORD", "TOKEN")


def _safe_value(name: str, value) -> str:
    """Return a printable value with redaction for secret-like setting names."""

    if value is None:
        return "<unset>"
    if any(marker in name.upper() for marker in SECRET_MARKERS):
        return "<redacted>"
    return str(value)


def redacted_config(settings: Settings, keys: list[str]) -> dict[str, str]:
    """Build a loggable view of selected settings."""

    config = {"service": settings.service_name}
    for key in keys:
        config[key] = _safe_value(key, getattr(settings, key, None))
    return config


def log_startup_config(settings: Settings, keys: list[str]) -> None:
    """Log selected startup config keys and whether gateway credentials exist."""

    logger.info("startup_config=%s", redacted_config(settings, keys))
    logger.info(
        "gateway credentials loaded: %s",
        "yes" if settings.gateway_credentials_loaded else "no",
    )
