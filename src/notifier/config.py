# src/notifier/config.py
import logging
import os

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

WEBHOOK_ENV = "DISCORD_WEBHOOK_URL"

REGION      = os.getenv("AWS_REGION", "us-east-1")

REQUEST_TIMEOUT_SEC = 10.0


def _log_level(name: str, default: str = "INFO") -> str:
    level = os.getenv(name, default).strip().upper() or default
    # getLevelName maps known names to their int, anything else to "Level X"
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("unknown %s %r, using %s", name, level, default)
        return default
    return level


LOG_LEVEL = _log_level("LOG_LEVEL")


def get_webhook_url() -> str:
    # read per invocation, not at import, so a missing value fails the invocation cleanly
    url = os.getenv(WEBHOOK_ENV, "").strip()
    if not url:
        raise ConfigurationError(f"environment variable {WEBHOOK_ENV} is not set")
    return url
