"""Engine configuration loaded from environment variables."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}; using default {default}")
        return default


# Augmentation gateway (optional; empty URL disables it)
AUGMENTATION_URL: str = os.getenv("EMOTION_AUGMENTATION_URL", "").strip()
AUGMENTATION_API_KEY: str = os.getenv("EMOTION_AUGMENTATION_API_KEY", "")
AUGMENTATION_TIMEOUT_SECONDS: float = _env_number("EMOTION_AUGMENTATION_TIMEOUT", 4.0, float)
AUGMENTATION_MAX_LENGTH: int = _env_number("EMOTION_AUGMENTATION_MAX_LENGTH", 200, int)

# Radar chart radius used when callers do not pass one
CHART_RADIUS: float = _env_number("EMOTION_CHART_RADIUS", 1.0, float)

LOG_LEVEL: str = os.getenv("EMOTION_LOG_LEVEL", "INFO").upper()
