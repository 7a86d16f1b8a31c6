from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

DEFAULT_MASTER = "localhost:9333"


def _as_timeout(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError:
        logger.warning("Ignoring WEED_TIMEOUT=%r, expected seconds", value)
        return None
    if not math.isfinite(timeout) or timeout <= 0:
        logger.warning("Ignoring WEED_TIMEOUT=%r, expected positive seconds", value)
        return None
    return timeout


@dataclass
class Settings:
    WEED_MASTER: str = DEFAULT_MASTER
    # seconds; None disables the timeout on per-request http clients
    WEED_TIMEOUT: float | None = None

    @classmethod
    def from_environment(cls) -> "Settings":
        return cls(
            WEED_MASTER=os.environ.get("WEED_MASTER", cls.WEED_MASTER),
            WEED_TIMEOUT=_as_timeout(os.environ.get("WEED_TIMEOUT")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
