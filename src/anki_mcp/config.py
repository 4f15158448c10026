import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .anki_connector import ANKI_CONNECT_URL


def _get_env(
    env: Mapping[str, str], name: str, default: Optional[str]
) -> Optional[str]:
    value = env.get(name)
    return value if value is not None and value != "" else default


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from the environment at start-up."""

    anki_url: str = ANKI_CONNECT_URL
    api_key: Optional[str] = None
    timeout: Optional[float] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``ANKI_CONNECT_*`` and ``ANKI_MCP_LOG_LEVEL``.

        Raises:
            ValueError: The timeout is not a positive number or the log level
                is not a known level name.
        """
        if env is None:
            env = os.environ

        timeout = None
        raw_timeout = _get_env(env, "ANKI_CONNECT_TIMEOUT", None)
        if raw_timeout is not None:
            timeout = float(raw_timeout)
            if not (math.isfinite(timeout) and timeout > 0):
                raise ValueError(
                    f"ANKI_CONNECT_TIMEOUT must be a positive number, got {raw_timeout}"
                )

        level_name = _get_env(env, "ANKI_MCP_LOG_LEVEL", "WARNING").upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level_name}")

        return cls(
            anki_url=_get_env(env, "ANKI_CONNECT_URL", ANKI_CONNECT_URL),
            api_key=_get_env(env, "ANKI_CONNECT_API_KEY", None),
            timeout=timeout,
            log_level=log_level,
        )
