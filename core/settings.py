# =============================================================================
# core/settings.py  —  Runtime Configuration
# =============================================================================
#
# All configuration comes from environment variables.  main.py calls
# load_dotenv() first, so a local .env file works the same way.
#
#   PYTHAGRAPH_API_URL            Upstream export endpoint
#   PYTHAGRAPH_USER_AGENT         User-Agent header sent upstream
#   PYTHAGRAPH_TIMEOUT_SECONDS    Request timeout (0 disables it)
#   PYTHAGRAPH_VALUE_MARKERS      Comma-separated value-column markers
#   PYTHAGRAPH_CATEGORY_MARKERS   Comma-separated category-column markers
#   PYTHAGRAPH_LOG_LEVEL          Logging level name (INFO, DEBUG, ...)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "https://red.pythagraph.co.kr/api/red/graph/exportGraphInfo.do"
DEFAULT_USER_AGENT = "MCP-PythagraphRED-Server/0.1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0

DEFAULT_VALUE_MARKERS = ("값", "value")
DEFAULT_CATEGORY_MARKERS = ("MBTI", "유형", "type")


def _split_markers(raw: Optional[str], default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse "a, b,c" into ("a", "b", "c"); blank input keeps the default."""
    if raw is None:
        return default
    markers = tuple(part.strip() for part in raw.split(",") if part.strip())
    return markers or default


@dataclass(frozen=True)
class Settings:
    """Everything the server needs to know before it handles a call."""

    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    value_markers: tuple[str, ...] = DEFAULT_VALUE_MARKERS
    category_markers: tuple[str, ...] = DEFAULT_CATEGORY_MARKERS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment (or any mapping, for tests).

        Raises:
            ValueError: if PYTHAGRAPH_TIMEOUT_SECONDS is not a non-negative number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("PYTHAGRAPH_TIMEOUT_SECONDS", "").strip()
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"PYTHAGRAPH_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
                ) from None
            if timeout < 0:
                raise ValueError(
                    f"PYTHAGRAPH_TIMEOUT_SECONDS must not be negative, got {raw_timeout!r}"
                )
            if timeout == 0:
                timeout = None

        return cls(
            api_url=env.get("PYTHAGRAPH_API_URL", "").strip() or DEFAULT_API_URL,
            user_agent=env.get("PYTHAGRAPH_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
            timeout_seconds=timeout,
            value_markers=_split_markers(env.get("PYTHAGRAPH_VALUE_MARKERS"), DEFAULT_VALUE_MARKERS),
            category_markers=_split_markers(
                env.get("PYTHAGRAPH_CATEGORY_MARKERS"), DEFAULT_CATEGORY_MARKERS
            ),
            log_level=(env.get("PYTHAGRAPH_LOG_LEVEL", "").strip() or "INFO").upper(),
        )
