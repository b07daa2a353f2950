"""Runtime settings read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

CYCLE_INFO_URL = "https://external-api.faa.gov/apra/dtpp/info"
CHART_BASE_URL = "https://aeronav.faa.gov/d-tpp"
DEFAULT_CYCLE = "2406"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Settings:
    """Service configuration."""

    cycle_info_url: str = CYCLE_INFO_URL
    chart_base_url: str = CHART_BASE_URL
    default_cycle: str = DEFAULT_CYCLE
    refresh_interval: int = 3600  # seconds
    http_timeout: int = 60  # seconds
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origin: str = "*"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        env = os.environ if env is None else env
        return cls(
            cycle_info_url=env.get("CHARTSAPI_CYCLE_INFO_URL") or CYCLE_INFO_URL,
            chart_base_url=env.get("CHARTSAPI_CHART_BASE_URL") or CHART_BASE_URL,
            default_cycle=env.get("CHARTSAPI_DEFAULT_CYCLE") or DEFAULT_CYCLE,
            refresh_interval=_int_env(env, "CHARTSAPI_REFRESH_INTERVAL", 3600),
            http_timeout=_int_env(env, "CHARTSAPI_HTTP_TIMEOUT", 60),
            host=env.get("CHARTSAPI_HOST") or "0.0.0.0",
            port=_int_env(env, "PORT", 8000),
            allowed_origin=env.get("ALLOWED_ORIGIN") or "*",
            log_level=(env.get("CHARTSAPI_LOG_LEVEL") or "INFO").upper(),
        )
