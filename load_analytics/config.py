"""Engine configuration with environment-specific profiles.

Supports dev, staging, and production environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Immutable engine settings resolved from environment."""

    database_url: str
    app_env: str = "dev"
    log_level: str = "INFO"

    # Reporting windows
    report_weeks: int = 5
    initial_lookback_days: int = 30

    slow_query_ms: float = 250.0

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "slow_query_ms": 500.0,
    },
    "staging": {
        "log_level": "INFO",
        "slow_query_ms": 250.0,
    },
    "production": {
        "log_level": "WARNING",
        "slow_query_ms": 150.0,
    },
}


def get_database_url() -> str:
    """Resolve database URL from the DATABASE_URL env var or a local default."""
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url
    return "postgresql+psycopg2://localhost:5432/athlete_load"


def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        database_url=get_database_url(),
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        report_weeks=int(os.getenv("REPORT_WEEKS", "5")),
        initial_lookback_days=int(os.getenv("INITIAL_LOOKBACK_DAYS", "30")),
        slow_query_ms=float(os.getenv("SLOW_QUERY_MS", str(profile.get("slow_query_ms", 250.0)))),
    )
