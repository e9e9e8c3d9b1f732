"""
Centralized configuration for Tempus.
Loads from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime environment settings."""
    env: str = "development"
    log_level: str = "INFO"
    event_log_dir: Path = field(default_factory=lambda: Path("./logs/events"))


@dataclass(frozen=True)
class ScheduleConfig:
    """Defaults for end-of-day schedules."""
    time_zone: str = "America/New_York"
    end_of_day_delta_minutes: float = 10.0
    extended_market_hours: bool = False

    @property
    def end_of_day_delta(self) -> timedelta:
        return timedelta(minutes=self.end_of_day_delta_minutes)


@dataclass
class TempusConfig:
    """Top-level configuration container."""
    runtime: RuntimeConfig
    schedule: ScheduleConfig

    @classmethod
    def from_env(cls) -> "TempusConfig":
        """Load configuration from environment variables."""
        return cls(
            runtime=RuntimeConfig(
                env=os.getenv("TEMPUS_ENV", "development"),
                log_level=os.getenv("TEMPUS_LOG_LEVEL", "INFO"),
                event_log_dir=Path(os.getenv("TEMPUS_EVENT_LOG_DIR", "./logs/events")),
            ),
            schedule=ScheduleConfig(
                time_zone=os.getenv("TEMPUS_TIME_ZONE", "America/New_York"),
                end_of_day_delta_minutes=float(os.getenv("TEMPUS_END_OF_DAY_DELTA_MINUTES", "10")),
                extended_market_hours=os.getenv("TEMPUS_EXTENDED_MARKET_HOURS", "false").lower() == "true",
            ),
        )


# Global config instance (lazy-loaded)
_config: Optional[TempusConfig] = None


def get_config() -> TempusConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = TempusConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    global _config
    _config = None
