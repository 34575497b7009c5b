"""Default facility settings loaded from environment variables.

These are the failover defaults used when the settings API is unreachable
or omits a field. Everything is resolved into one FacilitySettings value
and passed explicitly into the engine.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from session_slots.types import (
    FacilitySettings,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
)


class SchedulerConfig(BaseSettings):
    """Scheduler configuration loaded from ``SESSION_SLOTS_*`` variables.

    For local development, put overrides in a .env file in the project root.
    """

    # Operating hours
    open_time: str = Field(default="10:00", description="Default opening time (HH:MM)")
    close_time: str = Field(default="21:00", description="Default target close time (HH:MM)")

    # Session policy
    session_duration: int = Field(default=60, description="Session length in minutes")
    cleaning_buffer: int = Field(
        default=30,
        description="Cleaning/turnover time after every session, in minutes",
    )

    # Resources
    number_of_tanks: int = Field(default=1, description="Number of bookable tanks")
    tank_stagger_interval: int = Field(
        default=0,
        description="Minutes added to the opening time per tank index",
    )

    # Pricing / informational
    default_float_price: int = Field(default=27, description="Default price of one float")
    sessions_per_day: int = Field(
        default=7,
        description="Advertised sessions per day (informational, not used for capacity)",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "SESSION_SLOTS_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def as_payload(self) -> dict:
        """Defaults in the settings API's camelCase shape."""
        return {
            "defaultFloatPrice": self.default_float_price,
            "cleaningBuffer": self.cleaning_buffer,
            "sessionDuration": self.session_duration,
            "sessionsPerDay": self.sessions_per_day,
            "openTime": self.open_time,
            "closeTime": self.close_time,
            "numberOfTanks": self.number_of_tanks,
            "tankStaggerInterval": self.tank_stagger_interval,
        }

    def facility_settings(self) -> FacilitySettings:
        """Validated engine defaults. Raises SchedulingError on bad values."""
        return FacilitySettings(
            window=OperatingWindow(self.open_time, self.close_time),
            policy=SessionPolicy(self.session_duration, self.cleaning_buffer),
            resources=ResourceConfig(
                self.number_of_tanks, self.tank_stagger_interval
            ),
            default_float_price=self.default_float_price,
            sessions_per_day=self.sessions_per_day,
        )


# Singleton pattern
_config: SchedulerConfig | None = None


def get_config() -> SchedulerConfig:
    """Get the scheduler configuration singleton."""
    global _config
    if _config is None:
        _config = SchedulerConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the env."""
    global _config
    _config = None
