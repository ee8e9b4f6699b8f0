"""12-factor configuration adapter using environment variables."""

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stop_trips.domain.models.stop import STOP_TYPES


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    timezone: str = Field(
        default="Europe/Rome",
        description="Working timezone every reference date/time is normalized to (IANA name)",
    )
    timetable_file: str = Field(
        default="timetable.toml",
        description="Path to the TOML timetable used as the stop and trip data source",
    )
    stop_id: int = Field(default=1, description="Identifier of the stop to show")
    stop_type: str = Field(default="urban", description="Stop type: 'urban' or 'extraurban'")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("stop_type")
    @classmethod
    def validate_stop_type(cls, v: str) -> str:
        """Validate stop type is either 'urban' or 'extraurban'."""
        if v.lower() not in STOP_TYPES:
            raise ValueError("stop_type must be either 'urban' or 'extraurban'")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard logging level names."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)
