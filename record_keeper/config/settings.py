"""
Configuration Management for Record Keeper

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The record file path itself is a command-line argument; everything else
(log naming, timestamp format, matching rules) can be tuned through
RECORD_KEEPER_* variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchPolicy(str, Enum):
    """
    How many lines a name-prefix operation touches.

    Applies to delete, rename and quantity updates.
    """
    FIRST = "first"
    ALL = "all"


class RecordKeeperSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORD_KEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_suffix: str = Field(
        default="_log",
        min_length=1,
        description="Suffix appended to the record file path to name the log file"
    )
    timestamp_format: str = Field(
        default="%d/%m/%Y %H:%M:%S",
        description="strftime format for log entry timestamps"
    )
    match_policy: MatchPolicy = Field(
        default=MatchPolicy.FIRST,
        description="Whether prefix operations affect the first or all matching lines"
    )
    search_case_sensitive: bool = Field(
        default=True,
        description="Whether keyword search is case-sensitive"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Encoding of the record and log files"
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for local diagnostic logging (stderr)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case, store upper case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def log_path_for(self, record_path: Path) -> Path:
        """Derive the log file path from the record file path."""
        return Path(f"{record_path}{self.log_suffix}")


@lru_cache()
def get_settings() -> RecordKeeperSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return RecordKeeperSettings()
