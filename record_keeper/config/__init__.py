"""Configuration package."""

from record_keeper.config.settings import (
    MatchPolicy,
    RecordKeeperSettings,
    get_settings,
)

__all__ = [
    "MatchPolicy",
    "RecordKeeperSettings",
    "get_settings",
]
