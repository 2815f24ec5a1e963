"""Timetable configuration loaded from environment variables.

Variables use the ``TIMETABLE_`` prefix, e.g. ``TIMETABLE_UNIT_THRESHOLD=8``.
For local development, put them in a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from src.timetable.models import CreditPolicy


class TimetableConfig(BaseSettings):
    """Settings for the grid, the proration engine and the report script."""

    # Proration
    unit_threshold: int = Field(
        default=8,
        ge=0,
        description="Class occurrences per month that make one full registration unit",
    )
    credit_policy: CreditPolicy = Field(
        default=CreditPolicy.BY_SLOT,
        description="How secondary assigned teachers are credited",
    )

    # Paths
    roster_path: str = Field(
        default="data/roster.json",
        description="Roster snapshot read by scripts/timetable_report.py",
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
        "env_prefix": "TIMETABLE_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: TimetableConfig | None = None


def get_config() -> TimetableConfig:
    """Get the timetable configuration singleton."""
    global _config
    if _config is None:
        _config = TimetableConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the env."""
    global _config
    _config = None
