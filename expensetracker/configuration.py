"""Mini README: Centralised configuration for the expense tracker.

Structure:
    * ExpenseTrackerSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor used by the CLI and the web interface.

Usage:
    Values can be overridden with ``EXPENSE_TRACKER_*`` environment variables
    or a local ``.env`` file, e.g. ``EXPENSE_TRACKER_DATA_DIRECTORY=~/money``.
    The default ledger file lives inside ``data_directory``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label; anything but 'production' enables auto-reload.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the default ledger CSV file.",
    )
    ledger_filename: str = Field(
        "ledger.csv",
        description="File name used by save/load when no explicit path is given.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web interface listens on.",
        ge=1,
        le=65535,
    )
    default_theme: Literal["light", "dark"] = Field(
        "light",
        description="Dashboard colour scheme used when the request does not pick one.",
    )
    default_report_period: Literal["daily", "monthly", "yearly"] = Field(
        "monthly",
        description="Report period shown on the dashboard by default.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the entry points.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand ``~`` and make sure the directory exists."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def ledger_path(self) -> Path:
        """Default CSV file used for saving and loading the ledger."""

        return self.data_directory / self.ledger_filename


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings so every module sees the same configuration."""

    return ExpenseTrackerSettings()
