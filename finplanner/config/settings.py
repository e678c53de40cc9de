"""
Configuration Management for Financial Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets source configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    portfolio_spreadsheet_id: str = Field(
        ...,
        description="ID of the spreadsheet holding portfolio positions"
    )
    financial_spreadsheet_id: str = Field(
        ...,
        description="ID of the spreadsheet holding the financial plan"
    )

    # A1 ranges read from each spreadsheet
    portfolio_range: str = Field(
        default="A:H",
        description="Range covering the eight portfolio columns"
    )
    financial_range: str = Field(
        default="A:Z",
        description="Range covering the date column and all category columns"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before loading sheets."
            )
        return v


class ParserSettings(BaseSettings):
    """Parsing and validation behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="PARSER_",
        extra="ignore"
    )

    date_formats: str = Field(
        default="%d %B %Y,%d %b %Y",
        description="Comma-separated strptime formats used to check record order"
    )
    check_chronological_order: bool = Field(
        default=True,
        description="Report out-of-order records before monthly aggregation"
    )

    @property
    def date_formats_list(self) -> list[str]:
        """Get date formats as a list."""
        return [fmt.strip() for fmt in self.date_formats.split(",") if fmt.strip()]


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Render logs for the console instead of as JSON"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for structured logs"
    )
    audit_history_size: int = Field(
        default=500,
        ge=0,
        le=10000,
        description="How many audit events to keep in memory"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def parser(self) -> ParserSettings:
        return ParserSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("google_sheets", "parser", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
