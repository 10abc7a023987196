"""
Configuration management for the usage core.
"""

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kipraxis.calculators.time_utils import parse_clock_time
from kipraxis.errors import InvalidTimeValue
from kipraxis.models.usage import BillingRules, RoundingMode


class KipraxisConfig(BaseSettings):
    """Configuration settings for the usage core."""

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    timezone: str = Field(default="Europe/Berlin", alias="PRACTICE_TIMEZONE")

    # Billing Configuration
    billing_rounding: RoundingMode = Field(
        default=RoundingMode.PER_MINUTE, alias="BILLING_ROUNDING"
    )
    billing_min_charge_sec: Optional[int] = Field(
        default=60, ge=0, alias="BILLING_MIN_CHARGE_SEC"
    )
    plan_included_minutes: Optional[int] = Field(
        default=None, ge=0, alias="PLAN_INCLUDED_MINUTES"
    )

    # Practice hours
    business_hours_start: str = Field(default="08:00", alias="BUSINESS_HOURS_START")
    business_hours_end: str = Field(default="18:00", alias="BUSINESS_HOURS_END")
    call_window_start: str = Field(default="08:00", alias="CALL_WINDOW_START")
    call_window_end: str = Field(default="18:00", alias="CALL_WINDOW_END")

    # Reporting Configuration
    max_range_days: int = Field(default=365, gt=0, alias="MAX_RANGE_DAYS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        """Ensure the practice time zone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator(
        "business_hours_start",
        "business_hours_end",
        "call_window_start",
        "call_window_end",
    )
    @classmethod
    def validate_clock_time(cls, v):
        """Ensure practice hours are HH:MM strings."""
        try:
            parse_clock_time(v)
        except InvalidTimeValue as e:
            raise ValueError(str(e))
        return v.strip()

    @model_validator(mode="after")
    def validate_hours_order(self) -> "KipraxisConfig":
        """Ensure opening hours and call windows start before they end."""
        for start_field, end_field in (
            ("business_hours_start", "business_hours_end"),
            ("call_window_start", "call_window_end"),
        ):
            start, end = getattr(self, start_field), getattr(self, end_field)
            if parse_clock_time(start) >= parse_clock_time(end):
                raise ValueError(f"{start_field} ({start}) must be before {end_field} ({end})")
        return self

    def billing_rules(self) -> BillingRules:
        """Build the practice's BillingRules from configuration."""
        return BillingRules(
            rounding=self.billing_rounding,
            min_charge_sec=self.billing_min_charge_sec,
            plan_included_minutes=self.plan_included_minutes,
        )


def load_config(env_file: Optional[str] = None) -> KipraxisConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return KipraxisConfig()


# Global configuration instance
_config: Optional[KipraxisConfig] = None


def get_config() -> KipraxisConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> KipraxisConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
