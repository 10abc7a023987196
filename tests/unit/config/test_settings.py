"""
Unit tests for configuration management.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kipraxis.config.settings import (
    KipraxisConfig,
    get_config,
    load_config,
    reload_config,
)
from kipraxis.models.usage import BillingRules, RoundingMode


class TestKipraxisConfig:
    """Test cases for KipraxisConfig."""

    def test_config_with_valid_env_vars(self, test_config):
        """Test configuration loads correctly with valid environment variables."""
        assert test_config.environment == "testing"
        assert test_config.debug is True
        assert test_config.log_level == "DEBUG"
        assert test_config.billing_rounding is RoundingMode.PER_SECOND
        assert test_config.billing_min_charge_sec == 30
        assert test_config.plan_included_minutes == 1000

    def test_default_values(self):
        """Test default configuration values."""
        config = KipraxisConfig()

        assert config.environment == "development"
        assert config.debug is False
        assert config.timezone == "Europe/Berlin"
        assert config.billing_rounding is RoundingMode.PER_MINUTE
        assert config.billing_min_charge_sec == 60
        assert config.plan_included_minutes is None
        assert (config.business_hours_start, config.business_hours_end) == ("08:00", "18:00")
        assert (config.call_window_start, config.call_window_end) == ("08:00", "18:00")
        assert config.max_range_days == 365

    def test_billing_rules(self, test_config):
        """Test BillingRules built from configuration."""
        rules = test_config.billing_rules()

        assert rules == BillingRules(
            rounding=RoundingMode.PER_SECOND,
            min_charge_sec=30,
            plan_included_minutes=1000,
        )

    def test_invalid_rounding(self, mock_env):
        """Test unknown rounding modes are rejected at load time."""
        with patch.dict(os.environ, {"BILLING_ROUNDING": "per_hour"}):
            with pytest.raises(ValidationError):
                KipraxisConfig()

    @pytest.mark.parametrize("level", ["debug", "Warning", "ERROR"])
    def test_log_level_normalized(self, level):
        with patch.dict(os.environ, {"LOG_LEVEL": level}):
            assert KipraxisConfig().log_level == level.upper()

    def test_invalid_log_level(self):
        """Test invalid log level validation."""
        with patch.dict(os.environ, {"LOG_LEVEL": "VERBOSE"}):
            with pytest.raises(ValidationError) as exc_info:
                KipraxisConfig()

        assert "Log level must be one of" in str(exc_info.value)

    def test_invalid_environment(self):
        """Test invalid environment validation."""
        with patch.dict(os.environ, {"ENVIRONMENT": "staging"}):
            with pytest.raises(ValidationError) as exc_info:
                KipraxisConfig()

        assert "Environment must be one of" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["8 Uhr", "25:00", "08:75"])
    def test_invalid_clock_time(self, value):
        with patch.dict(os.environ, {"BUSINESS_HOURS_START": value}):
            with pytest.raises(ValidationError):
                KipraxisConfig()

    def test_hours_must_start_before_end(self):
        """Test practice hours ordering validation."""
        with patch.dict(
            os.environ, {"CALL_WINDOW_START": "18:00", "CALL_WINDOW_END": "08:00"}
        ):
            with pytest.raises(ValidationError) as exc_info:
                KipraxisConfig()

        assert "call_window_start" in str(exc_info.value)

    def test_invalid_timezone(self):
        with patch.dict(os.environ, {"PRACTICE_TIMEZONE": "Europe/Atlantis"}):
            with pytest.raises(ValidationError) as exc_info:
                KipraxisConfig()

        assert "Unknown time zone" in str(exc_info.value)

    def test_negative_min_charge_rejected(self):
        with patch.dict(os.environ, {"BILLING_MIN_CHARGE_SEC": "-5"}):
            with pytest.raises(ValidationError):
                KipraxisConfig()


class TestConfigFunctions:
    """Test cases for configuration functions."""

    def test_load_config_from_env_file(self, tmp_path, monkeypatch):
        """Test load_config reads the given .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("BILLING_ROUNDING=per_second\nPLAN_INCLUDED_MINUTES=500\n")
        monkeypatch.chdir(tmp_path)

        config = load_config(str(env_file))

        assert config.billing_rounding is RoundingMode.PER_SECOND
        assert config.plan_included_minutes == 500

    def test_get_config_singleton(self, mock_env):
        """Test get_config returns the same instance."""
        first = get_config()
        second = get_config()

        assert first is second

    def test_reload_config(self, mock_env, monkeypatch):
        """Test reload_config picks up changed environment."""
        original = get_config()
        monkeypatch.setenv("PLAN_INCLUDED_MINUTES", "2000")

        reloaded = reload_config()

        assert reloaded is not original
        assert reloaded.plan_included_minutes == 2000
        assert get_config() is reloaded
