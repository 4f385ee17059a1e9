"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from sentia.config.settings import Settings


def test_defaults():
    """Test defaults."""
    settings = Settings(_env_file=None)
    assert settings.request_timeout_ms == 30000
    assert settings.max_retries == 2
    assert settings.free_daily_scans == 3
    assert settings.premium_features == ["audio_guide", "nearby_discovery", "unlimited_scans"]
    assert settings.max_image_size_bytes == 10 * 1024 * 1024
    assert settings.request_timeout_seconds == 30.0


def test_log_level_is_normalized():
    """Test log level is normalized."""
    assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"


def test_invalid_log_level():
    """Test invalid log level."""
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD", _env_file=None)


@pytest.mark.parametrize(
    "field_name,value",
    [("request_timeout_ms", 0), ("free_daily_scans", -1), ("max_retries", -1)],
)


def test_limits_must_be_positive(field_name, value):
    """Test limits must be positive."""
    with pytest.raises(ValidationError):
        Settings(**{field_name: value}, _env_file=None)


def test_environment_overrides(monkeypatch):
    """Test environment overrides."""
    monkeypatch.setenv("FREE_DAILY_SCANS", "5")
    monkeypatch.setenv("API_BASE_URL", "https://staging.sentia.app/v1")
    settings = Settings(_env_file=None)
    assert settings.free_daily_scans == 5
    assert settings.api_base_url == "https://staging.sentia.app/v1"
