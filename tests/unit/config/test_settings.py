"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from signalboard.config import get_settings, reload_settings
from signalboard.config.models import StatusConfig
from signalboard.config.settings import Settings


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self) -> None:
        settings = Settings()
        assert settings.app_name == "signalboard"
        assert settings.debug is False

    def test_status_defaults(self) -> None:
        status = Settings().status
        assert status.history_capacity == 100
        assert status.default_flash_ms == 3000
        assert status.max_slots is None
        assert status.console_passthrough is True

    def test_observability_defaults(self) -> None:
        logging = Settings().observability.logging
        assert logging.level == "INFO"
        assert logging.format == "json"
        assert logging.redact_pii is True

    def test_env_override_nested(self, env_override) -> None:
        with env_override({"SIGNALBOARD_STATUS__HISTORY_CAPACITY": "25"}):
            assert Settings().status.history_capacity == 25


class TestStatusConfig:
    """Validation of status settings."""

    def test_capacity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            StatusConfig(history_capacity=0)

    def test_flash_timeout_not_negative(self) -> None:
        with pytest.raises(ValidationError):
            StatusConfig(default_flash_ms=-1)

    def test_max_slots_bound(self) -> None:
        assert StatusConfig(max_slots=8).max_slots == 8
        with pytest.raises(ValidationError):
            StatusConfig(max_slots=0)


class TestGetSettings:
    """Tests for get_settings function."""

    def test_loads_toml(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({
            "default.toml": "app_name = 'test'\n[status]\nmax_slots = 4",
        })
        monkeypatch.setenv("SIGNALBOARD_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("SIGNALBOARD_ENV", "nonexistent")

        settings = get_settings()

        assert isinstance(settings, Settings)
        assert settings.app_name == "test"
        assert settings.status.max_slots == 4

    def test_settings_cached(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "app_name = 'cached'"})
        monkeypatch.setenv("SIGNALBOARD_CONFIG_DIR", str(test_config_dir))

        assert get_settings() is get_settings()

    def test_env_beats_toml(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "debug = false"})
        monkeypatch.setenv("SIGNALBOARD_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("SIGNALBOARD_DEBUG", "true")

        assert get_settings().debug is True

    def test_reload_settings(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "app_name = 'first'"})
        monkeypatch.setenv("SIGNALBOARD_CONFIG_DIR", str(test_config_dir))
        assert get_settings().app_name == "first"

        mock_toml_files({"default.toml": "app_name = 'second'"})
        assert reload_settings().app_name == "second"
