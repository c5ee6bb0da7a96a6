"""Tests for configuration settings."""

import pytest
from pydantic import ValidationError

from pco_cli.config.settings import PlanningCenterSettings, get_settings, load_settings
from pco_cli.core.client.errors import ConfigurationError


@pytest.mark.usefixtures("clean_env")
class TestPlanningCenterSettings:
    """Test cases for PlanningCenterSettings."""

    def test_default_values(self) -> None:
        """Test that default values are set correctly."""
        settings = PlanningCenterSettings()

        assert settings.base_url == "https://api.planningcenteronline.com"
        assert settings.timeout == 30.0
        assert settings.max_retry_attempts == 3
        assert settings.default_output_format == "table"
        assert settings.default_page_size == 25
        assert settings.detailed_logging is False
        assert settings.log_level == "WARNING"
        assert settings.personal_access_token is None

    def test_token_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test token loading from PLANNING_CENTER_PAT."""
        monkeypatch.setenv("PLANNING_CENTER_PAT", "app:secret")
        settings = PlanningCenterSettings()
        assert settings.personal_access_token == "app:secret"
        assert settings.auth_method == "personal_access_token"

    def test_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test PCO_ prefixed variables."""
        monkeypatch.setenv("PCO_DEFAULT_OUTPUT_FORMAT", "json")
        monkeypatch.setenv("PCO_TIMEOUT", "12.5")
        settings = PlanningCenterSettings()
        assert settings.default_output_format == "json"
        assert settings.timeout == 12.5

    def test_invalid_token_format(self) -> None:
        """Test validation of a token without a secret."""
        with pytest.raises(ValidationError):
            PlanningCenterSettings(personal_access_token="just-an-id")

    def test_blank_token_is_unset(self) -> None:
        assert PlanningCenterSettings(personal_access_token="  ").personal_access_token is None

    def test_invalid_output_format(self) -> None:
        """Test validation of invalid output format."""
        with pytest.raises(ValidationError):
            PlanningCenterSettings(default_output_format="xml")

    def test_valid_output_format(self) -> None:
        """Test validation of valid output formats."""
        for output_format in ["table", "JSON", "csv"]:
            settings = PlanningCenterSettings(default_output_format=output_format)
            assert settings.default_output_format == output_format.lower()

    def test_invalid_log_level(self) -> None:
        """Test validation of invalid log level."""
        with pytest.raises(ValidationError):
            PlanningCenterSettings(log_level="INVALID")

    def test_valid_log_level(self) -> None:
        """Test validation of valid log levels."""
        for level in ["debug", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            settings = PlanningCenterSettings(log_level=level)
            assert settings.log_level == level.upper()

    def test_page_size_validation(self) -> None:
        """Test default_page_size bounds."""
        PlanningCenterSettings(default_page_size=1)
        PlanningCenterSettings(default_page_size=100)

        with pytest.raises(ValidationError):
            PlanningCenterSettings(default_page_size=0)
        with pytest.raises(ValidationError):
            PlanningCenterSettings(default_page_size=101)

    def test_base_url_validation(self) -> None:
        assert PlanningCenterSettings(base_url="https://api.example.test/").base_url == "https://api.example.test"
        with pytest.raises(ValidationError):
            PlanningCenterSettings(base_url="api.example.test")

    def test_has_credentials(self) -> None:
        """Test has_credentials property."""
        assert not PlanningCenterSettings().has_credentials
        assert PlanningCenterSettings(personal_access_token="a:b").has_credentials
        assert PlanningCenterSettings(client_id="id", client_secret="secret").has_credentials
        assert PlanningCenterSettings(access_token="token").has_credentials

    def test_validate_credentials(self) -> None:
        with pytest.raises(ConfigurationError):
            PlanningCenterSettings().validate_credentials()
        with pytest.raises(ConfigurationError):
            PlanningCenterSettings(client_id="id").validate_credentials()
        PlanningCenterSettings(personal_access_token="a:b").validate_credentials()

    def test_to_dict_masks_secrets(self) -> None:
        """Test that to_dict masks sensitive data."""
        settings = PlanningCenterSettings(personal_access_token="app:secret", client_secret="shh")
        data = settings.to_dict()
        assert data["personal_access_token"] == "***masked***"
        assert data["client_secret"] == "***masked***"
        assert data["access_token"] is None


@pytest.mark.usefixtures("clean_env")
class TestLoadSettings:
    """Test cases for load_settings and get_settings."""

    def test_get_settings_ignores_none_overrides(self) -> None:
        settings = get_settings(default_page_size=None, timeout=5)
        assert settings.default_page_size == 25
        assert settings.timeout == 5

    def test_overrides_win_over_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLANNING_CENTER_PAT", "env:token")
        settings = load_settings(personal_access_token="cli:token")
        assert settings.personal_access_token == "cli:token"

    def test_env_file_is_loaded(self, clean_env, monkeypatch: pytest.MonkeyPatch) -> None:
        # Register the variable so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("PLANNING_CENTER_PAT", "placeholder")
        monkeypatch.delenv("PLANNING_CENTER_PAT")
        (clean_env / ".env").write_text("PLANNING_CENTER_PAT=file:token\n", encoding="utf-8")

        settings = load_settings(working_directory=clean_env)

        assert settings.personal_access_token == "file:token"

    def test_project_settings_file(self, clean_env) -> None:
        config_dir = clean_env / ".pco"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(
            '{\n  // page size for list commands\n  "default_page_size": 50\n}', encoding="utf-8"
        )

        settings = load_settings(working_directory=clean_env)

        assert settings.default_page_size == 50

    def test_environment_beats_settings_file(self, clean_env, monkeypatch: pytest.MonkeyPatch) -> None:
        config_dir = clean_env / ".pco"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text('{"default_output_format": "csv"}', encoding="utf-8")
        monkeypatch.setenv("PCO_DEFAULT_OUTPUT_FORMAT", "json")

        settings = load_settings(working_directory=clean_env)

        assert settings.default_output_format == "json"
