"""Tests for the settings-file and .env loaders."""

import json
import os
from pathlib import Path

import pytest

from pco_cli.config.env_loader import EnvFileLoader
from pco_cli.config.hierarchical import (
    HierarchicalConfigLoader,
    SettingScope,
    parse_setting_value,
)


@pytest.mark.usefixtures("clean_env")
class TestHierarchicalConfigLoader:
    """Test cases for HierarchicalConfigLoader."""

    def test_defaults_only(self, clean_env: Path) -> None:
        settings = HierarchicalConfigLoader(clean_env).load_all_settings()
        assert settings["default_output_format"] == "table"
        assert settings["default_page_size"] == 25

    def test_precedence(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """User < project < environment."""
        user_dir = Path.home() / ".config" / "pco"
        user_dir.mkdir(parents=True)
        (user_dir / "settings.json").write_text(
            json.dumps({"default_page_size": 10, "timeout": 5, "log_level": "INFO"}), encoding="utf-8"
        )
        project_dir = clean_env / ".pco"
        project_dir.mkdir()
        (project_dir / "settings.json").write_text(json.dumps({"default_page_size": 20, "timeout": 6}), encoding="utf-8")
        monkeypatch.setenv("PCO_TIMEOUT", "7.5")

        settings = HierarchicalConfigLoader(clean_env).load_all_settings()

        assert settings["log_level"] == "INFO"
        assert settings["default_page_size"] == 20
        assert settings["timeout"] == 7.5

    def test_project_dir_found_from_subdirectory(self, clean_env: Path) -> None:
        project_dir = clean_env / ".pco"
        project_dir.mkdir()
        (project_dir / "settings.json").write_text('{"default_output_format": "csv"}', encoding="utf-8")
        nested = clean_env / "a" / "b"
        nested.mkdir(parents=True)

        settings = HierarchicalConfigLoader(nested).load_all_settings()

        assert settings["default_output_format"] == "csv"

    def test_secrets_in_files_are_ignored(self, clean_env: Path) -> None:
        project_dir = clean_env / ".pco"
        project_dir.mkdir()
        (project_dir / "settings.json").write_text(
            json.dumps({"personal_access_token": "a:b", "default_page_size": 30}), encoding="utf-8"
        )

        settings = HierarchicalConfigLoader(clean_env).load_all_settings()

        assert "personal_access_token" not in settings
        assert settings["default_page_size"] == 30

    def test_invalid_file_is_reported(self, clean_env: Path) -> None:
        project_dir = clean_env / ".pco"
        project_dir.mkdir()
        (project_dir / "settings.json").write_text("{not json", encoding="utf-8")
        loader = HierarchicalConfigLoader(clean_env)

        loader.load_all_settings()
        summary = loader.get_config_summary()

        assert summary["sources"]["project"]["exists"]
        assert len(summary["errors"]) == 1

    def test_env_var_references_are_resolved(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PCO_TEST_HOST", "api.example.test")
        project_dir = clean_env / ".pco"
        project_dir.mkdir()
        (project_dir / "settings.json").write_text('{"base_url": "https://${PCO_TEST_HOST}"}', encoding="utf-8")

        settings = HierarchicalConfigLoader(clean_env).load_all_settings()

        assert settings["base_url"] == "https://api.example.test"

    def test_set_value_writes_user_file(self, clean_env: Path) -> None:
        loader = HierarchicalConfigLoader(clean_env)

        path = loader.set_value(SettingScope.USER, "default_page_size", 40)

        assert path == Path.home() / ".config" / "pco" / "settings.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"default_page_size": 40}
        assert HierarchicalConfigLoader(clean_env).load_all_settings()["default_page_size"] == 40

    def test_set_value_keeps_existing_keys(self, clean_env: Path) -> None:
        loader = HierarchicalConfigLoader(clean_env)
        loader.set_value(SettingScope.PROJECT, "default_page_size", 40)
        path = HierarchicalConfigLoader(clean_env).set_value(SettingScope.PROJECT, "timeout", 9.0)

        assert path == clean_env / ".pco" / "settings.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"default_page_size": 40, "timeout": 9.0}

    def test_set_value_rejects_secrets(self, clean_env: Path) -> None:
        with pytest.raises(ValueError, match="credential"):
            HierarchicalConfigLoader(clean_env).set_value(SettingScope.USER, "personal_access_token", "a:b")

    def test_set_value_rejects_unknown_keys(self, clean_env: Path) -> None:
        with pytest.raises(ValueError, match="Unknown setting"):
            HierarchicalConfigLoader(clean_env).set_value(SettingScope.USER, "colour", "blue")

    def test_cannot_save_environment_scope(self, clean_env: Path) -> None:
        with pytest.raises(ValueError):
            HierarchicalConfigLoader(clean_env).save_settings(SettingScope.ENVIRONMENT, {})


def test_parse_setting_value() -> None:
    assert parse_setting_value("true") is True
    assert parse_setting_value("False") is False
    assert parse_setting_value("42") == 42
    assert parse_setting_value("2.5") == 2.5
    assert parse_setting_value("json") == "json"


@pytest.mark.usefixtures("clean_env")
class TestEnvFileLoader:
    """Test cases for EnvFileLoader."""

    @pytest.fixture(autouse=True)
    def restore_env(self, monkeypatch: pytest.MonkeyPatch):
        # Register variables so monkeypatch removes what load_dotenv sets
        for name in ("PLANNING_CENTER_PAT", "PCO_TIMEOUT"):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)

    def test_no_file(self, clean_env: Path) -> None:
        loader = EnvFileLoader(clean_env)
        assert loader.load_env_file() is None
        assert loader.get_loaded_file() is None

    def test_loads_nearest_file(self, clean_env: Path) -> None:
        (clean_env / ".env").write_text("PLANNING_CENTER_PAT=app:secret\nPCO_TIMEOUT=10\n", encoding="utf-8")
        nested = clean_env / "src"
        nested.mkdir()
        loader = EnvFileLoader(nested)

        loaded = loader.load_env_file()

        assert loaded == clean_env / ".env"
        assert loader.get_loaded_vars() == {"PLANNING_CENTER_PAT": "app:secret", "PCO_TIMEOUT": "10"}

    def test_config_dir_file_wins(self, clean_env: Path) -> None:
        (clean_env / ".env").write_text("PCO_TIMEOUT=1\n", encoding="utf-8")
        (clean_env / ".pco").mkdir()
        (clean_env / ".pco" / ".env").write_text("PCO_TIMEOUT=2\n", encoding="utf-8")

        assert EnvFileLoader(clean_env).load_env_file() == clean_env / ".pco" / ".env"

    def test_existing_environment_is_not_overridden(self, clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PCO_TIMEOUT", "99")
        (clean_env / ".env").write_text("PCO_TIMEOUT=10\n", encoding="utf-8")

        EnvFileLoader(clean_env).load_env_file()

        assert os.environ["PCO_TIMEOUT"] == "99"

    def test_search_stops_at_git_root(self, clean_env: Path) -> None:
        paths = EnvFileLoader(clean_env).get_search_paths()
        assert paths[0] == clean_env / ".pco" / ".env"
        assert clean_env.parent / ".env" not in paths
        assert paths[-1] == Path.home() / ".env"

    def test_create_example_file(self, clean_env: Path) -> None:
        path = EnvFileLoader(clean_env).create_example_env_file()

        assert path == clean_env / ".pco" / ".env"
        assert "PLANNING_CENTER_PAT=" in path.read_text(encoding="utf-8")
        with pytest.raises(FileExistsError):
            EnvFileLoader(clean_env).create_example_env_file()

    def test_create_example_file_user_scope(self, clean_env: Path) -> None:
        path = EnvFileLoader(clean_env).create_example_env_file(scope="user")
        assert path == Path.home() / ".pco" / ".env"
