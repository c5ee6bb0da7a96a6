"""
Hierarchical settings files for pco-cli.

Non-secret CLI preferences (output format, page size, retry tuning, base URL)
can be kept in JSON settings files. Comments are allowed. Files are merged
with environment variables in order of precedence.
"""

import os
import re
from pathlib import Path
from typing import Dict, Any, Callable, List, Optional, Tuple, Union
import logging
from enum import Enum
from dataclasses import dataclass, field

import commentjson

logger = logging.getLogger(__name__)

ENV_PREFIX = "PCO_"
PAT_ENV_VAR = "PLANNING_CENTER_PAT"

# Credentials are accepted from the environment only, never written to disk
SECRET_SETTINGS = frozenset({
    "personal_access_token",
    "client_secret",
    "access_token",
    "refresh_token",
})

DEFAULT_SETTINGS: Dict[str, Any] = {
    "base_url": "https://api.planningcenteronline.com",
    "token_url": "https://api.planningcenteronline.com/oauth/token",
    "timeout": 30.0,
    "max_retry_attempts": 3,
    "retry_base_delay": 1.0,
    "default_output_format": "table",
    "default_page_size": 25,
    "detailed_logging": False,
    "log_level": "WARNING",
}


class SettingScope(Enum):
    """Configuration scope levels."""
    DEFAULT = "default"
    USER = "user"
    PROJECT = "project"
    ENVIRONMENT = "environment"


@dataclass
class SettingsFile:
    """Represents a settings file with its path and content."""
    path: Path
    settings: Dict[str, Any]
    scope: SettingScope
    exists: bool = True
    errors: List[str] = field(default_factory=list)


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "timeout": float,
    "max_retry_attempts": int,
    "retry_base_delay": float,
    "default_page_size": int,
    "detailed_logging": _parse_bool,
}


class HierarchicalConfigLoader:
    """
    Loads and merges settings from multiple sources.

    Configuration precedence (higher numbers override lower):
    1. Default values
    2. User settings ($XDG_CONFIG_HOME/pco/settings.json or ~/.config/pco/settings.json)
    3. Project settings (.pco/settings.json, searched upward to the git root)
    4. Environment variables (PCO_*, PLANNING_CENTER_PAT)
    """

    CONFIG_DIR_NAME = ".pco"
    APP_DIR_NAME = "pco"
    SETTINGS_FILE_NAME = "settings.json"

    def __init__(self, working_directory: Optional[Path] = None):
        """Initialize the loader.

        Args:
            working_directory: Directory used for project settings discovery
        """
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self._settings_files: Dict[SettingScope, SettingsFile] = {}
        self._merged_settings: Optional[Dict[str, Any]] = None

    def load_all_settings(self, include_defaults: bool = True) -> Dict[str, Any]:
        """Load and merge all configuration sources.

        Args:
            include_defaults: Start from the built-in defaults

        Returns:
            Merged configuration dictionary
        """
        self._load_default_settings()
        self._load_user_settings()
        self._load_project_settings()
        self._load_environment_variables()

        self._merged_settings = self._merge_settings(include_defaults)
        return self._merged_settings

    def get_settings_file(self, scope: SettingScope) -> Optional[SettingsFile]:
        return self._settings_files.get(scope)

    def set_value(self, scope: SettingScope, key: str, value: Any) -> Path:
        """Set a single key in a settings file and save it.

        Args:
            scope: USER or PROJECT
            key: Setting name
            value: New value

        Returns:
            Path of the written file

        Raises:
            ValueError: For secret keys, unknown keys or read-only scopes
        """
        if key not in DEFAULT_SETTINGS:
            if key in SECRET_SETTINGS:
                raise ValueError(
                    f"'{key}' is a credential and cannot be stored in a settings file. "
                    f"Use the {PAT_ENV_VAR} or {ENV_PREFIX}{key.upper()} environment variable."
                )
            raise ValueError(
                f"Unknown setting '{key}'. Valid settings: {', '.join(sorted(DEFAULT_SETTINGS))}"
            )

        if scope not in self._settings_files:
            self.load_all_settings()
        current = dict(self._settings_files[scope].settings) if scope in self._settings_files else {}
        current[key] = value
        self.save_settings(scope, current)
        return self._settings_files[scope].path

    def save_settings(self, scope: SettingScope, settings: Dict[str, Any]) -> None:
        """Save settings to a specific scope.

        Args:
            scope: Configuration scope to save to
            settings: Settings dictionary to save

        Raises:
            ValueError: For DEFAULT/ENVIRONMENT scopes or if a secret is included
            OSError: If the file cannot be written
        """
        if scope in (SettingScope.DEFAULT, SettingScope.ENVIRONMENT):
            raise ValueError(f"Cannot save to {scope.name} scope")

        secrets = sorted(SECRET_SETTINGS.intersection(settings))
        if secrets:
            raise ValueError(f"Refusing to save credentials to a settings file: {', '.join(secrets)}")

        settings_file = self._settings_files.get(scope)
        if not settings_file:
            settings_file = SettingsFile(
                path=self._get_settings_path(scope),
                settings={},
                scope=scope,
                exists=False
            )
            self._settings_files[scope] = settings_file

        settings_file.path.parent.mkdir(parents=True, exist_ok=True)
        with open(settings_file.path, 'w', encoding='utf-8') as f:
            commentjson.dump(settings, f, indent=2)

        settings_file.settings = settings
        settings_file.exists = True
        self._merged_settings = None

        logger.info(f"Saved settings to {scope.value}: {settings_file.path}")

    def _load_default_settings(self) -> None:
        self._settings_files[SettingScope.DEFAULT] = SettingsFile(
            path=Path("(default)"),
            settings=dict(DEFAULT_SETTINGS),
            scope=SettingScope.DEFAULT,
        )

    def _load_user_settings(self) -> None:
        settings_path = self._get_user_config_dir() / self.SETTINGS_FILE_NAME
        self._settings_files[SettingScope.USER] = self._load_settings_file(
            settings_path, SettingScope.USER
        )

    def _load_project_settings(self) -> None:
        project_config_dir = self._find_project_config_dir()
        if project_config_dir:
            self._settings_files[SettingScope.PROJECT] = self._load_settings_file(
                project_config_dir / self.SETTINGS_FILE_NAME, SettingScope.PROJECT
            )
        else:
            self._settings_files[SettingScope.PROJECT] = SettingsFile(
                path=self.working_directory / self.CONFIG_DIR_NAME / self.SETTINGS_FILE_NAME,
                settings={},
                scope=SettingScope.PROJECT,
                exists=False
            )

    def _env_mapping(self) -> List[Tuple[str, str]]:
        keys = list(DEFAULT_SETTINGS) + ["client_id", "user_agent"] + sorted(SECRET_SETTINGS)
        mapping = [(f"{ENV_PREFIX}{key.upper()}", key) for key in keys]
        # Later entries win: the prefixed variable overrides the short name
        mapping.insert(0, (PAT_ENV_VAR, "personal_access_token"))
        return mapping

    def _load_environment_variables(self) -> None:
        """Load settings from environment variables."""
        env_settings: Dict[str, Any] = {}

        for env_var, key in self._env_mapping():
            value = os.environ.get(env_var)
            if value is None or value == "":
                continue
            converter = _CONVERTERS.get(key)
            try:
                env_settings[key] = converter(value) if converter else value
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid value for {env_var}: {value} - {e}")

        self._settings_files[SettingScope.ENVIRONMENT] = SettingsFile(
            path=Path("(environment)"),
            settings=env_settings,
            scope=SettingScope.ENVIRONMENT,
            exists=bool(env_settings)
        )

    def _load_settings_file(self, file_path: Path, scope: SettingScope) -> SettingsFile:
        """Load settings from a JSON file.

        Secret keys found in a file are ignored with a warning.
        """
        settings_file = SettingsFile(
            path=file_path,
            settings={},
            scope=scope,
            exists=file_path.exists()
        )

        if not settings_file.exists:
            logger.debug(f"Settings file not found: {file_path}")
            return settings_file

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                parsed = commentjson.loads(f.read())
        except Exception as e:
            error_msg = f"Error loading {file_path}: {e}"
            logger.error(error_msg)
            settings_file.errors.append(error_msg)
            return settings_file

        if not isinstance(parsed, dict):
            settings_file.errors.append(f"{file_path} must contain a JSON object")
            return settings_file

        for key in SECRET_SETTINGS.intersection(parsed):
            logger.warning(f"Ignoring credential '{key}' in {file_path}")
            parsed.pop(key)

        settings_file.settings = self._resolve_env_vars(parsed)
        logger.debug(f"Loaded settings from {scope.value}: {file_path}")
        return settings_file

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Resolve $VAR_NAME and ${VAR_NAME} references in values."""
        if isinstance(obj, str):
            return self._resolve_env_vars_in_string(obj)
        elif isinstance(obj, dict):
            return {key: self._resolve_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def _resolve_env_vars_in_string(self, value: str) -> str:
        env_var_pattern = re.compile(r'\$(?:(\w+)|\{([^}]+)\})')

        def replace_env_var(match):
            var_name = match.group(1) or match.group(2)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            logger.warning(f"Environment variable not found: {var_name}")
            return match.group(0)

        return env_var_pattern.sub(replace_env_var, value)

    def _merge_settings(self, include_defaults: bool = True) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}

        precedence_order = [
            SettingScope.USER,
            SettingScope.PROJECT,
            SettingScope.ENVIRONMENT,
        ]
        if include_defaults:
            precedence_order.insert(0, SettingScope.DEFAULT)

        for scope in precedence_order:
            settings_file = self._settings_files.get(scope)
            if settings_file and settings_file.settings:
                merged.update(settings_file.settings)

        return merged

    def _get_user_config_dir(self) -> Path:
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            return Path(xdg_config_home) / self.APP_DIR_NAME
        return Path.home() / ".config" / self.APP_DIR_NAME

    def _find_project_config_dir(self) -> Optional[Path]:
        """Find the project configuration directory by searching upward."""
        current_dir = self.working_directory

        while current_dir != current_dir.parent:
            config_dir = current_dir / self.CONFIG_DIR_NAME
            if config_dir.is_dir():
                return config_dir

            if (current_dir / ".git").exists():
                break

            current_dir = current_dir.parent

        return None

    def _get_settings_path(self, scope: SettingScope) -> Path:
        if scope == SettingScope.USER:
            return self._get_user_config_dir() / self.SETTINGS_FILE_NAME
        elif scope == SettingScope.PROJECT:
            project_dir = self._find_project_config_dir()
            if project_dir:
                return project_dir / self.SETTINGS_FILE_NAME
            return self.working_directory / self.CONFIG_DIR_NAME / self.SETTINGS_FILE_NAME
        raise ValueError(f"Cannot get path for scope: {scope}")

    def get_config_summary(self) -> Dict[str, Any]:
        """Get a summary of the configuration sources."""
        summary: Dict[str, Any] = {
            "sources": {},
            "errors": [],
            "working_directory": str(self.working_directory)
        }

        for scope, settings_file in self._settings_files.items():
            summary["sources"][scope.value] = {
                "path": str(settings_file.path),
                "exists": settings_file.exists,
                "settings_count": len(settings_file.settings),
                "errors": settings_file.errors
            }
            summary["errors"].extend(settings_file.errors)

        return summary


def parse_setting_value(value: str) -> Union[str, int, float, bool]:
    """Convert a ``--set key=value`` string to a JSON scalar."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for converter in (int, float):
        try:
            return converter(value)
        except ValueError:
            continue
    return value
