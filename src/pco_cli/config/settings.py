"""
Configuration settings for pco-cli.

This module provides configuration management using Pydantic settings
with support for environment variables, .env files and hierarchical
settings files.
"""

from typing import Optional, Dict, Any
from pathlib import Path
import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pco_cli import USER_AGENT
from pco_cli.core.client.auth import DEFAULT_TOKEN_URL
from pco_cli.core.client.connection import DEFAULT_BASE_URL
from pco_cli.core.client.errors import ConfigurationError

logger = logging.getLogger(__name__)

SECRET_KEYS = frozenset({
    "personal_access_token",
    "client_secret",
    "access_token",
    "refresh_token",
})

OUTPUT_FORMATS = ("table", "json", "csv")


class PlanningCenterSettings(BaseSettings):
    """
    Connection and CLI settings.

    Settings are loaded from multiple sources in order of preference:
    1. Explicit keyword arguments (command-line options)
    2. Environment variables (prefixed with PCO_, plus PLANNING_CENTER_PAT)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="PCO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Connection
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Planning Center API base URL"
    )

    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0
    )

    max_retry_attempts: int = Field(
        default=3,
        description="Maximum attempts for transient failures",
        ge=0,
        le=10
    )

    retry_base_delay: float = Field(
        default=1.0,
        description="Base delay in seconds for exponential backoff",
        ge=0
    )

    user_agent: str = Field(
        default=USER_AGENT,
        description="User-Agent header sent with every request"
    )

    # Authentication
    personal_access_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "personal_access_token",
            "PCO_PERSONAL_ACCESS_TOKEN",
            "PLANNING_CENTER_PAT",
        ),
        description="Personal Access Token in app_id:secret form"
    )

    client_id: Optional[str] = Field(default=None, description="OAuth client id")
    client_secret: Optional[str] = Field(default=None, description="OAuth client secret")
    access_token: Optional[str] = Field(default=None, description="OAuth access token")
    refresh_token: Optional[str] = Field(default=None, description="OAuth refresh token")

    token_url: str = Field(
        default=DEFAULT_TOKEN_URL,
        description="OAuth token endpoint"
    )

    # Output
    default_output_format: str = Field(
        default="table",
        description="Default CLI output format"
    )

    default_page_size: int = Field(
        default=25,
        description="Default page size for list commands",
        ge=1,
        le=100
    )

    # Logging
    detailed_logging: bool = Field(
        default=False,
        description="Log request and response bodies"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    @field_validator("base_url", "token_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that URLs are absolute http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL '{v}'. Must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("personal_access_token")
    @classmethod
    def validate_personal_access_token(cls, v: Optional[str]) -> Optional[str]:
        """Validate the app_id:secret format."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        app_id, _, secret = v.partition(":")
        if not app_id or not secret:
            raise ValueError("Personal Access Token must be in the format 'app_id:secret'")
        return v

    @field_validator("default_output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        v_lower = v.lower()
        if v_lower not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output format '{v}'. Valid formats: {', '.join(OUTPUT_FORMATS)}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @property
    def has_credentials(self) -> bool:
        """Check if any authentication method is configured."""
        return bool(
            self.personal_access_token
            or self.access_token
            or (self.client_id and self.client_secret)
        )

    @property
    def auth_method(self) -> Optional[str]:
        """Name of the authentication method that will be used."""
        if self.personal_access_token:
            return "personal_access_token"
        if self.access_token or (self.client_id and self.client_secret):
            return "oauth"
        return None

    def validate_credentials(self) -> None:
        """
        Ensure credentials are usable.

        Raises:
            ConfigurationError: If no complete authentication method is configured
        """
        if self.client_id and not self.client_secret and not self.personal_access_token:
            raise ConfigurationError(
                "client_secret is required when client_id is set",
                config_field="client_secret",
            )
        if not self.has_credentials:
            raise ConfigurationError(
                "No Planning Center credentials configured. Use --token, set "
                "PLANNING_CENTER_PAT, or configure OAuth client settings.",
                config_field="personal_access_token",
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary, masking sensitive data."""
        data = self.model_dump()
        for key in SECRET_KEYS:
            if data.get(key):
                data[key] = "***masked***"
        return data


def get_settings(**overrides: Any) -> PlanningCenterSettings:
    """Build settings from the environment, with explicit overrides on top."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return PlanningCenterSettings(**values)


def load_settings(
    working_directory: Optional[Path] = None,
    load_env_file: bool = True,
    **overrides: Any,
) -> PlanningCenterSettings:
    """
    Load effective settings from every source.

    Precedence (lowest to highest): defaults, user settings file, project
    settings file, .env file and environment variables, explicit overrides.

    Args:
        working_directory: Directory used for .env and project settings discovery
        load_env_file: Search for and load a .env file first
        **overrides: Values from command-line options; None values are ignored

    Returns:
        Validated settings
    """
    from .env_loader import EnvFileLoader
    from .hierarchical import HierarchicalConfigLoader

    if load_env_file:
        EnvFileLoader(working_directory).load_env_file()

    merged = HierarchicalConfigLoader(working_directory).load_all_settings(include_defaults=False)
    known = set(PlanningCenterSettings.model_fields)
    values = {key: value for key, value in merged.items() if key in known and value is not None}
    values.update({key: value for key, value in overrides.items() if value is not None})

    logger.debug(f"Effective settings keys: {sorted(values)}")
    return PlanningCenterSettings(**values)
