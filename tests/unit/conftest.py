"""
Shared fixtures for pco-cli unit tests.
"""

from typing import Callable

import httpx
import pytest

from factories import BASE_URL, RecordingTransport
from pco_cli.core.client.auth import PersonalAccessTokenAuthenticator
from pco_cli.core.client.connection import ApiConnection
from pco_cli.core.client.retry import RetryConfig

ISOLATED_ENV_VARS = (
    "PLANNING_CENTER_PAT",
    "PCO_PERSONAL_ACCESS_TOKEN",
    "PCO_CLIENT_ID",
    "PCO_CLIENT_SECRET",
    "PCO_ACCESS_TOKEN",
    "PCO_REFRESH_TOKEN",
    "PCO_DEFAULT_OUTPUT_FORMAT",
    "PCO_DEFAULT_PAGE_SIZE",
    "PCO_BASE_URL",
    "PCO_TIMEOUT",
    "PCO_LOG_LEVEL",
    "PCO_MAX_RETRY_ATTEMPTS",
    "PCO_DETAILED_LOGGING",
)


@pytest.fixture
def make_connection():
    """Factory for an ApiConnection backed by a recording mock transport."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], max_attempts: int = 3):
        transport = RecordingTransport(handler)
        connection = ApiConnection(
            PersonalAccessTokenAuthenticator("app-id:secret"),
            base_url=BASE_URL,
            retry_config=RetryConfig(max_attempts=max_attempts, initial_delay_ms=0, jitter=False),
            transport=transport,
        )
        return connection, transport

    return factory


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Isolate a test from real credentials, settings files and .env files.

    Returns the working directory the test runs in.
    """
    for name in ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    (work / ".git").mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.chdir(work)
    return work
