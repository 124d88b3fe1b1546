"""Shared fixtures for CLI execution tests."""

from __future__ import annotations

import pytest

from tests.api.conftest import WSDL_PATH


@pytest.fixture()
def cli_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set environment variables so ADSClient works without keyring credentials."""
    env = {
        "CHROMEDATA_ACCOUNT_NUMBER": "123456",
        "CHROMEDATA_ACCOUNT_SECRET": "s3cret",
        "CHROMEDATA_ENDPOINT": str(WSDL_PATH),
        "CHROMEDATA_CONCURRENCY": "2",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env
