"""Shared helpers for building the ADS client from settings and the keyring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chromedata.api.client import ADSClient
from chromedata.api.errors import ConfigError
from chromedata.auth.credential_store import CredentialStore
from chromedata.auth.credentials import AccountCredentials
from chromedata.models.config import AppSettings

if TYPE_CHECKING:
    from chromedata.auth.credentials import CredentialProvider
    from chromedata.cli.main import AppContext


def resolve_credentials(app_ctx: AppContext, settings: AppSettings) -> CredentialProvider:
    """Return credentials from the environment, falling back to the keyring.

    Environment variables win only when both halves are set, so a stray
    ``CHROMEDATA_ACCOUNT_NUMBER`` never pairs with a keyring secret.
    """
    if settings.account_number and settings.account_secret:
        return AccountCredentials(
            account_number=settings.account_number,
            account_secret=settings.account_secret,
        )

    store = CredentialStore(profile=app_ctx.profile)
    if not store.has_credentials:
        raise ConfigError(
            f"No ChromeData account credentials found for profile '{app_ctx.profile}'."
            " Run 'chromedata auth set' or set CHROMEDATA_ACCOUNT_NUMBER and"
            " CHROMEDATA_ACCOUNT_SECRET."
        )
    return store


def get_client(app_ctx: AppContext, settings: AppSettings | None = None) -> ADSClient:
    """Build an :class:`ADSClient` from settings / credential store."""
    settings = settings or AppSettings()
    return ADSClient(
        resolve_credentials(app_ctx, settings),
        endpoint=settings.endpoint,
        country=settings.country,
        language=settings.language,
        timeout=settings.timeout,
    )
