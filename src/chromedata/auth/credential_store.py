"""Keyring-backed credential persistence."""

from __future__ import annotations

import contextlib

import keyring
from keyring.errors import PasswordDeleteError

SERVICE_NAME = "chromedata"


class CredentialStore:
    """Read / write ChromeData account credentials via the OS keyring.

    Implements :class:`~chromedata.auth.credentials.CredentialProvider`, so a
    store can be handed straight to :class:`~chromedata.api.client.ADSClient`.
    """

    def __init__(self, profile: str = "default") -> None:
        self._profile = profile

    # -- key helpers ---------------------------------------------------------

    def _key(self, name: str) -> str:
        return f"{self._profile}/{name}"

    # -- properties ----------------------------------------------------------

    @property
    def profile(self) -> str:
        return self._profile

    @property
    def account_number(self) -> str | None:
        """Return the stored account number, or *None*."""
        return keyring.get_password(SERVICE_NAME, self._key("account_number"))

    @property
    def account_secret(self) -> str | None:
        """Return the stored account secret, or *None*."""
        return keyring.get_password(SERVICE_NAME, self._key("account_secret"))

    @property
    def has_credentials(self) -> bool:
        """Return *True* if both halves of the credential pair are stored."""
        return self.account_number is not None and self.account_secret is not None

    # -- mutators ------------------------------------------------------------

    def save(self, account_number: str, account_secret: str) -> None:
        """Persist both keyring entries."""
        keyring.set_password(SERVICE_NAME, self._key("account_number"), account_number)
        keyring.set_password(SERVICE_NAME, self._key("account_secret"), account_secret)

    def clear(self) -> None:
        """Delete all stored credentials, ignoring missing entries."""
        for name in ("account_number", "account_secret"):
            with contextlib.suppress(PasswordDeleteError):
                keyring.delete_password(SERVICE_NAME, self._key(name))
