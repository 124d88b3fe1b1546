"""Account credentials and the provider protocol the client consumes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class CredentialProvider(Protocol):
    """Anything that can hand out a ChromeData account number and secret."""

    @property
    def account_number(self) -> str | None: ...

    @property
    def account_secret(self) -> str | None: ...


class AccountCredentials(BaseModel):
    """A fixed ChromeData account number / secret pair."""

    account_number: str
    account_secret: str

    def __repr__(self) -> str:
        return f"AccountCredentials(account_number={self.account_number!r}, account_secret='***')"
