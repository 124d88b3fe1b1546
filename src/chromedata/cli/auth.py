"""CLI commands for ChromeData account credentials (keyring)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chromedata.auth.credential_store import CredentialStore
from chromedata.cli._options import global_options
from chromedata.models.config import AppSettings

if TYPE_CHECKING:
    from chromedata.cli.main import AppContext

auth_group = click.Group("auth", help="Account credential management")


def _mask(value: str | None) -> str | None:
    if not value:
        return None
    return f"{value[:2]}***" if len(value) > 4 else "***"


@auth_group.command("set")
@click.option("--account-number", prompt="Account number", help="ChromeData account number")
@click.option(
    "--account-secret",
    prompt="Account secret",
    hide_input=True,
    help="ChromeData account secret",
)
@global_options
def set_cmd(app_ctx: AppContext, account_number: str, account_secret: str) -> None:
    """Store account credentials in the OS keyring."""
    formatter = app_ctx.formatter
    account_number = account_number.strip()
    account_secret = account_secret.strip()
    if not account_number or not account_secret:
        raise click.BadParameter("account number and secret must not be empty")

    store = CredentialStore(profile=app_ctx.profile)
    store.save(account_number, account_secret)

    if formatter.format == "json":
        formatter.output({"profile": store.profile, "saved": True}, command="auth.set")
    else:
        formatter.rich.command_result(True, f"Credentials saved for profile '{store.profile}'.")


@auth_group.command("status")
@global_options
def status_cmd(app_ctx: AppContext) -> None:
    """Show where credentials will be read from."""
    formatter = app_ctx.formatter
    settings = AppSettings()
    store = CredentialStore(profile=app_ctx.profile)

    if settings.account_number and settings.account_secret:
        source = "environment"
        number = settings.account_number
    elif store.has_credentials:
        source = "keyring"
        number = store.account_number
    else:
        source = None
        number = None

    info = {
        "profile": store.profile,
        "source": source,
        "account_number": _mask(number),
        "endpoint": settings.endpoint,
    }

    if formatter.format == "json":
        formatter.output(info, command="auth.status")
        return

    if source is None:
        formatter.rich.info("[yellow]No credentials configured.[/yellow]")
        formatter.rich.info("Run [cyan]chromedata auth set[/cyan] to store them.")
        return
    formatter.rich.info(f"Profile:   {info['profile']}")
    formatter.rich.info(f"Source:    {source}")
    formatter.rich.info(f"Account:   {info['account_number']}")
    formatter.rich.info(f"Endpoint:  {info['endpoint']}")


@auth_group.command("clear")
@global_options
def clear_cmd(app_ctx: AppContext) -> None:
    """Remove stored credentials for the profile."""
    formatter = app_ctx.formatter
    store = CredentialStore(profile=app_ctx.profile)
    store.clear()

    if formatter.format == "json":
        formatter.output({"profile": store.profile, "cleared": True}, command="auth.clear")
    else:
        formatter.rich.info(f"Cleared credentials for profile '{store.profile}'.")
