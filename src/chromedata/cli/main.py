"""CLI entry-point: Click command group and dispatch."""

from __future__ import annotations

import dataclasses
import logging

import click

from chromedata.api.errors import ConfigError, InvalidVinError, ServiceError, TransportError
from chromedata.output.formatter import OutputFormatter

# ---------------------------------------------------------------------------
# Application context (stored in ctx.obj)
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class AppContext:
    """Shared state passed to every Click command via ``@click.pass_obj``."""

    profile: str
    output_format: str | None
    quiet: bool
    verbose: bool
    _formatter: OutputFormatter | None = dataclasses.field(default=None, repr=False)

    @property
    def formatter(self) -> OutputFormatter:
        if self._formatter is None:
            force = "quiet" if self.quiet else self.output_format
            self._formatter = OutputFormatter(force_format=force)
        return self._formatter


def configure_logging(verbose: bool) -> None:
    """Route *chromedata* (and zeep) debug logs to stderr through Rich."""
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    for name in ("chromedata", "zeep"):
        log = logging.getLogger(name)
        if not any(isinstance(h, RichHandler) for h in log.handlers):
            log.addHandler(handler)
        log.setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Root Click group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--profile", default=None, help="Credential profile name")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["rich", "json", "quiet"]),
    default=None,
    help="Output format (default: auto-detect)",
)
@click.option("--quiet", is_flag=True, default=False, help="Suppress normal output")
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    profile: str | None,
    output_format: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Decode VINs with the ChromeData Automotive Description Service."""
    from chromedata.models.config import AppSettings

    settings = AppSettings()
    ctx.ensure_object(dict)
    ctx.obj = AppContext(
        profile=profile or settings.profile,
        output_format=output_format or settings.output_format,
        quiet=quiet,
        verbose=verbose,
    )
    configure_logging(verbose)


# ---------------------------------------------------------------------------
# Register subcommand groups (lazy imports keep startup fast)
# ---------------------------------------------------------------------------


def _register_commands() -> None:
    """Import and attach all subcommands to the root CLI."""
    from chromedata.cli.auth import auth_group
    from chromedata.cli.describe import batch_cmd, describe_cmd
    from chromedata.cli.vin import vin_group

    cli.add_command(auth_group)
    cli.add_command(batch_cmd)
    cli.add_command(describe_cmd)
    cli.add_command(vin_group)


_register_commands()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate command handler."""
    try:
        cli(args=argv, standalone_mode=False)
    except click.exceptions.Exit as exc:
        raise SystemExit(exc.exit_code) from None
    except click.exceptions.Abort:
        raise SystemExit(1) from None
    except click.exceptions.ClickException as exc:
        exc.show()
        raise SystemExit(exc.exit_code) from None
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except SystemExit:
        raise
    except Exception as exc:
        app_ctx = _extract_app_ctx()
        formatter = app_ctx.formatter if app_ctx else OutputFormatter()
        cmd_name = _get_command_name()

        if _handle_known_error(exc, formatter, cmd_name):
            raise SystemExit(1) from exc

        formatter.output_error(
            code=type(exc).__name__,
            message=str(exc),
            command=cmd_name,
        )
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# Helpers for error handling
# ---------------------------------------------------------------------------


def _extract_app_ctx() -> AppContext | None:
    """Try to extract AppContext from the current Click context."""
    ctx = click.get_current_context(silent=True)
    while ctx is not None:
        if isinstance(ctx.obj, AppContext):
            return ctx.obj
        ctx = ctx.parent
    return None


def _get_command_name() -> str:
    """Reconstruct a dotted command name from the Click context chain."""
    ctx = click.get_current_context(silent=True)
    parts: list[str] = []
    while ctx is not None:
        if ctx.info_name and ctx.info_name != "cli":
            parts.append(ctx.info_name)
        ctx = ctx.parent
    return ".".join(reversed(parts)) or "unknown"


def _handle_known_error(
    exc: Exception,
    formatter: OutputFormatter,
    cmd_name: str,
) -> bool:
    """Handle well-known errors with friendly output.

    Returns ``True`` if the error was handled and the caller should exit.
    """
    if isinstance(exc, ConfigError):
        _show_error(
            formatter,
            cmd_name,
            code="config_error",
            message=str(exc),
            steps=["chromedata auth set"],
        )
        return True
    if isinstance(exc, InvalidVinError):
        _show_error(
            formatter,
            cmd_name,
            code=f"invalid_vin_{exc.reason}",
            message=str(exc),
            steps=[f"chromedata vin check {exc.vin}"],
        )
        return True
    if isinstance(exc, ServiceError):
        message = str(exc) or "ADS rejected the request."
        if exc.fault_code:
            message = f"{message} (fault {exc.fault_code})"
        _show_error(formatter, cmd_name, code="service_error", message=message)
        return True
    if isinstance(exc, TransportError):
        _show_error(
            formatter,
            cmd_name,
            code="transport_error",
            message=str(exc) or "Could not reach the ADS service.",
            hint="Check your network connection or CHROMEDATA_ENDPOINT.",
        )
        return True
    return False


def _show_error(
    formatter: OutputFormatter,
    cmd_name: str,
    *,
    code: str,
    message: str,
    hint: str = "",
    steps: list[str] | None = None,
) -> None:
    """Print *message* with optional next steps, or a JSON error envelope."""
    if formatter.format == "json":
        formatter.output_error(
            code=code,
            message=f"{message} {hint}".strip(),
            command=cmd_name,
        )
        return

    formatter.rich.error(message)
    if hint:
        formatter.rich.info(f"[dim]{hint}[/dim]")
    if steps:
        formatter.rich.info("")
        formatter.rich.info("Next steps:")
        for step in steps:
            formatter.rich.info(f"  [cyan]{step}[/cyan]")
