"""CLI commands for local VIN validation (no network)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chromedata.cli._options import global_options
from chromedata.vin import compute_check_digit, is_valid_vin, is_well_formed_vin, normalize_vin

if TYPE_CHECKING:
    from chromedata.cli.main import AppContext

vin_group = click.Group("vin", help="Local VIN utilities")


def check_result(vin: str) -> dict[str, Any]:
    """Return the structural and check-digit verdict for one VIN."""
    normalized = normalize_vin(vin)
    return {
        "vin": normalized,
        "well_formed": is_well_formed_vin(normalized),
        "valid": is_valid_vin(normalized),
        "expected_check_digit": compute_check_digit(normalized),
    }


@vin_group.command("check")
@click.argument("vins", nargs=-1, required=True)
@global_options
def check_cmd(app_ctx: AppContext, vins: tuple[str, ...]) -> None:
    """Validate VIN check digits locally.

    Exits with status 1 if any VIN fails.
    """
    formatter = app_ctx.formatter
    results = [check_result(v) for v in vins]

    if formatter.format == "json":
        formatter.output(results, command="vin.check")
    elif formatter.format != "quiet":
        formatter.rich.vin_checks(results)

    if not all(r["valid"] for r in results):
        raise SystemExit(1)
