"""CLI commands that call the ADS ``describeVehicle`` operation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from chromedata._internal.async_utils import run_async
from chromedata._internal.vin import read_vins
from chromedata.cli._client import get_client
from chromedata.cli._options import global_options
from chromedata.models.config import AppSettings

if TYPE_CHECKING:
    from chromedata.api.client import ADSClient
    from chromedata.api.response import ADSResponse
    from chromedata.cli.main import AppContext


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a parameter mapping."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--param")
        params[key.strip()] = value.strip()
    return params


@click.command("describe")
@click.argument("vin")
@click.option(
    "--param",
    "params",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra ADS request field, e.g. trimName=LX (repeatable)",
)
@click.option("--exclude-fleet", is_flag=True, default=False, help="Skip fleet-only styles")
@click.option("--color-photos", is_flag=True, default=False, help="Include color-matched photos")
@global_options
def describe_cmd(
    app_ctx: AppContext,
    vin: str,
    params: tuple[str, ...],
    exclude_fleet: bool,
    color_photos: bool,
) -> None:
    """Describe a vehicle by VIN."""
    formatter = app_ctx.formatter
    parameters = _parse_params(params)
    client = get_client(app_ctx)
    if exclude_fleet:
        client.exclude_fleet()
    if color_photos:
        client.include_color_matched_photos()

    response = client.by_vin(vin, parameters or None)

    if formatter.format == "json":
        formatter.output(response, command="describe")
    else:
        formatter.rich.description(response)


def _batch_row(idx: int, vin: str) -> dict[str, Any]:
    return {"index": idx, "vin": vin, "ok": False, "status": None, "vehicle": None, "error": None}


async def _run_batch(
    client: ADSClient, vins: list[str], concurrency: int
) -> list[dict[str, Any]]:
    rows = [_batch_row(i, v) for i, v in enumerate(vins)]

    def _fulfilled(response: ADSResponse, idx: int) -> None:
        row = rows[idx]
        row["ok"] = True
        row["status"] = response.status_code
        row["vehicle"] = " ".join(
            str(part) for part in (response.model_year, response.make, response.model) if part
        )
        row["response"] = response

    def _rejected(exc: BaseException, idx: int) -> None:
        rows[idx]["error"] = str(exc) or type(exc).__name__

    async with client:
        await client.pool_async(
            (client.by_vin_async(v) for v in vins),
            _fulfilled,
            _rejected,
            concurrency=concurrency,
        )
    return rows


@click.command("batch")
@click.argument("file", type=click.File("r"))
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum requests in flight (default: CHROMEDATA_CONCURRENCY or 15)",
)
@global_options
def batch_cmd(app_ctx: AppContext, file: Any, concurrency: int | None) -> None:
    """Describe every VIN listed in FILE (one per line, '-' for stdin).

    Exits with status 1 if any request fails.
    """
    formatter = app_ctx.formatter
    settings = AppSettings()
    vins = list(read_vins(file))
    client = get_client(app_ctx, settings)

    rows = run_async(_run_batch(client, vins, concurrency or settings.concurrency))

    if formatter.format == "json":
        formatter.output(rows, command="batch")
    elif formatter.format != "quiet":
        formatter.rich.batch_results(rows)

    if not all(row["ok"] for row in rows):
        raise SystemExit(1)
