from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from chromedata.api.response import ADSResponse


class RichOutput:
    """Rich-based terminal output helpers for *chromedata*."""

    def __init__(self, console: Console) -> None:
        self._con = console

    # ------------------------------------------------------------------
    # Local VIN checks
    # ------------------------------------------------------------------

    def vin_checks(self, results: list[dict[str, Any]]) -> None:
        """Print a table of ``vin check`` results."""
        table = Table(title="VIN Check")
        table.add_column("VIN", style="cyan")
        table.add_column("Result")
        table.add_column("Check digit", justify="center")

        for r in results:
            if r["valid"]:
                result = "[green]valid[/green]"
            elif r["well_formed"]:
                result = "[red]checksum mismatch[/red]"
            else:
                result = "[red]invalid format[/red]"
            table.add_row(r["vin"], result, r["expected_check_digit"] or "-")

        self._con.print(table)

    # ------------------------------------------------------------------
    # Vehicle description
    # ------------------------------------------------------------------

    def description(self, response: ADSResponse) -> None:
        """Print a panel with the decoded vehicle and its matching styles."""
        title = " ".join(
            str(part) for part in (response.model_year, response.make, response.model) if part
        )
        heading = title or response.vin or "Unknown vehicle"
        self._con.print(Panel(f"[bold]{heading}[/bold]", expand=False))

        status = response.response_status
        status_style = "green" if response.is_successful else "yellow"
        table = Table(title="Description")
        table.add_column("Field", style="bold")
        table.add_column("Value")

        table.add_row("VIN", response.vin or "")
        table.add_row(
            "Status",
            f"[{status_style}]{status.response_code or 'unknown'}[/{status_style}]",
        )
        if response.style_name:
            table.add_row("Style", response.style_name)
        if response.trim:
            table.add_row("Trim", response.trim)
        for msg in status.status:
            if msg.message:
                table.add_row("Note", msg.message)
        self._con.print(table)

        if response.styles:
            self.styles(response)

    def styles(self, response: ADSResponse) -> None:
        """Print a table of the styles ADS matched for the VIN."""
        table = Table(title="Styles")
        table.add_column("ID", justify="right")
        table.add_column("Name")
        table.add_column("Trim")
        table.add_column("Model code")

        for s in response.styles:
            table.add_row(
                str(s.id) if s.id is not None else "",
                s.name or "",
                s.trim or "",
                s.mfr_model_code or "",
            )

        self._con.print(table)

    # ------------------------------------------------------------------
    # Batch summary
    # ------------------------------------------------------------------

    def batch_results(self, rows: list[dict[str, Any]]) -> None:
        """Print one line per pooled request, in input order."""
        table = Table(title="Batch")
        table.add_column("#", justify="right")
        table.add_column("VIN", style="cyan")
        table.add_column("Result")
        table.add_column("Vehicle")

        for row in rows:
            if row["ok"]:
                result = f"[green]{row['status'] or 'ok'}[/green]"
            else:
                result = f"[red]{row['error']}[/red]"
            table.add_row(str(row["index"]), row["vin"], result, row.get("vehicle") or "")

        self._con.print(table)

    # ------------------------------------------------------------------
    # Command result helpers
    # ------------------------------------------------------------------

    def command_result(self, success: bool, message: str = "") -> None:
        """Print a coloured OK / FAILED indicator."""
        text = "[green]OK[/green]" if success else "[red]FAILED[/red]"
        if message:
            text += f"  {message}"
        self._con.print(text)

    def error(self, message: str) -> None:
        """Print a bold red error line."""
        self._con.print(f"[bold red]Error:[/bold red] {message}")

    def info(self, message: str) -> None:
        """Print an informational message (plain)."""
        self._con.print(message)
