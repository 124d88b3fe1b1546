"""VIN list parsing for batch input."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chromedata.vin import normalize_vin

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


def read_vins(lines: Iterable[str]) -> Iterator[str]:
    """Yield normalized VINs from *lines*, one per line.

    Blank lines and ``#`` comments are skipped.  Only the first
    comma-separated field is used, so a CSV whose first column is the VIN
    works as-is.
    """
    for line in lines:
        text = line.split("#", 1)[0].split(",", 1)[0]
        vin = normalize_vin(text)
        if vin:
            yield vin
