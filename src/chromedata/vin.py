"""VIN normalization and check-digit validation (ISO 3779 / 49 CFR 565)."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any

VIN_LENGTH = 17
CHECK_DIGIT_INDEX = 8

_VIN_PATTERN = re.compile(r"[A-HJ-NPR-Z0-9]{17}")

TRANSLITERATIONS: MappingProxyType[str, int] = MappingProxyType(
    {
        "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8,
        "J": 1, "K": 2, "L": 3, "M": 4, "N": 5, "P": 7, "R": 9, "S": 2,
        "T": 3, "U": 4, "V": 5, "W": 6, "X": 7, "Y": 8, "Z": 9,
    }
)  # fmt: skip

WEIGHTS: tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2)


def normalize_vin(vin: str) -> str:
    """Return *vin* stripped of surrounding whitespace and upper-cased."""
    return vin.strip().upper()


def is_well_formed_vin(vin: Any) -> bool:
    """Return *True* if *vin* is 17 characters of the VIN alphabet.

    Only the structure is checked; see :func:`is_valid_vin` for the
    check digit.  Non-ASCII input is rejected before case folding so
    that characters such as ``"ſ"`` never fold into the alphabet.
    """
    if not isinstance(vin, str) or not vin.isascii():
        return False
    return _VIN_PATTERN.fullmatch(vin.upper()) is not None


def compute_check_digit(vin: str) -> str | None:
    """Return the expected check character for *vin*, or *None* if malformed.

    The character already at the check position is ignored (its weight is
    zero), so a VIN with a wrong check digit still yields the correct one.
    """
    if not is_well_formed_vin(vin):
        return None

    total = 0
    for char, weight in zip(vin.upper(), WEIGHTS, strict=True):
        value = int(char) if char.isdigit() else TRANSLITERATIONS[char]
        total += value * weight

    remainder = total % 11
    return "X" if remainder == 10 else str(remainder)


def is_valid_vin(vin: Any) -> bool:
    """Return *True* if *vin* is well formed and its check digit matches.

    Case-insensitive.  Never raises: malformed input (wrong length,
    I/O/Q, punctuation, non-strings) simply yields *False*.
    """
    expected = compute_check_digit(vin)
    if expected is None:
        return False
    return bool(vin[CHECK_DIGIT_INDEX].upper() == expected)
