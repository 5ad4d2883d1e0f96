"""Derived and legacy-format field helpers used by the form controller."""

import math
import re
from typing import Any

from catalog_admin.domain.definitions import (
    DEFAULT_QUANTITY_UNIT,
    QUANTITY_UNIT_ALIASES,
    QUANTITY_UNITS,
)

_LEGACY_QUANTITY = re.compile(r"^(\d+(?:\.\d+)?)\s*(.+)$")
_LEADING_INTEGER = re.compile(r"^\s*(\d+)")


def parse_number(value: Any) -> float | None:
    """Parse a form input as a number.

    Returns None for blank input; raises ValueError for anything that is
    present but not numeric. NaN and infinities count as not numeric.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, (int, float)):
        raw = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
    try:
        number = float(raw)
    except OverflowError:
        raise ValueError(f"not a finite number: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def compact_number(value: float) -> int | float:
    """Render integral floats as ints (``500.0`` -> ``500``)."""
    return int(value) if float(value).is_integer() else value


def compute_discount(actual_mrp: Any, offered_mrp: Any) -> float:
    """Discount percentage of the offered price against the actual price.

    ``round((actual - offered) / actual * 100, 2)`` when actual > offered,
    otherwise 0. Missing or non-numeric prices also give 0.
    """
    try:
        actual = parse_number(actual_mrp)
        offered = parse_number(offered_mrp)
    except ValueError:
        return 0.0
    if actual is None or offered is None or actual <= 0:
        return 0.0
    if actual > offered:
        return round((actual - offered) / actual * 100, 2)
    return 0.0


def parse_legacy_quantity(raw: Any) -> tuple[int | float | str, str]:
    """Split a legacy ``totalQuantity`` string such as ``"500 ml"`` into (value, unit).

    Text that does not start with a number is kept whole as the value, with
    the default unit.
    """
    text = str(raw).strip()
    match = _LEGACY_QUANTITY.match(text)
    if match is None:
        return text, DEFAULT_QUANTITY_UNIT
    return compact_number(float(match.group(1))), normalize_quantity_unit(match.group(2))


def normalize_quantity_unit(unit: str) -> str:
    """Map free-text legacy units (``"ML"``, ``"gms"``, ``"box"``) onto the unit choices.

    Units with no known spelling are returned stripped but otherwise unchanged.
    """
    cleaned = unit.strip()
    key = cleaned.lower()
    if key in QUANTITY_UNITS:
        return key
    return QUANTITY_UNIT_ALIASES.get(key, cleaned)


def parse_leading_integer(raw: Any) -> int | None:
    """Read the leading whole number of a legacy value such as ``"500 ml"``."""
    match = _LEADING_INTEGER.match(str(raw))
    return int(match.group(1)) if match else None


def format_quantity(value: Any, unit: str) -> str:
    """Display string persisted next to the compound quantity, e.g. ``"2 boxes"``."""
    try:
        number = parse_number(value)
    except ValueError:
        number = None
    return f"{compact_number(number or 0.0)} {unit}"
