"""Tolerant parsing of the free-form additional points field."""

from __future__ import annotations

import math
import re
from decimal import Decimal

# Optional minus, digits, optional single period, digits.
_DECIMAL_TOKEN = re.compile(r"-?\d*\.?\d+")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def normalize_additional_points(raw: object) -> float:
    """Parse a raw additional points value into a finite float.

    Historical rows contain values such as ``"00.500.900.202.00"`` (several
    numbers glued together) or ``"1,5"``. The first well-formed decimal token
    wins; anything unparseable degrades to ``0.0``. Never raises.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
        try:
            return _finite_or_zero(float(raw))
        except (ValueError, OverflowError):
            return 0.0

    text = str(raw).replace(",", ".")
    match = _DECIMAL_TOKEN.search(text)
    if match is not None:
        return _parse_float(match.group(0))
    return _parse_float(_collapse_periods(_NON_NUMERIC.sub("", text)))


def _collapse_periods(text: str) -> str:
    dot_index = text.find(".")
    if dot_index == -1:
        return text
    return text[: dot_index + 1] + text[dot_index + 1 :].replace(".", "")


def _parse_float(text: str) -> float:
    try:
        value = float(text)
    except (ValueError, OverflowError):
        return 0.0
    return _finite_or_zero(value)


def _finite_or_zero(value: float) -> float:
    if math.isfinite(value):
        return value
    return 0.0


__all__ = ["normalize_additional_points"]
