"""Helpers for normalising raw score values coming from stored documents."""

from __future__ import annotations

import math
from typing import Any


def coerce_games(value: Any) -> int:
    """Return ``value`` as a non-negative game count.

    Integers pass through, numeric strings are parsed and finite floats are
    truncated. Anything else (``None``, booleans, garbage strings, negative or
    non-finite numbers) becomes ``0`` so a malformed set never prevents the
    standings from being computed.
    """

    # Reject booleans explicitly (bool is a subclass of int in Python)
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
        try:
            value = float(value)
        except ValueError:
            return 0

    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        value = int(value)

    if not isinstance(value, int):
        return 0

    return value if value > 0 else 0


def round_half_up(value: float) -> int:
    """Round the way ``Math.round`` does: halves go towards positive infinity."""

    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Return ``part / total`` as a whole percentage, or ``0`` when ``total`` is 0."""

    if total <= 0:
        return 0
    return round_half_up(part / total * 100)
