from __future__ import annotations

import math
from typing import Iterable

from .models.material import MaterialEntry

MINUTES_PER_HOUR = 60.0


def parse_amount(value: str | float | int | None) -> float:
    """Read a numeric form field, treating anything unusable as zero.

    Blank text, text that is not a plain decimal number, ``nan``/``inf`` and
    negative values all count as 0. Python digit separators (``1_000``) are
    not accepted.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value or "_" in value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def total_material_cost(materials: Iterable[MaterialEntry]) -> float:
    return sum((parse_amount(material.cost) for material in materials), 0.0)


def labor_hours(hours: str, minutes: str) -> float:
    return parse_amount(hours) + parse_amount(minutes) / MINUTES_PER_HOUR


def compute_base_cost(
    materials: Iterable[MaterialEntry],
    hours: str,
    minutes: str,
    hourly_rate: str,
) -> float:
    """Materials plus labor (time spent at the desired hourly rate)."""
    labor_cost = labor_hours(hours, minutes) * parse_amount(hourly_rate)
    return total_material_cost(materials) + labor_cost


__all__ = ["parse_amount", "total_material_cost", "labor_hours", "compute_base_cost"]
