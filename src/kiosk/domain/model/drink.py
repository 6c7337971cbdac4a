"""Drink selection value object.

Everything a kiosk submits is untrusted and every field is optional.
``DrinkSelection.from_raw()`` turns whatever arrived into a well-formed
selection instead of rejecting it: each field has a fallback default.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_SIZE = "M"
DEFAULT_SHOT_COUNT = 1


def coerce_cacao(value: Any) -> float | None:
    """Return *value* as a finite number, or None if it is not one."""
    if value is None:
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def coerce_shot_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return DEFAULT_SHOT_COUNT
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SHOT_COUNT
    if not math.isfinite(number) or number != int(number) or number < 1:
        return DEFAULT_SHOT_COUNT
    return int(number)


@dataclass(frozen=True)
class DrinkSelection:
    """A normalized drink configuration.

    ``cacao`` keeps the numeric concentration (None for anything that
    is not a number); the price tier is derived from it by the pricing
    service.  Sizes outside the price table are kept verbatim.
    """

    cacao: float | None = None
    is_iced: bool = False
    size: str = DEFAULT_SIZE
    has_topping: bool = False
    shot_count: int = DEFAULT_SHOT_COUNT

    @staticmethod
    def from_raw(
        cacao: Any = None,
        is_iced: Any = None,
        size: Any = None,
        has_topping: Any = None,
        shot_count: Any = None,
    ) -> DrinkSelection:
        return DrinkSelection(
            cacao=coerce_cacao(cacao),
            is_iced=bool(is_iced),
            size=size if isinstance(size, str) else DEFAULT_SIZE,
            has_topping=bool(has_topping),
            shot_count=coerce_shot_count(shot_count),
        )
