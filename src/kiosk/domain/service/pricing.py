"""Drink pricing.

Prices are whole numbers in the smallest currency unit, so there is no
rounding anywhere.  The amounts themselves live in a ``PriceTable`` value
that can be swapped per deployment; the banding of cacao concentrations
into tiers is fixed.

Pricing is total: every unknown input falls back to a default instead of
raising.  Invalid tables are rejected when they are built, never while
pricing an order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from kiosk.domain.exceptions import ValidationError
from kiosk.domain.model.drink import coerce_cacao

TIER_100 = "100"
TIER_70 = "70.5"
TIER_57 = "57.9"
TIER_MILK = "MILK"

# Evaluated high to low, first match wins.
CACAO_TIERS: tuple[tuple[float, str], ...] = (
    (85, TIER_100),
    (65, TIER_70),
    (45, TIER_57),
)

TIER_LABELS = (TIER_100, TIER_70, TIER_57, TIER_MILK)


def _check_amount(name: str, amount: Any) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(
            f"Price table entry {name} must be an integer, got {amount!r}"
        )
    if amount < 0:
        raise ValidationError(
            f"Price table entry {name} cannot be negative, got {amount}"
        )
    return amount


@dataclass(frozen=True)
class PriceTable:
    """Base prices per tier plus the fixed surcharges."""

    base_prices: Mapping[str, int]
    size_addons: Mapping[str, int]
    ice_addon: int = 0
    topping_addon: int = 0
    shot_addons: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [label for label in TIER_LABELS if label not in self.base_prices]
        if missing:
            raise ValidationError(
                f"Price table has no base price for tier(s): {', '.join(missing)}"
            )
        for label, amount in self.base_prices.items():
            _check_amount(f"base_prices[{label}]", amount)
        for size, amount in self.size_addons.items():
            _check_amount(f"size_addons[{size}]", amount)
        for shots, amount in self.shot_addons.items():
            _check_amount(f"shot_addons[{shots}]", amount)
        _check_amount("ice_addon", self.ice_addon)
        _check_amount("topping_addon", self.topping_addon)

    # --- Lookups ----------------------------------------------------------------

    def base_price(self, tier: str) -> int:
        return self.base_prices[tier]

    def size_addon(self, size: Any) -> int:
        if not isinstance(size, str):
            return 0
        return self.size_addons.get(size, 0)

    def shot_addon(self, shot_count: Any) -> int:
        if isinstance(shot_count, bool) or not isinstance(shot_count, int):
            return 0
        return self.shot_addons.get(shot_count, 0)

    # --- Factory ----------------------------------------------------------------

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> PriceTable:
        """Build a table from its JSON form.

        JSON object keys are always strings, so shot counts are converted
        back to integers here.
        """
        if not isinstance(raw, Mapping):
            raise ValidationError("Price table must be a JSON object")
        try:
            shot_addons = {
                int(shots): amount
                for shots, amount in (raw.get("shot_addons") or {}).items()
            }
            return PriceTable(
                base_prices=dict(raw["base_prices"]),
                size_addons=dict(raw.get("size_addons") or {}),
                ice_addon=raw.get("ice_addon", 0),
                topping_addon=raw.get("topping_addon", 0),
                shot_addons=shot_addons,
            )
        except KeyError as exc:
            raise ValidationError(f"Price table is missing {exc}") from exc
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValidationError(f"Malformed price table: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_prices": dict(self.base_prices),
            "size_addons": dict(self.size_addons),
            "ice_addon": self.ice_addon,
            "topping_addon": self.topping_addon,
            "shot_addons": {str(k): v for k, v in self.shot_addons.items()},
        }


DEFAULT_PRICE_TABLE = PriceTable(
    base_prices={TIER_100: 8300, TIER_70: 7300, TIER_57: 6800, TIER_MILK: 6800},
    size_addons={"M": 0, "L": 500, "XL": 1000},
    ice_addon=700,
    topping_addon=0,
)


def normalize_cacao(cacao: Any) -> str:
    """Map a cacao concentration to its tier label."""
    value = coerce_cacao(cacao)
    if value is None:
        return TIER_MILK
    for threshold, label in CACAO_TIERS:
        if value >= threshold:
            return label
    return TIER_MILK


def compute_price(
    cacao: Any,
    is_iced: Any,
    size: Any,
    has_topping: Any,
    shot_count: Any = 1,
    table: PriceTable = DEFAULT_PRICE_TABLE,
) -> tuple[str, int]:
    """Return ``(tier_label, price)`` for a drink configuration."""
    tier = normalize_cacao(cacao)
    price = (
        table.base_price(tier)
        + table.size_addon(size)
        + (table.ice_addon if is_iced else 0)
        + (table.topping_addon if has_topping else 0)
        + table.shot_addon(shot_count)
    )
    return tier, price
