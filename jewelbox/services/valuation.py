"""
Valuation engine - weight and purity formulas for inventory, sale totals,
and the per-karat rate table.

Pure functions: no I/O, no state. The same code produces the live preview
and the value persisted at save time.

    wastage_amount = net_weight * wasteage_percentage / 100
    total_weight   = net_weight + wastage_amount + polish_weight + stone_weight
    pure_gold      = (net_weight / 96) * (96 - ratti)

96 is the fixed ratti divisor; karat does not enter pure_gold.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from jewelbox.utils.numbers import ZERO, round_money, round_weight, to_decimal

PURITY_DIVISOR = Decimal("96")
KARAT_BASE = 24


def wastage_amount(net_weight: Any, wasteage_percentage: Any) -> Decimal:
    """Weight added for wastage. No upper bound on the percentage."""
    return to_decimal(net_weight) * to_decimal(wasteage_percentage) / Decimal("100")


def total_weight(
    net_weight: Any,
    wasteage_percentage: Any = 0,
    polish_weight: Any = 0,
    stone_weight: Any = 0,
) -> Decimal:
    """Billable weight in grams, 3 decimals."""
    net = to_decimal(net_weight)
    total = (
        net
        + wastage_amount(net, wasteage_percentage)
        + to_decimal(polish_weight)
        + to_decimal(stone_weight)
    )
    return round_weight(total)


def pure_gold(net_weight: Any, ratti: Any = 0) -> Decimal:
    """Pure gold content in grams, 3 decimals."""
    net = to_decimal(net_weight)
    return round_weight(net / PURITY_DIVISOR * (PURITY_DIVISOR - to_decimal(ratti)))


def compute_derived(inputs: Mapping[str, Any]) -> Dict[str, Decimal]:
    """
    Derived fields for an inventory record from its physical inputs.
    Missing keys count as 0.
    """
    return {
        "total_weight": total_weight(
            inputs.get("net_weight"),
            inputs.get("wasteage_percentage"),
            inputs.get("polish_weight"),
            inputs.get("stone_weight"),
        ),
        "pure_gold": pure_gold(inputs.get("net_weight"), inputs.get("ratti")),
    }


def sale_total(prices: Iterable[Any]) -> Decimal:
    """Exact sum of line prices. Round with round_money only for display."""
    total = ZERO
    for price in prices:
        total += to_decimal(price)
    return total


def karat_rate(rate_24k: Any, karat: int) -> Decimal:
    """Rate for one karat, scaled linearly from the 24k rate, 2 decimals."""
    return round_money(to_decimal(rate_24k) * Decimal(karat) / Decimal(KARAT_BASE))


def karat_rate_table(rate_24k: Any) -> List[Tuple[int, Decimal]]:
    """[(24, r24), (23, r23), ..., (1, r1)]"""
    return [(k, karat_rate(rate_24k, k)) for k in range(KARAT_BASE, 0, -1)]
