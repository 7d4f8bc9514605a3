"""Commission tier resolution.

Pure functions over tier-like objects exposing ``target_amount``,
``commission_rate``, ``tier_number`` and optionally ``is_active``. They
work on model instances and on plain namespaces alike, and never touch
the database.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

ZERO = Decimal("0")


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _eligible(tiers: Iterable) -> list:
    return [
        tier for tier in tiers
        if getattr(tier, "is_active", True) and tier.target_amount is not None
    ]


def _rank(tier):
    return (
        _as_decimal(tier.target_amount),
        getattr(tier, "tier_number", 0) or 0,
        _as_decimal(tier.commission_rate or 0),
    )


def resolve_tier(tiers: Iterable, current_sales) -> Optional[object]:
    """Return the tier with the highest target not above ``current_sales``.

    Ties on the target go to the highest ``tier_number``, then the highest
    rate. ``None`` when no tier qualifies.
    """
    sales = _as_decimal(current_sales)
    reached = [t for t in _eligible(tiers) if _as_decimal(t.target_amount) <= sales]
    if not reached:
        return None
    return max(reached, key=_rank)


def next_tier(tiers: Iterable, current_sales) -> Optional[object]:
    """Return the lowest tier whose target is still above ``current_sales``."""
    sales = _as_decimal(current_sales)
    ahead = [t for t in _eligible(tiers) if _as_decimal(t.target_amount) > sales]
    if not ahead:
        return None
    return min(ahead, key=lambda t: (_as_decimal(t.target_amount), -(getattr(t, "tier_number", 0) or 0)))


def estimate_commission(tiers: Iterable, current_sales) -> dict:
    """Resolve the rate for ``current_sales`` and the resulting commission.

    ``estimated_commission`` is ``current_sales * commission_rate`` with no
    rounding; the rate is 0 when no tier qualifies.
    """
    sales = _as_decimal(current_sales)
    tier = resolve_tier(tiers, sales)
    rate = _as_decimal(tier.commission_rate) if tier is not None else ZERO
    return {
        "tier": tier,
        "commission_rate": rate,
        "estimated_commission": sales * rate,
    }


def progress_to_next_tier(tiers: Iterable, current_sales) -> Decimal:
    """Percentage of the next tier target reached, capped at 100.

    100 when there is no tier left to reach.
    """
    sales = _as_decimal(current_sales)
    upcoming = next_tier(tiers, sales)
    if upcoming is None:
        return Decimal("100")
    target = _as_decimal(upcoming.target_amount)
    if target <= 0:
        return Decimal("100")
    return min(sales / target * 100, Decimal("100"))
