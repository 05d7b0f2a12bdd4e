"""
Plan table - the fixed, ordered list of subscription tiers.
"""
from decimal import Decimal
from typing import Iterable, Optional, Sequence

import pandas as pd

from .models import PlanTier


class PlanTableError(ValueError):
    """Raised when a plan table breaks the contiguity/ordering invariants."""


PLAN_TABLE: tuple[PlanTier, ...] = (
    PlanTier(level=1, min_volume=0, max_volume=999, included_volume=500,
             base_fee=Decimal("199.00"), overage_unit_cost=Decimal("39.80")),
    PlanTier(level=2, min_volume=1000, max_volume=2499, included_volume=1000,
             base_fee=Decimal("299.00"), overage_unit_cost=Decimal("23.90")),
    PlanTier(level=3, min_volume=2500, max_volume=4999, included_volume=2500,
             base_fee=Decimal("599.00"), overage_unit_cost=Decimal("23.96")),
    PlanTier(level=4, min_volume=5000, max_volume=7999, included_volume=5000,
             base_fee=Decimal("999.00"), overage_unit_cost=Decimal("19.98")),
    PlanTier(level=5, min_volume=8000, max_volume=9999, included_volume=8000,
             base_fee=Decimal("1499.00"), overage_unit_cost=Decimal("18.74")),
    # Single-point tier: covers exactly 10,000 contacts
    PlanTier(level=6, min_volume=10000, max_volume=10000, included_volume=10000,
             base_fee=Decimal("1799.00"), overage_unit_cost=Decimal("17.99")),
)


def get_plans() -> tuple[PlanTier, ...]:
    """Return the plan tiers in ascending level order."""
    return tuple(PLAN_TABLE)


def validate_plans(plans: Sequence[PlanTier]) -> None:
    """
    Check the plan table invariants.

    - at least one tier, the lowest starting at volume 0
    - levels strictly ascending
    - ranges contiguous and non-overlapping
    - included volume within the tier's maximum
    - non-negative fees

    Raises PlanTableError describing the first violation found.
    """
    if not plans:
        raise PlanTableError("Plan table is empty")

    if plans[0].min_volume != 0:
        raise PlanTableError(
            f"Lowest tier (level {plans[0].level}) must start at volume 0, "
            f"starts at {plans[0].min_volume}"
        )

    for plan in plans:
        if plan.level < 1:
            raise PlanTableError(f"Tier level must be positive, got {plan.level}")
        if plan.min_volume > plan.max_volume:
            raise PlanTableError(
                f"Tier {plan.level} has an empty range "
                f"[{plan.min_volume}, {plan.max_volume}]"
            )
        if plan.included_volume > plan.max_volume:
            raise PlanTableError(
                f"Tier {plan.level} includes {plan.included_volume} contacts "
                f"but covers at most {plan.max_volume}"
            )
        if plan.base_fee < 0 or plan.overage_unit_cost < 0:
            raise PlanTableError(f"Tier {plan.level} has a negative fee")

    for lower, upper in zip(plans, plans[1:]):
        if upper.level <= lower.level:
            raise PlanTableError(
                f"Tier levels must ascend: {lower.level} followed by {upper.level}"
            )
        if lower.max_volume + 1 != upper.min_volume:
            raise PlanTableError(
                f"Tiers {lower.level} and {upper.level} are not contiguous: "
                f"{lower.max_volume} → {upper.min_volume}"
            )


def plans_frame(plans: Optional[Iterable[PlanTier]] = None) -> pd.DataFrame:
    """Tabular view of the plan table, one row per tier indexed by level."""
    rows = [p.to_dict() for p in (plans if plans is not None else get_plans())]
    df = pd.DataFrame(rows, columns=[
        'level', 'min_volume', 'max_volume', 'included_volume',
        'base_fee', 'overage_unit_cost',
    ])
    df['base_fee'] = df['base_fee'].astype(float)
    df['overage_unit_cost'] = df['overage_unit_cost'].astype(float)
    return df.set_index('level')
