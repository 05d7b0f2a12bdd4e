"""
Pricing Engine - Core quote resolution logic with traceability.

Resolution order:
1. Volumes of zero or less get no quote
2. Scan tiers in ascending order for the one whose range holds the volume
3. No tier → consultation quote (one level above the highest tier)
4. Overage beyond the included volume is billed in whole blocks of 100
"""
import logging
from decimal import Decimal
from typing import Optional, Sequence

from .models import ConsultationQuote, PlanTier, PricedQuote, Quote, TraceStep
from .plans import get_plans, validate_plans

logger = logging.getLogger(__name__)

OVERAGE_BLOCK_SIZE = 100
CONSULTATION_MESSAGE = "Consult a representative for volumes above 10,000 contacts."

CENTS = Decimal("0.01")


class PricingEngine:
    """
    Prices a contact volume against an ordered plan table.

    The table is validated once at construction and never mutated, so one
    engine can be shared freely between callers.
    """

    def __init__(self, plans: Optional[Sequence[PlanTier]] = None):
        """Initialize engine with the built-in plan table or a custom one."""
        self.plans = tuple(plans) if plans is not None else get_plans()
        validate_plans(self.plans)

    @property
    def consultation_level(self) -> int:
        """Sentinel level reported when no tier covers the volume."""
        return self.plans[-1].level + 1

    def find_plan(self, volume: int) -> Optional[PlanTier]:
        """Return the first tier whose range contains volume, or None."""
        for plan in self.plans:
            if plan.contains(volume):
                return plan
        return None

    def calculate(self, volume: int) -> Optional[Quote]:
        """
        Calculate the quote for a contact volume.

        Returns None for volumes of zero or less, a ConsultationQuote when no
        tier covers the volume, and a PricedQuote otherwise.
        """
        quote, _ = self.calculate_with_trace(volume)
        return quote

    def calculate_with_trace(self, volume: int) -> tuple[Optional[Quote], list[TraceStep]]:
        """
        Calculate the quote with a trace of resolution steps.

        Returns (quote, trace_steps).
        """
        trace = [TraceStep("Volume", "Requested contact volume", str(volume))]

        if volume <= 0:
            trace.append(TraceStep("No Quote", "Volume must be positive"))
            logger.debug("No quote for volume %s", volume)
            return None, trace

        plan = self.find_plan(volume)

        if plan is None:
            level = self.consultation_level
            trace.append(TraceStep(
                "Tier Lookup",
                f"No tier covers volume (largest tier ends at {self.plans[-1].max_volume})",
            ))
            trace.append(TraceStep("Consultation", CONSULTATION_MESSAGE, f"level {level}"))
            logger.info("Volume %s exceeds plan table, consultation level %s", volume, level)
            return ConsultationQuote(volume=volume, level=level, message=CONSULTATION_MESSAGE), trace

        trace.append(TraceStep(
            "Tier Lookup",
            f"Range {plan.min_volume}-{plan.max_volume}",
            f"level {plan.level}",
        ))

        overage_volume = max(0, volume - plan.included_volume)
        overage_blocks = 0
        overage_cost = Decimal("0.00")

        if overage_volume > 0:
            # Partial blocks are billed as full blocks
            overage_blocks = -(-overage_volume // OVERAGE_BLOCK_SIZE)
            overage_cost = (overage_blocks * plan.overage_unit_cost).quantize(CENTS)
            trace.append(TraceStep(
                "Overage",
                f"{overage_volume} contacts over {plan.included_volume} included → "
                f"{overage_blocks} × {plan.overage_unit_cost:.2f}",
                f"{overage_cost:.2f}",
            ))
        else:
            trace.append(TraceStep("Overage", f"Within {plan.included_volume} included contacts"))

        total = (plan.base_fee + overage_cost).quantize(CENTS)
        trace.append(TraceStep(
            "Total",
            f"Base fee {plan.base_fee:.2f} + overage {overage_cost:.2f}",
            f"{total:.2f}",
        ))
        logger.debug("Volume %s priced at level %s, total %s", volume, plan.level, total)

        quote = PricedQuote(
            volume=volume,
            level=plan.level,
            included_volume=plan.included_volume,
            base_fee=plan.base_fee,
            overage_unit_cost=plan.overage_unit_cost,
            overage_volume=overage_volume,
            overage_blocks=overage_blocks,
            overage_cost=overage_cost,
            total=total,
        )
        return quote, trace


_default_engine: Optional[PricingEngine] = None


def get_engine() -> PricingEngine:
    """Get the shared engine built from the fixed plan table."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PricingEngine()
    return _default_engine


def find_plan(volume: int) -> Optional[PlanTier]:
    """Find the tier covering volume in the fixed plan table."""
    return get_engine().find_plan(volume)


def compute_quote(volume: int) -> Optional[Quote]:
    """Compute the quote for volume against the fixed plan table."""
    return get_engine().calculate(volume)
