"""
Data models for the pricing engine.

Uses frozen dataclasses for immutable, type-safe data representation.
A quote is either a PricedQuote or a ConsultationQuote; a volume with no
plan at all (zero or negative) produces no quote (None).
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union


@dataclass(frozen=True)
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class PlanTier:
    """A contiguous volume range with its own base fee and overage rate."""
    level: int
    min_volume: int
    max_volume: int
    included_volume: int
    base_fee: Decimal
    overage_unit_cost: Decimal  # per block of 100 contacts

    def contains(self, volume: int) -> bool:
        """Whether the inclusive [min_volume, max_volume] range covers volume."""
        return self.min_volume <= volume <= self.max_volume

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "min_volume": self.min_volume,
            "max_volume": self.max_volume,
            "included_volume": self.included_volume,
            "base_fee": self.base_fee,
            "overage_unit_cost": self.overage_unit_cost,
        }


@dataclass(frozen=True)
class PricedQuote:
    """Quote for a volume covered by a plan tier."""
    volume: int
    level: int
    included_volume: int
    base_fee: Decimal
    overage_unit_cost: Decimal
    overage_volume: int
    overage_blocks: int
    overage_cost: Decimal
    total: Decimal
    kind: str = field(default="priced", init=False)

    @property
    def consultation(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "volume": self.volume,
            "level": self.level,
            "included_volume": self.included_volume,
            "base_fee": self.base_fee,
            "overage_unit_cost": self.overage_unit_cost,
            "overage_volume": self.overage_volume,
            "overage_blocks": self.overage_blocks,
            "overage_cost": self.overage_cost,
            "total": self.total,
            "consultation": False,
        }


@dataclass(frozen=True)
class ConsultationQuote:
    """Sentinel quote for volumes above every defined tier."""
    volume: int
    level: int
    message: str
    kind: str = field(default="consultation", init=False)

    @property
    def consultation(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "volume": self.volume,
            "level": self.level,
            "consultation": True,
            "message": self.message,
        }


Quote = Union[PricedQuote, ConsultationQuote]


def format_trace(trace: list[TraceStep]) -> str:
    """Get human-readable trace as formatted text."""
    lines = []
    for t in trace:
        if t.value:
            lines.append(f"→ {t.step}: {t.description} = {t.value}")
        else:
            lines.append(f"→ {t.step}: {t.description}")
    return "\n".join(lines)
