"""
Risk Post-Adjustment Rules

Rule-based multipliers applied to the network's base risk for extreme
conditions. Rules run in table order and each multiplies the running
risk, so their effects compound.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from firerisk.core.inference.network import RawInputs


@dataclass(frozen=True)
class AdjustmentRule:
    """A single conditional multiplier on the running risk."""
    name: str
    description: str
    applies: Callable[["RawInputs"], bool]
    factor: Callable[["RawInputs"], float]


# Order matters: each factor multiplies the already-adjusted value
ADJUSTMENT_RULES: Tuple[AdjustmentRule, ...] = (
    AdjustmentRule(
        name="precipitation",
        description="Precipitation above 70% suppresses risk (x0.3)",
        applies=lambda raw: raw.precipitation > 70,
        factor=lambda raw: 0.3,
    ),
    AdjustmentRule(
        name="temperature",
        description="Temperature above 35°C raises risk (x1.2)",
        applies=lambda raw: raw.temperature > 35,
        factor=lambda raw: 1.2,
    ),
    AdjustmentRule(
        name="wind_speed",
        description="Wind above 15 m/s raises risk by 10% per m/s over the threshold",
        applies=lambda raw: raw.wind_speed > 15,
        factor=lambda raw: 1 + (raw.wind_speed - 15) / 10,
    ),
    AdjustmentRule(
        name="humidity",
        description="Humidity below 20% raises risk (x1.3)",
        applies=lambda raw: raw.humidity < 20,
        factor=lambda raw: 1.3,
    ),
)


def apply_adjustments(raw: "RawInputs", risk: float) -> Tuple[float, List[str]]:
    """
    Apply every triggered rule to the running risk.

    Args:
        raw: Raw (unnormalized) inputs the rules are evaluated against
        risk: Base risk on the 0-100 scale

    Returns:
        Tuple of (adjusted unclamped risk, names of the rules that fired)
    """
    applied = []
    for rule in ADJUSTMENT_RULES:
        if rule.applies(raw):
            risk *= rule.factor(raw)
            applied.append(rule.name)
    return risk, applied
