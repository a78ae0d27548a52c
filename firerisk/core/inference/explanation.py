"""
Explanation Generator Module

Generates human-readable explanations for fire risk assessments: the
categorical risk level, per-factor notes and the calculation steps shown
next to the network diagram.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Sequence
from enum import Enum

from firerisk.core.inference.network import InferenceResult, RawInputs, INPUT_TO_HIDDEN
from firerisk.core.inference.adjustments import ADJUSTMENT_RULES
from firerisk.utils import get_logger

logger = get_logger(__name__)


class RiskLevel(str, Enum):
    """Risk level categories."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """Convert numeric score (0-100) to risk level."""
        if score < 30:
            return cls.LOW
        elif score < 60:
            return cls.MODERATE
        else:
            return cls.HIGH

    @property
    def description(self) -> str:
        return {
            RiskLevel.LOW: "low, suggesting safe conditions",
            RiskLevel.MODERATE: "moderate, requiring regular monitoring",
            RiskLevel.HIGH: "high, indicating dangerous conditions",
        }[self]


@dataclass
class FactorNote:
    """Explanation of one input variable's influence."""
    name: str
    label: str
    weight: float  # leading input-to-hidden weight
    effects: List[str]
    alert: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "weight": self.weight,
            "effects": self.effects,
            "alert": self.alert,
        }


@dataclass
class RiskExplanation:
    """Structured explanation for a single assessment."""
    risk: int
    risk_level: RiskLevel
    summary: str
    factors: List[FactorNote] = field(default_factory=list)
    adjustments: List[str] = field(default_factory=list)
    calculation_steps: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "risk": self.risk,
            "risk_level": self.risk_level.value,
            "summary": self.summary,
            "factors": [f.to_dict() for f in self.factors],
            "adjustments": self.adjustments,
            "calculation_steps": self.calculation_steps,
        }


# name -> (label, effects, alert text, alert predicate)
_FACTOR_TEXT = {
    "temperature": (
        "Temperature",
        [
            "Drying out vegetation",
            "Increasing evaporation rates",
            "Creating conditions favorable for fire spread",
        ],
        "Currently at critical levels, significantly increasing risk!",
        lambda raw: raw.temperature > 35,
    ),
    "precipitation": (
        "Precipitation",
        [
            "Higher precipitation reduces risk by increasing moisture content",
            "Extended dry periods increase vulnerability",
        ],
        "Current precipitation levels are helping to suppress fire risk.",
        lambda raw: raw.precipitation > 70,
    ),
    "wind_speed": (
        "Wind Speed",
        [
            "Accelerates fire spread",
            "Affects oxygen availability",
            "Influences fire direction",
        ],
        "High wind speeds are creating dangerous conditions!",
        lambda raw: raw.wind_speed > 15,
    ),
    "humidity": (
        "Humidity",
        [
            "Higher humidity reduces fire risk",
            "Low humidity makes vegetation more flammable",
        ],
        "Dangerously low humidity levels detected!",
        lambda raw: raw.humidity < 20,
    ),
}


class ExplanationGenerator:
    """
    Builds RiskExplanation objects from inference results.

    Args:
        input_weights: Input-to-hidden weight matrix the factor weights are
            read from; defaults to the built-in network
    """

    def __init__(self, input_weights: Optional[Sequence[Sequence[float]]] = None):
        self.input_weights = INPUT_TO_HIDDEN if input_weights is None else input_weights

    def generate(self, raw: RawInputs, result: InferenceResult) -> RiskExplanation:
        """
        Explain one assessment.

        Args:
            raw: Readings the assessment was computed from
            result: Output of InferenceEngine.forward for those readings

        Returns:
            RiskExplanation with level, factor notes and calculation steps
        """
        level = RiskLevel.from_score(result.risk)
        summary = (
            f"The current fire risk of {result.risk}% is {level.description}. "
            "This assessment is based on the combination of all environmental "
            "factors and their interactions."
        )
        explanation = RiskExplanation(
            risk=result.risk,
            risk_level=level,
            summary=summary,
            factors=self.factor_notes(raw),
            adjustments=self.adjustment_notes(result),
            calculation_steps=self.calculation_steps(result),
        )
        logger.debug(f"Explanation generated: risk={result.risk} level={level.value}")
        return explanation

    def factor_notes(self, raw: RawInputs) -> List[FactorNote]:
        notes = []
        for row, (name, (label, effects, alert, triggered)) in enumerate(_FACTOR_TEXT.items()):
            notes.append(FactorNote(
                name=name,
                label=label,
                weight=float(self.input_weights[row][0]),
                effects=list(effects),
                alert=alert if triggered(raw) else "",
            ))
        return notes

    def adjustment_notes(self, result: InferenceResult) -> List[str]:
        """Descriptions of the post adjustments that fired, in application order."""
        return [rule.description for rule in ADJUSTMENT_RULES if rule.name in result.adjustments]

    def calculation_steps(self, result: InferenceResult) -> Dict[str, List[str]]:
        """Formatted intermediate values, one list per stage."""
        labels = [text[0] for text in _FACTOR_TEXT.values()]
        return {
            "normalization": [
                f"{label}: {value:.2f}" for label, value in zip(labels, result.normalized_inputs)
            ],
            "hidden_layer": [
                f"Node {i + 1}: {value:.3f}" for i, value in enumerate(result.hidden)
            ],
            "output_before_adjustments": [
                f"Risk: {value * 100:.1f}%" for value in result.activations[-1]
            ],
        }
