"""
Inference Module

Computes fire risk scores and per-layer activations from environmental readings.
"""
from .network import (
    InferenceEngine,
    InferenceResult,
    RawInputs,
    ActivationSet,
    INPUT_TO_HIDDEN,
    HIDDEN_TO_OUTPUT,
)
from .adjustments import AdjustmentRule, ADJUSTMENT_RULES, apply_adjustments
from .explanation import ExplanationGenerator, RiskExplanation, RiskLevel

__all__ = [
    "InferenceEngine",
    "InferenceResult",
    "RawInputs",
    "ActivationSet",
    "INPUT_TO_HIDDEN",
    "HIDDEN_TO_OUTPUT",
    "AdjustmentRule",
    "ADJUSTMENT_RULES",
    "apply_adjustments",
    "ExplanationGenerator",
    "RiskExplanation",
    "RiskLevel",
]
