"""
Inference Engine Module

Fixed-weight 4 -> 6 -> 1 feed-forward network mapping environmental
readings to a 0-100 fire risk score.

Pipeline per call:
    1. Normalize raw readings by fixed scale constants
    2. Dense 4 -> 6 with ReLU
    3. Dense 6 -> 1 with logistic output
    4. Scale to 0-100 and apply rule-based adjustments
    5. Clamp and round

Every call regenerates the complete activation set, so the diagram and the
score always come from the same pass.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Dict, Any, List, Optional, Sequence, Tuple
import math
import numpy as np

from firerisk.core.inference.adjustments import apply_adjustments
from firerisk.utils import get_logger

logger = get_logger(__name__)


# Rows: temperature, precipitation, wind speed, humidity. Columns: hidden units.
INPUT_TO_HIDDEN: Tuple[Tuple[float, ...], ...] = (
    (2.0, 1.8, 1.6, 1.4, 1.2, 1.0),
    (-2.0, -1.8, -1.6, -1.4, -1.2, -1.0),
    (1.6, 1.4, 1.2, 1.0, 0.8, 0.6),
    (-1.2, -1.0, -0.8, -0.6, -0.4, -0.2),
)

HIDDEN_TO_OUTPUT: Tuple[Tuple[float, ...], ...] = (
    (1.2,), (1.0,), (0.8,), (0.6,), (0.4,), (0.2,),
)

# Field order is the input-layer order
INPUT_FIELDS: Tuple[str, ...] = ("temperature", "precipitation", "wind_speed", "humidity")

INPUT_SCALES: Dict[str, float] = {
    "temperature": 50.0,
    "precipitation": 100.0,
    "wind_speed": 20.0,
    "humidity": 100.0,
}

INPUT_RANGES: Dict[str, Tuple[float, float]] = {
    "temperature": (0.0, 50.0),
    "precipitation": (0.0, 100.0),
    "wind_speed": (0.0, 20.0),
    "humidity": (0.0, 100.0),
}

# Normalized inputs, hidden activations, output activation
ActivationSet = Tuple[Tuple[float, ...], ...]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class RawInputs:
    """Environmental readings in their natural units."""
    temperature: float  # °C, 0-50
    precipitation: float  # %, 0-100
    wind_speed: float  # m/s, 0-20
    humidity: float  # %, 0-100

    @classmethod
    def clamped(
        cls,
        temperature: float,
        precipitation: float,
        wind_speed: float,
        humidity: float,
    ) -> "RawInputs":
        """Build inputs with every field clamped into its documented range."""
        values = {
            "temperature": temperature,
            "precipitation": precipitation,
            "wind_speed": wind_speed,
            "humidity": humidity,
        }
        return cls(**{
            name: _clamp(float(value), *INPUT_RANGES[name])
            for name, value in values.items()
        })

    def with_changes(self, **changes: float) -> "RawInputs":
        """Return a clamped copy with some fields replaced."""
        updated = replace(self, **changes)
        return RawInputs.clamped(**updated.to_dict())

    def normalized(self) -> Tuple[float, ...]:
        """Divide each reading by its fixed scale, in input-layer order."""
        return tuple(getattr(self, name) / INPUT_SCALES[name] for name in INPUT_FIELDS)

    def to_dict(self) -> Dict[str, float]:
        return {name: float(getattr(self, name)) for name in INPUT_FIELDS}


def relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(0.0, x)


def sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


class DenseLayer:
    """Fully connected layer with a fixed [in][out] weight matrix."""

    def __init__(self, weights: Sequence[Sequence[float]], bias: Optional[Sequence[float]] = None, activation=relu):
        self.weights = np.array(weights, dtype=float)
        if self.weights.ndim != 2:
            raise ValueError(f"Weight matrix must be 2D, got shape {self.weights.shape}")
        out_size = self.weights.shape[1]
        self.bias = np.zeros(out_size) if bias is None else np.array(bias, dtype=float)
        if self.bias.shape != (out_size,):
            raise ValueError("Bias vector length must match the number of output units")
        self.weights.setflags(write=False)
        self.bias.setflags(write=False)
        self.activation = activation

    @property
    def in_size(self) -> int:
        return self.weights.shape[0]

    @property
    def out_size(self) -> int:
        return self.weights.shape[1]

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        return self.activation(inputs @ self.weights + self.bias)


@dataclass
class InferenceResult:
    """Outcome of one forward pass."""
    risk: int  # 0-100, clamped and rounded
    activations: ActivationSet
    adjustments: List[str] = field(default_factory=list)

    @property
    def normalized_inputs(self) -> Tuple[float, ...]:
        return self.activations[0]

    @property
    def hidden(self) -> Tuple[float, ...]:
        return self.activations[1]

    @property
    def output(self) -> float:
        return self.activations[-1][0]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "risk": self.risk,
            "activations": [list(layer) for layer in self.activations],
            "adjustments": list(self.adjustments),
        }


class InferenceEngine:
    """
    Fire risk network with fixed weights.

    The engine holds no per-call state: ``forward`` is a pure function of
    its inputs and the weights given at construction.
    """

    def __init__(
        self,
        input_to_hidden: Sequence[Sequence[float]] = INPUT_TO_HIDDEN,
        hidden_to_output: Sequence[Sequence[float]] = HIDDEN_TO_OUTPUT,
    ):
        self.hidden_layer = DenseLayer(input_to_hidden, activation=relu)
        self.output_layer = DenseLayer(hidden_to_output, activation=sigmoid)
        if self.hidden_layer.in_size != len(INPUT_FIELDS):
            raise ValueError(f"Hidden layer expects {self.hidden_layer.in_size} inputs, network has {len(INPUT_FIELDS)}")
        if self.output_layer.in_size != self.hidden_layer.out_size:
            raise ValueError("Output layer input size must match hidden layer size")
        if self.output_layer.out_size != 1:
            raise ValueError("Output layer must have exactly one unit")
        logger.info(
            f"InferenceEngine initialized ({self.hidden_layer.in_size} -> "
            f"{self.hidden_layer.out_size} -> {self.output_layer.out_size})"
        )

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return (self.hidden_layer.in_size, self.hidden_layer.out_size, self.output_layer.out_size)

    @property
    def weights(self) -> List[List[List[float]]]:
        """Weight matrices per layer transition, as nested lists for the diagram."""
        return [self.hidden_layer.weights.tolist(), self.output_layer.weights.tolist()]

    def forward(self, raw: RawInputs) -> InferenceResult:
        """
        Run the full pipeline for one set of readings.

        Args:
            raw: Readings already clamped into their documented ranges

        Returns:
            InferenceResult with the rounded risk and the full activation set
        """
        normalized = np.array(raw.normalized(), dtype=float)
        hidden = self.hidden_layer.forward(normalized)
        output = self.output_layer.forward(hidden)

        base_risk = float(output[0]) * 100
        risk, applied = apply_adjustments(raw, base_risk)
        risk = float(np.clip(risk, 0, 100))
        # Half-up rounding; built-in round() would send 62.5 to 62
        rounded = int(math.floor(risk + 0.5))

        logger.debug(f"Forward pass: base={base_risk:.2f} adjusted={risk:.2f} applied={applied}")

        activations: ActivationSet = (
            tuple(float(v) for v in normalized),
            tuple(float(v) for v in hidden),
            tuple(float(v) for v in output),
        )
        return InferenceResult(risk=rounded, activations=activations, adjustments=applied)
