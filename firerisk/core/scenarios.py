"""
Scenario Simulation

Preset and custom deltas applied additively to the current readings.
Deltas and the resulting readings are both clamped on write.
"""
import re
from dataclasses import dataclass
from typing import Dict, Tuple
from enum import Enum

from firerisk.core.inference.network import RawInputs, INPUT_FIELDS

DELTA_RANGES: Dict[str, Tuple[float, float]] = {
    "temperature": (-4.0, 4.0),
    "precipitation": (-30.0, 30.0),
    "wind_speed": (-5.0, 5.0),
    "humidity": (-30.0, 30.0),
}


@dataclass(frozen=True)
class SimulationDelta:
    """Change applied to each reading when a simulation runs."""
    temperature: float = 0.0
    precipitation: float = 0.0
    wind_speed: float = 0.0
    humidity: float = 0.0

    @classmethod
    def clamped(cls, **values: float) -> "SimulationDelta":
        unknown = set(values) - set(INPUT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown delta fields: {sorted(unknown)}")
        return cls(**{
            name: max(DELTA_RANGES[name][0], min(DELTA_RANGES[name][1], float(value)))
            for name, value in values.items()
        })

    def to_dict(self) -> Dict[str, float]:
        return {name: float(getattr(self, name)) for name in INPUT_FIELDS}


class Preset(str, Enum):
    """Named what-if scenarios."""
    CURRENT_TREND = "current_trend"
    MITIGATION = "mitigation"
    WORST_CASE = "worst_case"

    @classmethod
    def from_string(cls, name: str) -> "Preset":
        """Parse preset name, accepting hyphens and camelCase."""
        text = re.sub(r"[\s-]+", "_", name.strip())
        normalized = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", text).lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown preset: {name}. Valid: {[p.value for p in cls]}")

    @property
    def delta(self) -> SimulationDelta:
        return PRESET_DELTAS[self]


PRESET_DELTAS: Dict[Preset, SimulationDelta] = {
    Preset.CURRENT_TREND: SimulationDelta(temperature=2, precipitation=-10, wind_speed=2, humidity=-10),
    Preset.MITIGATION: SimulationDelta(temperature=1, precipitation=10, wind_speed=0, humidity=5),
    Preset.WORST_CASE: SimulationDelta(temperature=4, precipitation=-30, wind_speed=5, humidity=-30),
}


def apply_delta(raw: RawInputs, delta: SimulationDelta) -> RawInputs:
    """Add the delta to each reading and clamp into the input ranges."""
    return RawInputs.clamped(**{
        name: getattr(raw, name) + getattr(delta, name)
        for name in INPUT_FIELDS
    })


__all__ = [
    "SimulationDelta",
    "Preset",
    "PRESET_DELTAS",
    "DELTA_RANGES",
    "apply_delta",
]
