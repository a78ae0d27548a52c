"""
Simulation Service - Session State and Assessment Orchestration
"""
import uuid
import logging
from datetime import datetime
from typing import Dict, Any, Optional

from firerisk.core.inference import InferenceEngine, InferenceResult, RawInputs, ExplanationGenerator, RiskLevel
from firerisk.core.layout import LayoutEngine, LayerSpec, Extent, DEFAULT_LAYERS
from firerisk.core.history import HistoryBuffer, HistoryEntry
from firerisk.core.scenarios import SimulationDelta, Preset, apply_delta
from firerisk.config import settings

logger = logging.getLogger(__name__)

DEFAULT_INPUTS = RawInputs(temperature=25, precipitation=50, wind_speed=10, humidity=60)


class SimulationService:
    """
    Owns one session: current readings, the pending simulation delta and
    the risk history.

    Every change to the readings is followed by an explicit ``assess()``
    so that the score, the activations and the history stay in step.
    """

    def __init__(
        self,
        engine: Optional[InferenceEngine] = None,
        layout_engine: Optional[LayoutEngine] = None,
        history_capacity: Optional[int] = None,
        initial_inputs: RawInputs = DEFAULT_INPUTS,
    ):
        self.engine = engine or InferenceEngine()
        self.layout_engine = layout_engine or LayoutEngine(edge_scale=settings.edge_thickness_scale)
        self.explainer = ExplanationGenerator(self.engine.weights[0])
        self.history = HistoryBuffer(history_capacity or settings.history_capacity)

        self._inputs = initial_inputs
        self._delta = SimulationDelta()
        self._preset: Optional[Preset] = None
        self._latest: Optional[Dict[str, Any]] = None
        self._latest_result: Optional[InferenceResult] = None

        # History opens with the initial readings
        self.assess()

    @property
    def inputs(self) -> RawInputs:
        return self._inputs

    @property
    def delta(self) -> SimulationDelta:
        return self._delta

    @property
    def preset(self) -> Optional[Preset]:
        return self._preset

    def predict(self, raw: RawInputs) -> Dict[str, Any]:
        """Forward pass without touching session state or history."""
        result = self.engine.forward(raw)
        return self._result_to_dict(raw, result)

    def assess(self) -> Dict[str, Any]:
        """Score the current readings and record them in the history."""
        raw = self._inputs
        result = self.engine.forward(raw)
        self.history.push(HistoryEntry(inputs=raw, risk=result.risk))

        assessment = self._result_to_dict(raw, result)
        assessment.update({
            "assessment_id": f"ASM-{uuid.uuid4().hex[:8].upper()}",
            "timestamp": datetime.now().isoformat(),
            "explanation": self.explainer.generate(raw, result).to_dict(),
        })
        self._latest = assessment
        self._latest_result = result

        logger.info(f"Assessment {assessment['assessment_id']}: risk={result.risk} adjustments={result.adjustments}")
        return assessment

    def latest(self) -> Dict[str, Any]:
        """Most recent assessment."""
        return self._latest

    def set_inputs(self, **values: float) -> Dict[str, Any]:
        """Replace readings (clamped on write) and reassess."""
        self._inputs = RawInputs.clamped(**values)
        return self.assess()

    def update_inputs(self, **changes: float) -> Dict[str, Any]:
        """Change some readings (clamped on write) and reassess."""
        self._inputs = self._inputs.with_changes(**changes)
        return self.assess()

    def set_delta(self, **values: float) -> SimulationDelta:
        self._delta = SimulationDelta.clamped(**values)
        self._preset = None
        return self._delta

    def apply_preset(self, name: str) -> SimulationDelta:
        """
        Select a preset scenario's delta.

        Raises:
            ValueError: If the preset name is unknown
        """
        preset = Preset.from_string(name)
        self._delta = preset.delta
        self._preset = preset
        logger.info(f"Preset selected: {preset.value} -> {self._delta.to_dict()}")
        return self._delta

    def run_simulation(self) -> Dict[str, Any]:
        """Apply the pending delta to the readings and reassess."""
        self._inputs = apply_delta(self._inputs, self._delta)
        return self.assess()

    def diagram(self) -> Dict[str, Any]:
        """Layout of the network for the latest activations."""
        layers = tuple(
            LayerSpec(size, spec.label) for size, spec in zip(self.engine.layer_sizes, DEFAULT_LAYERS)
        )
        extent = Extent.from_canvas(settings.diagram_width, settings.diagram_height, settings.diagram_margin)
        layout = self.layout_engine.layout(
            layers,
            self._latest_result.activations,
            self.engine.weights,
            extent,
        )
        return {
            "width": settings.diagram_width,
            "height": settings.diagram_height,
            "margin": settings.diagram_margin,
            "layers": [{"node_count": spec.node_count, "label": spec.label} for spec in layers],
            **layout.to_dict(),
        }

    def history_snapshot(self) -> Dict[str, Any]:
        return {
            "capacity": self.history.capacity,
            "entries": [entry.to_dict() for entry in self.history.all()],
            "chart": self.history.chart_series(),
        }

    @staticmethod
    def _result_to_dict(raw: RawInputs, result: InferenceResult) -> Dict[str, Any]:
        return {
            "inputs": raw.to_dict(),
            "risk_level": RiskLevel.from_score(result.risk).value,
            **result.to_dict(),
        }
