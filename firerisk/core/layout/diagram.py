"""
Network Diagram Layout

Converts a layer topology plus optional activation and weight values into
positioned nodes and edges in pixel space. Rendering is left to the
caller; this module only produces geometry.

Ordering is part of the contract: nodes are layer-major then
index-major, edges are transition-major, then source-major, then
target-major. Consumers that diff or animate the diagram rely on it.
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence

from firerisk.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LayerSpec:
    """One layer of the diagram topology."""
    node_count: int
    label: str = ""


DEFAULT_LAYERS = (
    LayerSpec(4, "Input"),
    LayerSpec(6, "Hidden"),
    LayerSpec(1, "Output"),
)


@dataclass(frozen=True)
class Extent:
    """Drawable area in pixels."""
    width: float
    height: float

    @classmethod
    def from_canvas(cls, width: float, height: float, margin: float = 0.0) -> "Extent":
        """Inner extent of a canvas with an equal margin on every side."""
        return cls(width=width - 2 * margin, height=height - 2 * margin)


@dataclass(frozen=True)
class PositionedNode:
    x: float
    y: float
    layer_index: int
    index_in_layer: int
    value: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "layer": self.layer_index,
            "index": self.index_in_layer,
            "value": self.value,
        }


@dataclass(frozen=True)
class PositionedEdge:
    source: PositionedNode
    target: PositionedNode
    weight: float = 0.0
    thickness: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": [self.source.layer_index, self.source.index_in_layer],
            "target": [self.target.layer_index, self.target.index_in_layer],
            "x1": self.source.x,
            "y1": self.source.y,
            "x2": self.target.x,
            "y2": self.target.y,
            "weight": self.weight,
            "thickness": self.thickness,
        }


@dataclass(frozen=True)
class DiagramLayout:
    nodes: tuple
    edges: tuple

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def _lookup(values: Optional[Sequence], *indices: int) -> float:
    """Nested index lookup that degrades to 0 for missing or out-of-range data."""
    current: Any = values
    for i in indices:
        if current is None or i < 0:
            return 0.0
        try:
            current = current[i]
        except (IndexError, KeyError, TypeError):
            return 0.0
    if current is None:
        return 0.0
    try:
        value = float(current)
    except (TypeError, ValueError):
        return 0.0
    # NaN never renders
    return value if value == value else 0.0


class LayoutEngine:
    """
    Deterministic layout for fully connected layered networks.

    Args:
        edge_scale: Stroke thickness per unit of absolute edge weight
    """

    def __init__(self, edge_scale: float = 2.0):
        self.edge_scale = edge_scale

    def layout(
        self,
        layers: Sequence[LayerSpec],
        activations: Optional[Sequence[Sequence[float]]],
        weights: Optional[Sequence[Sequence[Sequence[float]]]],
        extent: Extent,
    ) -> DiagramLayout:
        """
        Position every node and edge of the network.

        Args:
            layers: Topology, input layer first
            activations: Per-layer node values, or None
            weights: Per-transition [source][target] weights, or None
            extent: Drawable width and height

        Returns:
            DiagramLayout with nodes and edges in contract order

        Raises:
            ValueError: On an empty topology, a layer without nodes or a
                negative extent
        """
        if not layers:
            raise ValueError("Layout requires at least one layer")
        for spec in layers:
            if spec.node_count < 1:
                raise ValueError(f"Layer '{spec.label}' must have at least one node, got {spec.node_count}")
        if extent.width < 0 or extent.height < 0:
            raise ValueError(f"Extent must be non-negative, got {extent.width}x{extent.height}")

        layer_count = len(layers)
        by_layer: List[List[PositionedNode]] = []

        for i, spec in enumerate(layers):
            if layer_count > 1:
                x = i * (extent.width / (layer_count - 1))
            else:
                x = extent.width / 2
            node_spacing = extent.height / (spec.node_count + 1)
            by_layer.append([
                PositionedNode(
                    x=x,
                    y=(j + 1) * node_spacing,
                    layer_index=i,
                    index_in_layer=j,
                    value=_lookup(activations, i, j),
                )
                for j in range(spec.node_count)
            ])

        edges = []
        for i in range(layer_count - 1):
            for source in by_layer[i]:
                for target in by_layer[i + 1]:
                    weight = _lookup(weights, i, source.index_in_layer, target.index_in_layer)
                    edges.append(PositionedEdge(
                        source=source,
                        target=target,
                        weight=weight,
                        thickness=abs(weight) * self.edge_scale,
                    ))

        nodes = tuple(node for layer_nodes in by_layer for node in layer_nodes)
        logger.debug(f"Layout computed: {len(nodes)} nodes, {len(edges)} edges")
        return DiagramLayout(nodes=nodes, edges=tuple(edges))
