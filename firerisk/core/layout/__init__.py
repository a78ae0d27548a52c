"""
Layout Module

Geometry for the network diagram.
"""
from .diagram import (
    LayoutEngine,
    LayerSpec,
    Extent,
    PositionedNode,
    PositionedEdge,
    DiagramLayout,
    DEFAULT_LAYERS,
)

__all__ = [
    "LayoutEngine",
    "LayerSpec",
    "Extent",
    "PositionedNode",
    "PositionedEdge",
    "DiagramLayout",
    "DEFAULT_LAYERS",
]
