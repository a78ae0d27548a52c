"""
Unit Tests for Diagram Layout
"""
import pytest

from firerisk.core.layout import (
    LayoutEngine, LayerSpec, Extent, PositionedNode, DiagramLayout, DEFAULT_LAYERS,
)
from firerisk.core.inference import InferenceEngine, RawInputs


@pytest.fixture
def extent() -> Extent:
    return Extent.from_canvas(500, 400, margin=20)


@pytest.fixture
def network_values():
    engine = InferenceEngine()
    result = engine.forward(RawInputs(temperature=25, precipitation=50, wind_speed=10, humidity=60))
    return result.activations, engine.weights


class TestExtent:

    def test_from_canvas_subtracts_margins(self, extent):
        assert (extent.width, extent.height) == (460, 360)


class TestLayoutEngine:
    """Tests for LayoutEngine."""

    def test_counts_for_default_topology(self, extent, network_values):
        activations, weights = network_values
        layout = LayoutEngine().layout(DEFAULT_LAYERS, activations, weights, extent)

        assert isinstance(layout, DiagramLayout)
        assert len(layout.nodes) == 11
        assert len(layout.edges) == 4 * 6 + 6 * 1

    def test_nodes_inside_extent(self, extent, network_values):
        activations, weights = network_values
        layout = LayoutEngine().layout(DEFAULT_LAYERS, activations, weights, extent)
        for node in layout.nodes:
            assert 0 <= node.x <= extent.width
            assert 0 <= node.y <= extent.height

    def test_positions(self, extent):
        layout = LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent)
        nodes = layout.nodes

        # Input layer at the left edge, 4 nodes spaced 360 / 5
        assert [n.x for n in nodes[:4]] == [0, 0, 0, 0]
        assert [n.y for n in nodes[:4]] == pytest.approx([72, 144, 216, 288])
        # Hidden layer at the middle
        assert nodes[4].x == pytest.approx(230)
        assert nodes[4].y == pytest.approx(360 / 7)
        # Single output node centred vertically at the right edge
        assert (nodes[10].x, nodes[10].y) == pytest.approx((460, 180))

    def test_single_layer_is_centred(self, extent):
        layout = LayoutEngine().layout([LayerSpec(3, "Only")], None, None, extent)
        assert all(n.x == 230 for n in layout.nodes)
        assert layout.edges == ()

    def test_node_order_is_layer_then_index(self, extent):
        layout = LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent)
        keys = [(n.layer_index, n.index_in_layer) for n in layout.nodes]
        assert keys == sorted(keys)
        assert keys[0] == (0, 0) and keys[-1] == (2, 0)

    def test_edge_order_is_transition_source_target(self, extent):
        layout = LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent)
        keys = [
            (e.source.layer_index, e.source.index_in_layer, e.target.index_in_layer)
            for e in layout.edges
        ]
        assert keys == sorted(keys)
        assert keys[:2] == [(0, 0, 0), (0, 0, 1)]
        assert keys[-1] == (1, 5, 0)

    def test_node_values_from_activations(self, extent, network_values):
        activations, weights = network_values
        layout = LayoutEngine().layout(DEFAULT_LAYERS, activations, weights, extent)
        assert [n.value for n in layout.nodes[:4]] == pytest.approx([0.5, 0.5, 0.5, 0.6])
        assert layout.nodes[10].value == pytest.approx(activations[2][0])

    def test_edge_weights_and_thickness(self, extent, network_values):
        activations, weights = network_values
        layout = LayoutEngine(edge_scale=2.0).layout(DEFAULT_LAYERS, activations, weights, extent)

        first = layout.edges[0]
        assert first.weight == 2.0
        assert first.thickness == 4.0
        # Precipitation -> hidden 0 is negative; thickness uses the magnitude
        precip = layout.edges[6]
        assert (precip.source.index_in_layer, precip.target.index_in_layer) == (1, 0)
        assert precip.weight == -2.0
        assert precip.thickness == 4.0

    def test_missing_data_degrades_to_zero(self, extent):
        partial_activations = [[0.5, 0.5]]  # only two input values
        partial_weights = [[[1.0]]]  # only the first edge
        layout = LayoutEngine().layout(DEFAULT_LAYERS, partial_activations, partial_weights, extent)

        assert [n.value for n in layout.nodes[:4]] == [0.5, 0.5, 0.0, 0.0]
        assert all(n.value == 0.0 for n in layout.nodes[4:])
        assert layout.edges[0].weight == 1.0
        assert all(e.weight == 0.0 and e.thickness == 0.0 for e in layout.edges[1:])

    def test_none_and_nan_values_are_zero(self, extent):
        layout = LayoutEngine().layout(
            [LayerSpec(2), LayerSpec(1)],
            [[None, float("nan")], [1.0]],
            None,
            extent,
        )
        assert [n.value for n in layout.nodes] == [0.0, 0.0, 1.0]

    def test_layout_is_deterministic(self, extent, network_values):
        activations, weights = network_values
        engine = LayoutEngine()
        assert engine.layout(DEFAULT_LAYERS, activations, weights, extent) == \
            engine.layout(DEFAULT_LAYERS, activations, weights, extent)

    def test_edges_reference_positioned_nodes(self, extent):
        layout = LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent)
        for edge in layout.edges:
            assert isinstance(edge.source, PositionedNode)
            assert edge.source in layout.nodes
            assert edge.target in layout.nodes

    def test_arbitrary_topology(self, extent):
        layers = [LayerSpec(2), LayerSpec(3), LayerSpec(3), LayerSpec(2)]
        layout = LayoutEngine().layout(layers, None, None, extent)
        assert len(layout.nodes) == 10
        assert len(layout.edges) == 2 * 3 + 3 * 3 + 3 * 2
        assert sorted({n.x for n in layout.nodes}) == pytest.approx([0, 460 / 3, 920 / 3, 460])

    def test_empty_topology_rejected(self, extent):
        with pytest.raises(ValueError):
            LayoutEngine().layout([], None, None, extent)

    def test_empty_layer_rejected(self, extent):
        with pytest.raises(ValueError):
            LayoutEngine().layout([LayerSpec(4), LayerSpec(0)], None, None, extent)

    def test_negative_extent_rejected(self):
        extent = Extent.from_canvas(100, 400, margin=60)
        assert extent.width < 0
        with pytest.raises(ValueError, match="non-negative"):
            LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent)

    def test_zero_extent_collapses_to_origin(self):
        layout = LayoutEngine().layout(DEFAULT_LAYERS, None, None, Extent(0, 0))
        assert all((n.x, n.y) == (0, 0) for n in layout.nodes)

    def test_to_dict(self, extent):
        d = LayoutEngine().layout(DEFAULT_LAYERS, None, None, extent).to_dict()
        assert len(d["nodes"]) == 11
        assert d["edges"][0]["source"] == [0, 0]
        assert d["edges"][0]["target"] == [1, 0]
