"""
Unit Tests for Settings
"""
import pytest
from pydantic import ValidationError

from firerisk.config import Settings
from firerisk.core.layout import Extent


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.history_capacity == 20
        assert (s.diagram_width, s.diagram_height, s.diagram_margin) == (500.0, 400.0, 20.0)

    def test_margin_leaving_no_drawable_area_rejected(self):
        with pytest.raises(ValidationError, match="diagram_margin"):
            Settings(diagram_width=500, diagram_height=400, diagram_margin=250)

    def test_largest_margin_accepted(self):
        s = Settings(diagram_width=500, diagram_height=400, diagram_margin=200)
        extent = Extent.from_canvas(s.diagram_width, s.diagram_height, s.diagram_margin)
        assert (extent.width, extent.height) == (100.0, 0.0)

    def test_history_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(history_capacity=0)
