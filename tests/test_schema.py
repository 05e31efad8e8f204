"""Tests for the board, design and order models."""

from datetime import datetime, timezone

from clover_fab.cost import estimate_quote
from clover_fab.schema import (
    BoardSpecs,
    Design,
    Order,
    OrderStatus,
    Point,
    SolderMaskColor,
    SurfaceFinish,
)
from clover_fab.schema.design import sanitize_name


class TestBoardSpecs:
    """Test BoardSpecs parsing and serialization."""

    def test_defaults(self):
        specs = BoardSpecs()
        assert specs.layers == 2
        assert (specs.width, specs.height) == (100.0, 100.0)
        assert specs.quantity == 5
        assert specs.copper_weight == "1oz"

    def test_from_camel_case(self):
        specs = BoardSpecs.from_dict(
            {"copperWeight": "2oz", "castellatedHoles": True, "impedanceControl": True}
        )
        assert specs.copper_weight == "2oz"
        assert specs.castellated_holes is True
        assert specs.impedance_control is True

    def test_from_snake_case_and_unknown_keys(self):
        specs = BoardSpecs.from_dict({"copper_weight": "2oz", "rushOrder": True})
        assert specs.copper_weight == "2oz"

    def test_to_dict_camel_case(self):
        data = BoardSpecs().to_dict()
        assert "copperWeight" in data
        assert "castellatedHoles" in data
        assert "copper_weight" not in data

    def test_enum_members_stored_as_strings(self):
        specs = BoardSpecs(color=SolderMaskColor.BLACK, finish=SurfaceFinish.ENIG)
        assert specs.color == "black"
        assert specs.finish == "enig"

    def test_area(self):
        assert BoardSpecs(width=50, height=40).area_cm2 == 20.0

    def test_supported_layers(self):
        assert BoardSpecs(layers=4).is_supported_layer_count
        assert not BoardSpecs(layers=3).is_supported_layer_count


class TestDesign:
    """Test Design parsing and derived values."""

    def test_from_dict(self, sample_design_dict):
        design = Design.from_dict(sample_design_dict)
        assert design.name == "LED Blinker"
        assert design.specs.width == 50
        assert len(design.components) == 4
        assert design.components_on("bottom")[0].designator == "C1"
        assert design.traces_on("bottom")[0].net == "GND"
        assert len(design.mounting_holes) == 2

    def test_missing_collections(self):
        design = Design.from_dict({"name": "Bare", "drillHoles": None})
        assert design.components == ()
        assert design.drill_holes == ()
        assert design.specs == BoardSpecs()

    def test_file_stem(self):
        assert Design(name="LED  Blinker\tv2").file_stem == "LED-Blinker-v2"
        assert sanitize_name("plain") == "plain"

    def test_outline_fallback(self):
        design = Design(name="Rect", specs=BoardSpecs(width=10, height=5))
        assert design.outline() == (Point(0, 0), Point(10, 0), Point(10, 5), Point(0, 5))

    def test_outline_too_short_uses_rectangle(self):
        design = Design(
            name="Line", specs=BoardSpecs(width=10, height=5), board_outline=((0, 0), (3, 3))
        )
        assert len(design.outline()) == 4
        assert design.outline()[2] == Point(10, 5)

    def test_explicit_outline(self):
        design = Design(name="Tri", board_outline=({"x": 0, "y": 0}, (10, 0), Point(5, 8)))
        assert design.outline() == (Point(0, 0), Point(10, 0), Point(5, 8))

    def test_to_dict_round_trip(self, sample_design):
        assert Design.from_dict(sample_design.to_dict()) == sample_design


class TestOrder:
    """Test Order serialization."""

    def _order(self, design, **kwargs):
        return Order(
            id="order-1",
            design=design,
            quote=estimate_quote(design.specs),
            status=OrderStatus.DRAFT,
            created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            **kwargs,
        )

    def test_to_dict(self, simple_design):
        data = self._order(simple_design).to_dict()
        assert data["id"] == "order-1"
        assert data["status"] == "draft"
        assert data["createdAt"] == "2024-05-01T12:00:00+00:00"
        assert data["design"]["name"] == "Simple"
        assert "jlcpcbUrl" not in data
        assert "gerberPath" not in data

    def test_to_dict_with_links(self, simple_design):
        data = self._order(
            simple_design, order_url="https://example.com/q", gerber_path="/tmp/Simple.zip"
        ).to_dict()
        assert data["jlcpcbUrl"] == "https://example.com/q"
        assert data["gerberPath"] == "/tmp/Simple.zip"

    def test_status_values(self):
        assert OrderStatus("gerber-generated") is OrderStatus.GERBER_GENERATED
        assert [s.value for s in OrderStatus][0] == "draft"
