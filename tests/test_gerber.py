"""Tests for Gerber layer encoders."""

import pytest

from clover_fab.export.gerber import (
    GerberWriter,
    generate_copper,
    generate_edge_cuts,
    generate_silkscreen,
    generate_soldermask,
)
from clover_fab.schema import BoardSpecs, Component, Design, Point, Trace

PREAMBLE_TAIL = ["%FSLAX46Y46*%", "G04 Units: mm*", "%MOMM*%", "%LPD*%"]


def lines(text: str) -> list:
    return text.split("\n")


class TestGerberWriter:
    """Test the line builder."""

    def test_preamble(self):
        out = lines(GerberWriter("Profile,NP").render())
        assert out[0] == "%TF.GenerationSoftware,Clover,AI-PCB-Designer,1.0*%"
        assert out[1] == "%TF.FileFunction,Profile,NP*%"
        assert out[2:6] == PREAMBLE_TAIL
        assert out[-1] == "M02*"

    def test_apertures(self):
        gw = GerberWriter("Copper,L1,Top")
        gw.aperture_circle(10, 1.0)
        gw.aperture_rect(11, 1.5, 1.5)
        assert "%ADD10C,1.000000*%" in gw.lines
        assert "%ADD11R,1.500000X1.500000*%" in gw.lines

    def test_operations(self):
        gw = GerberWriter("Copper,L1,Top")
        gw.move(1, 2)
        gw.draw(3, 4)
        gw.flash(0.5, 0)
        assert gw.lines[-3:] == ["X1000000Y2000000D02*", "X3000000Y4000000D01*", "X500000Y0D03*"]

    def test_no_trailing_newline(self):
        assert GerberWriter("Legend,Top").render().endswith("M02*")


class TestEdgeCuts:
    """Test the board outline layer."""

    def test_implicit_rectangle(self, simple_design):
        out = lines(generate_edge_cuts(simple_design))
        assert out[1] == "%TF.FileFunction,Profile,NP*%"
        assert out[6:] == [
            "%ADD10C,0.100000*%",
            "D10*",
            "X0Y0D02*",
            "X10000000Y0D01*",
            "X10000000Y5000000D01*",
            "X0Y5000000D01*",
            "X0Y0D01*",
            "M02*",
        ]

    def test_explicit_outline_closed(self):
        design = Design(
            name="Tri",
            board_outline=[Point(0, 0), Point(20, 0), Point(10, 15)],
        )
        out = lines(generate_edge_cuts(design))
        ops = [line for line in out if line.endswith(("D01*", "D02*"))]
        assert ops == [
            "X0Y0D02*",
            "X20000000Y0D01*",
            "X10000000Y15000000D01*",
            "X0Y0D01*",
        ]

    def test_two_point_outline_uses_rectangle(self):
        """Outlines with fewer than 3 vertices fall back to the board size."""
        design = Design(
            name="Degenerate",
            specs=BoardSpecs(width=10, height=5),
            board_outline=[Point(0, 0), Point(3, 3)],
        )
        assert "X10000000Y5000000D01*" in lines(generate_edge_cuts(design))


class TestCopper:
    """Test copper layers."""

    def test_top_copper(self, simple_design):
        out = lines(generate_copper(simple_design, "top"))
        assert out[1] == "%TF.FileFunction,Copper,L1,Top*%"
        assert out[6:] == [
            "%ADD10C,1.000000*%",
            "%ADD11R,1.500000X1.500000*%",
            "%ADD12C,0.250000*%",
            "D10*",
            "X1000000Y2000000D03*",
            "D12*",
            "X1000000Y2000000D02*",
            "X4000000Y2000000D01*",
            "M02*",
        ]

    def test_bottom_copper_only_bottom_items(self, sample_design):
        text = generate_copper(sample_design, "bottom")
        assert "%TF.FileFunction,Copper,L2,Bot*%" in text
        assert lines(text).count("X12000000Y8000000D03*") == 1
        assert "X20000000Y20000000D03*" not in text
        assert "X5000000Y8000000D01*" in text

    def test_empty_side_still_has_apertures(self, simple_design):
        out = lines(generate_copper(simple_design, "bottom"))
        assert "D10*" in out and "D12*" in out
        assert not any(line.endswith(("D01*", "D02*", "D03*")) for line in out)

    def test_single_point_trace_moves_only(self):
        design = Design(name="One", traces=[Trace("N", 0.2, points=[Point(5, 5)])])
        out = lines(generate_copper(design, "top"))
        assert "X5000000Y5000000D02*" in out
        assert not any(line.endswith("D01*") for line in out)

    def test_empty_trace_emits_nothing(self):
        design = Design(name="None", traces=[Trace("N", 0.2)])
        out = lines(generate_copper(design, "top"))
        assert out[-2] == "D12*"

    def test_trace_width_ignored(self):
        """All traces use the fixed 0.25 mm line aperture."""
        design = Design(name="Wide", traces=[Trace("P", 2.0, points=[Point(0, 0), Point(1, 0)])])
        text = generate_copper(design, "top")
        assert "%ADD12C,0.250000*%" in text
        assert "2.000000" not in text

    def test_inner_layer_traces_not_drawn(self):
        design = Design(
            name="Inner",
            traces=[Trace("IN", 0.2, points=[Point(1, 1), Point(2, 2)], layer="inner1")],
        )
        assert "D01*" not in generate_copper(design, "top")
        assert "D01*" not in generate_copper(design, "bottom")

    def test_unknown_side_rejected(self, simple_design):
        with pytest.raises(ValueError, match="Unknown layer side"):
            generate_copper(simple_design, "inner1")


class TestSilkscreenAndMask:
    """Test silkscreen and solder mask layers."""

    def test_silkscreen_mark_offset(self, simple_design):
        out = lines(generate_silkscreen(simple_design, "top"))
        assert out[1] == "%TF.FileFunction,Legend,Top*%"
        assert out[6:] == ["%ADD10C,0.150000*%", "D10*", "X1000000Y4000000D03*", "M02*"]

    def test_soldermask_openings(self, simple_design):
        out = lines(generate_soldermask(simple_design, "top"))
        assert out[1] == "%TF.FileFunction,Soldermask,Top*%"
        assert out[6:] == ["%ADD10C,1.100000*%", "D10*", "X1000000Y2000000D03*", "M02*"]

    def test_bottom_soldermask(self, sample_design):
        text = generate_soldermask(sample_design, "bottom")
        assert "%TF.FileFunction,Soldermask,Bot*%" in text
        assert [line for line in lines(text) if line.endswith("D03*")] == ["X12000000Y8000000D03*"]

    def test_deterministic(self, sample_design):
        assert generate_silkscreen(sample_design, "top") == generate_silkscreen(sample_design, "top")

    def test_design_not_mutated(self, sample_design):
        before = sample_design.to_dict()
        generate_copper(sample_design, "top")
        generate_edge_cuts(sample_design)
        assert sample_design.to_dict() == before

    def test_component_order_preserved(self):
        design = Design(
            name="Order",
            components=[Component("B", x=2, y=0), Component("A", x=1, y=0)],
        )
        flashes = [line for line in lines(generate_soldermask(design, "top")) if line.endswith("D03*")]
        assert flashes == ["X2000000Y0D03*", "X1000000Y0D03*"]
