"""Tests for manufacturer profiles and the order URL."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from clover_fab.manufacturers import (
    JLCPCB_PROFILE,
    ManufacturerProfile,
    build_order_url,
    get_manufacturer_ids,
    get_profile,
)
from clover_fab.manufacturers.jlcpcb import format_number
from clover_fab.schema import BoardSpecs


def query(url: str) -> list:
    return parse_qsl(urlsplit(url).query)


class TestOrderUrl:
    """Test build_order_url()."""

    def test_default_specs(self, default_specs):
        assert build_order_url(default_specs) == (
            "https://cart.jlcpcb.com/quote?type=0&layers=2&dimensions=100x100&pcbQty=5"
            "&impedance=no&pcbColor=green&surfaceFinish=1&copperWeight=1"
            "&boardThickness=1.6&castellatedHoles=0&stencil=0"
        )

    def test_parameter_order(self, default_specs):
        keys = [k for k, _ in query(build_order_url(default_specs))]
        assert keys == [
            "type",
            "layers",
            "dimensions",
            "pcbQty",
            "impedance",
            "pcbColor",
            "surfaceFinish",
            "copperWeight",
            "boardThickness",
            "castellatedHoles",
            "stencil",
        ]

    def test_options_enabled(self):
        specs = BoardSpecs(
            layers=4,
            width=50.5,
            height=40,
            quantity=10,
            color="black",
            finish="enig",
            thickness=1.2,
            copper_weight="2oz",
            castellated_holes=True,
            impedance_control=True,
            stencil=True,
        )
        assert dict(query(build_order_url(specs))) == {
            "type": "0",
            "layers": "4",
            "dimensions": "50.5x40",
            "pcbQty": "10",
            "impedance": "yes",
            "pcbColor": "black",
            "surfaceFinish": "3",
            "copperWeight": "2",
            "boardThickness": "1.2",
            "castellatedHoles": "1",
            "stencil": "1",
        }

    @pytest.mark.parametrize(
        "finish, code", [("hasl", "1"), ("leadfree-hasl", "2"), ("enig", "3"), ("osp", "4"), ("?", "4")]
    )
    def test_surface_finish_codes(self, finish, code):
        assert dict(query(build_order_url(BoardSpecs(finish=finish))))["surfaceFinish"] == code


class TestFormatNumber:
    """Test number rendering."""

    @pytest.mark.parametrize(
        "value, expected", [(100.0, "100"), (100, "100"), (1.6, "1.6"), (0.8, "0.8"), (50.25, "50.25")]
    )
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestProfiles:
    """Test the manufacturer registry."""

    def test_get_profile(self):
        assert get_profile("jlcpcb") is JLCPCB_PROFILE

    @pytest.mark.parametrize("alias", ["JLC", " jlcpcb ", "lcsc"])
    def test_aliases(self, alias):
        assert get_profile(alias).id == "jlcpcb"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown manufacturer"):
            get_profile("acme")

    def test_ids(self):
        assert get_manufacturer_ids() == ["jlcpcb"]

    def test_quote_url(self):
        assert JLCPCB_PROFILE.quote_url == "https://cart.jlcpcb.com/quote"

    def test_pricing_table_id(self):
        assert JLCPCB_PROFILE.pricing_table_id == "jlcpcb"
        assert ManufacturerProfile("acme", "Acme", "", "").pricing_table_id == "acme"
