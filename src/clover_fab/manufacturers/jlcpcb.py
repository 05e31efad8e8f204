"""
JLCPCB manufacturer profile and order URL.

The order URL pre-fills JLCPCB's online quote page with the board
parameters. Parameter names and codes follow the quote page's query string.
"""

from __future__ import annotations

from urllib.parse import urlencode

from clover_fab.schema import BoardSpecs

from .base import ManufacturerProfile

JLCPCB_QUOTE_URL = "https://cart.jlcpcb.com/quote"

JLCPCB_PROFILE = ManufacturerProfile(
    id="jlcpcb",
    name="JLCPCB",
    website="https://jlcpcb.com",
    quote_url=JLCPCB_QUOTE_URL,
    pricing_id="jlcpcb",
)

# Quote page codes; anything else (osp, unknown finishes) maps to 4
SURFACE_FINISH_CODES = {
    "hasl": 1,
    "leadfree-hasl": 2,
    "enig": 3,
}
OTHER_FINISH_CODE = 4


def format_number(value: int | float) -> str:
    """
    Render a number the way the quote page expects.

    Integral floats drop their fractional part (``100.0`` -> ``"100"``),
    other floats use the shortest round-tripping form (``1.6`` -> ``"1.6"``).
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def order_url_params(specs: BoardSpecs) -> list[tuple[str, str]]:
    """Ordered query parameters for the quote page."""
    return [
        ("type", "0"),
        ("layers", format_number(specs.layers)),
        ("dimensions", f"{format_number(specs.width)}x{format_number(specs.height)}"),
        ("pcbQty", format_number(specs.quantity)),
        ("impedance", "yes" if specs.impedance_control else "no"),
        ("pcbColor", specs.color),
        ("surfaceFinish", str(SURFACE_FINISH_CODES.get(specs.finish, OTHER_FINISH_CODE))),
        ("copperWeight", "1" if specs.copper_weight == "1oz" else "2"),
        ("boardThickness", format_number(specs.thickness)),
        ("castellatedHoles", "1" if specs.castellated_holes else "0"),
        ("stencil", "1" if specs.stencil else "0"),
    ]


def build_order_url(specs: BoardSpecs) -> str:
    """
    Build the JLCPCB quote URL for a board.

    Example:
        >>> build_order_url(BoardSpecs())
        'https://cart.jlcpcb.com/quote?type=0&layers=2&dimensions=100x100&...'
    """
    return f"{JLCPCB_QUOTE_URL}?{urlencode(order_url_params(specs))}"
