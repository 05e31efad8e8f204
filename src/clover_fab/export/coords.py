"""
Coordinate formatting for plotter and drill files.

Gerber files declare ``%FSLAX46Y46*%`` with millimetre units, so every
coordinate is written as an integer count of nanometres (4 integer and 6
fractional digits implied). Drill files use plain decimal millimetres.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

# 10^6: six implied fractional digits
GERBER_SCALE = 1_000_000
_MILLI = Decimal("0.001")


def to_fixed_coord(mm: float) -> str:
    """
    Convert millimetres to a Gerber 4.6 fixed-point coordinate string.

    Halves round toward positive infinity.

    Example:
        >>> to_fixed_coord(1.0)
        '1000000'
        >>> to_fixed_coord(0.0005)
        '500'
        >>> to_fixed_coord(-2.5)
        '-2500000'
    """
    return str(math.floor(mm * GERBER_SCALE + 0.5))


def to_drill_coord(mm: float) -> str:
    """
    Format millimetres with 3 decimals for an Excellon coordinate.

    Exact ties round away from zero (1.0625 -> "1.063").
    """
    return str(Decimal(mm).quantize(_MILLI, rounding=ROUND_HALF_UP))


def format_xy(x: float, y: float) -> str:
    """Gerber ``X..Y..`` coordinate pair."""
    return f"X{to_fixed_coord(x)}Y{to_fixed_coord(y)}"


def format_drill_xy(x: float, y: float) -> str:
    """Excellon ``X..Y..`` coordinate record."""
    return f"X{to_drill_coord(x)}Y{to_drill_coord(y)}"
