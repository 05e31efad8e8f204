"""
Excellon drill file encoder.

Tool T1 drills every plain hole at a fixed 0.8 mm. Mounting holes share a
single tool T2 whose diameter is taken from the first mounting hole; boards
with mixed mounting-hole sizes get every mounting hole at that first size.
"""

from __future__ import annotations

import logging

from clover_fab.schema import Design

from .coords import format_drill_xy, to_drill_coord

logger = logging.getLogger(__name__)

DRILL_TOOL_DIAMETER = 0.8  # mm

DRILL_HEADER = (
    "M48",
    ";DRILL file generated by Clover AI PCB Designer",
    ";FORMAT={-:-/ absolute / metric / decimal}",
    "FMAT,2",
    "METRIC,TZ",
)


def generate_drill_file(design: Design) -> str:
    """
    Render the drill program for a design.

    The T2 tool definition and section are omitted entirely when the design
    has no mounting holes.
    """
    mounting = design.mounting_holes
    lines = list(DRILL_HEADER)

    lines.append(f"T1C{to_drill_coord(DRILL_TOOL_DIAMETER)}")
    if mounting:
        mh_diameter = mounting[0].diameter
        if any(h.diameter != mh_diameter for h in mounting[1:]):
            logger.debug(
                f"{design.name}: mounting holes have mixed diameters, "
                f"all drilled at {mh_diameter:.3f} mm"
            )
        lines.append(f"T2C{to_drill_coord(mh_diameter)}")
    lines.append("%")

    lines.append("T1")
    for hole in design.drill_holes:
        lines.append(format_drill_xy(hole.x, hole.y))

    if mounting:
        lines.append("T2")
        for hole in mounting:
            lines.append(format_drill_xy(hole.x, hole.y))

    lines.append("T0")
    lines.append("M30")
    return "\n".join(lines)
