"""
Gerber (RS-274X subset) layer encoders.

Each encoder renders one layer of a Design as Gerber text: a fixed preamble,
aperture definitions, then move (D02), draw (D01) and flash (D03)
operations, and a closing ``M02*``. Only circular and rectangular standard
apertures are used; no aperture macros.

Example::

    from clover_fab.export.gerber import generate_copper

    text = generate_copper(design, "top")
    Path("board-F_Cu.gbr").write_text(text)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from clover_fab.schema import LAYER_SIDES, Design

from .coords import format_xy

GENERATION_SOFTWARE = "Clover,AI-PCB-Designer,1.0"

# Aperture sizes in mm
OUTLINE_LINE_WIDTH = 0.1
COPPER_PAD_DIAMETER = 1.0
COPPER_PAD_RECT = (1.5, 1.5)
TRACE_LINE_WIDTH = 0.25
SILKSCREEN_MARK_DIAMETER = 0.15
SILKSCREEN_MARK_OFFSET_Y = 2.0
SOLDERMASK_PAD_DIAMETER = 1.1

# (top, bottom) X2 file functions per layer kind
FILE_FUNCTIONS = {
    "copper": ("Copper,L1,Top", "Copper,L2,Bot"),
    "silkscreen": ("Legend,Top", "Legend,Bot"),
    "soldermask": ("Soldermask,Top", "Soldermask,Bot"),
}


def _file_function(kind: str, side: str) -> str:
    if side not in LAYER_SIDES:
        raise ValueError(f"Unknown layer side: {side!r}. Expected one of {LAYER_SIDES}")
    top, bottom = FILE_FUNCTIONS[kind]
    return top if side == "top" else bottom


@dataclass
class GerberWriter:
    """
    Line-oriented Gerber builder.

    Example::

        gw = GerberWriter("Profile,NP")
        gw.aperture_circle(10, 0.1)
        gw.select(10)
        gw.move(0, 0)
        gw.draw(10, 0)
        text = gw.render()
    """

    file_function: str

    def __post_init__(self) -> None:
        self.lines: List[str] = [
            f"%TF.GenerationSoftware,{GENERATION_SOFTWARE}*%",
            f"%TF.FileFunction,{self.file_function}*%",
            "%FSLAX46Y46*%",
            "G04 Units: mm*",
            "%MOMM*%",
            "%LPD*%",
        ]

    def aperture_circle(self, code: int, diameter: float) -> None:
        self.lines.append(f"%ADD{code}C,{diameter:.6f}*%")

    def aperture_rect(self, code: int, width: float, height: float) -> None:
        self.lines.append(f"%ADD{code}R,{width:.6f}X{height:.6f}*%")

    def select(self, code: int) -> None:
        self.lines.append(f"D{code}*")

    def move(self, x: float, y: float) -> None:
        self.lines.append(f"{format_xy(x, y)}D02*")

    def draw(self, x: float, y: float) -> None:
        self.lines.append(f"{format_xy(x, y)}D01*")

    def flash(self, x: float, y: float) -> None:
        self.lines.append(f"{format_xy(x, y)}D03*")

    def render(self) -> str:
        """Return the finished file text, terminated by ``M02*``."""
        return "\n".join([*self.lines, "M02*"])


def generate_edge_cuts(design: Design) -> str:
    """Board outline as a closed thin-line polygon."""
    gw = GerberWriter("Profile,NP")
    gw.aperture_circle(10, OUTLINE_LINE_WIDTH)
    gw.select(10)

    outline = design.outline()
    first = outline[0]
    gw.move(first.x, first.y)
    for vertex in outline[1:]:
        gw.draw(vertex.x, vertex.y)
    gw.draw(first.x, first.y)

    return gw.render()


def generate_copper(design: Design, side: str) -> str:
    """
    Copper layer: a round pad flash per component, then the traces.

    Every trace is drawn with the fixed D12 line aperture; the trace's own
    width is not used.
    """
    gw = GerberWriter(_file_function("copper", side))
    gw.aperture_circle(10, COPPER_PAD_DIAMETER)
    gw.aperture_rect(11, *COPPER_PAD_RECT)
    gw.aperture_circle(12, TRACE_LINE_WIDTH)

    gw.select(10)
    for comp in design.components_on(side):
        gw.flash(comp.x, comp.y)

    gw.select(12)
    for trace in design.traces_on(side):
        if not trace.points:
            continue
        first, *rest = trace.points
        gw.move(first.x, first.y)
        for point in rest:
            gw.draw(point.x, point.y)

    return gw.render()


def generate_silkscreen(design: Design, side: str) -> str:
    """Silkscreen: a small reference mark 2 mm above each component."""
    gw = GerberWriter(_file_function("silkscreen", side))
    gw.aperture_circle(10, SILKSCREEN_MARK_DIAMETER)
    gw.select(10)

    for comp in design.components_on(side):
        gw.flash(comp.x, comp.y + SILKSCREEN_MARK_OFFSET_Y)

    return gw.render()


def generate_soldermask(design: Design, side: str) -> str:
    """Solder mask: an opening slightly larger than the copper pad per component."""
    gw = GerberWriter(_file_function("soldermask", side))
    gw.aperture_circle(10, SOLDERMASK_PAD_DIAMETER)
    gw.select(10)

    for comp in design.components_on(side):
        gw.flash(comp.x, comp.y)

    return gw.render()
