"""
Board design model.

A Design is produced upstream (by the chat/streaming parser) and owned by the
caller. Encoders only read it; nothing in clover-fab mutates a Design.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from .board import BoardSpecs

LAYER_SIDES = ("top", "bottom")

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class Point:
    """A 2D point in millimetres."""

    x: float
    y: float

    @classmethod
    def from_dict(cls, data: Any) -> Point:
        if isinstance(data, Point):
            return data
        if isinstance(data, dict):
            return cls(x=data["x"], y=data["y"])
        x, y = data
        return cls(x=x, y=y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Component:
    """A placed component."""

    designator: str  # e.g. "R1", "U1", "LED1"
    package: str = ""  # e.g. "0805", "SOT-23"
    value: str = ""  # e.g. "10k"
    description: str = ""
    x: float = 0.0  # mm
    y: float = 0.0  # mm
    rotation: float = 0.0  # degrees
    layer: str = "top"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Component:
        return cls(
            designator=data["designator"],
            package=data.get("package", ""),
            value=data.get("value", ""),
            description=data.get("description", ""),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            rotation=data.get("rotation", 0.0),
            layer=data.get("layer", "top"),
        )

    def to_dict(self) -> dict:
        return {
            "designator": self.designator,
            "package": self.package,
            "value": self.value,
            "description": self.description,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "layer": self.layer,
        }


@dataclass(frozen=True)
class Trace:
    """A copper trace on one layer, as an ordered polyline."""

    net: str
    width: float  # mm
    points: tuple[Point, ...] = ()
    layer: str = "top"  # top, bottom, inner1, inner2, ...

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(Point.from_dict(p) for p in self.points))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Trace:
        return cls(
            net=data.get("net", ""),
            width=data.get("width", 0.25),
            points=tuple(data.get("points", ())),
            layer=data.get("layer", "top"),
        )

    def to_dict(self) -> dict:
        return {
            "net": self.net,
            "width": self.width,
            "points": [p.to_dict() for p in self.points],
            "layer": self.layer,
        }


@dataclass(frozen=True)
class Hole:
    """A drilled hole (plain drill or mounting hole)."""

    x: float
    y: float
    diameter: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Hole:
        return cls(x=data["x"], y=data["y"], diameter=data["diameter"])

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "diameter": self.diameter}


def sanitize_name(name: str) -> str:
    """Collapse every run of whitespace in a name to a single hyphen."""
    return _WHITESPACE_RUN.sub("-", name)


@dataclass(frozen=True)
class Design:
    """A complete board design."""

    name: str
    description: str = ""
    specs: BoardSpecs = field(default_factory=BoardSpecs)
    components: tuple[Component, ...] = ()
    traces: tuple[Trace, ...] = ()
    board_outline: tuple[Point, ...] = ()
    drill_holes: tuple[Hole, ...] = ()
    mounting_holes: tuple[Hole, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "traces", tuple(self.traces))
        object.__setattr__(
            self, "board_outline", tuple(Point.from_dict(p) for p in self.board_outline)
        )
        object.__setattr__(self, "drill_holes", tuple(self.drill_holes))
        object.__setattr__(self, "mounting_holes", tuple(self.mounting_holes))

    @property
    def file_stem(self) -> str:
        """Base name used for generated files and the archive."""
        return sanitize_name(self.name)

    def outline(self) -> tuple[Point, ...]:
        """
        Board outline polygon.

        Outlines with fewer than 3 vertices cannot describe a board, so the
        implicit rectangle (0,0)-(width,height) is used instead.
        """
        if len(self.board_outline) >= 3:
            return self.board_outline
        w, h = self.specs.width, self.specs.height
        return (Point(0, 0), Point(w, 0), Point(w, h), Point(0, h))

    def components_on(self, side: str) -> list[Component]:
        return [c for c in self.components if c.layer == side]

    def traces_on(self, side: str) -> list[Trace]:
        return [t for t in self.traces if t.layer == side]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Design:
        """
        Build a design from the JSON emitted by the design parser.

        Keys follow the upstream camelCase convention (``boardOutline``,
        ``drillHoles``, ``mountingHoles``); snake_case is accepted too.
        """

        def items(*keys: str) -> Iterable[Any]:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return ()

        specs = data.get("specs")
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            specs=BoardSpecs.from_dict(specs) if isinstance(specs, dict) else specs or BoardSpecs(),
            components=tuple(Component.from_dict(c) for c in items("components")),
            traces=tuple(Trace.from_dict(t) for t in items("traces")),
            board_outline=tuple(Point.from_dict(p) for p in items("boardOutline", "board_outline")),
            drill_holes=tuple(Hole.from_dict(h) for h in items("drillHoles", "drill_holes")),
            mounting_holes=tuple(
                Hole.from_dict(h) for h in items("mountingHoles", "mounting_holes")
            ),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "specs": self.specs.to_dict(),
            "components": [c.to_dict() for c in self.components],
            "traces": [t.to_dict() for t in self.traces],
            "boardOutline": [p.to_dict() for p in self.board_outline],
            "drillHoles": [h.to_dict() for h in self.drill_holes],
            "mountingHoles": [h.to_dict() for h in self.mounting_holes],
        }
