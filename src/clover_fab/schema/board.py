"""
Board specification model.

BoardSpecs is an immutable value that fully determines pricing and the
marketplace order URL. Enumerated fields are stored as plain strings so that
values outside the known sets still flow through (they price with zero
surcharge rather than failing).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any

SUPPORTED_LAYER_COUNTS = (1, 2, 4, 6)
BOARD_THICKNESSES = (0.8, 1.0, 1.2, 1.6, 2.0)


class SolderMaskColor(str, Enum):
    """Solder mask colours offered by the fab."""

    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"
    WHITE = "white"
    BLACK = "black"
    PURPLE = "purple"


class SurfaceFinish(str, Enum):
    """Surface finish options."""

    HASL = "hasl"
    LEADFREE_HASL = "leadfree-hasl"
    ENIG = "enig"
    OSP = "osp"


class CopperWeight(str, Enum):
    """Outer copper weight."""

    ONE_OZ = "1oz"
    TWO_OZ = "2oz"


# JSON key (camelCase, as produced by the design parser) -> field name
_FIELD_ALIASES = {
    "copperWeight": "copper_weight",
    "castellatedHoles": "castellated_holes",
    "impedanceControl": "impedance_control",
}


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class BoardSpecs:
    """Fabrication parameters for a board order."""

    layers: int = 2
    width: float = 100.0  # mm
    height: float = 100.0  # mm
    quantity: int = 5
    color: str = SolderMaskColor.GREEN.value
    finish: str = SurfaceFinish.HASL.value
    thickness: float = 1.6  # mm
    copper_weight: str = CopperWeight.ONE_OZ.value
    castellated_holes: bool = False
    impedance_control: bool = False
    stencil: bool = False

    def __post_init__(self) -> None:
        # Accept enum members but always store their string values
        for name in ("color", "finish", "copper_weight"):
            object.__setattr__(self, name, _enum_value(getattr(self, name)))

    @property
    def area_cm2(self) -> float:
        """Board area in square centimetres."""
        return (self.width / 10) * (self.height / 10)

    @property
    def is_supported_layer_count(self) -> bool:
        return self.layers in SUPPORTED_LAYER_COUNTS

    def replace(self, **changes: Any) -> BoardSpecs:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BoardSpecs:
        """
        Build specs from a JSON-style mapping.

        Accepts both camelCase keys (``copperWeight``) and snake_case keys.
        Missing keys take the default value; unknown keys are ignored.
        """
        kwargs: dict[str, Any] = {}
        known = cls.__dataclass_fields__
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Convert to dictionary (camelCase keys, as used on the wire)."""
        data = asdict(self)
        reverse = {v: k for k, v in _FIELD_ALIASES.items()}
        return {reverse.get(k, k): v for k, v in data.items()}


DEFAULT_BOARD_SPECS = BoardSpecs()
