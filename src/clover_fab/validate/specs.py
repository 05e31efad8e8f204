"""
Boundary validation for board specs and designs.

The pricing and encoding core assumes its preconditions (quantity >= 1,
positive dimensions); these checks run where untrusted input enters, in the
service facade and the CLI. Hard errors are collected and raised together
as a ValidationError. Values the core can price with a fallback (unsupported
layer counts, unknown colours) only produce logged warnings.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Optional

from clover_fab.exceptions import ValidationError
from clover_fab.schema import (
    BOARD_THICKNESSES,
    LAYER_SIDES,
    SUPPORTED_LAYER_COUNTS,
    BoardSpecs,
    CopperWeight,
    Design,
    SolderMaskColor,
    SurfaceFinish,
)

logger = logging.getLogger(__name__)


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _positive(value: object) -> bool:
    return _is_number(value) and math.isfinite(value) and value > 0


def check_specs(specs: BoardSpecs) -> list[str]:
    """Return every hard error in a set of board specs (empty if valid)."""
    errors: list[str] = []

    if not isinstance(specs.quantity, int) or isinstance(specs.quantity, bool):
        errors.append(f"quantity must be an integer (got {specs.quantity!r})")
    elif specs.quantity < 1:
        errors.append(f"quantity must be at least 1 (got {specs.quantity})")

    for name in ("width", "height"):
        value = getattr(specs, name)
        if not _positive(value):
            errors.append(f"{name} must be a positive number of millimetres (got {value!r})")

    if not _positive(specs.thickness):
        errors.append(f"thickness must be a positive number of millimetres (got {specs.thickness!r})")

    if not isinstance(specs.layers, int) or isinstance(specs.layers, bool):
        errors.append(f"layers must be an integer (got {specs.layers!r})")

    return errors


def spec_warnings(specs: BoardSpecs) -> list[str]:
    """Values that are accepted but priced or built with a fallback."""
    warnings: list[str] = []

    if specs.layers not in SUPPORTED_LAYER_COUNTS:
        warnings.append(
            f"{specs.layers}-layer boards are not a standard option; priced as 2-layer"
        )
    if specs.color not in {c.value for c in SolderMaskColor}:
        warnings.append(f"Unknown solder mask colour {specs.color!r}; no surcharge applied")
    if specs.finish not in {f.value for f in SurfaceFinish}:
        warnings.append(f"Unknown surface finish {specs.finish!r}; no surcharge applied")
    if specs.copper_weight not in {w.value for w in CopperWeight}:
        warnings.append(f"Unknown copper weight {specs.copper_weight!r}; priced as 1oz")
    if _is_number(specs.thickness) and specs.thickness not in BOARD_THICKNESSES:
        warnings.append(f"Board thickness {specs.thickness} mm is not a standard option")

    return warnings


def validate_specs(specs: BoardSpecs, operation: Optional[str] = None) -> BoardSpecs:
    """
    Validate board specs, logging warnings.

    Returns:
        The specs unchanged

    Raises:
        ValidationError: With every hard error found
    """
    errors = check_specs(specs)
    if errors:
        raise ValidationError(
            errors,
            operation=operation,
            suggestions=["Use a quantity of at least 1 and positive board dimensions"],
        )
    for warning in spec_warnings(specs):
        logger.warning(warning)
    return specs


def check_design(design: Design) -> list[str]:
    """Return every hard error in a design, including its specs."""
    errors: list[str] = []

    if not isinstance(design.name, str) or not design.name.strip():
        errors.append("design name must not be empty")
    elif design.file_stem in (".", "..") or any(sep in design.file_stem for sep in "/\\"):
        errors.append(f"design name {design.name!r} cannot be used as a file name")

    errors.extend(check_specs(design.specs))

    seen: set[str] = set()
    for component in design.components:
        if component.designator in seen:
            errors.append(f"duplicate component designator {component.designator!r}")
        seen.add(component.designator)
        if component.layer not in LAYER_SIDES:
            errors.append(
                f"component {component.designator} is on unknown side {component.layer!r}"
            )

    for i, trace in enumerate(design.traces):
        if not _positive(trace.width):
            errors.append(f"trace {i} ({trace.net}) must have a positive width (got {trace.width!r})")

    for label, holes in (("drill hole", design.drill_holes), ("mounting hole", design.mounting_holes)):
        for i, hole in enumerate(holes):
            if not _positive(hole.diameter):
                errors.append(f"{label} {i} must have a positive diameter (got {hole.diameter!r})")

    return errors


def validate_design(design: Design, operation: Optional[str] = None) -> Design:
    """
    Validate a design and its specs, logging warnings.

    Raises:
        ValidationError: With every hard error found
    """
    errors = check_design(design)
    if errors:
        raise ValidationError(errors, operation=operation, context={"design": design.name})
    for warning in spec_warnings(design.specs):
        logger.warning(f"{design.name}: {warning}")
    if 0 < len(design.board_outline) < 3:
        logger.warning(
            f"{design.name}: board outline has {len(design.board_outline)} point(s); "
            "using the rectangular board size"
        )
    return design
