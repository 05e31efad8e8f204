"""
Fabrication output: Gerber layers, Excellon drill file and the ZIP package.

Usage:
    from clover_fab.export import GerberPackager, encode_design

    # In-memory manifest (name, bytes) in archive order
    files = encode_design(design)

    # Layer files + archive on disk
    result = GerberPackager("manufacturing/").generate(design)
"""

from .coords import format_drill_xy, format_xy, to_drill_coord, to_fixed_coord
from .drill import DRILL_TOOL_DIAMETER, generate_drill_file
from .gerber import (
    GerberWriter,
    generate_copper,
    generate_edge_cuts,
    generate_silkscreen,
    generate_soldermask,
)
from .package import (
    LAYER_PLAN,
    GeneratedFile,
    GerberPackager,
    LayerJob,
    PackageResult,
    default_output_root,
    encode_design,
    generate_gerber_package,
)

__all__ = [
    # Coordinates
    "to_fixed_coord",
    "to_drill_coord",
    "format_xy",
    "format_drill_xy",
    # Layers
    "GerberWriter",
    "generate_edge_cuts",
    "generate_copper",
    "generate_silkscreen",
    "generate_soldermask",
    # Drill
    "DRILL_TOOL_DIAMETER",
    "generate_drill_file",
    # Package
    "LAYER_PLAN",
    "LayerJob",
    "GeneratedFile",
    "GerberPackager",
    "PackageResult",
    "default_output_root",
    "encode_design",
    "generate_gerber_package",
]
