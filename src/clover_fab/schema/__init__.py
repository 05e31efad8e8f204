"""
Data models for board specs, designs, quotes and orders.

Usage:
    from clover_fab.schema import BoardSpecs, Design

    specs = BoardSpecs(layers=4, width=80, height=60, quantity=10)
    design = Design.from_dict(payload)
"""

from .board import (
    BOARD_THICKNESSES,
    DEFAULT_BOARD_SPECS,
    SUPPORTED_LAYER_COUNTS,
    BoardSpecs,
    CopperWeight,
    SolderMaskColor,
    SurfaceFinish,
)
from .design import LAYER_SIDES, Component, Design, Hole, Point, Trace, sanitize_name
from .order import Order, OrderStatus
from .quote import Quote, QuoteBreakdown

__all__ = [
    # Board specs
    "BoardSpecs",
    "DEFAULT_BOARD_SPECS",
    "SUPPORTED_LAYER_COUNTS",
    "BOARD_THICKNESSES",
    "SolderMaskColor",
    "SurfaceFinish",
    "CopperWeight",
    # Design
    "Design",
    "Component",
    "Trace",
    "Hole",
    "Point",
    "LAYER_SIDES",
    "sanitize_name",
    # Quote / order
    "Quote",
    "QuoteBreakdown",
    "Order",
    "OrderStatus",
]
