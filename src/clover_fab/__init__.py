"""
clover-fab: PCB design to manufacturer-ready fabrication bundle.

Turns an abstract board design into Gerber layer files, an Excellon drill
file, a cost quote and a ZIP archive ready for upload to a PCB fab.

Modules:
    schema: Board specs, design, quote and order data models
    cost: Quote estimation
    export: Gerber / drill encoders and package generation
    archive: CRC32, raw DEFLATE and the ZIP writer
    manufacturers: Manufacturer profiles and order URLs
    orders: In-memory order registry
    service: Result-returning facade for UI / request layers

Quick Start::

    from clover_fab import Design, estimate_quote, generate_gerber_package

    design = Design.from_dict(json.load(open("design.json")))
    quote = estimate_quote(design.specs)
    print(f"Total: ${quote.total_price:.2f}")

    zip_path = generate_gerber_package(design, "manufacturing/")
"""

__version__ = "0.3.0"

from clover_fab.archive import ZipEntry, build_zip, crc32, deflate_raw
from clover_fab.cost import PricingTable, estimate_quote
from clover_fab.exceptions import (
    ArchiveError,
    CloverFabError,
    ConfigurationError,
    GenerationError,
    ValidationError,
)
from clover_fab.export import (
    GerberPackager,
    PackageResult,
    encode_design,
    generate_drill_file,
    generate_gerber_package,
)
from clover_fab.manufacturers import build_order_url
from clover_fab.orders import OrderRegistry
from clover_fab.schema import (
    DEFAULT_BOARD_SPECS,
    BoardSpecs,
    Component,
    Design,
    Hole,
    Order,
    OrderStatus,
    Point,
    Quote,
    QuoteBreakdown,
    Trace,
)

__all__ = [
    "__version__",
    # Schema
    "BoardSpecs",
    "DEFAULT_BOARD_SPECS",
    "Component",
    "Design",
    "Hole",
    "Order",
    "OrderStatus",
    "Point",
    "Quote",
    "QuoteBreakdown",
    "Trace",
    # Cost
    "PricingTable",
    "estimate_quote",
    # Export
    "GerberPackager",
    "PackageResult",
    "encode_design",
    "generate_drill_file",
    "generate_gerber_package",
    # Archive
    "ZipEntry",
    "build_zip",
    "crc32",
    "deflate_raw",
    # Manufacturers / orders
    "build_order_url",
    "OrderRegistry",
    # Errors
    "CloverFabError",
    "ValidationError",
    "GenerationError",
    "ArchiveError",
    "ConfigurationError",
]
