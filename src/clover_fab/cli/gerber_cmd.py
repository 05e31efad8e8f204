"""
Fabrication output commands.

Usage:
    clover-fab gerber design.json -o manufacturing/
    clover-fab order-url board.json
    clover-fab inspect manufacturing/Blinky.zip
"""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from clover_fab.archive import read_central_directory
from clover_fab.config import Config
from clover_fab.exceptions import ArchiveError, ValidationError
from clover_fab.export import GerberPackager
from clover_fab.manufacturers import build_order_url
from clover_fab.schema import Design
from clover_fab.validate import validate_design, validate_specs

from .utils import load_board


def add_gerber_arguments(parser) -> None:
    parser.add_argument("design", help="Design JSON file")
    parser.add_argument("-o", "--output", help="Output directory (default: export.output_dir)")
    parser.add_argument("--workers", type=int, help="Compression threads (0 = serial)")
    parser.add_argument(
        "--no-layer-files",
        action="store_true",
        help="Only keep the ZIP archive, not the individual layer files",
    )
    parser.add_argument("--format", choices=["table", "json"], help="Output format")


def run_gerber(args, config: Config) -> int:
    """Handle the gerber command."""
    board = load_board(args.design)
    if not isinstance(board, Design):
        raise ValidationError(
            ["gerber needs a full design (with a name), not bare board specs"],
            context={"file": args.design},
        )
    design = validate_design(board, operation="cli:gerber")

    workers = args.workers if args.workers is not None else config.export.workers
    packager = GerberPackager(
        Path(args.output or config.export.output_dir),
        workers=workers or None,
        compression_level=config.export.compression_level,
        keep_layer_files=config.export.keep_layer_files and not args.no_layer_files,
    )
    result = packager.generate(design)

    if (args.format or config.defaults.format) == "json":
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    console = Console()
    console.print(f"[green]Created {result.archive_path}[/green] ({result.archive_size} bytes)")
    if result.layer_dir:
        console.print(f"[dim]Layer files: {result.layer_dir}[/dim]")
    for name in result.files:
        console.print(f"  {name}")
    return 0


def add_order_url_arguments(parser) -> None:
    parser.add_argument("input", help="JSON file with board specs or a full design")


def run_order_url(args, config: Config) -> int:
    """Handle the order-url command."""
    board = load_board(args.input)
    specs = board.specs if isinstance(board, Design) else board
    print(build_order_url(validate_specs(specs, operation="cli:order-url")))
    return 0


def add_inspect_arguments(parser) -> None:
    parser.add_argument("archive", help="ZIP archive to list")
    parser.add_argument("--format", choices=["table", "json"], help="Output format")


def run_inspect(args, config: Config) -> int:
    """Handle the inspect command: list an archive's central directory."""
    path = Path(args.archive)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ArchiveError(f"Cannot read archive: {e}", context={"file": str(path)}) from e
    records = read_central_directory(data)

    if (args.format or config.defaults.format) == "json":
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return 0

    table = Table(title=path.name)
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Compressed", justify="right")
    table.add_column("CRC-32")
    table.add_column("Offset", justify="right")
    for record in records:
        table.add_row(
            record.name,
            str(record.uncompressed_size),
            str(record.compressed_size),
            f"{record.crc32:08x}",
            str(record.local_header_offset),
        )
    Console().print(table)
    return 0
