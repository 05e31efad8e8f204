"""
Quote command: estimate the price of a board order.

Usage:
    clover-fab quote board.json
    clover-fab quote design.json --quantity 30 --shipping express --format json
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from clover_fab.config import SHIPPING_TIERS, Config
from clover_fab.cost import cost_drivers, estimate_quote
from clover_fab.schema import Design, Quote
from clover_fab.validate import validate_specs

from .utils import load_board


def add_arguments(parser) -> None:
    parser.add_argument("input", help="JSON file with board specs or a full design")
    parser.add_argument("--quantity", "-n", type=int, help="Override the board quantity")
    parser.add_argument("--shipping", choices=SHIPPING_TIERS, help="Shipping tier")
    parser.add_argument("--format", choices=["table", "json"], help="Output format")


def run(args, config: Config) -> int:
    """Handle the quote command."""
    board = load_board(args.input)
    specs = board.specs if isinstance(board, Design) else board
    if args.quantity is not None:
        specs = specs.replace(quantity=args.quantity)
    validate_specs(specs, operation="cli:quote")

    pricing = config.pricing_table()
    quote = estimate_quote(specs, pricing, args.shipping or config.pricing.shipping)

    if (args.format or config.defaults.format) == "json":
        print(json.dumps(quote.to_dict(), indent=2))
        return 0

    _print_quote(Console(), quote, cost_drivers(specs, pricing))
    return 0


def _print_quote(console: Console, quote: Quote, drivers: list[str]) -> None:
    specs = quote.specs
    console.print(
        f"\n[bold]Quote: {specs.layers}-layer {specs.width:g}x{specs.height:g} mm "
        f"x {quote.quantity}[/bold]\n"
    )

    table = Table(show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Amount", justify="right")
    c = quote.currency
    table.add_row("Base price", f"{quote.base_price:.2f} {c}")
    table.add_row("PCB cost", f"{quote.breakdown.pcb_cost:.2f} {c}")
    table.add_row("Setup fee", f"{quote.breakdown.setup_fee:.2f} {c}")
    table.add_row("Stencil", f"{quote.breakdown.stencil_cost:.2f} {c}")
    table.add_row("Shipping", f"{quote.breakdown.shipping_cost:.2f} {c}")
    table.add_row("[bold]Total[/bold]", f"[bold]{quote.total_price:.2f} {c}[/bold]")
    table.add_row("Per board", f"{quote.unit_price:.2f} {c}")
    table.add_row("Lead time", f"{quote.estimated_days} days")
    console.print(table)

    if drivers:
        console.print("\n[dim]Cost drivers:[/dim]")
        for driver in drivers:
            console.print(f"  • {driver}")
    console.print()
