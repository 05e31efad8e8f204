"""
Quote estimation for PCB orders.

Usage:
    from clover_fab.cost import estimate_quote, PricingTable

    quote = estimate_quote(specs)
    print(f"Total: ${quote.total_price:.2f} ({quote.estimated_days} days)")

    # Custom pricing table
    pricing = PricingTable.load("my-fab.yaml")
    quote = estimate_quote(specs, pricing, shipping="express")
"""

from .quote import (
    DEFAULT_PRICING,
    PricingTable,
    area_cost,
    batch_multiplier,
    cost_drivers,
    estimate_quote,
    round_cents,
    surcharges,
)

__all__ = [
    "estimate_quote",
    "PricingTable",
    "DEFAULT_PRICING",
    "area_cost",
    "surcharges",
    "batch_multiplier",
    "cost_drivers",
    "round_cents",
]
