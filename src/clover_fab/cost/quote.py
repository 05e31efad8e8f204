"""
Quote estimation for bare PCB orders.

A simplified commercial pricing heuristic: a base price per layer tier, an
area charge above a free allowance, fixed option surcharges and batch
pricing in multiples of five boards. Pure and deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from clover_fab.exceptions import ConfigurationError
from clover_fab.schema import BoardSpecs, Quote, QuoteBreakdown

# Default pricing data directory
_PRICING_DIR = Path(__file__).parent / "pricing"


def round_cents(amount: float) -> float:
    """Round to 2 decimals, halves rounding up (matches Math.round(x * 100) / 100)."""
    if not math.isfinite(amount):
        return amount
    return math.floor(amount * 100 + 0.5) / 100


@dataclass
class PricingTable:
    """Price constants used by the estimator."""

    base_prices: dict[int, float] = field(
        default_factory=lambda: {1: 2.0, 2: 2.0, 4: 28.0, 6: 48.0}
    )
    fallback_layers: int = 2  # Tier used for unsupported layer counts
    free_area_cm2: float = 10.0
    area_rate_per_cm2: float = 0.04
    setup_fee: float = 0.0
    stencil_cost: float = 8.0
    color_surcharge: dict[str, float] = field(
        default_factory=lambda: {
            "green": 0.0,
            "red": 0.0,
            "yellow": 0.0,
            "blue": 0.0,
            "white": 0.0,
            "black": 0.0,
            "purple": 2.0,
        }
    )
    finish_surcharge: dict[str, float] = field(
        default_factory=lambda: {"hasl": 0.0, "leadfree-hasl": 0.0, "enig": 12.0, "osp": 0.0}
    )
    heavy_copper_surcharge: float = 8.0  # 2oz copper
    castellated_surcharge: float = 15.0
    impedance_surcharge: float = 20.0
    batch_size: int = 5
    shipping: dict[str, float] = field(
        default_factory=lambda: {"economy": 3.5, "standard": 8.5, "express": 18.0}
    )
    lead_times: dict[int, int] = field(default_factory=lambda: {1: 3, 2: 3, 4: 7, 6: 10})
    default_lead_time: int = 5
    currency: str = "USD"

    def base_price(self, layers: int) -> float:
        """Base price for a layer count, falling back to the 2-layer tier."""
        if layers in self.base_prices:
            return self.base_prices[layers]
        return self.base_prices[self.fallback_layers]

    def lead_time(self, layers: int) -> int:
        return self.lead_times.get(layers, self.default_lead_time)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PricingTable:
        """
        Build a table from a mapping, keeping defaults for missing keys.

        Raises:
            ConfigurationError: If the mapping contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown keys in pricing table",
                context={"keys": ", ".join(unknown)},
                suggestions=[f"Valid keys: {', '.join(sorted(known))}"],
            )

        table = cls(**data)
        # YAML may give string keys for numeric tables
        table.base_prices = {int(k): float(v) for k, v in table.base_prices.items()}
        table.lead_times = {int(k): int(v) for k, v in table.lead_times.items()}
        return table

    @classmethod
    def load(cls, path: str | Path) -> PricingTable:
        """
        Load a pricing table from a YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read pricing file: {e}", context={"file": str(path)}
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in pricing file: {e}", context={"file": str(path)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Pricing file must contain a mapping", context={"file": str(path)}
            )
        return cls.from_dict(data.get("pcb", data))

    @classmethod
    def for_manufacturer(cls, manufacturer: str = "jlcpcb") -> PricingTable:
        """
        Load the bundled pricing table for a manufacturer.

        Raises:
            ConfigurationError: If no table is bundled for the manufacturer
        """
        pricing_file = _PRICING_DIR / f"{manufacturer.lower()}.yaml"
        if not pricing_file.exists():
            bundled = sorted(p.stem for p in _PRICING_DIR.glob("*.yaml"))
            raise ConfigurationError(
                f"No bundled pricing table for {manufacturer!r}",
                suggestions=[f"Bundled tables: {', '.join(bundled)}", "Set pricing.file instead"],
            )
        return cls.load(pricing_file)


DEFAULT_PRICING = PricingTable()


def area_cost(specs: BoardSpecs, pricing: PricingTable = DEFAULT_PRICING) -> float:
    """Area charge for the board area above the free allowance."""
    return max(0.0, specs.area_cm2 - pricing.free_area_cm2) * pricing.area_rate_per_cm2


def surcharges(specs: BoardSpecs, pricing: PricingTable = DEFAULT_PRICING) -> dict[str, float]:
    """
    Option surcharges keyed by option name.

    Unknown colours and finishes contribute 0.
    """
    return {
        "color": pricing.color_surcharge.get(specs.color, 0.0),
        "finish": pricing.finish_surcharge.get(specs.finish, 0.0),
        "copper": pricing.heavy_copper_surcharge if specs.copper_weight == "2oz" else 0.0,
        "castellated": pricing.castellated_surcharge if specs.castellated_holes else 0.0,
        "impedance": pricing.impedance_surcharge if specs.impedance_control else 0.0,
    }


def batch_multiplier(quantity: int, pricing: PricingTable = DEFAULT_PRICING) -> int:
    """Number of batches billed: 1-5 boards cost the same as a batch of 5."""
    return max(1, math.ceil(quantity / pricing.batch_size))


def estimate_quote(
    specs: BoardSpecs,
    pricing: Optional[PricingTable] = None,
    shipping: str = "standard",
) -> Quote:
    """
    Estimate the price of a board order.

    Preconditions (not checked here, see ``clover_fab.validate``):
    quantity >= 1 and positive dimensions. Quantity 0 divides by zero.

    Args:
        specs: Board specification
        pricing: Pricing table (default: built-in JLCPCB-like table)
        shipping: Shipping tier name

    Returns:
        Quote with per-unit and total price and a cost breakdown

    Raises:
        ValueError: If the shipping tier is not in the pricing table
    """
    pricing = pricing or DEFAULT_PRICING
    if shipping not in pricing.shipping:
        available = ", ".join(pricing.shipping)
        raise ValueError(f"Unknown shipping tier: {shipping!r}. Available: {available}")

    base_price = pricing.base_price(specs.layers)
    extras = sum(surcharges(specs, pricing).values())
    pcb_cost = (base_price + area_cost(specs, pricing) + extras) * batch_multiplier(
        specs.quantity, pricing
    )
    stencil_cost = pricing.stencil_cost if specs.stencil else 0.0
    shipping_cost = pricing.shipping[shipping]

    total_price = pcb_cost + pricing.setup_fee + stencil_cost + shipping_cost
    # Quantity 0 has no finite unit price
    unit_price = pcb_cost / specs.quantity if specs.quantity else math.inf

    return Quote(
        base_price=base_price,
        quantity=specs.quantity,
        unit_price=round_cents(unit_price),
        total_price=round_cents(total_price),
        estimated_days=pricing.lead_time(specs.layers),
        shipping_estimate=shipping_cost,
        currency=pricing.currency,
        specs=specs,
        breakdown=QuoteBreakdown(
            pcb_cost=round_cents(pcb_cost),
            setup_fee=pricing.setup_fee,
            stencil_cost=stencil_cost,
            shipping_cost=shipping_cost,
        ),
    )


def cost_drivers(specs: BoardSpecs, pricing: Optional[PricingTable] = None) -> list[str]:
    """Describe what is making this board more expensive than the base tier."""
    pricing = pricing or DEFAULT_PRICING
    drivers: list[str] = []

    if specs.layers not in pricing.base_prices:
        drivers.append(f"{specs.layers}-layer boards are priced as {pricing.fallback_layers}-layer")
    elif pricing.base_price(specs.layers) > pricing.base_price(pricing.fallback_layers):
        drivers.append(
            f"{specs.layers}-layer base price ${pricing.base_price(specs.layers):.2f}"
        )

    extra_area = area_cost(specs, pricing)
    if extra_area > 0:
        drivers.append(f"Board area {specs.area_cm2:.0f} cm2 adds ${extra_area:.2f} per batch")

    for name, amount in surcharges(specs, pricing).items():
        if amount > 0:
            drivers.append(f"{name.capitalize()} option adds ${amount:.2f} per batch")

    batches = batch_multiplier(specs.quantity, pricing)
    if batches > 1:
        drivers.append(f"{specs.quantity} boards are billed as {batches} batches")

    if specs.stencil:
        drivers.append(f"Stencil adds ${pricing.stencil_cost:.2f}")

    return drivers
