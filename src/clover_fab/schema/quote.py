"""Quote model returned by the quote estimator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .board import BoardSpecs


@dataclass(frozen=True)
class QuoteBreakdown:
    """Cost breakdown of a quote, in quote currency."""

    pcb_cost: float
    setup_fee: float
    stencil_cost: float
    shipping_cost: float

    def to_dict(self) -> dict:
        return {
            "pcbCost": self.pcb_cost,
            "setupFee": self.setup_fee,
            "stencilCost": self.stencil_cost,
            "shippingCost": self.shipping_cost,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuoteBreakdown:
        return cls(
            pcb_cost=data.get("pcbCost", data.get("pcb_cost", 0.0)),
            setup_fee=data.get("setupFee", data.get("setup_fee", 0.0)),
            stencil_cost=data.get("stencilCost", data.get("stencil_cost", 0.0)),
            shipping_cost=data.get("shippingCost", data.get("shipping_cost", 0.0)),
        )


@dataclass(frozen=True)
class Quote:
    """
    Price estimate for a board order.

    Quotes are derived values: a specs change always produces a new Quote,
    existing quotes are never updated in place.
    """

    base_price: float
    quantity: int
    unit_price: float
    total_price: float
    estimated_days: int
    shipping_estimate: float
    specs: BoardSpecs
    breakdown: QuoteBreakdown
    currency: str = "USD"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "basePrice": self.base_price,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "totalPrice": self.total_price,
            "estimatedDays": self.estimated_days,
            "shippingEstimate": self.shipping_estimate,
            "currency": self.currency,
            "specs": self.specs.to_dict(),
            "breakdown": self.breakdown.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Quote:
        return cls(
            base_price=data["basePrice"],
            quantity=data["quantity"],
            unit_price=data["unitPrice"],
            total_price=data["totalPrice"],
            estimated_days=data["estimatedDays"],
            shipping_estimate=data["shippingEstimate"],
            specs=BoardSpecs.from_dict(data["specs"]),
            breakdown=QuoteBreakdown.from_dict(data["breakdown"]),
            currency=data.get("currency", "USD"),
        )
