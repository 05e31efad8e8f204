"""Order model held by the order registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .design import Design
from .quote import Quote


class OrderStatus(str, Enum):
    """
    Order lifecycle states.

    Transitions are driven externally; nothing moves an order forward
    automatically.
    """

    DRAFT = "draft"
    QUOTED = "quoted"
    GERBER_GENERATED = "gerber-generated"
    SUBMITTED = "submitted"
    MANUFACTURING = "manufacturing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


@dataclass
class Order:
    """A board order: design and quote snapshots plus status."""

    id: str
    design: Design
    quote: Quote
    status: OrderStatus
    created_at: datetime
    order_url: Optional[str] = None
    gerber_path: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "design": self.design.to_dict(),
            "quote": self.quote.to_dict(),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }
        if self.order_url is not None:
            data["jlcpcbUrl"] = self.order_url
        if self.gerber_path is not None:
            data["gerberPath"] = self.gerber_path
        return data
