"""
In-memory order registry.

Orders hold snapshots of the design and quote taken at creation time, so
later edits to a design never leak into an existing order. The registry is
an explicit object owned by the caller; all access is serialized with a
lock and callers only ever receive copies of stored orders.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from clover_fab.cost import estimate_quote
from clover_fab.schema import Design, Order, OrderStatus, Quote

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderRegistry:
    """
    Thread-safe store of orders keyed by id.

    Example::

        registry = OrderRegistry()
        order = registry.create(design)
        registry.update_status(order.id, OrderStatus.SUBMITTED)
        for o in registry.list():
            print(o.id, o.status.value)
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utc_now
        self._orders: dict[str, Order] = {}
        self._lock = threading.Lock()

    def create(self, design: Design, quote: Optional[Quote] = None) -> Order:
        """
        Create a draft order for a design.

        The quote is estimated from the design's specs unless given.
        """
        snapshot = copy.deepcopy(design)
        if quote is None:
            quote = estimate_quote(snapshot.specs)

        order = Order(
            id=str(uuid.uuid4()),
            design=snapshot,
            quote=quote,
            status=OrderStatus.DRAFT,
            created_at=self._clock(),
        )
        with self._lock:
            self._orders[order.id] = order

        logger.info(f"Created order {order.id} for {design.name!r}")
        return replace(order)

    def get(self, order_id: str) -> Optional[Order]:
        """Get an order by id, or None."""
        with self._lock:
            order = self._orders.get(order_id)
            return replace(order) if order is not None else None

    def update_status(
        self, order_id: str, status: Union[OrderStatus, str]
    ) -> Optional[Order]:
        """
        Set an order's status.

        Only the status changes. Unknown ids are a no-op returning None.

        Raises:
            ValueError: If status is not a valid OrderStatus value
        """
        status = OrderStatus(status)
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                logger.debug(f"update_status: no order {order_id}")
                return None
            previous = order.status
            order.status = status
            result = replace(order)

        logger.info(f"Order {order_id}: {previous.value} -> {status.value}")
        return result

    def attach(
        self,
        order_id: str,
        *,
        order_url: Optional[str] = None,
        gerber_path: Optional[str] = None,
    ) -> Optional[Order]:
        """Record the order URL and/or package path. Unknown ids return None."""
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            if order_url is not None:
                order.order_url = order_url
            if gerber_path is not None:
                order.gerber_path = str(gerber_path)
            return replace(order)

    def list(self) -> list[Order]:
        """All orders, newest first."""
        with self._lock:
            orders = [replace(o) for o in self._orders.values()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._orders
