"""Order tracking."""

from .registry import OrderRegistry, utc_now

__all__ = ["OrderRegistry", "utc_now"]
