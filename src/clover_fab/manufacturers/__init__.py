"""
PCB Manufacturer Profiles Package.

Supported manufacturers:
- JLCPCB (jlcpcb) - quote page pre-filled from board specs

Usage:
    from clover_fab.manufacturers import build_order_url, get_profile

    profile = get_profile("jlc")
    url = build_order_url(specs)
"""

from .base import ManufacturerProfile
from .jlcpcb import JLCPCB_PROFILE, JLCPCB_QUOTE_URL, build_order_url, order_url_params

__all__ = [
    "ManufacturerProfile",
    "get_profile",
    "get_manufacturer_ids",
    "build_order_url",
    "order_url_params",
    "JLCPCB_PROFILE",
    "JLCPCB_QUOTE_URL",
]

# Registry of all manufacturer profiles
_PROFILES: dict[str, ManufacturerProfile] = {
    "jlcpcb": JLCPCB_PROFILE,
}

# Aliases for convenience
_ALIASES: dict[str, str] = {
    "jlc": "jlcpcb",
    "lcsc": "jlcpcb",
}


def get_profile(manufacturer_id: str) -> ManufacturerProfile:
    """
    Get a manufacturer profile by ID.

    Args:
        manufacturer_id: Manufacturer identifier (e.g., "jlcpcb")

    Returns:
        ManufacturerProfile for the specified manufacturer

    Raises:
        ValueError: If manufacturer_id is not recognized
    """
    normalized = manufacturer_id.lower().strip()
    normalized = _ALIASES.get(normalized, normalized)

    if normalized not in _PROFILES:
        available = ", ".join(sorted(_PROFILES.keys()))
        raise ValueError(f"Unknown manufacturer: {manufacturer_id!r}. Available: {available}")

    return _PROFILES[normalized]


def get_manufacturer_ids() -> list[str]:
    """Get list of valid manufacturer IDs."""
    return sorted(_PROFILES.keys())
