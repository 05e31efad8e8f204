"""
Base classes for PCB manufacturer profiles.
"""

from dataclasses import dataclass


@dataclass
class ManufacturerProfile:
    """Manufacturer profile: identity, quote page and pricing table."""

    # Basic info
    id: str  # "jlcpcb"
    name: str  # "JLCPCB"
    website: str

    # Online quote page that accepts board parameters as a query string
    quote_url: str

    # Pricing table shipped in cost/pricing/<pricing_id>.yaml
    pricing_id: str = ""

    @property
    def pricing_table_id(self) -> str:
        """Bundled pricing table name, defaulting to the manufacturer id."""
        return self.pricing_id or self.id
