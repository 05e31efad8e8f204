"""
Input validation for board specs and designs.

Usage:
    from clover_fab.validate import validate_design

    validate_design(design)  # raises ValidationError listing every problem
"""

from .specs import check_design, check_specs, spec_warnings, validate_design, validate_specs

__all__ = [
    "check_specs",
    "check_design",
    "spec_warnings",
    "validate_specs",
    "validate_design",
]
