"""
Betting utilities.

Provides American odds to implied probability conversion and formatting.
"""

from .odds_converter import (
    american_to_implied_probability,
    american_to_percentage,
    coerce_american,
    format_probability,
)

__all__ = [
    "american_to_implied_probability",
    "american_to_percentage",
    "coerce_american",
    "format_probability",
]
