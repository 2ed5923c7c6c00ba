"""
Odds conversion utilities.

Converts American moneyline odds into implied win probabilities and formats
them for display.
"""
from decimal import Decimal, InvalidOperation, Overflow
from typing import Any, Optional

HUNDRED = Decimal("100")


def coerce_american(odds: Any) -> Optional[Decimal]:
    """
    Coerce an upstream odds value to a finite Decimal.

    Accepts ints, floats, Decimals and numeric strings ("-150", "+130").

    Returns:
        The odds as a Decimal, or None if the value is absent or not numeric
    """
    if odds is None or isinstance(odds, bool):
        return None

    try:
        value = Decimal(str(odds).strip())
    except (InvalidOperation, ValueError):
        return None

    if not value.is_finite():
        return None
    return value


def american_to_implied_probability(odds: Any) -> Optional[Decimal]:
    """
    Convert American odds to implied probability.

    Note: This includes the bookmaker's vig, so the two sides of a line
    won't sum to 1.

    Args:
        odds: American odds (e.g., -150, +130), possibly as a string

    Returns:
        Implied probability (0-1), or None for absent/non-numeric odds

    Examples:
        >>> american_to_implied_probability(-150)
        Decimal('0.6')
        >>> american_to_implied_probability(+150)
        Decimal('0.4')
        >>> american_to_implied_probability(None) is None
        True
        >>> american_to_implied_probability("1e1000000")
        Decimal('0')
    """
    american = coerce_american(odds)
    if american is None:
        return None

    try:
        if american > 0:
            return HUNDRED / (american + HUNDRED)
        else:
            return abs(american) / (abs(american) + HUNDRED)
    except Overflow:
        # Magnitude past the decimal context's range: use each formula's limit
        return Decimal(0) if american > 0 else Decimal(1)


def format_probability(probability: Optional[Decimal]) -> Optional[str]:
    """
    Format a probability as a percentage with one decimal place.

    Examples:
        >>> format_probability(Decimal('0.6'))
        '60.0%'
    """
    if probability is None:
        return None
    return f"{probability * HUNDRED:.1f}%"


def american_to_percentage(odds: Any) -> Optional[str]:
    """Convert American odds straight to a display percentage ("43.5%")."""
    return format_probability(american_to_implied_probability(odds))
