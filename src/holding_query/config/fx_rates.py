"""
FX rate configuration for currency normalisation.

All money queries report in a single reference currency (PLN). Each
Currency member carries its own fixed rate; this module exposes those
rates as a lookup table together with the rounding discipline applied
to every converted amount:
- Products are rounded to SIGNIFICANT_DIGITS significant digits
- Rounding mode is ROUND_HALF_UP

Usage:
    from holding_query.config import default_fx_rates, get_pln_rate

    rates = default_fx_rates()
    eur_rate = get_pln_rate(Currency.EUR)  # Decimal("4.30")

To update a rate:
    Modify the rate bound to the member in holding_query.domain.enums.Currency.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from holding_query.domain.enums import Currency


# =============================================================================
# REFERENCE CURRENCY AND ROUNDING
# =============================================================================

REFERENCE_CURRENCY: Currency = Currency.PLN

# Converted amounts keep 4 significant digits (not decimal places)
SIGNIFICANT_DIGITS: int = 4

ROUNDING_MODE: str = ROUND_HALF_UP


# =============================================================================
# RATE LOOKUP
# =============================================================================

def get_pln_rate(currency: Currency) -> Decimal:
    """
    Get the fixed rate converting one unit of currency into PLN.

    Args:
        currency: Currency to look up

    Returns:
        Rate as a Decimal (1.0 for PLN)
    """
    return currency.rate


def default_fx_rates() -> dict[Currency, Decimal]:
    """
    Get the full rate table keyed by currency.

    Returns:
        Dictionary of every Currency to its PLN rate
    """
    return {currency: get_pln_rate(currency) for currency in Currency}
