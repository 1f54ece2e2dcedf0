"""Configuration module for the holding query engine."""

from .fx_rates import (
    REFERENCE_CURRENCY,
    ROUNDING_MODE,
    SIGNIFICANT_DIGITS,
    default_fx_rates,
    get_pln_rate,
)

__all__ = [
    "REFERENCE_CURRENCY",
    "ROUNDING_MODE",
    "SIGNIFICANT_DIGITS",
    "default_fx_rates",
    "get_pln_rate",
]
