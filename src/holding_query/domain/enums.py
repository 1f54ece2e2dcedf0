"""
Domain enums for the holding query engine.

Defines the closed enumerations attached to the ownership hierarchy:
- Sex: Employee sex used for filtering and grouping
- Currency: Account currency, each member carrying its fixed rate to PLN
- AccountType: Bank account product type

Currency members bind their exchange rate directly so that the rate can
never drift away from the currency it belongs to.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum


class Sex(Enum):
    """Sex of an employee (User)."""

    MAN = "MAN"
    WOMAN = "WOMAN"
    OTHER = "OTHER"


class Currency(Enum):
    """
    Account currencies with their fixed rate to the reference currency.

    The rate is a multiplier:
        amount_in_pln = amount * rate

    PLN is the reference currency and carries a rate of exactly 1.0.
    """

    PLN = ("PLN", Decimal("1.0"))
    USD = ("USD", Decimal("3.72"))
    EUR = ("EUR", Decimal("4.30"))
    CHF = ("CHF", Decimal("3.58"))

    def __init__(self, code: str, rate: Decimal) -> None:
        self.code = code
        self.rate = rate

    def __str__(self) -> str:
        return self.code

    @classmethod
    def from_code(cls, code: str) -> Currency:
        """
        Look up a currency by its ISO code.

        Args:
            code: Currency code such as "EUR" (case-insensitive)

        Returns:
            Matching Currency member

        Raises:
            ValueError: If no currency uses the code
        """
        normalized = code.strip().upper()
        for currency in cls:
            if currency.code == normalized:
                return currency
        raise ValueError(f"Unknown currency code: {code!r}")


class AccountType(Enum):
    """Bank account product types."""

    PERSONAL = "PERSONAL"
    STANDARD = "STANDARD"
    SAVINGS = "SAVINGS"
