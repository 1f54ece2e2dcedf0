"""
FX conversion module for the holding query engine.

Converts account balances from their own currency into the reference
currency (PLN) using the fixed per-currency rate.

Rounding discipline:
- The product amount * rate is computed exactly
- The product is rounded to 4 significant digits, ROUND_HALF_UP
- Sums of converted amounts round each account individually and never
  re-round the total

Classes:
    CurrencyNormalizer: Converter applying rates and rounding

Usage:
    from holding_query.engine.fx_converter import CurrencyNormalizer

    normalizer = CurrencyNormalizer()
    total_pln = normalizer.normalize_all(user.accounts)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal
from typing import TYPE_CHECKING

from holding_query.contracts.config import QueryConfig

if TYPE_CHECKING:
    from holding_query.domain.entities import Account
    from holding_query.domain.enums import Currency

logger = logging.getLogger(__name__)

# Context wide enough that products and sums are never rounded
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


class CurrencyNormalizer:
    """
    Convert account amounts to the reference currency.

    Rates, significant digits and rounding mode come from QueryConfig,
    so alternative rate tables can be supplied for what-if queries.
    """

    def __init__(self, config: QueryConfig | None = None) -> None:
        """
        Initialize the normalizer.

        Args:
            config: Query configuration (defaults to QueryConfig.default())
        """
        self.config = config or QueryConfig.default()
        self._rounding = Context(
            prec=self.config.significant_digits,
            rounding=self.config.rounding,
        )

    def normalize(self, amount: Decimal, currency: Currency) -> Decimal:
        """
        Convert an amount to the reference currency.

        Args:
            amount: Amount in its own currency
            currency: Currency the amount is held in

        Returns:
            amount * rate rounded to the configured significant digits

        Example:
            >>> CurrencyNormalizer().normalize(Decimal("100.00"), Currency.EUR)
            Decimal('430.0')
        """
        product = _EXACT.multiply(amount, self.config.get_rate(currency))
        return self._rounding.plus(product)

    def normalize_account(self, account: Account) -> Decimal:
        """Convert a single account balance to the reference currency."""
        return self.normalize(account.amount, account.currency)

    def normalize_all(self, accounts: Iterable[Account]) -> Decimal:
        """
        Sum account balances in the reference currency.

        Each balance is converted and rounded on its own before being
        added; the total itself is not rounded again.

        Args:
            accounts: Accounts to total (may be empty)

        Returns:
            Total in the reference currency, Decimal(0) for no accounts
        """
        total = Decimal(0)
        count = 0
        for account in accounts:
            total = _EXACT.add(total, self.normalize_account(account))
            count += 1
        logger.debug("Normalized %d accounts to %s: %s", count, self.config.reference_currency, total)
        return total


def create_currency_normalizer(config: QueryConfig | None = None) -> CurrencyNormalizer:
    """
    Create a currency normalizer instance.

    Args:
        config: Optional query configuration

    Returns:
        CurrencyNormalizer ready for use
    """
    return CurrencyNormalizer(config)
