"""
Configuration contracts for the holding query engine.

Provides the immutable QueryConfig dataclass controlling:
- Reference currency and the rate table used for normalisation
- Significant-digit rounding discipline for converted amounts
- Size cap for the capped user set query
- Seed for the random user sampler

The factory method .default() returns the standard configuration:
PLN reference currency, 4 significant digits, ROUND_HALF_UP.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from holding_query.config.fx_rates import (
    REFERENCE_CURRENCY,
    ROUNDING_MODE,
    SIGNIFICANT_DIGITS,
    default_fx_rates,
)
from holding_query.contracts.errors import InvalidArgumentError
from holding_query.domain.enums import Currency


@dataclass(frozen=True)
class QueryConfig:
    """
    Master configuration for query execution.

    Attributes:
        reference_currency: Currency all money queries report in
        fx_rates: Rate to the reference currency for every Currency;
            the reference currency itself must map to 1
        significant_digits: Significant digits kept after conversion
        rounding: decimal rounding mode applied to conversions
        user_set_limit: Maximum size of the capped user set
        random_seed: Seed for random sampling (None = nondeterministic)
    """

    reference_currency: Currency = REFERENCE_CURRENCY
    fx_rates: Mapping[Currency, Decimal] = field(default_factory=default_fx_rates)
    significant_digits: int = SIGNIFICANT_DIGITS
    rounding: str = ROUNDING_MODE
    user_set_limit: int = 10
    random_seed: int | None = None

    def __post_init__(self) -> None:
        if self.significant_digits <= 0:
            raise InvalidArgumentError(
                "significant_digits", self.significant_digits, "must be positive"
            )
        if self.user_set_limit < 0:
            raise InvalidArgumentError(
                "user_set_limit", self.user_set_limit, "must be non-negative"
            )
        missing = [c.code for c in Currency if c not in self.fx_rates]
        if missing:
            raise InvalidArgumentError("fx_rates", missing, "missing rates for currencies")
        reference_rate = self.fx_rates[self.reference_currency]
        if reference_rate != 1:
            raise InvalidArgumentError(
                "fx_rates",
                {self.reference_currency.code: reference_rate},
                f"rate of reference currency {self.reference_currency.code} must be 1",
            )
        # Freeze the rate table so the config stays immutable
        object.__setattr__(self, "fx_rates", MappingProxyType(dict(self.fx_rates)))

    def get_rate(self, currency: Currency) -> Decimal:
        """Get the configured rate to the reference currency."""
        return self.fx_rates[currency]

    @classmethod
    def default(cls, random_seed: int | None = None) -> QueryConfig:
        """
        Standard configuration: PLN, 4 significant digits, half-up.

        Args:
            random_seed: Optional seed for reproducible sampling

        Returns:
            QueryConfig with the default rate table
        """
        return cls(random_seed=random_seed)

    @classmethod
    def with_rates(
        cls,
        overrides: Mapping[Currency, Decimal],
        random_seed: int | None = None,
    ) -> QueryConfig:
        """
        Configuration with some currency rates replaced.

        Args:
            overrides: Rates to use instead of the defaults
            random_seed: Optional seed for reproducible sampling

        Returns:
            QueryConfig whose rate table merges defaults and overrides
        """
        rates = default_fx_rates()
        rates.update(overrides)
        return cls(fx_rates=rates, random_seed=random_seed)
