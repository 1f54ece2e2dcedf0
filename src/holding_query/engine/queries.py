"""
Query and aggregation engine for the holding hierarchy.

HoldingQueryEngine answers analytical questions over an immutable
Holding -> Company -> User -> Account tree: counts, name listings,
groupings, filters, best-match selections, random sampling and
reference-currency totals.

Every query is a pure read composed from the traversal layer
(holding_query.engine.traversal) and, for money, the CurrencyNormalizer.
Only export_accounts performs I/O.

Policies:
- Richest woman: ties go to the first woman in traversal order
- Most popular account type: a tie for first place is an error
- Users per company: a repeated company name overwrites the earlier entry

Usage:
    from holding_query.engine.queries import create_query_engine
    from holding_query.engine.loader import MockHoldingLoader

    engine = create_query_engine(MockHoldingLoader())
    engine.count_users()
    engine.get_richest_woman()
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from decimal import Decimal
from itertools import islice
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import polars as pl

from holding_query.contracts.config import QueryConfig
from holding_query.contracts.errors import (
    IndeterminateResultError,
    InvalidArgumentError,
    NotFoundError,
)
from holding_query.contracts.protocols import HoldingLoaderProtocol
from holding_query.domain.entities import Account, Holding, User
from holding_query.domain.enums import AccountType, Sex
from holding_query.engine.export import AccountExporter
from holding_query.engine.frames import account_type_counts, holding_summary
from holding_query.engine.fx_converter import CurrencyNormalizer
from holding_query.engine.traversal import (
    currencies_in_use,
    iter_accounts,
    iter_companies,
    iter_users,
)

if TYPE_CHECKING:
    from holding_query.contracts.protocols import (
        CompanyAction,
        UserConverter,
        UserPredicate,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_woman(user: User) -> bool:
    """Predicate matching women."""
    return user.sex is Sex.WOMAN


class HoldingQueryEngine:
    """
    Read-only query facade over a holding hierarchy.

    The only mutable state is the random generator used for sampling;
    the hierarchy itself is never modified.
    """

    def __init__(
        self,
        holdings: Iterable[Holding],
        config: QueryConfig | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            holdings: Fully built hierarchy, in significant order
            config: Query configuration (defaults to QueryConfig.default())
        """
        self.holdings: tuple[Holding, ...] = tuple(holdings)
        self.config = config or QueryConfig.default()
        self.normalizer = CurrencyNormalizer(self.config)
        self._random = random.Random(self.config.random_seed)

    # =========================================================================
    # Holdings
    # =========================================================================

    def count_holdings_with_companies(self) -> int:
        """Count holdings owning at least one company."""
        return sum(1 for holding in self.holdings if holding.companies)

    def get_holding_names(self) -> list[str]:
        """Holding names, lower-cased, in original order."""
        return [holding.name.lower() for holding in self.holdings]

    def get_holding_names_as_string(self) -> str:
        """
        Holding names sorted ascending and joined.

        Names keep their original case.

        Example:
            "(Coca-Cola, Nestle, Pepsico)"
        """
        return "(" + ", ".join(sorted(holding.name for holding in self.holdings)) + ")"

    # =========================================================================
    # Companies
    # =========================================================================

    def count_companies(self) -> int:
        return sum(len(holding.companies) for holding in self.holdings)

    def get_company_names(self) -> list[str]:
        """Company names in traversal order."""
        return [company.name for company in iter_companies(self.holdings)]

    def get_company_names_as_string(self) -> str:
        """Company names in traversal order joined with '+'."""
        return "+".join(self.get_company_names())

    def get_first_n_company_names(self, n: int) -> set[str]:
        """
        Names of the first n companies in traversal order.

        Args:
            n: Number of companies to take (fewer if fewer exist)

        Returns:
            Unordered set of up to n names

        Raises:
            InvalidArgumentError: If n is negative
        """
        if n < 0:
            raise InvalidArgumentError("n", n, "must be non-negative")
        return {company.name for company in islice(iter_companies(self.holdings), n)}

    def for_each_company(self, action: CompanyAction) -> None:
        """Call action once for every company, in traversal order."""
        for company in iter_companies(self.holdings):
            action(company)

    # =========================================================================
    # Users
    # =========================================================================

    def count_users(self) -> int:
        return sum(len(company.users) for company in iter_companies(self.holdings))

    def count_women(self) -> int:
        return sum(1 for user in iter_users(self.holdings) if is_woman(user))

    def get_user_first_names(self, predicate: UserPredicate) -> set[str]:
        """First names of users matching predicate, duplicates collapsed."""
        return {user.first_name for user in iter_users(self.holdings) if predicate(user)}

    def get_user(self, predicate: UserPredicate) -> User:
        """
        First user in traversal order matching predicate.

        Raises:
            NotFoundError: If no user matches
        """
        user = self.find_user(predicate)
        if user is None:
            raise NotFoundError("No user matches the predicate", query="get_user")
        return user

    def find_user(self, predicate: UserPredicate) -> User | None:
        """First user matching predicate, or None."""
        return next((user for user in iter_users(self.holdings) if predicate(user)), None)

    def get_women_older_than(self, age: int) -> list[str]:
        """
        First names of users older than age, excluding men.

        Every user past the age filter is logged at DEBUG level.

        Args:
            age: Exclusive lower age bound

        Returns:
            First names in traversal order
        """
        names = []
        for user in iter_users(self.holdings):
            if user.age <= age:
                continue
            logger.debug("User older than %d: %s (%s)", age, user.full_name, user.sex.value)
            if user.sex is not Sex.MAN:
                names.append(user.first_name)
        return names

    def get_richest_woman(self) -> User:
        """
        The woman with the highest total balance in the reference currency.

        Each account is normalised and rounded individually before being
        summed. Ties go to the first woman in traversal order.

        Raises:
            NotFoundError: If the dataset contains no women
        """
        richest: User | None = None
        richest_total = Decimal(0)
        for user in iter_users(self.holdings):
            if not is_woman(user):
                continue
            total = self.normalizer.normalize_all(user.accounts)
            if richest is None or total > richest_total:
                richest, richest_total = user, total

        if richest is None:
            raise NotFoundError("No women in the dataset", query="get_richest_woman")
        logger.debug("Richest woman: %s with %s", richest.full_name, richest_total)
        return richest

    def get_users(self, limit: int | None = None) -> set[User]:
        """
        Set of users, capped in size.

        Args:
            limit: Maximum number of users (defaults to config.user_set_limit)

        Raises:
            InvalidArgumentError: If limit is negative
        """
        cap = self.config.user_set_limit if limit is None else limit
        if cap < 0:
            raise InvalidArgumentError("limit", cap, "must be non-negative")
        return set(islice(iter_users(self.holdings), cap))

    def get_random_users(self, n: int) -> list[User]:
        """
        Sample n distinct users without replacement.

        Users are picked by position, so equal-valued users are still
        distinct picks and no position is ever drawn twice.

        Args:
            n: Sample size

        Raises:
            InvalidArgumentError: If n is negative or exceeds the user count
        """
        population = list(iter_users(self.holdings))
        if n < 0:
            raise InvalidArgumentError("n", n, "must be non-negative")
        if n > len(population):
            raise InvalidArgumentError("n", n, f"exceeds user count {len(population)}")
        return self._random.sample(population, n)

    def get_user_names(self) -> str:
        """Distinct first names, sorted, joined by a single space."""
        return " ".join(sorted({user.first_name for user in iter_users(self.holdings)}))

    def get_all_user_names_descending(self) -> list[str]:
        """'First Last' for every user, sorted Z to A."""
        return sorted((user.full_name for user in iter_users(self.holdings)), reverse=True)

    def get_age_squares_sum(self) -> int:
        return sum(user.age * user.age for user in iter_users(self.holdings))

    @staticmethod
    def get_adult_status(user: User | None) -> str:
        """
        Describe a user's age.

        Returns:
            "First Last is N years old", or "No user" when user is None
        """
        if user is None:
            return "No user"
        return f"{user.full_name} is {user.age} years old"

    # =========================================================================
    # Groupings
    # =========================================================================

    def get_users_per_company(
        self,
        converter: UserConverter[T] | None = None,
    ) -> dict[str, list[T]] | dict[str, list[User]]:
        """
        Map company name to its users.

        A company whose name repeats an earlier company's name replaces
        that entry; a warning is logged when this happens.

        Args:
            converter: Optional function applied to each user

        Returns:
            Company name -> users (or converted users), in traversal order
        """
        result: dict[str, list] = {}
        for company in iter_companies(self.holdings):
            if company.name in result:
                logger.warning("Duplicate company name %r overwrites earlier entry", company.name)
            result[company.name] = [
                converter(user) if converter is not None else user
                for user in company.users
            ]
        return result

    def get_users_per_company_as_string(self) -> dict[str, list[str]]:
        """Map company name to 'First Last' of each user."""
        return self.get_users_per_company(lambda user: user.full_name)

    def get_last_names_by_sex(self) -> dict[Sex, set[str]]:
        """
        Map MAN and WOMAN to the surnames of those users.

        Users of OTHER sex are ignored. Both keys are always present.
        """
        result: dict[Sex, set[str]] = {Sex.MAN: set(), Sex.WOMAN: set()}
        for user in iter_users(self.holdings):
            if user.sex in result:
                result[user.sex].add(user.last_name)
        return result

    # =========================================================================
    # Accounts
    # =========================================================================

    def count_accounts(self) -> int:
        return sum(len(user.accounts) for user in iter_users(self.holdings))

    def get_currencies_as_string(self) -> str:
        """Distinct currencies in use, sorted by code, joined by ', '."""
        return ", ".join(sorted(currency.code for currency in currencies_in_use(self.holdings)))

    def create_accounts_map(self) -> dict[str, Account]:
        """Map account number to account."""
        return {account.number: account for account in iter_accounts(self.holdings)}

    def get_most_popular_account_type(self) -> AccountType:
        """
        The account type held by the most accounts.

        Raises:
            IndeterminateResultError: If two or more types share the top
                count, or there are no accounts at all
        """
        counts = account_type_counts(self.holdings).collect()
        if counts.height == 0:
            raise IndeterminateResultError("No accounts to rank")

        top = counts["account_count"][0]
        leaders = counts.filter(pl.col("account_count") == top)["account_type"].to_list()
        if len(leaders) > 1:
            raise IndeterminateResultError(
                f"Account types tied with {top} accounts each: {', '.join(leaders)}",
                candidates=[AccountType(value) for value in leaders],
            )
        return AccountType(leaders[0])

    # =========================================================================
    # Money
    # =========================================================================

    def get_account_amount_in_pln(self, account: Account) -> Decimal:
        """Account balance in the reference currency."""
        return self.normalizer.normalize_account(account)

    def get_total_cash_in_pln(self, accounts: Iterable[Account]) -> Decimal:
        """Total of the given accounts in the reference currency (0 if empty)."""
        return self.normalizer.normalize_all(accounts)

    def get_money_on_accounts(self) -> dict[AccountType, Decimal]:
        """
        Total balance per account type in the reference currency.

        Only account types present in the dataset appear as keys.
        """
        grouped: dict[AccountType, list[Account]] = {}
        for account in iter_accounts(self.holdings):
            grouped.setdefault(account.account_type, []).append(account)
        return {
            account_type: self.normalizer.normalize_all(accounts)
            for account_type, accounts in grouped.items()
        }

    # =========================================================================
    # Reporting and export
    # =========================================================================

    def summary_by_holding(self) -> pl.DataFrame:
        """Company, user and account counts per holding."""
        return holding_summary(self.holdings)

    def export_accounts(self, path: str | Path) -> int:
        """
        Write every account as NUMBER|AMOUNT|CURRENCY, one per line.

        Returns:
            Number of lines written

        Raises:
            ExportError: If the file cannot be written
        """
        return AccountExporter().export(iter_accounts(self.holdings), path)


def create_query_engine(
    source: HoldingLoaderProtocol | Sequence[Holding],
    config: QueryConfig | None = None,
) -> HoldingQueryEngine:
    """
    Create a query engine from a loader or an already built hierarchy.

    Args:
        source: Loader to call once, or the holdings themselves
        config: Optional query configuration

    Returns:
        HoldingQueryEngine ready for use
    """
    holdings = source.load() if isinstance(source, HoldingLoaderProtocol) else source
    return HoldingQueryEngine(holdings, config)
