"""
Hierarchy traversal for the holding query engine.

Flattens the Holding -> Company -> User -> Account tree into lazy
sequences. Every higher-level query is built on these producers:

    iter_company_paths: (holding index, Holding, Company) per Company
    iter_user_paths:    (holding index, Holding, Company, User) per User
    iter_companies:     every Company, Holding order then Company order
    iter_users:         every User, Company-sequence order then User order
    iter_accounts:      every Account, User-sequence order then Account order

The path producers define the ordering once; the plain producers strip
the ancestors from them. The holding index identifies a Holding by
position, since holding names need not be unique.

Each call returns a fresh generator, so two calls are two independent
traversals over the same unchanged data. Nothing here is cached and
nothing mutates the hierarchy.

Usage:
    from holding_query.engine.traversal import iter_users

    women = sum(1 for user in iter_users(holdings) if user.sex is Sex.WOMAN)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from holding_query.domain.entities import Account, Company, Holding, User
    from holding_query.domain.enums import Currency


def iter_company_paths(holdings: Iterable[Holding]) -> Iterator[tuple[int, Holding, Company]]:
    """Yield (holding index, holding, company) for every company."""
    for index, holding in enumerate(holdings):
        for company in holding.companies:
            yield index, holding, company


def iter_user_paths(
    holdings: Iterable[Holding],
) -> Iterator[tuple[int, Holding, Company, User]]:
    """Yield (holding index, holding, company, user) for every user."""
    for index, holding, company in iter_company_paths(holdings):
        for user in company.users:
            yield index, holding, company, user


def iter_companies(holdings: Iterable[Holding]) -> Iterator[Company]:
    """Yield every company across every holding."""
    for _, _, company in iter_company_paths(holdings):
        yield company


def iter_users(holdings: Iterable[Holding]) -> Iterator[User]:
    """Yield every user across every company."""
    for _, _, _, user in iter_user_paths(holdings):
        yield user


def iter_accounts(holdings: Iterable[Holding]) -> Iterator[Account]:
    """Yield every account across every user."""
    for user in iter_users(holdings):
        yield from user.accounts


def currencies_in_use(holdings: Iterable[Holding]) -> frozenset[Currency]:
    """
    Collect the currencies held by at least one account.

    The result carries no order; callers rendering it must sort.

    Args:
        holdings: Holding hierarchy to scan

    Returns:
        Distinct currencies present among all accounts
    """
    return frozenset(account.currency for account in iter_accounts(holdings))
