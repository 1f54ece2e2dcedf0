"""
Shared fixtures for holding query tests.

The standard dataset (expected values worked out by hand):

    Nestle
        NestleCoffee
            Anna Kowalska  30 WOMAN  001  100.00 PLN PERSONAL  -> 100.0
                                     002   50.00 EUR SAVINGS   -> 215.0
            Jan Nowak      40 MAN    003   10.00 USD PERSONAL  -> 37.20
        NestleWater
            Ewa Zielinska  25 WOMAN  004 1000.00 PLN STANDARD  -> 1000
    Coca-Cola
        CokePL
            Anna Wisniewska 55 WOMAN 005  200.00 CHF SAVINGS   -> 716.0
            Alex Smith     33 OTHER  006  -20.50 PLN PERSONAL  -> -20.50
    Pepsico
        (no companies)
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from holding_query.contracts.config import QueryConfig
from holding_query.domain.entities import Account, Company, Holding, User
from holding_query.domain.enums import AccountType, Currency, Sex
from holding_query.engine.queries import HoldingQueryEngine


def make_account(
    number: str,
    amount: str,
    currency: Currency = Currency.PLN,
    account_type: AccountType = AccountType.PERSONAL,
) -> Account:
    """Build an account from a string amount."""
    return Account(
        number=number,
        amount=Decimal(amount),
        currency=currency,
        account_type=account_type,
    )


@pytest.fixture
def account_factory():
    """Return the make_account builder for tests needing ad-hoc accounts."""
    return make_account


@pytest.fixture
def anna_kowalska() -> User:
    return User(
        first_name="Anna",
        last_name="Kowalska",
        age=30,
        sex=Sex.WOMAN,
        accounts=(
            make_account("001", "100.00", Currency.PLN, AccountType.PERSONAL),
            make_account("002", "50.00", Currency.EUR, AccountType.SAVINGS),
        ),
    )


@pytest.fixture
def jan_nowak() -> User:
    return User(
        first_name="Jan",
        last_name="Nowak",
        age=40,
        sex=Sex.MAN,
        accounts=(make_account("003", "10.00", Currency.USD, AccountType.PERSONAL),),
    )


@pytest.fixture
def ewa_zielinska() -> User:
    return User(
        first_name="Ewa",
        last_name="Zielinska",
        age=25,
        sex=Sex.WOMAN,
        accounts=(make_account("004", "1000.00", Currency.PLN, AccountType.STANDARD),),
    )


@pytest.fixture
def anna_wisniewska() -> User:
    return User(
        first_name="Anna",
        last_name="Wisniewska",
        age=55,
        sex=Sex.WOMAN,
        accounts=(make_account("005", "200.00", Currency.CHF, AccountType.SAVINGS),),
    )


@pytest.fixture
def alex_smith() -> User:
    return User(
        first_name="Alex",
        last_name="Smith",
        age=33,
        sex=Sex.OTHER,
        accounts=(make_account("006", "-20.50", Currency.PLN, AccountType.PERSONAL),),
    )


@pytest.fixture
def holdings(
    anna_kowalska: User,
    jan_nowak: User,
    ewa_zielinska: User,
    anna_wisniewska: User,
    alex_smith: User,
) -> tuple[Holding, ...]:
    """Return the standard three-holding dataset."""
    return (
        Holding(
            name="Nestle",
            companies=(
                Company(name="NestleCoffee", users=(anna_kowalska, jan_nowak)),
                Company(name="NestleWater", users=(ewa_zielinska,)),
            ),
        ),
        Holding(
            name="Coca-Cola",
            companies=(Company(name="CokePL", users=(anna_wisniewska, alex_smith)),),
        ),
        Holding(name="Pepsico"),
    )


@pytest.fixture
def config() -> QueryConfig:
    """Default configuration with a fixed sampling seed."""
    return QueryConfig.default(random_seed=7)


@pytest.fixture
def engine(holdings: tuple[Holding, ...], config: QueryConfig) -> HoldingQueryEngine:
    """Return a query engine over the standard dataset."""
    return HoldingQueryEngine(holdings, config)


@pytest.fixture
def empty_engine(config: QueryConfig) -> HoldingQueryEngine:
    """Return a query engine over an empty dataset."""
    return HoldingQueryEngine((), config)
