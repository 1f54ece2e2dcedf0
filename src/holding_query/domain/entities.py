"""
Domain entities for the holding query engine.

The ownership structure is a strict tree:

    Holding -> Company -> User -> Account

Every entity is an immutable dataclass and children are held in tuples,
so a hierarchy cannot be changed once it has been built by a loader.
Insertion order at every level is preserved and is the default
iteration order for all traversals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from holding_query.domain.enums import AccountType, Currency, Sex


@dataclass(frozen=True)
class Account:
    """
    A single bank account.

    Attributes:
        number: Account number, unique across the whole dataset
        amount: Balance in the account's own currency (any sign)
        currency: Currency the balance is held in
        account_type: Product type of the account
    """

    number: str
    amount: Decimal
    currency: Currency
    account_type: AccountType


@dataclass(frozen=True)
class User:
    """
    An employee of a company.

    Attributes:
        first_name: Given name
        last_name: Surname
        age: Age in years (non-negative)
        sex: Sex of the employee
        accounts: Accounts owned by the employee, in insertion order
    """

    first_name: str
    last_name: str
    age: int
    sex: Sex
    accounts: tuple[Account, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.age < 0:
            raise ValueError(f"age must be non-negative, got {self.age}")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Company:
    """A company owned by a holding, employing users."""

    name: str
    users: tuple[User, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Holding:
    """Top-level owner of a sequence of companies."""

    name: str
    companies: tuple[Company, ...] = field(default_factory=tuple)
