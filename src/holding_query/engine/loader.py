"""
Holding hierarchy loaders.

Loaders build the immutable Holding -> Company -> User -> Account tree
once, before any query runs. Implementations of HoldingLoaderProtocol:

    RecordLoader: Build the tree from nested mapping records (JSON-like)
    MockHoldingLoader: Fixed demonstration dataset

Both validate the dataset invariants while building:
- Account numbers are unique across the whole dataset
- Ages are non-negative
- Currency, sex and account type values are known

Usage:
    from holding_query.engine.loader import MockHoldingLoader

    holdings = MockHoldingLoader().load()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from holding_query.domain.entities import Account, Company, Holding, User
from holding_query.domain.enums import AccountType, Currency, Sex

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Exception raised when the hierarchy cannot be built."""

    def __init__(self, message: str, source: str | None = None) -> None:
        """
        Initialize DataLoadError.

        Args:
            message: Error message
            source: Record path that caused the error
        """
        self.source = source
        super().__init__(f"{message}" + (f" (source: {source})" if source else ""))


class RecordLoader:
    """
    Build holdings from nested mapping records.

    Expected record shape:
        {
            "name": "Nestle",
            "companies": [
                {
                    "name": "Nestle Polska",
                    "users": [
                        {
                            "first_name": "Zosia",
                            "last_name": "Psikuta",
                            "age": 34,
                            "sex": "WOMAN",
                            "accounts": [
                                {"number": "CRZE...", "amount": "87.61",
                                 "currency": "PLN", "type": "PERSONAL"},
                            ],
                        },
                    ],
                },
            ],
        }

    Amounts should be strings (or Decimals) so that no precision is lost.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]]) -> None:
        self.records = list(records)

    def load(self) -> tuple[Holding, ...]:
        """
        Build the hierarchy from the records.

        Returns:
            Holdings in record order

        Raises:
            DataLoadError: If a record is malformed or an invariant is broken
        """
        seen_numbers: set[str] = set()
        holdings = tuple(
            self._build_holding(record, f"holdings[{i}]", seen_numbers)
            for i, record in enumerate(self.records)
        )
        logger.debug(
            "Loaded %d holdings with %d accounts", len(holdings), len(seen_numbers)
        )
        return holdings

    def _build_holding(
        self,
        record: Mapping[str, Any],
        source: str,
        seen_numbers: set[str],
    ) -> Holding:
        companies = tuple(
            self._build_company(company, f"{source}.companies[{i}]", seen_numbers)
            for i, company in enumerate(record.get("companies", ()))
        )
        return Holding(name=_required(record, "name", source), companies=companies)

    def _build_company(
        self,
        record: Mapping[str, Any],
        source: str,
        seen_numbers: set[str],
    ) -> Company:
        users = tuple(
            self._build_user(user, f"{source}.users[{i}]", seen_numbers)
            for i, user in enumerate(record.get("users", ()))
        )
        return Company(name=_required(record, "name", source), users=users)

    def _build_user(
        self,
        record: Mapping[str, Any],
        source: str,
        seen_numbers: set[str],
    ) -> User:
        accounts = tuple(
            self._build_account(account, f"{source}.accounts[{i}]", seen_numbers)
            for i, account in enumerate(record.get("accounts", ()))
        )
        try:
            return User(
                first_name=_required(record, "first_name", source),
                last_name=_required(record, "last_name", source),
                age=int(_required(record, "age", source)),
                sex=Sex(_required(record, "sex", source)),
                accounts=accounts,
            )
        except ValueError as e:
            raise DataLoadError(f"Invalid user record: {e}", source=source) from e

    def _build_account(
        self,
        record: Mapping[str, Any],
        source: str,
        seen_numbers: set[str],
    ) -> Account:
        number = _required(record, "number", source)
        if number in seen_numbers:
            raise DataLoadError(f"Duplicate account number: {number}", source=source)
        seen_numbers.add(number)

        try:
            amount = Decimal(str(_required(record, "amount", source)))
            currency = Currency.from_code(_required(record, "currency", source))
            account_type = AccountType(_required(record, "type", source))
        except (InvalidOperation, ValueError) as e:
            raise DataLoadError(f"Invalid account record: {e}", source=source) from e

        return Account(
            number=number,
            amount=amount,
            currency=currency,
            account_type=account_type,
        )


def _required(record: Mapping[str, Any], key: str, source: str) -> Any:
    """Fetch a required field or raise DataLoadError."""
    if key not in record or record[key] is None:
        raise DataLoadError(f"Required field '{key}' is missing or null", source=source)
    return record[key]


# =============================================================================
# MOCK DATASET
# =============================================================================

MOCK_HOLDING_RECORDS: tuple[dict[str, Any], ...] = (
    {
        "name": "Nestle",
        "companies": [
            {
                "name": "Nestle Polska",
                "users": [
                    {
                        "first_name": "Zosia", "last_name": "Psikuta", "age": 34, "sex": "WOMAN",
                        "accounts": [
                            {"number": "PL10105000997603123456789123", "amount": "87.61",
                             "currency": "PLN", "type": "PERSONAL"},
                            {"number": "PL10105000997603123456789124", "amount": "1200.00",
                             "currency": "EUR", "type": "SAVINGS"},
                        ],
                    },
                    {
                        "first_name": "Zenon", "last_name": "Kucowski", "age": 61, "sex": "MAN",
                        "accounts": [
                            {"number": "PL10105000997603123456789125", "amount": "-35.20",
                             "currency": "PLN", "type": "STANDARD"},
                        ],
                    },
                ],
            },
            {
                "name": "Nestle Waters",
                "users": [
                    {
                        "first_name": "Alfred", "last_name": "Pasibrzuch", "age": 47, "sex": "MAN",
                        "accounts": [
                            {"number": "PL10105000997603123456789126", "amount": "540.10",
                             "currency": "USD", "type": "PERSONAL"},
                        ],
                    },
                ],
            },
        ],
    },
    {
        "name": "Coca-Cola",
        "companies": [
            {
                "name": "Coca-Cola HBC Polska",
                "users": [
                    {
                        "first_name": "Adam", "last_name": "Wojcik", "age": 29, "sex": "MAN",
                        "accounts": [
                            {"number": "PL10105000997603123456789127", "amount": "15000.00",
                             "currency": "CHF", "type": "SAVINGS"},
                            {"number": "PL10105000997603123456789128", "amount": "310.45",
                             "currency": "PLN", "type": "PERSONAL"},
                        ],
                    },
                    {
                        "first_name": "Zosia", "last_name": "Jawowa", "age": 52, "sex": "WOMAN",
                        "accounts": [
                            {"number": "PL10105000997603123456789129", "amount": "2750.00",
                             "currency": "USD", "type": "STANDARD"},
                        ],
                    },
                    {
                        "first_name": "Kim", "last_name": "Nowak", "age": 38, "sex": "OTHER",
                        "accounts": [],
                    },
                ],
            },
        ],
    },
    {
        "name": "Pepsico",
        "companies": [],
    },
)


class MockHoldingLoader(RecordLoader):
    """Loader for the fixed demonstration dataset."""

    def __init__(self) -> None:
        super().__init__(MOCK_HOLDING_RECORDS)


def create_mock_loader() -> MockHoldingLoader:
    """
    Create a loader for the demonstration dataset.

    Returns:
        MockHoldingLoader ready for use
    """
    return MockHoldingLoader()
