"""
Domain module for the holding query engine.

Contains the ownership hierarchy entities and the enumerations
attached to them.
"""

from holding_query.domain.entities import Account, Company, Holding, User
from holding_query.domain.enums import AccountType, Currency, Sex

__all__ = [
    "Account",
    "AccountType",
    "Company",
    "Currency",
    "Holding",
    "Sex",
    "User",
]
