"""
Contracts module for the holding query engine.

Provides configuration, error types and component protocols:
- config: QueryConfig controlling rounding, rates, sampling and export
- errors: Exception hierarchy raised by queries and export
- protocols: Loader and exporter interfaces, predicate type aliases
"""

from holding_query.contracts.config import QueryConfig
from holding_query.contracts.errors import (
    ExportError,
    HoldingQueryError,
    IndeterminateResultError,
    InvalidArgumentError,
    NotFoundError,
)
from holding_query.contracts.protocols import (
    AccountExporterProtocol,
    CompanyAction,
    HoldingLoaderProtocol,
    UserConverter,
    UserPredicate,
)

__all__ = [
    # Configuration
    "QueryConfig",
    # Errors
    "ExportError",
    "HoldingQueryError",
    "IndeterminateResultError",
    "InvalidArgumentError",
    "NotFoundError",
    # Protocols
    "AccountExporterProtocol",
    "CompanyAction",
    "HoldingLoaderProtocol",
    "UserConverter",
    "UserPredicate",
]
