"""
Holding query engine components.

    Loader -> traversal -> HoldingQueryEngine (+ CurrencyNormalizer)
        -> AccountExporter

Modules:
    traversal: Lazy flattening of the hierarchy into companies/users/accounts
    fx_converter: Reference-currency normalisation with significant-digit rounding
    queries: HoldingQueryEngine with every read-only query
    frames: Polars projections for grouped counts and summaries
    export: NUMBER|AMOUNT|CURRENCY account export
    loader: Record and mock dataset loaders
"""

from .export import EXPORT_ENCODING, AccountExporter, export_accounts, read_exported_accounts
from .fx_converter import CurrencyNormalizer, create_currency_normalizer
from .frames import accounts_frame, account_type_counts, holding_summary, users_frame
from .loader import DataLoadError, MockHoldingLoader, RecordLoader, create_mock_loader
from .queries import HoldingQueryEngine, create_query_engine, is_woman
from .traversal import (
    currencies_in_use,
    iter_accounts,
    iter_companies,
    iter_company_paths,
    iter_user_paths,
    iter_users,
)

__all__ = [
    "EXPORT_ENCODING",
    "AccountExporter",
    "export_accounts",
    "read_exported_accounts",
    "CurrencyNormalizer",
    "create_currency_normalizer",
    "accounts_frame",
    "account_type_counts",
    "holding_summary",
    "users_frame",
    "DataLoadError",
    "MockHoldingLoader",
    "RecordLoader",
    "create_mock_loader",
    "HoldingQueryEngine",
    "create_query_engine",
    "is_woman",
    "currencies_in_use",
    "iter_accounts",
    "iter_companies",
    "iter_company_paths",
    "iter_user_paths",
    "iter_users",
]
