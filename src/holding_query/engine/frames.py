"""
Tabular projections of the holding hierarchy.

Flattens the traversal sequences into Polars LazyFrames for grouped
counting and summary reporting:
- accounts_frame: one row per account with its owning user/company/holding
- users_frame: one row per user with its account count
- account_type_counts: number of accounts per account type
- holding_summary: company, user and account counts per holding

Frames are built from the traversal layer on every call and are never
cached, so they always reflect the (immutable) hierarchy exactly.
Amounts are carried as their exact string rendering; money arithmetic
stays in Decimal inside CurrencyNormalizer.

Usage:
    from holding_query.engine.frames import account_type_counts

    counts = account_type_counts(holdings).collect()
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import polars as pl

from holding_query.engine.traversal import iter_user_paths

if TYPE_CHECKING:
    from holding_query.domain.entities import Holding


# =============================================================================
# SCHEMAS
# =============================================================================

ACCOUNTS_SCHEMA: dict[str, pl.DataType] = {
    "holding_index": pl.Int64,
    "holding_name": pl.String,
    "company_name": pl.String,
    "first_name": pl.String,
    "last_name": pl.String,
    "sex": pl.String,
    "number": pl.String,
    "account_type": pl.String,
    "currency": pl.String,
    "amount": pl.String,
}

USERS_SCHEMA: dict[str, pl.DataType] = {
    "holding_index": pl.Int64,
    "holding_name": pl.String,
    "company_name": pl.String,
    "first_name": pl.String,
    "last_name": pl.String,
    "sex": pl.String,
    "age": pl.Int64,
    "account_count": pl.Int64,
}


# =============================================================================
# FRAME BUILDERS
# =============================================================================


def accounts_frame(holdings: Sequence[Holding]) -> pl.LazyFrame:
    """
    Build a LazyFrame with one row per account, in traversal order.

    Args:
        holdings: Holding hierarchy

    Returns:
        LazyFrame matching ACCOUNTS_SCHEMA
    """
    rows = [
        {
            "holding_index": index,
            "holding_name": holding.name,
            "company_name": company.name,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "sex": user.sex.value,
            "number": account.number,
            "account_type": account.account_type.value,
            "currency": account.currency.code,
            "amount": format(account.amount, "f"),
        }
        for index, holding, company, user in iter_user_paths(holdings)
        for account in user.accounts
    ]
    return pl.LazyFrame(rows, schema=ACCOUNTS_SCHEMA)


def users_frame(holdings: Sequence[Holding]) -> pl.LazyFrame:
    """
    Build a LazyFrame with one row per user, in traversal order.

    Args:
        holdings: Holding hierarchy

    Returns:
        LazyFrame matching USERS_SCHEMA
    """
    rows = [
        {
            "holding_index": index,
            "holding_name": holding.name,
            "company_name": company.name,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "sex": user.sex.value,
            "age": user.age,
            "account_count": len(user.accounts),
        }
        for index, holding, company, user in iter_user_paths(holdings)
    ]
    return pl.LazyFrame(rows, schema=USERS_SCHEMA)


# =============================================================================
# AGGREGATIONS
# =============================================================================


def account_type_counts(holdings: Sequence[Holding]) -> pl.LazyFrame:
    """
    Count accounts per account type, most frequent first.

    Ties are ordered by account type name so the frame is deterministic.

    Returns:
        LazyFrame with account_type and account_count columns
    """
    return (
        accounts_frame(holdings)
        .group_by("account_type")
        .agg(pl.len().cast(pl.Int64).alias("account_count"))
        .sort(["account_count", "account_type"], descending=[True, False])
    )


def holding_summary(holdings: Sequence[Holding]) -> pl.DataFrame:
    """
    Summarise company, user and account counts per holding.

    Holdings without companies or users still appear with zero counts,
    in their original order. Totals are keyed by holding position, so
    holdings sharing a name are counted separately.

    Returns:
        DataFrame with holding_name, company_count, user_count, account_count
    """
    base = pl.LazyFrame(
        {
            "holding_index": list(range(len(holdings))),
            "holding_name": [h.name for h in holdings],
            "company_count": [len(h.companies) for h in holdings],
        },
        schema={"holding_index": pl.Int64, "holding_name": pl.String, "company_count": pl.Int64},
    )

    user_totals = (
        users_frame(holdings)
        .group_by("holding_index")
        .agg([
            pl.len().cast(pl.Int64).alias("user_count"),
            pl.col("account_count").sum().cast(pl.Int64).alias("account_count"),
        ])
    )

    return (
        base.join(user_totals, on="holding_index", how="left")
        .with_columns([
            pl.col("user_count").fill_null(0),
            pl.col("account_count").fill_null(0),
        ])
        .sort("holding_index")
        .drop("holding_index")
        .collect()
    )
