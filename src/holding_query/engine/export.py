"""
Account export for the holding query engine.

Writes accounts to a line-oriented UTF-8 text file, one line per
account in traversal order:

    NUMBER|AMOUNT|CURRENCY

The amount is written in its own currency and at its stored precision.
There is no header line and no trailing summary.

The file handle is scoped by a with-block, so it is closed on every exit
path including a write that fails partway through. I/O failures are
raised as ExportError; partially written output is left in place.

Usage:
    from holding_query.engine.export import export_accounts

    written = export_accounts(holdings, "accounts.txt")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from holding_query.contracts.errors import ExportError, InvalidArgumentError
from holding_query.engine.traversal import iter_accounts

if TYPE_CHECKING:
    from holding_query.domain.entities import Account, Holding

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
EXPORT_ENCODING = "utf-8"

_FORBIDDEN_IN_NUMBER = (FIELD_SEPARATOR, "\n", "\r")


def format_account_line(account: Account) -> str:
    """
    Render one account as an export line (without newline).

    Example:
        PL10105000997603123456789123|87.61|PLN

    Raises:
        InvalidArgumentError: If the account number contains the field
            separator or a line break
    """
    if any(char in account.number for char in _FORBIDDEN_IN_NUMBER):
        raise InvalidArgumentError(
            "number", account.number, "must not contain '|' or line breaks"
        )
    return FIELD_SEPARATOR.join([
        account.number,
        format(account.amount, "f"),
        account.currency.code,
    ])


class AccountExporter:
    """
    Write accounts to a NUMBER|AMOUNT|CURRENCY text file.

    Implements AccountExporterProtocol.
    """

    def export(self, accounts: Iterable[Account], path: str | Path) -> int:
        """
        Write accounts to path, replacing any existing file.

        Args:
            accounts: Accounts in output order
            path: Destination file

        Returns:
            Number of lines written

        Raises:
            ExportError: If the file cannot be opened or written
            InvalidArgumentError: If an account number cannot be exported
        """
        target = Path(path)
        written = 0
        try:
            with target.open("w", encoding=EXPORT_ENCODING, newline="\n") as handle:
                for account in accounts:
                    handle.write(format_account_line(account) + "\n")
                    written += 1
        except OSError as e:
            raise ExportError(
                f"Failed to export accounts after {written} lines: {e}", path=target
            ) from e

        logger.info("Exported %d accounts to %s", written, target)
        return written


def export_accounts(
    holdings: Sequence[Holding],
    path: str | Path,
) -> int:
    """
    Export every account of the hierarchy in traversal order.

    Args:
        holdings: Holding hierarchy
        path: Destination file

    Returns:
        Number of lines written
    """
    return AccountExporter().export(iter_accounts(holdings), path)


def read_exported_accounts(path: str | Path) -> list[tuple[str, str, str]]:
    """
    Parse an export file back into (number, amount, currency) tuples.

    The amount is returned exactly as written.

    Args:
        path: Export file to read

    Returns:
        One tuple per line, in file order

    Raises:
        ExportError: If the file cannot be read or a line is malformed
    """
    target = Path(path)
    rows: list[tuple[str, str, str]] = []
    try:
        with target.open("r", encoding=EXPORT_ENCODING, newline="\n") as handle:
            for line_number, line in enumerate(handle, start=1):
                fields = line.rstrip("\n").split(FIELD_SEPARATOR)
                if len(fields) != 3:
                    raise ExportError(
                        f"Malformed export line {line_number}: {line.rstrip()!r}", path=target
                    )
                rows.append((fields[0], fields[1], fields[2]))
    except ExportError:
        raise
    except OSError as e:
        raise ExportError(f"Failed to read export: {e}", path=target) from e
    return rows
