"""Unit tests for the account export.

Tests cover:
- NUMBER|AMOUNT|CURRENCY line format and order
- Round trip through read_exported_accounts
- ExportError on I/O failure, with partial output flushed and closed
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from holding_query.contracts.errors import ExportError, InvalidArgumentError
from holding_query.contracts.protocols import AccountExporterProtocol
from holding_query.domain.enums import AccountType, Currency
from holding_query.engine.export import (
    EXPORT_ENCODING,
    AccountExporter,
    export_accounts,
    format_account_line,
    read_exported_accounts,
)
from holding_query.engine.traversal import iter_accounts


class TestFormatAccountLine:
    """Tests for single line rendering."""

    def test_line_format(self, account_factory):
        account = account_factory("PL001", "87.61", Currency.PLN)

        assert format_account_line(account) == "PL001|87.61|PLN"

    def test_amount_keeps_original_precision(self, account_factory):
        assert format_account_line(account_factory("A", "10.500", Currency.EUR)) == "A|10.500|EUR"
        assert format_account_line(account_factory("B", "-0.01", Currency.USD)) == "B|-0.01|USD"

    def test_amount_never_in_scientific_notation(self, account_factory):
        account = account_factory("C", "1E+3", Currency.CHF, AccountType.SAVINGS)

        assert format_account_line(account) == "C|1000|CHF"

    @pytest.mark.parametrize("number", ["PL|001", "PL001\n", "PL\r001"])
    def test_number_that_would_break_line_rejected(self, account_factory, number):
        with pytest.raises(InvalidArgumentError, match="number"):
            format_account_line(account_factory(number, "1.00"))


class TestExportAccounts:
    """Tests for writing the export file."""

    def test_writes_one_line_per_account(self, holdings, tmp_path):
        path = tmp_path / "accounts.txt"

        written = export_accounts(holdings, path)

        assert written == 6
        assert path.read_text(encoding="utf-8") == (
            "001|100.00|PLN\n"
            "002|50.00|EUR\n"
            "003|10.00|USD\n"
            "004|1000.00|PLN\n"
            "005|200.00|CHF\n"
            "006|-20.50|PLN\n"
        )

    def test_round_trip_matches_traversal(self, holdings, tmp_path):
        path = tmp_path / "accounts.txt"
        export_accounts(holdings, path)

        rows = read_exported_accounts(path)

        expected = [
            (account.number, format(account.amount, "f"), account.currency.code)
            for account in iter_accounts(holdings)
        ]
        assert rows == expected
        assert [Decimal(amount) for _, amount, _ in rows][5] == Decimal("-20.50")

    def test_engine_export(self, engine, tmp_path):
        path = tmp_path / "engine.txt"

        assert engine.export_accounts(str(path)) == 6
        assert len(path.read_text(encoding="utf-8").splitlines()) == 6

    def test_empty_dataset_writes_empty_file(self, empty_engine, tmp_path):
        path = tmp_path / "empty.txt"

        assert empty_engine.export_accounts(path) == 0
        assert path.read_text(encoding="utf-8") == ""

    def test_overwrites_existing_file(self, holdings, tmp_path):
        path = tmp_path / "accounts.txt"
        path.write_text("stale\n", encoding="utf-8")

        export_accounts(holdings, path)

        assert "stale" not in path.read_text(encoding="utf-8")

    def test_exporter_satisfies_protocol(self):
        assert isinstance(AccountExporter(), AccountExporterProtocol)


class TestExportFailures:
    """Tests for I/O failure handling."""

    def test_unwritable_path_raises_export_error(self, holdings, tmp_path):
        with pytest.raises(ExportError) as exc_info:
            export_accounts(holdings, tmp_path / "missing_dir" / "accounts.txt")

        assert exc_info.value.path == tmp_path / "missing_dir" / "accounts.txt"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_directory_target_raises_export_error(self, holdings, tmp_path):
        with pytest.raises(ExportError):
            export_accounts(holdings, tmp_path)

    def test_failure_midway_keeps_partial_output_and_closes_file(self, account_factory, tmp_path):
        path = tmp_path / "partial.txt"

        def failing_accounts():
            yield account_factory("001", "1.00")
            raise OSError("disk full")

        with pytest.raises(ExportError, match="after 1 lines"):
            AccountExporter().export(failing_accounts(), path)

        # The handle was closed, so the first line was flushed to disk
        assert path.read_text(encoding="utf-8") == "001|1.00|PLN\n"

    def test_export_error_is_os_error(self, holdings, tmp_path):
        with pytest.raises(OSError):
            export_accounts(holdings, tmp_path)

    def test_written_as_utf8(self, account_factory, tmp_path):
        path = tmp_path / "accounts.txt"

        AccountExporter().export([account_factory("ŻÓŁW-1", "1.00")], path)

        assert path.read_bytes() == "ŻÓŁW-1|1.00|PLN\n".encode("utf-8")
        assert EXPORT_ENCODING == "utf-8"

    def test_unexportable_number_is_not_an_io_error(self, account_factory, tmp_path):
        accounts = [account_factory("001", "1.00"), account_factory("0|02", "2.00")]

        with pytest.raises(InvalidArgumentError):
            AccountExporter().export(accounts, tmp_path / "accounts.txt")


class TestReadExportedAccounts:
    """Tests for parsing an export file."""

    def test_malformed_line_rejected(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("001|1.00|PLN\nbroken line\n", encoding="utf-8")

        with pytest.raises(ExportError, match="line 2"):
            read_exported_accounts(path)

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(ExportError):
            read_exported_accounts(tmp_path / "nope.txt")
