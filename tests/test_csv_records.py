import io
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from csv_records import AccountRecord, parse_amount, parse_transaction_row, write_account_records
from errors import MissingAmountError, RecordError
from models import ClientAccount, TransactionType
from money import Money


class TestParseAmount:
    @pytest.mark.parametrize("text, units", [
        ("5.0", 50_000),
        ("1.2345", 12_345),
        ("0.0001", 1),
        ("100", 1_000_000),
        ("-1.5", -15_000),
        ("1.23456", 12_346),
        ("1.23454", 12_345),
        ("0.00005", 1),
        ("-0.00005", -1),
        ("2.675", 26_750),
    ])
    def test_exact_scaling(self, text, units):
        assert parse_amount(text) == Money(units)

    @pytest.mark.parametrize("text", ["abc", "1.2.3", "NaN", "Infinity", "-inf"])
    def test_invalid(self, text):
        with pytest.raises(RecordError):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["922337203685478", "1e30"])
    def test_out_of_range(self, text):
        with pytest.raises(RecordError):
            parse_amount(text)


class TestParseTransactionRow:
    def test_deposit_with_whitespace(self):
        row = {"type": " deposit", " client": " 1", " tx": " 7", " amount": " 5.0"}
        transaction = parse_transaction_row(row)

        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 7
        assert transaction.amount == Money(50_000)

    def test_type_is_case_insensitive(self):
        transaction = parse_transaction_row({"type": "Withdrawal", "client": "2", "tx": "3", "amount": "1"})
        assert transaction.transaction_type == TransactionType.WITHDRAWAL

    def test_dispute_ignores_amount(self):
        transaction = parse_transaction_row({"type": "dispute", "client": "1", "tx": "1", "amount": "9.0"})
        assert transaction.transaction_type == TransactionType.DISPUTE
        assert transaction.amount is None

    def test_short_row(self):
        # DictReader fills missing trailing columns with None
        transaction = parse_transaction_row({"type": "resolve", "client": "1", "tx": "1", "amount": None})
        assert transaction.transaction_type == TransactionType.RESOLVE

    def test_surplus_columns_ignored(self):
        row = {"type": "chargeback", "client": "1", "tx": "1", "amount": "", None: ["x"]}
        assert parse_transaction_row(row).transaction_type == TransactionType.CHARGEBACK

    @pytest.mark.parametrize("kind", ["deposit", "withdrawal"])
    def test_missing_amount(self, kind):
        with pytest.raises(MissingAmountError):
            parse_transaction_row({"type": kind, "client": "1", "tx": "1", "amount": ""})

    @pytest.mark.parametrize("row", [
        {"type": "refund", "client": "1", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "x", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "65536", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "-1", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "1", "tx": "4294967296", "amount": "1"},
        {"type": "deposit", "client": "1", "amount": "1"},
        {"client": "1", "tx": "1", "amount": "1"},
        {"type": "deposit", "client": "1", "tx": "1", "amount": "one"},
    ])
    def test_malformed(self, row):
        with pytest.raises(RecordError):
            parse_transaction_row(row)

    def test_id_bounds_accepted(self):
        transaction = parse_transaction_row({"type": "dispute", "client": "65535", "tx": "4294967295"})
        assert transaction.client_id == 65535
        assert transaction.transaction_id == 4294967295


class TestAccountRecord:
    def test_from_account(self):
        account = ClientAccount(client_id=3)
        account.deposit(Money(50_000))
        account.dispute(Money(20_000))

        record = AccountRecord.from_account(account)
        assert record.as_row() == {
            "client": "3",
            "available": "3.0000",
            "held": "2.0000",
            "total": "5.0000",
            "locked": "false",
        }

    def test_write_account_records_sorted(self):
        accounts = [ClientAccount(client_id=2), ClientAccount(client_id=1)]
        accounts[0].deposit(Money(30_000))

        stream = io.StringIO()
        write_account_records(accounts, stream)

        assert stream.getvalue().splitlines() == [
            "client,available,held,total,locked",
            "1,0.0000,0.0000,0.0000,false",
            "2,3.0000,0.0000,3.0000,false",
        ]
