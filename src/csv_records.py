import csv
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, TextIO

from errors import MissingAmountError, MoneyOverflowError, RecordError
from models import ClientAccount, Transaction, TransactionType
from money import FRACTION_DIGITS, Money

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1

OUTPUT_FIELDS = ["client", "available", "held", "total", "locked"]

_QUANTUM = Decimal(1).scaleb(-FRACTION_DIGITS)


def normalize_row(row: Dict[Optional[str], object]) -> Dict[str, str]:
    """Trim header names and values. Missing trailing columns become empty strings."""
    normalized = {}
    for key, value in row.items():
        # DictReader files surplus columns under the None key.
        if key is None:
            continue
        normalized[key.strip()] = (value or "").strip()
    return normalized


def parse_amount(text: str) -> Money:
    """Parse decimal text straight into scaled units, rounding half away from zero to 4 places."""
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise RecordError(f"invalid amount {text!r}") from None

    if not value.is_finite():
        raise RecordError(f"invalid amount {text!r}")

    try:
        units = int(value.quantize(_QUANTUM, rounding=ROUND_HALF_UP).scaleb(FRACTION_DIGITS))
        return Money(units)
    except (InvalidOperation, MoneyOverflowError):
        raise RecordError(f"amount out of range {text!r}") from None


def _parse_id(normalized: Dict[str, str], field: str, maximum: int) -> int:
    try:
        value = int(normalized[field])
    except KeyError:
        raise RecordError(f"missing column {field!r}") from None
    except ValueError:
        raise RecordError(f"invalid {field} {normalized[field]!r}") from None

    if not 0 <= value <= maximum:
        raise RecordError(f"{field} out of range {value}")
    return value


def parse_transaction_row(row: Dict[Optional[str], object]) -> Transaction:
    """
    Convert one CSV row into a typed Transaction.

    Raises:
        MissingAmountError: deposit or withdrawal without an amount
        RecordError: any other malformed field
    """
    normalized = normalize_row(row)

    try:
        transaction_type = TransactionType(normalized["type"].lower())
    except KeyError:
        raise RecordError("missing column 'type'") from None
    except ValueError:
        raise RecordError(f"unknown transaction type {normalized['type']!r}") from None

    client_id = _parse_id(normalized, "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(normalized, "tx", MAX_TRANSACTION_ID)

    amount = None
    if transaction_type.carries_amount:
        amount_str = normalized.get("amount", "")
        if not amount_str:
            raise MissingAmountError(f"{transaction_type.value} tx {transaction_id}")
        amount = parse_amount(amount_str)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


@dataclass(frozen=True)
class AccountRecord:
    client: int
    available: Money
    held: Money
    total: Money
    locked: bool

    @classmethod
    def from_account(cls, account: ClientAccount) -> "AccountRecord":
        return cls(
            client=account.client_id,
            available=account.available,
            held=account.held,
            total=account.total,
            locked=account.locked,
        )

    def as_row(self) -> Dict[str, str]:
        return {
            "client": str(self.client),
            "available": str(self.available),
            "held": str(self.held),
            "total": str(self.total),
            "locked": str(self.locked).lower(),
        }


def write_account_records(accounts: Iterable[ClientAccount], stream: TextIO) -> None:
    """Write the output CSV, one row per account, ordered by client id."""
    records = [AccountRecord.from_account(account) for account in sorted(accounts, key=lambda a: a.client_id)]

    writer = csv.DictWriter(stream, fieldnames=OUTPUT_FIELDS, lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow(record.as_row())
