import csv
import sys
import logging
from typing import List, Optional

from csv_records import write_account_records
from errors import BankError, TransactionError, UsageError
from payments_engine import PaymentsEngine


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def run(argv: List[str]) -> None:
    if len(argv) != 2:
        raise UsageError(f"expected 1 argument, got {len(argv) - 1}")

    engine = PaymentsEngine()
    accounts = engine.process_file(argv[1])
    write_account_records(accounts.values(), sys.stdout)


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    argv = sys.argv if argv is None else argv

    try:
        run(argv)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        print("Usage: payments-engine <input.csv>", file=sys.stderr)
        return 1
    except (BankError, TransactionError, OSError, UnicodeDecodeError, csv.Error) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
