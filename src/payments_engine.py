import csv
import logging
import sys
from typing import Dict, Iterable, Optional

from csv_records import parse_transaction_row
from errors import MissingAmountError, TransactionError
from models import ClientAccount, ProcessingStats
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays a CSV transaction log through a single ledger, in file order.
    Rejected records are logged as warnings and skipped; malformed records abort the run.
    """

    def __init__(self, processor: Optional[TransactionProcessor] = None):
        self._processor = processor if processor is not None else TransactionProcessor()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            return self.process_rows(csv.DictReader(f))

    def process_rows(self, rows: Iterable[Dict]) -> Dict[int, ClientAccount]:
        """Process parsed CSV rows in order and return final account states."""
        for position, row in enumerate(rows, start=1):
            self._process_row(position, row)

        # Print final processing report to stderr
        print(self._stats, file=sys.stderr)
        return self._processor.accounts()

    def _process_row(self, position: int, row: Dict) -> None:
        try:
            transaction = parse_transaction_row(row)
        except MissingAmountError as e:
            self._stats.record_skipped()
            logger.warning(f"transaction {position} failed: {e}")
            return

        try:
            self._processor.process_transaction(transaction)
        except TransactionError as e:
            self._stats.record_failure()
            logger.warning(f"transaction {position} failed: {e}")
            return

        self._stats.record_success()
