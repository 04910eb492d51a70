from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import InsufficientFundsError, LockedAccountError
from money import Money, ZERO


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Money] = None

    def __post_init__(self):
        if self.transaction_type.carries_amount and self.amount is None:
            raise ValueError(f"{self.transaction_type.value} requires an amount")

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


class ClientAccount:
    """
    Balance state for one client.

    Every operation computes its new values before assigning any of them,
    so a raised error leaves the account exactly as it was.
    """

    def __init__(self, client_id: int):
        self.client_id = client_id
        self._available = ZERO
        self._held = ZERO
        self._locked = False

    @property
    def available(self) -> Money:
        return self._available

    @property
    def held(self) -> Money:
        return self._held

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def total(self) -> Money:
        return self._available + self._held

    def _check_unlocked(self) -> None:
        if self._locked:
            raise LockedAccountError()

    def _commit(self, available: Money, held: Money) -> None:
        # available + held must stay representable; raises before any field changes.
        available + held
        self._available = available
        self._held = held

    def deposit(self, amount: Money) -> None:
        self._check_unlocked()
        self._commit(self._available + amount, self._held)

    def withdraw(self, amount: Money) -> None:
        self._check_unlocked()
        available = self._available - amount
        if available < ZERO:
            raise InsufficientFundsError()
        self._commit(available, self._held)

    def dispute(self, amount: Money) -> None:
        self._commit(self._available - amount, self._held + amount)

    def resolve(self, amount: Money) -> None:
        self._commit(self._available + amount, self._held - amount)

    def chargeback(self, amount: Money) -> None:
        self._commit(self._available, self._held - amount)
        self._locked = True

    def __repr__(self) -> str:
        return (
            f"ClientAccount(client={self.client_id}, available={self._available}, "
            f"held={self._held}, locked={self._locked})"
        )


class ProcessingStats:
    """Counters for a single processing run."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.skipped = 0

    def record_success(self):
        self.processed += 1

    def record_failure(self):
        self.failed += 1

    def record_skipped(self):
        self.skipped += 1

    def __str__(self) -> str:
        return f"Processed: {self.processed}, Failed: {self.failed}, Skipped: {self.skipped}"
