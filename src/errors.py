class TransactionError(Exception):
    """Base class for failures of a single transaction against the ledger."""

    message = "Transaction failed"

    def __str__(self) -> str:
        return self.message


class InsufficientFundsError(TransactionError):
    message = "Insufficient funds"


class LockedAccountError(TransactionError):
    message = "Locked account"


class NoSuchTransactionError(TransactionError):
    message = "Referenced transaction not found"

    def __init__(self, transaction_id: int):
        super().__init__(transaction_id)
        self.transaction_id = transaction_id

    def __str__(self) -> str:
        return f"{self.message} (tx {self.transaction_id})"


class MoneyOverflowError(TransactionError, OverflowError):
    message = "Numerical overflow"


class BankError(Exception):
    """Base class for record-level and run-level failures outside the ledger."""

    message = "Bank error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class MissingAmountError(BankError):
    message = "Amount missing in transaction CSV"


class RecordError(BankError):
    message = "Malformed transaction record"


class UsageError(BankError):
    message = "Command line usage error"
