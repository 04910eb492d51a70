from typing import Dict

from errors import NoSuchTransactionError
from models import ClientAccount
from money import Money


class StateManager:
    """
    Owns client accounts and the amount history used for dispute lookups.
    Single-threaded: only the transaction processor mutates it.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._amounts: Dict[int, Money] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def store_amount(self, transaction_id: int, amount: Money) -> None:
        """Remember a deposit amount for future disputes. Later ids overwrite earlier ones."""
        self._amounts[transaction_id] = amount

    def get_amount(self, transaction_id: int) -> Money:
        """Retrieve the recorded amount for a transaction or raise NoSuchTransactionError."""
        try:
            return self._amounts[transaction_id]
        except KeyError:
            raise NoSuchTransactionError(transaction_id) from None

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
