from typing import Dict, Optional

from models import Transaction, TransactionType, ClientAccount
from state_manager import StateManager


class TransactionProcessor:
    """
    Applies transactions to ledger state, one at a time and in input order.

    Failures raise a TransactionError subclass and leave every account as it
    was before the call. Any transaction kind creates its client's account on
    first reference, including disputes against clients never seen before.
    """

    def __init__(self, state: Optional[StateManager] = None):
        self._state = state if state is not None else StateManager()

    def process_transaction(self, transaction: Transaction) -> None:
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(transaction)

    def accounts(self) -> Dict[int, ClientAccount]:
        return self._state.get_all_accounts()

    def _handle_deposit(self, transaction: Transaction) -> None:
        account = self._state.get_or_create_account(transaction.client_id)
        account.deposit(transaction.amount)
        self._state.store_amount(transaction.transaction_id, transaction.amount)

    def _handle_withdrawal(self, transaction: Transaction) -> None:
        # Withdrawals are not recorded, so they can never be disputed.
        account = self._state.get_or_create_account(transaction.client_id)
        account.withdraw(transaction.amount)

    def _handle_dispute(self, transaction: Transaction) -> None:
        amount = self._state.get_amount(transaction.transaction_id)
        account = self._state.get_or_create_account(transaction.client_id)
        account.dispute(amount)

    def _handle_resolve(self, transaction: Transaction) -> None:
        amount = self._state.get_amount(transaction.transaction_id)
        account = self._state.get_or_create_account(transaction.client_id)
        account.resolve(amount)

    def _handle_chargeback(self, transaction: Transaction) -> None:
        amount = self._state.get_amount(transaction.transaction_id)
        account = self._state.get_or_create_account(transaction.client_id)
        account.chargeback(amount)
