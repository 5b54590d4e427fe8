"""Timestamp-keyed ledger of transactions.

:class:`TransactionList` owns every transaction added to it. Entries are keyed by
:meth:`Transaction.get_date_time` and every query walks them in ascending timestamp order.

Adding a transaction whose timestamp is already present supersedes the earlier entry. The
earlier transaction is released and a warning is logged, as this silently drops data.
"""
import collections
import datetime
import logging
from typing import Dict, Iterator, List

from .actions import signals
from .transaction import Transaction
from ..status import status


def _is_aware(timestamp: datetime.datetime) -> bool:
    return timestamp.tzinfo is not None and timestamp.utcoffset() is not None


class TransactionList:
    """An ordered collection owning all inserted transactions.

    Example:

        >>> from TransactionLedger.core.transaction import Deposit
        >>> ledger = TransactionList()
        >>> ledger.add_transaction(Deposit(100.0, fee=5.0))
        >>> ledger.total_transaction_cost()
        95.0

    The list can be used as a context manager; leaving the block releases every entry.
    """

    def __init__(self) -> None:
        self._transactions: Dict[datetime.datetime, Transaction] = {}

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        for key in sorted(self._transactions):
            yield self._transactions[key]

    def __contains__(self, timestamp: datetime.datetime) -> bool:
        return timestamp in self._transactions

    def __getitem__(self, timestamp: datetime.datetime) -> Transaction:
        return self._transactions[timestamp]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} entries={len(self)}>'

    def __enter__(self) -> 'TransactionList':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.clear()

    def add_transaction(self, transaction: Transaction) -> None:
        """Take ownership of a transaction.

        Args:
            transaction (Transaction): A :class:`Deposit` or :class:`Withdrawal`.

        Raises:
            status.InvalidTransactionException: If transaction is not a :class:`Transaction`, or if its
                timestamp is timezone-aware while the ledger holds naive timestamps, or the reverse.
        """
        if not isinstance(transaction, Transaction):
            raise status.InvalidTransactionException(f'Got {type(transaction).__name__}.')

        key = transaction.get_date_time()
        if self._transactions and _is_aware(key) != _is_aware(next(iter(self._transactions))):
            raise status.InvalidTransactionException(
                f'Cannot mix timezone-aware and naive timestamps, got {key.isoformat()}.'
            )

        previous = self._transactions.pop(key, None)
        self._transactions[key] = transaction

        if previous is not None:
            logging.warning(
                f'A transaction already exists at {key.isoformat()}, '
                f'replacing "{previous}" with "{transaction}"'
            )
            if not signals.signalsBlocked():
                signals.transactionReplaced.emit(previous, transaction)
            return

        if not signals.signalsBlocked():
            signals.transactionAdded.emit(transaction)

    def total_transaction_cost(self) -> float:
        """Return the sum of every transaction's cost, or 0.0 for an empty ledger."""
        total = 0.0
        for transaction in self:
            total += transaction.compute_cost()
        return total

    def frequent_transaction_type(self) -> str:
        """Return the most frequent transaction type.

        Ties go to the type that reached the highest count first when walking the ledger in
        ascending timestamp order.

        Returns:
            str: The type label, or an empty string for an empty ledger.
        """
        counts = collections.Counter()
        frequent = ''
        highest = 0
        for transaction in self:
            counts[transaction.type] += 1
            if counts[transaction.type] > highest:
                highest = counts[transaction.type]
                frequent = transaction.type
        return frequent

    def transactions_on_a_date(self, date: datetime.date) -> List[Transaction]:
        """Return the transactions whose timestamp falls on the given calendar date.

        Args:
            date (datetime.date): The date to match. A datetime is reduced to its date.

        Returns:
            list[Transaction]: Matching transactions in ascending timestamp order. The ledger keeps
            ownership of the returned transactions.
        """
        if isinstance(date, datetime.datetime):
            date = date.date()
        return [t for t in self if t.get_date_time().date() == date]

    def to_string(self) -> str:
        """Return every transaction's string, one per line, in ascending timestamp order."""
        return '\n'.join(t.to_string() for t in self)

    def clear(self) -> int:
        """Release every owned transaction.

        Returns:
            int: The number of transactions released.
        """
        count = len(self._transactions)
        self._transactions.clear()
        logging.debug(f'Released {count} transaction(s)')
        if not signals.signalsBlocked():
            signals.ledgerCleared.emit(count)
        return count
