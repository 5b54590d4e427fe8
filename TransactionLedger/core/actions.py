"""Package-wide Qt signals and logging slots for TransactionLedger.

This module provides:
    - Slots that trace ledger and settings changes to the log.
    - Signals: custom Qt signals for ledger mutations, configuration changes and errors.
"""
import logging

from PySide6 import QtCore


@QtCore.Slot(object)
def log_transaction_added(transaction) -> None:
    logging.debug(f'Transaction added: {transaction}')


@QtCore.Slot(object, object)
def log_transaction_replaced(old, new) -> None:
    logging.debug(f'Transaction replaced: {old} -> {new}')


@QtCore.Slot(int)
def log_ledger_cleared(count: int) -> None:
    logging.debug(f'Ledger cleared, released {count} transaction(s)')


class Signals(QtCore.QObject):
    """Centralized Qt signals for ledger, config and error events."""
    transactionAdded = QtCore.Signal(object)
    transactionReplaced = QtCore.Signal(object, object)  # old, new
    ledgerCleared = QtCore.Signal(int)

    configChanged = QtCore.Signal(str, object)  # key, value

    showLogs = QtCore.Signal()

    error = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        self.transactionAdded.connect(log_transaction_added)
        self.transactionReplaced.connect(log_transaction_replaced)
        self.ledgerCleared.connect(log_ledger_cleared)
        self.configChanged.connect(lambda k, v: logging.debug(f'Config changed: {k}={v!r}'))


signals = Signals()
