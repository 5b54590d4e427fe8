"""
Core ledger API.

Modules:

- :mod:`TransactionLedger.core.transaction` – Abstract :class:`Transaction` and its :class:`Deposit` and
  :class:`Withdrawal` variants.
- :mod:`TransactionLedger.core.ledger` – :class:`TransactionList`, the timestamp-keyed owner of transactions.
- :mod:`TransactionLedger.core.actions` – Qt signals emitted when the ledger or the settings change.
"""
