"""
Data package: pandas views over a ledger.

This package provides:

- :mod:`TransactionLedger.data.data` – Tabular exports and per-type and per-day summaries.
"""
