"""
Settings package.

This package provides:

- :mod:`TransactionLedger.settings.lib` – Settings schema, validation, environment overrides and the shared
  :data:`TransactionLedger.settings.lib.settings` instance.
"""
