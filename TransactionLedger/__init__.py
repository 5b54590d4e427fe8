"""
TransactionLedger: a small polymorphic ledger of deposits and withdrawals.

This package provides:

- :mod:`TransactionLedger.core` – The transaction hierarchy, the timestamp-keyed ledger and the Qt signal hub.
- :mod:`TransactionLedger.data` – pandas views (:func:`TransactionLedger.data.data.to_dataframe`,
  :func:`TransactionLedger.data.data.get_type_summary`) over a ledger.
- :mod:`TransactionLedger.settings` – Settings schema, validation and environment overrides.
- :mod:`TransactionLedger.status` – Status codes and the exceptions raised on invalid input.
- :mod:`TransactionLedger.log` – In-memory logging with a Qt message bridge.

Use :class:`TransactionLedger.core.ledger.TransactionList` to collect transactions, and
:func:`initialize` from an application entry point to install the package's logging.
"""

import sys

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('TransactionLedger requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'TransactionLedger: a polymorphic ledger of deposits and withdrawals with aggregate queries.'


def initialize(enable_stream_handler: bool = True, enable_qt_handler: bool = True) -> None:
    """Install the package's logging at the configured ``log_level``.

    The level comes from the shared settings, so ``TRANSACTIONLEDGER_LOG_LEVEL`` applies.
    """
    from .log import log
    log.setup_logging(enable_stream_handler=enable_stream_handler, enable_qt_handler=enable_qt_handler)
