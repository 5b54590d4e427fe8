"""
Logging subsystem.

Modules:

- :mod:`TransactionLedger.log.log` – Root logger setup, the in-memory :class:`TankHandler` and the Qt message bridge.
"""
