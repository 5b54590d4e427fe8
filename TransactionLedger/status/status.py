"""Status definitions and exceptions for TransactionLedger.

This module provides:
    - Status: enumeration of possible validation outcomes
    - STATUS_MESSAGE: user-facing messages for each status
    - get_message: retrieve the message for a status
    - BaseStatusException: base exception carrying a Status
    - ConstructionError and its subclasses, raised when a transaction is built from invalid values
"""
import enum
import logging
from typing import Dict


class Status(enum.StrEnum):
    """Enumeration of ledger status codes."""
    UnknownStatus = enum.auto()
    Okay = enum.auto()

    # Construction status
    ConstructionFailed = enum.auto()
    TimestampInvalid = enum.auto()
    TransactionTypeInvalid = enum.auto()
    AmountInvalid = enum.auto()
    AmountNegative = enum.auto()
    ChargeInvalid = enum.auto()

    # Ledger status
    TransactionInvalid = enum.auto()

    # Configuration status
    SettingsInvalid = enum.auto()


STATUS_MESSAGE: Dict[Status, str] = {
    Status.UnknownStatus: 'Unknown status.',
    Status.Okay: 'Everything is okay.',

    Status.ConstructionFailed: 'The transaction could not be created.',
    Status.TimestampInvalid: 'The transaction timestamp must be a valid date and time.',
    Status.TransactionTypeInvalid: 'The transaction type must be a non-empty string.',
    Status.AmountInvalid: 'The amount must be a finite number.',
    Status.AmountNegative: 'The amount must not be negative.',
    Status.ChargeInvalid: 'Fees and percentages must be finite, non-negative numbers.',

    Status.TransactionInvalid: 'The transaction cannot be added to the ledger.',

    Status.SettingsInvalid: 'The settings seem to be incomplete, or contain invalid values.',
}


def get_message(status: Status) -> str:
    """
    Get the message for a given status.

    Args:
        status (Status): The status enum.

    Returns:
        str: The message associated with the status.
    """
    return STATUS_MESSAGE.get(status, 'Unknown status')


class BaseStatusException(Exception):
    """Base exception for status-based errors in TransactionLedger.

    Attributes:
        status (Status): Status code associated with this error.
        status_message (str): User-facing message for the status.

    Args:
        message (str): Optional additional context for the error.
    """
    status = Status.UnknownStatus

    def __init__(self, message: str = None):
        self.status_message = get_message(self.status)
        exception_message = f'{self.status_message} {message}' if message else self.status_message
        super().__init__(exception_message)

        logging.error(exception_message)

        from ..core.actions import signals
        if not signals.signalsBlocked():
            signals.error.emit(message or self.status_message)


class UnknownException(BaseStatusException):
    """Exception for an unknown error during status processing."""
    pass


class ConstructionError(BaseStatusException):
    """Base exception for transactions constructed from invalid values."""
    status = Status.ConstructionFailed


class InvalidTimestampException(ConstructionError):
    """Exception raised when a transaction timestamp is not a datetime."""
    status = Status.TimestampInvalid


class InvalidTransactionTypeException(ConstructionError):
    """Exception raised when a transaction type label is missing or not a string."""
    status = Status.TransactionTypeInvalid


class InvalidAmountException(ConstructionError):
    """Exception raised when an amount is not a finite real number."""
    status = Status.AmountInvalid


class NegativeAmountException(ConstructionError):
    """Exception raised when a negative amount is rejected."""
    status = Status.AmountNegative


class InvalidChargeException(ConstructionError):
    """Exception raised when a fee or percentage is invalid."""
    status = Status.ChargeInvalid


class InvalidTransactionException(BaseStatusException):
    """Exception raised when a non-transaction, or a timestamp of the wrong timezone awareness, is added to the ledger."""
    status = Status.TransactionInvalid


class SettingsInvalidException(BaseStatusException):
    """Exception raised when a settings value fails schema validation."""
    status = Status.SettingsInvalid
