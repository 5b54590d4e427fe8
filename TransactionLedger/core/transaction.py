"""Transaction hierarchy.

:class:`Transaction` is abstract: it holds the type label and the creation timestamp and renders the
common ``Type: ..., Date/time: ...`` prefix. :class:`Deposit` and :class:`Withdrawal` add their own
amount and charge fields, cost rule and string suffix.

Example:

    >>> d = Deposit(100.0, fee=5.0)
    >>> d.compute_cost()
    95.0

"""
import abc
import datetime
import enum
import logging
import math
import numbers
from typing import Optional

from ..settings import lib
from ..status import status


class TransactionType(enum.StrEnum):
    """Type labels of the concrete transaction variants."""
    Deposit = 'Deposit'
    Withdrawal = 'Withdrawal'


def _verify_amount(amount) -> float:
    """Verify a transaction amount and return it as a float.

    Raises:
        status.InvalidAmountException: If amount is not a finite real number.
        status.NegativeAmountException: If amount is negative and negative amounts are rejected.
    """
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise status.InvalidAmountException(f'Got {amount!r}.')
    amount = float(amount)
    if not math.isfinite(amount):
        raise status.InvalidAmountException(f'Got {amount!r}.')
    if amount < 0 and lib.settings['reject_negative_amounts']:
        raise status.NegativeAmountException(f'Got {amount!r}.')
    return amount


def _verify_charge(name: str, value) -> float:
    """Verify a fee or percentage and return it as a float.

    Raises:
        status.InvalidChargeException: If value is not a finite, non-negative real number.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise status.InvalidChargeException(f'{name} must be a number, got {value!r}.')
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise status.InvalidChargeException(f'{name} must be finite and non-negative, got {value!r}.')
    return value


class Transaction(abc.ABC):
    """A single financial event with a type, a timestamp and a computable cost.

    The class cannot be instantiated directly; use :class:`Deposit` or :class:`Withdrawal`.

    Args:
        type_ (str): Label identifying the variant.
        timestamp (datetime.datetime): Creation date and time.

    Raises:
        status.InvalidTransactionTypeException: If type_ is not a non-empty string.
        status.InvalidTimestampException: If timestamp is not a datetime.
    """

    def __init__(self, type_: str, timestamp: datetime.datetime) -> None:
        if not isinstance(type_, str) or not type_:
            raise status.InvalidTransactionTypeException(f'Got {type_!r}.')
        if not isinstance(timestamp, datetime.datetime):
            raise status.InvalidTimestampException(f'Got {timestamp!r}.')

        self._type: str = str(type_)
        self._timestamp: datetime.datetime = timestamp

    @property
    def type(self) -> str:
        return self._type

    @property
    def timestamp(self) -> datetime.datetime:
        return self._timestamp

    def get_date_time(self) -> datetime.datetime:
        """Return the timestamp used as the ledger key."""
        return self._timestamp

    @abc.abstractmethod
    def compute_cost(self) -> float:
        """Return the net effect of the transaction used for aggregate totals."""

    @abc.abstractmethod
    def to_string(self) -> str:
        """Return the common ``Type: <type>, Date/time: <timestamp>`` prefix.

        Variants override this, call it through ``super()`` and append their own fields.
        """
        timestamp = self._timestamp.strftime(lib.settings['datetime_format'])
        return f'Type: {self._type}, Date/time: {timestamp}'

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self._timestamp.isoformat()} cost={self.compute_cost()}>'


class Deposit(Transaction):
    """Money paid in, less a flat fee.

    Args:
        amount (float): Deposited value.
        fee (float, optional): Flat fee subtracted from the amount. Defaults to 0.0.
        timestamp (datetime.datetime, optional): Creation time. Defaults to now.
    """

    def __init__(self, amount: float, fee: float = 0.0, timestamp: Optional[datetime.datetime] = None) -> None:
        super().__init__(TransactionType.Deposit, timestamp if timestamp is not None else datetime.datetime.now())
        self._amount: float = _verify_amount(amount)
        self._fee: float = _verify_charge('fee', fee)
        logging.debug(f'Created deposit of {self._amount} with fee {self._fee}')

    @property
    def amount(self) -> float:
        return self._amount

    @property
    def fee(self) -> float:
        return self._fee

    def compute_cost(self) -> float:
        return self._amount - self._fee

    def to_string(self) -> str:
        return f'{super().to_string()}, Amount: {self._amount:.2f}, Fee: {self._fee:.2f}'


class Withdrawal(Transaction):
    """Money paid out, plus a proportional charge.

    Args:
        amount (float): Withdrawn value.
        percentage (float, optional): Charge as a fraction of the amount, e.g. 0.02 for 2%. Defaults to 0.0.
        timestamp (datetime.datetime, optional): Creation time. Defaults to now.
    """

    def __init__(self, amount: float, percentage: float = 0.0,
                 timestamp: Optional[datetime.datetime] = None) -> None:
        super().__init__(TransactionType.Withdrawal, timestamp if timestamp is not None else datetime.datetime.now())
        self._amount: float = _verify_amount(amount)
        self._percentage: float = _verify_charge('percentage', percentage)
        logging.debug(f'Created withdrawal of {self._amount} at {self._percentage:.2%}')

    @property
    def amount(self) -> float:
        return self._amount

    @property
    def percentage(self) -> float:
        return self._percentage

    def compute_cost(self) -> float:
        return self._amount + self._amount * self._percentage

    def to_string(self) -> str:
        return f'{super().to_string()}, Amount: {self._amount:.2f}, Percentage: {self._percentage}'
