"""Logging setup for TransactionLedger.

Importing the package leaves the host program's logging alone. Applications that want the
ledger's own configuration call :func:`setup_logging` (or :func:`TransactionLedger.initialize`),
which installs a stdout handler, the in-memory :class:`TankHandler` and the Qt message bridge
at the level held in the ``log_level`` setting.
"""
import collections
import logging
import sys

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from ..core.actions import signals

LOG_FORMAT = '[%(asctime)s] <%(module)s> %(levelname)s:  %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

TANK_MAX_RECORDS = 50_000

VALID_LEVELS = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)

QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def set_logging_level(level):
    """
    Sets the logging level for the root logger and all of its handlers.

    Args:
        level (int): One of the standard logging levels.

    Raises:
        ValueError: If level is not one of :data:`VALID_LEVELS`.
    """
    if not isinstance(level, int) or isinstance(level, bool):
        raise ValueError('Logging level must be an integer.')
    if level not in VALID_LEVELS:
        raise ValueError('Invalid logging level. Use one of the standard logging levels, e.g., logging.DEBUG.')

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def configured_level():
    """Return the ``log_level`` setting."""
    from ..settings import lib
    return lib.settings['log_level']


def qt_message_handler(mode, context, message):
    """
    Forwards Qt's own messages to the ``Qt`` logger. Fatal messages exit the process.
    """
    level = QT_LEVELS.get(mode, logging.INFO)
    logging.getLogger('Qt').log(level, message.strip())
    if mode == QtMsgType.QtFatalMsg:
        sys.exit(1)


def setup_logging(enable_stream_handler=True, enable_qt_handler=True, log_level=None):
    """
    Replaces the root logger's handlers with the ledger's own.

    Args:
        enable_stream_handler (bool): Also log to stdout.
        enable_qt_handler (bool): Route Qt's own messages through Python logging.
        log_level (int, optional): Level for the root logger and every installed handler.
            Defaults to the ``log_level`` setting.
    """
    if log_level is None:
        log_level = configured_level()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if enable_stream_handler:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    tank_handler = TankHandler()
    tank_handler.setFormatter(formatter)
    root_logger.addHandler(tank_handler)

    set_logging_level(log_level)

    if enable_qt_handler:
        qInstallMessageHandler(qt_message_handler)


def get_tank_handler():
    """
    Returns the :class:`TankHandler` installed on the root logger, or None.
    """
    return next(
        (h for h in logging.getLogger().handlers if isinstance(h, TankHandler)),
        None
    )


class TankHandler(logging.Handler):
    """
    Keeps the most recent formatted records in memory so they can be browsed later.

    Records at ERROR and above also emit ``signals.showLogs``.

    Args:
        max_records (int, optional): Oldest records are dropped beyond this many.

    Attributes:
        tank (collections.deque[tuple[int, str]]): ``(levelno, message)`` pairs, oldest first.
    """

    def __init__(self, max_records=TANK_MAX_RECORDS):
        super().__init__()
        self.tank = collections.deque(maxlen=max_records)

    def emit(self, record):
        try:
            self.tank.append((record.levelno, self.format(record)))
            if record.levelno >= logging.ERROR and not signals.signalsBlocked():
                signals.showLogs.emit()
        except (Exception, KeyboardInterrupt):
            self.handleError(record)

    def get_logs(self, level=logging.NOTSET):
        """
        Returns the stored messages at or above ``level``.

        Args:
            level (int, optional): The minimum logging level. Defaults to logging.NOTSET.

        Returns:
            list[str]: Formatted messages, oldest first.
        """
        return [msg for lvl, msg in self.tank if lvl >= level]

    def clear_logs(self):
        self.tank.clear()
