"""Unittest base class for creating a clean test environment."""
import datetime
import logging
import os
import pathlib
import subprocess
import sys
import textwrap
from contextlib import contextmanager
import unittest

from PySide6 import QtCore

from TransactionLedger.log import log
from TransactionLedger.settings import lib


PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent

_app = None


def ts(day: int, hour: int = 12, minute: int = 0, second: int = 0) -> datetime.datetime:
    """Return a timestamp in January 2025."""
    return datetime.datetime(2025, 1, day, hour, minute, second)


def run_script(source: str, env: dict = None) -> subprocess.CompletedProcess:
    """Run Python source in a fresh interpreter with the project importable."""
    environ = {**os.environ, **(env or {})}
    environ['PYTHONPATH'] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), environ.get('PYTHONPATH')]))
    environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
    return subprocess.run(
        [sys.executable, '-c', textwrap.dedent(source)],
        cwd=PROJECT_ROOT, env=environ, capture_output=True, text=True, timeout=120,
    )


@contextmanager
def mute_signals():
    from TransactionLedger.core.actions import signals
    blocker = QtCore.QSignalBlocker(signals)  # blocks every signal in `signals`
    try:
        yield
    finally:
        blocker.unblock()


class SignalSpy:
    """Collects the arguments of every emission of a signal."""

    def __init__(self, signal):
        self.signal = signal
        self.calls = []
        self.signal.connect(self._slot)

    def _slot(self, *args):
        self.calls.append(args)

    def disconnect(self):
        self.signal.disconnect(self._slot)


class BaseTestCase(unittest.TestCase):
    """Base test case that resets the shared settings and logging around each test."""

    def setUp(self) -> None:
        """Ensure a Qt core application and fresh settings."""
        global _app
        if not QtCore.QCoreApplication.instance():
            _app = QtCore.QCoreApplication([])  # type: ignore
            logging.debug('QtCore.QCoreApplication initialized for tests.')

        log.setup_logging(enable_stream_handler=False,
                          enable_qt_handler=False,
                          log_level=logging.DEBUG)

        self._settings = lib.settings
        lib.settings = lib.SettingsAPI(environ={})
        logging.debug('SettingsAPI reinitialized.')

    def tearDown(self) -> None:
        """Restore the original settings instance."""
        lib.settings = self._settings
