# tests/test_settings.py
"""
Unit tests for TransactionLedger.settings.lib
(covers helpers, validators, environment overrides and SettingsAPI).

Run with:
    python -m unittest tests.test_settings
"""
import logging

from TransactionLedger.core.actions import signals
from TransactionLedger.settings import lib
from TransactionLedger.settings.lib import (
    SETTINGS_KEYS,
    SETTINGS_SCHEMA,
    SettingsAPI,
    coerce_value,
    default_settings,
    section_of,
    validate_settings_data,
)
from TransactionLedger.status import status
from tests.base import BaseTestCase, SignalSpy, mute_signals


class HelperTests(BaseTestCase):

    def test_default_settings_are_valid(self):
        data = default_settings()
        validate_settings_data(data)
        self.assertEqual(set(data), set(SETTINGS_SCHEMA))
        self.assertEqual(data['ledger']['datetime_format'], '%Y-%m-%d %H:%M:%S')
        self.assertTrue(data['ledger']['reject_negative_amounts'])
        self.assertEqual(data['logging']['log_level'], logging.INFO)

    def test_default_settings_returns_copies(self):
        a = default_settings()
        a['ledger']['datetime_format'] = '%Y'
        self.assertNotEqual(default_settings()['ledger']['datetime_format'], '%Y')

    def test_section_of(self):
        self.assertEqual(section_of('datetime_format'), 'ledger')
        self.assertEqual(section_of('log_level'), 'logging')
        with self.assertRaises(KeyError):
            section_of('nope')

    def test_coerce_bool(self):
        self.assertTrue(coerce_value('reject_negative_amounts', 'yes'))
        self.assertTrue(coerce_value('reject_negative_amounts', ' TRUE '))
        self.assertFalse(coerce_value('reject_negative_amounts', '0'))
        self.assertFalse(coerce_value('reject_negative_amounts', False))
        with mute_signals():
            with self.assertRaises(status.SettingsInvalidException):
                coerce_value('reject_negative_amounts', 'maybe')
            with self.assertRaises(status.SettingsInvalidException):
                coerce_value('reject_negative_amounts', 1)

    def test_coerce_log_level(self):
        self.assertEqual(coerce_value('log_level', 'DEBUG'), logging.DEBUG)
        self.assertEqual(coerce_value('log_level', 'warning'), logging.WARNING)
        self.assertEqual(coerce_value('log_level', '40'), logging.ERROR)
        with mute_signals():
            with self.assertRaises(status.SettingsInvalidException):
                coerce_value('log_level', 'LOUD')
            with self.assertRaises(status.SettingsInvalidException):
                coerce_value('log_level', True)

    def test_validate_rejects_bad_data(self):
        cases = []

        missing = default_settings()
        del missing['logging']
        cases.append(missing)

        unknown = default_settings()
        unknown['ledger']['currency'] = 'EUR'
        cases.append(unknown)

        wrong_type = default_settings()
        wrong_type['ledger']['reject_negative_amounts'] = 'yes'
        cases.append(wrong_type)

        bad_level = default_settings()
        bad_level['logging']['log_level'] = 5
        cases.append(bad_level)

        empty_format = default_settings()
        empty_format['ledger']['datetime_format'] = ''
        cases.append(empty_format)

        with mute_signals():
            for data in cases:
                with self.subTest(data=data):
                    with self.assertRaises(status.SettingsInvalidException):
                        validate_settings_data(data)


class SettingsAPITests(BaseTestCase):

    def test_keys(self):
        for key in SETTINGS_KEYS:
            self.assertEqual(lib.settings[key], default_settings()[section_of(key)][key])
        with self.assertRaises(KeyError):
            _ = lib.settings['nope']

    def test_environment_overrides(self):
        api = SettingsAPI(environ={
            'TRANSACTIONLEDGER_DATETIME_FORMAT': '%Y/%m/%d',
            'TRANSACTIONLEDGER_REJECT_NEGATIVE_AMOUNTS': 'no',
            'TRANSACTIONLEDGER_LOG_LEVEL': 'ERROR',
            'UNRELATED': 'ignored',
        })
        self.assertEqual(api['datetime_format'], '%Y/%m/%d')
        self.assertFalse(api['reject_negative_amounts'])
        self.assertEqual(api['log_level'], logging.ERROR)

    def test_invalid_environment_override(self):
        with mute_signals():
            with self.assertRaises(status.SettingsInvalidException):
                SettingsAPI(environ={'TRANSACTIONLEDGER_LOG_LEVEL': '7'})

    def test_setitem_coerces_and_emits(self):
        spy = SignalSpy(signals.configChanged)
        try:
            lib.settings['reject_negative_amounts'] = 'off'
        finally:
            spy.disconnect()
        self.assertFalse(lib.settings['reject_negative_amounts'])
        self.assertEqual(spy.calls, [('reject_negative_amounts', False)])

    def test_setitem_invalid_keeps_previous_value(self):
        with mute_signals():
            with self.assertRaises(status.SettingsInvalidException):
                lib.settings['datetime_format'] = ''
        self.assertEqual(lib.settings['datetime_format'], '%Y-%m-%d %H:%M:%S')

    def test_block_signals(self):
        spy = SignalSpy(signals.configChanged)
        try:
            lib.settings.block_signals(True)
            lib.settings['datetime_format'] = '%H:%M'
            lib.settings.block_signals(False)
        finally:
            spy.disconnect()
        self.assertEqual(spy.calls, [])
        self.assertEqual(lib.settings['datetime_format'], '%H:%M')

    def test_log_level_is_applied(self):
        lib.settings['log_level'] = 'WARNING'
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_sections(self):
        section = lib.settings.get_section('ledger')
        section['datetime_format'] = '%Y'
        self.assertNotEqual(lib.settings['datetime_format'], '%Y')

        lib.settings.set_section('ledger', section)
        self.assertEqual(lib.settings['datetime_format'], '%Y')

        with self.assertRaises(ValueError):
            lib.settings.set_section('nope', {})

    def test_revert(self):
        lib.settings['datetime_format'] = '%Y'
        lib.settings['reject_negative_amounts'] = False
        lib.settings.revert()
        self.assertEqual(lib.settings.settings_data, default_settings())
