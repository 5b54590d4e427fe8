"""Settings library for the ledger.

Provides:
    - Schema validation for the ledger and logging settings.
    - Default values, environment overrides and type coercion.
    - The shared :data:`settings` instance consulted by the transaction classes.

Settings live in memory only. Each key may be overridden at construction time with an
environment variable named ``TRANSACTIONLEDGER_<KEY>``, e.g. ``TRANSACTIONLEDGER_LOG_LEVEL=DEBUG``.
"""
import copy
import logging
import os
from typing import Dict, Any, List, Mapping, Optional

from PySide6 import QtCore

from ..status import status

app_name: str = 'TransactionLedger'
ENV_PREFIX: str = 'TRANSACTIONLEDGER_'

TRUE_STRINGS: List[str] = ['1', 'true', 't', 'yes', 'y', 'on']
FALSE_STRINGS: List[str] = ['0', 'false', 'f', 'no', 'n', 'off']

SETTINGS_SCHEMA: Dict[str, Any] = {
    'ledger': {
        'type': dict,
        'required': True,
        'item_schema': {
            'datetime_format': {'type': str, 'required': True, 'default': '%Y-%m-%d %H:%M:%S'},
            'reject_negative_amounts': {'type': bool, 'required': True, 'default': True},
        }
    },
    'logging': {
        'type': dict,
        'required': True,
        'item_schema': {
            'log_level': {'type': int, 'required': True, 'default': logging.INFO,
                          'allowed_values': [
                              logging.DEBUG,
                              logging.INFO,
                              logging.WARNING,
                              logging.ERROR,
                              logging.CRITICAL,
                          ]},
        }
    },
}

SETTINGS_KEYS: List[str] = [k for section in SETTINGS_SCHEMA.values() for k in section['item_schema']]


def default_settings() -> Dict[str, Dict[str, Any]]:
    """Build a fresh settings dictionary populated with schema defaults.

    Returns:
        dict: Mapping of section names to dicts of default values.
    """
    return {
        section: {k: v['default'] for k, v in specs['item_schema'].items()}
        for section, specs in SETTINGS_SCHEMA.items()
    }


def section_of(key: str) -> str:
    """Return the name of the section that defines ``key``.

    Raises:
        KeyError: If no section defines the key.
    """
    for section, specs in SETTINGS_SCHEMA.items():
        if key in specs['item_schema']:
            return section
    raise KeyError(f'Invalid settings key: {key}, must be one of {SETTINGS_KEYS}')


def coerce_value(key: str, value: Any) -> Any:
    """Convert ``value`` to the schema type of ``key``.

    Strings are parsed the way environment variables are written: booleans accept
    ``yes/no``, ``true/false``, ``1/0`` and ``on/off``, log levels accept level names.

    Args:
        key: Settings key.
        value: Raw value.

    Returns:
        The converted value.

    Raises:
        status.SettingsInvalidException: If the value cannot be converted.
    """
    _type = SETTINGS_SCHEMA[section_of(key)]['item_schema'][key]['type']
    if isinstance(value, _type) and not (_type is int and isinstance(value, bool)):
        return value

    if _type == bool:
        if isinstance(value, str):
            if value.strip().lower() in TRUE_STRINGS:
                return True
            if value.strip().lower() in FALSE_STRINGS:
                return False
        raise status.SettingsInvalidException(f'Cannot convert "{value}" to bool for "{key}".')

    if _type == int:
        if isinstance(value, str):
            v = value.strip()
            if v.lstrip('-').isdigit():
                return int(v)
            level = logging.getLevelName(v.upper())
            if key == 'log_level' and isinstance(level, int):
                return level
        raise status.SettingsInvalidException(f'Cannot convert "{value}" to int for "{key}".')

    if _type == str:
        return str(value)

    raise status.SettingsInvalidException(f'Cannot convert "{value}" to {_type} for "{key}".')


def _validate_section(section_name: str, section: Mapping[str, Any], item_schema: Dict[str, Any]) -> None:
    """Validate a single settings section.

    Args:
        section_name: Name of the section, used in messages.
        section: Mapping of keys to values.
        item_schema: Dict describing required fields, types and allowed values.

    Raises:
        status.SettingsInvalidException: If a key is unknown, missing, mistyped or not allowed.
    """
    logging.debug(f'Validating "{section_name}" section.')
    if not isinstance(section, dict):
        raise status.SettingsInvalidException(f'"{section_name}" must be a dict.')

    unknown = set(section) - set(item_schema)
    if unknown:
        raise status.SettingsInvalidException(f'Unknown keys in "{section_name}": {sorted(unknown)}.')

    for field, field_specs in item_schema.items():
        if field_specs['required'] and field not in section:
            raise status.SettingsInvalidException(f'"{section_name}" missing "{field}".')
        if field not in section:
            continue

        v = section[field]
        if not isinstance(v, field_specs['type']) or (field_specs['type'] is int and isinstance(v, bool)):
            raise status.SettingsInvalidException(
                f'"{section_name}" field "{field}" must be {field_specs["type"]}, got {type(v)}.'
            )
        if 'allowed_values' in field_specs and v not in field_specs['allowed_values']:
            raise status.SettingsInvalidException(
                f'"{section_name}" field "{field}" must be one of {field_specs["allowed_values"]}, got {v!r}.'
            )
        if field == 'datetime_format' and not v:
            raise status.SettingsInvalidException('"datetime_format" must not be empty.')


def validate_settings_data(data: Dict[str, Any]) -> None:
    """Validate a full settings dictionary against :data:`SETTINGS_SCHEMA`.

    Raises:
        status.SettingsInvalidException: If a section is missing or fails validation.
    """
    if not isinstance(data, dict):
        raise status.SettingsInvalidException('Settings must be a dict.')

    for section_name, specs in SETTINGS_SCHEMA.items():
        if specs['required'] and section_name not in data:
            raise status.SettingsInvalidException(f'Missing required section: {section_name}')
        _validate_section(section_name, data[section_name], specs['item_schema'])

    logging.debug('Settings data is valid.')


class SettingsAPI:
    """
    Provides an interface to get/set/revert settings sections and individual keys.

    Args:
        environ: Mapping to read ``TRANSACTIONLEDGER_*`` overrides from. Defaults to :data:`os.environ`.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._signals_blocked: bool = False

        self.settings_data: Dict[str, Dict[str, Any]] = {}
        self.init_data()

    def __getitem__(self, key: str) -> Any:
        """Retrieve a settings value using dictionary-style access.

        Raises:
            KeyError: If key is not in SETTINGS_KEYS.
        """
        return self.settings_data[section_of(key)][key]

    def __setitem__(self, key: str, value: Any) -> None:
        """Assign a settings value using dictionary-style access.

        The value is coerced to the schema type and the owning section is validated
        before it is committed.

        Raises:
            KeyError: If key is not in SETTINGS_KEYS.
            status.SettingsInvalidException: If the value is invalid.
        """
        section_name = section_of(key)
        value = coerce_value(key, value)

        section = self.settings_data[section_name].copy()
        section[key] = value
        _validate_section(section_name, section, SETTINGS_SCHEMA[section_name]['item_schema'])
        self.settings_data[section_name] = section

        if key == 'log_level':
            self.apply_log_level()

        from ..core.actions import signals
        if self._signals_blocked or signals.signalsBlocked():
            return

        signals.configChanged.emit(key, value)

    def block_signals(self, v: bool) -> None:
        """Enable or disable emission of configuration change signals."""
        self._signals_blocked = v

    @QtCore.Slot()
    def init_data(self) -> None:
        """Load defaults, apply environment overrides and validate the result."""
        data = default_settings()
        for key in SETTINGS_KEYS:
            env_key = f'{ENV_PREFIX}{key.upper()}'
            if env_key not in self._environ:
                continue
            logging.debug(f'Applying environment override {env_key}')
            data[section_of(key)][key] = coerce_value(key, self._environ[env_key])

        validate_settings_data(data)
        self.settings_data = data

    def apply_log_level(self) -> None:
        """Apply the configured log level to the root logger."""
        from ..log import log
        log.set_logging_level(self['log_level'])

    def get_section(self, section_name: str) -> Dict[str, Any]:
        """Retrieve a copy of a settings section.

        Raises:
            KeyError: If section_name is not a known section.
        """
        return self.settings_data[section_name].copy()

    def set_section(self, section_name: str, new_data: Dict[str, Any]) -> None:
        """Replace a settings section after validating it.

        Raises:
            ValueError: If section_name is unrecognized.
            status.SettingsInvalidException: If the data fails validation.
        """
        if section_name not in SETTINGS_SCHEMA:
            raise ValueError(f'Unknown section: {section_name}')

        _validate_section(section_name, new_data, SETTINGS_SCHEMA[section_name]['item_schema'])
        self.settings_data[section_name] = copy.deepcopy(new_data)

        if section_name == 'logging':
            self.apply_log_level()

        from ..core.actions import signals
        if self._signals_blocked or signals.signalsBlocked():
            return

        for k, v in new_data.items():
            signals.configChanged.emit(k, v)

    def revert(self) -> None:
        """Restore every section to its schema defaults."""
        logging.debug('Reverting settings to defaults.')
        for section_name, section in default_settings().items():
            self.set_section(section_name, section)


settings = SettingsAPI()
