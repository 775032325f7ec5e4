"""
Platform configuration.

Configuration is a plain dict; a JSON file may override any of the keys of
``DEFAULT_CONFIG``.
"""

import copy
import json
from typing import Any, Dict, Optional

from .core.exceptions import ConfigurationError

DEFAULT_CONFIG: Dict[str, Any] = {
    'database_type': 'sqlite',
    'database_config': {'database_path': 'coursefiles.db'},
    'wwwroot': 'http://localhost',
    'site_id': 1,
    'strings': {},
    'log_level': 'INFO',
    'log_file': None,
}

_EXPECTED_TYPES = {
    'database_type': str,
    'database_config': dict,
    'wwwroot': str,
    'site_id': int,
    'strings': dict,
    'log_level': str,
    'log_file': (str, type(None)),
}


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check the types of known keys; unknown keys are kept as they are."""
    for key, expected in _EXPECTED_TYPES.items():
        if key in config and not isinstance(config[key], expected):
            raise ConfigurationError(f"Invalid type for '{key}'", error_code="invalid_config",
                                     details={'key': key, 'value': config[key]})
    if isinstance(config.get('site_id'), bool):
        raise ConfigurationError("Invalid type for 'site_id'", error_code="invalid_config",
                                 details={'key': 'site_id', 'value': config['site_id']})
    return config


def merge_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Defaults with ``overrides`` applied; nested dicts are merged one level deep."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return validate_config(config)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON configuration file over the defaults."""
    if not path:
        return merge_config()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}", error_code="config_unreadable")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}", error_code="config_invalid_json")
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Configuration in {path} must be a JSON object", error_code="invalid_config")
    return merge_config(overrides)
