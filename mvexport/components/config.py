"""
Configuration management for mvexport.

This module provides functionality for managing configuration,
including loading from environment variables, files and default values.
"""

import os
import json
import logging
import threading
from typing import Dict, List, Optional, Any
from copy import deepcopy
import yaml

# Set up logging
logger = logging.getLogger(__name__)


def to_bool(value: Any) -> Optional[bool]:
    """
    Convert a value to a boolean.

    Args:
        value: Value to convert

    Returns:
        Boolean value, or None if conversion failed
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, (int, float)):
        return bool(value)

    if isinstance(value, str):
        value = value.lower().strip()
        if value in ('true', 'yes', 'y', '1', 't'):
            return True
        if value in ('false', 'no', 'n', '0', 'f'):
            return False

    return None


def to_list(value: Any, separator: str = ',') -> Optional[List[str]]:
    """
    Convert a value to a list.

    Args:
        value: Value to convert
        separator: Separator for string values

    Returns:
        List value, or None if conversion failed
    """
    if value is None:
        return None

    if isinstance(value, (list, tuple)):
        return list(value)

    if isinstance(value, str):
        return [item.strip() for item in value.split(separator) if item.strip()]

    return None


class Config:
    """
    Configuration for mvexport.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            overrides: Optional configuration overrides
        """
        self._lock = threading.RLock()
        self._config = {}
        self._initialized = False

        self.load_config(overrides)

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> None:
        """
        Load configuration from all sources.

        Later sources win: defaults, environment variables, overrides.

        Args:
            overrides: Optional configuration overrides
        """
        with self._lock:
            config = self._get_defaults()
            config = self._apply_env_vars(config)
            if overrides:
                config = self._apply_overrides(config, overrides)
            config = self._apply_inferred_values(config)

            self._config = config
            self._initialized = True

            logger.debug("Configuration loaded")

    def _get_defaults(self) -> Dict[str, Any]:
        """
        Get default configuration values.

        Returns:
            Default configuration
        """
        return {
            # Export
            'export': {
                'required-columns': ['key', 'lat', 'lon'],
                'sort-keys': False      # sort merged rows by key
            },

            # Output file
            'output': {
                'directory': '.',
                'prefix': 'mvmapper_data',
                'timestamp-format': '%Y-%m-%d_%H-%M-%S-%f'
            },

            # Logging
            'logging': {
                'level': 'warning'
            }
        }

    def _apply_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variables to configuration.

        Args:
            config: Current configuration

        Returns:
            Updated configuration
        """
        config = deepcopy(config)

        # Export
        if 'MVEXPORT_REQUIRED_COLUMNS' in os.environ:
            config['export']['required-columns'] = to_list(os.environ['MVEXPORT_REQUIRED_COLUMNS'])
        sort_keys = to_bool(os.environ.get('MVEXPORT_SORT_KEYS'))
        if sort_keys is not None:
            config['export']['sort-keys'] = sort_keys

        # Output
        config['output']['directory'] = os.environ.get('MVEXPORT_OUTPUT_DIR', config['output']['directory'])
        config['output']['prefix'] = os.environ.get('MVEXPORT_OUTPUT_PREFIX', config['output']['prefix'])
        config['output']['timestamp-format'] = os.environ.get(
            'MVEXPORT_TIMESTAMP_FORMAT', config['output']['timestamp-format'])

        # Logging
        config['logging']['level'] = os.environ.get('LOG_LEVEL', config['logging']['level']).lower()

        return config

    def _apply_overrides(self, config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply configuration overrides.

        Args:
            config: Current configuration
            overrides: Configuration overrides

        Returns:
            Updated configuration
        """
        config = deepcopy(config)

        def deep_update(d, u):
            for k, v in u.items():
                if isinstance(v, dict) and k in d and isinstance(d[k], dict):
                    d[k] = deep_update(d[k], v)
                else:
                    d[k] = v
            return d

        return deep_update(config, deepcopy(overrides))

    def _apply_inferred_values(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply inferred configuration values.

        Args:
            config: Current configuration

        Returns:
            Updated configuration
        """
        config = deepcopy(config)

        config['export']['required-columns'] = to_list(config['export']['required-columns']) or []
        config['export']['sort-keys'] = bool(to_bool(config['export']['sort-keys']))
        config['logging']['level'] = str(config['logging']['level']).lower()

        return config

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            path: Configuration path (dot-separated)
            default: Default value if not found

        Returns:
            Configuration value, or default if not found
        """
        if not self._initialized:
            self.load_config()

        value = self._config
        for component in path.split('.'):
            if isinstance(value, dict) and component in value:
                value = value[component]
            else:
                return default

        return value


def read_config_file(filepath: str) -> Dict[str, Any]:
    """
    Read a JSON or YAML file into a dictionary.

    Args:
        filepath: Path to the file

    Returns:
        Parsed content
    """
    filepath = str(filepath)
    if filepath.endswith('.json'):
        with open(filepath, 'r') as f:
            return json.load(f)
    elif filepath.endswith('.yaml') or filepath.endswith('.yml'):
        with open(filepath, 'r') as f:
            return yaml.safe_load(f) or {}
    else:
        raise ValueError(f"Unsupported file format: {filepath}")


class ConfigManager:
    """
    Singleton manager for configuration.
    """

    _instance = None
    _lock = threading.RLock()

    @classmethod
    def get_config(cls, overrides: Optional[Dict[str, Any]] = None) -> Config:
        """
        Get the configuration instance.

        Args:
            overrides: Optional configuration overrides

        Returns:
            Config instance
        """
        with cls._lock:
            if cls._instance is None:
                cls._instance = Config(overrides)
            elif overrides:
                cls._instance.load_config(overrides)

            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the configuration instance."""
        with cls._lock:
            cls._instance = None
