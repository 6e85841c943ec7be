"""
Configuration Management for the Medical Regression Lab

This module provides centralized configuration for the application, including
synthetic-data defaults, chart settings, logging configuration and debug flags.

Usage:
    from config import CONFIG

    # Access config
    print(CONFIG.get('analysis.noise_scale'))

    # Update config (runtime)
    CONFIG.update('analysis.default_seed', 42)

    # Get with default
    value = CONFIG.get('some.nested.key', default='default_value')
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Optional, Dict
import warnings


class ConfigManager:
    """
    Centralized configuration management with hierarchical key access.

    Supports:
    - Nested dictionary access with dot notation
    - Default values and fallbacks
    - Environment variable overrides (REGLAB_ prefix)
    - Config validation
    - Runtime updates
    """

    def __init__(self, config_dict: Optional[Dict] = None):
        """
        Create a ConfigManager populated with the given configuration or the module defaults and apply environment variable overrides.

        Parameters:
            config_dict (dict | None): Optional initial configuration dictionary to use instead of the built-in defaults. If None, the manager is initialized from the default configuration.
        """
        self._config = config_dict or self._get_default_config()
        self._env_prefix = "REGLAB_"
        self._load_env_overrides()

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """
        Provide the default nested configuration used by the application.

        Returns:
            Dict[str, Any]: A dictionary with the default configuration sections
            ('analysis', 'ui', 'logging', 'debug') and their settings.
        """
        return {

            # ========== ANALYSIS SETTINGS ==========
            "analysis": {
                # Synthetic data
                "default_seed": None,  # None = fresh entropy on every render
                "noise_scale": 20.0,  # Jitter amplitude at noise level 1.0
                "default_noise_level": 1.0,
                "noise_level_max": 2.0,

                # Poisson sampler
                "poisson_warn_lambda": 30.0,  # Knuth's method degrades above this

                # Charts derived from the known signal
                "boundary_points": 200,  # Resolution of the logistic p=0.5 line
                "expected_curve_points": 100,
            },

            # ========== UI & DISPLAY SETTINGS ==========
            "ui": {
                "page_title": "Medical Regression Lab",
                "plot_height": 450,
                "point_size": 9,
                "decimal_places": 2,
            },

            # ========== LOGGING SETTINGS ==========
            "logging": {
                "enabled": True,
                "level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
                "format": "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
                "date_format": "%Y-%m-%d %H:%M:%S",

                # File Logging
                "file_enabled": False,
                "log_dir": "logs",
                "log_file": "app.log",
                "max_log_size": 10485760,  # 10MB in bytes
                "backup_count": 5,

                # Console Logging
                "console_enabled": True,
                "console_level": "INFO",

                # Third-party loggers (shiny, uvicorn)
                "framework_level": "WARNING",

                # What to Log
                "log_data_operations": True,
                "log_analysis_operations": True,
                "log_performance": True,
            },

            # ========== DEVELOPER SETTINGS ==========
            "debug": {
                "enabled": False,
                "show_timings": False,
            },
        }

    def _load_env_overrides(self) -> None:
        """
        Apply configuration overrides from environment variables that start with the REGLAB_ prefix.

        Environment variables must follow the form REGLAB_<SECTION>_<KEY>=value; the portion after the prefix is lowercased and split on underscores, where the first segment is the section and the remaining segments are joined with underscores to form the key (e.g., REGLAB_ANALYSIS_DEFAULT_SEED -> analysis.default_seed). The raw string is coerced to the type of the existing default. Overrides that fail are skipped with a warning.
        """
        for key, value in os.environ.items():
            if key.startswith(self._env_prefix):
                # REGLAB_LOGGING_LEVEL -> ['logging', 'level']
                parts = key[len(self._env_prefix):].lower().split('_')

                if len(parts) < 2:
                    continue

                section = parts[0]
                key_name = '_'.join(parts[1:])
                path = f"{section}.{key_name}"

                try:
                    self.update(path, self._coerce(value, self.get(path)))
                except (KeyError, ValueError, TypeError) as e:
                    warnings.warn(f"Failed to set env override {key}={value}: {e}", stacklevel=2)

    @staticmethod
    def _coerce(raw: str, current: Any) -> Any:
        """
        Convert an environment string to the type of the value it replaces.

        Parameters:
            raw (str): Raw environment variable value.
            current (Any): Existing configuration value used as the type template; None means "int if it parses, else keep the string".

        Returns:
            The converted value.

        Raises:
            ValueError: If the string cannot be converted to the template type.
        """
        if isinstance(current, bool):
            lowered = raw.strip().lower()
            if lowered in ('1', 'true', 'yes', 'on'):
                return True
            if lowered in ('0', 'false', 'no', 'off'):
                return False
            raise ValueError(f"'{raw}' is not a boolean")
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
        if current is None:
            if raw.strip().lower() in ('', 'none', 'null'):
                return None
            try:
                return int(raw)
            except ValueError:
                return raw
        return raw

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieve a configuration value using a dot-separated key path.

        Parameters:
            key (str): Dot-separated path to a nested configuration value (e.g., "logging.level").
            default: Value to return if the specified path does not exist.

        Returns:
            The configuration value at the given path, or `default` if the path is not found.
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def update(self, key: str, value: Any) -> None:
        """
        Set an existing configuration value identified by a dot-separated path.

        Parameters:
            key (str): Dot-separated path to an existing configuration entry (e.g., "logging.level").
            value (Any): Value to assign to the configuration entry.

        Raises:
            KeyError: If any intermediate path segment or the final key does not exist in the configuration.
        """
        keys = key.split('.')
        config = self._config

        # Navigate to parent key
        for k in keys[:-1]:
            if not isinstance(config, dict) or k not in config:
                raise KeyError(f"Config path '{'.'.join(keys[:-1])}' does not exist")
            config = config[k]

        final_key = keys[-1]
        if final_key not in config:
            raise KeyError(f"Config key '{key}' does not exist")

        config[final_key] = value

    def set_nested(self, key: str, value: Any, create: bool = False) -> None:
        """
        Set a value using a dot-separated path, optionally creating missing intermediate dictionaries.

        Parameters:
            key (str): Dot-separated path to the configuration key (e.g., "section.sub.key").
            value (Any): Value to assign to the final key.
            create (bool): If True, create missing intermediate dictionaries; if False a missing segment raises KeyError.
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                if create:
                    config[k] = {}
                else:
                    raise KeyError(f"Config path '{k}' does not exist")
            config = config[k]

        config[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Return a deep copy of a top-level configuration section.

        Parameters:
            section (str): Top-level section name (e.g., "analysis").

        Returns:
            dict or Any: A deep copy of the section dictionary if the section is a dict; otherwise the section value as-is.
        """
        result = self.get(section, {})
        return copy.deepcopy(result) if isinstance(result, dict) else result

    def to_dict(self) -> Dict[str, Any]:
        """Get a deep copy of the entire configuration dictionary."""
        return copy.deepcopy(self._config)

    def to_json(self, filepath: Optional[str] = None, pretty: bool = True) -> str:
        """
        Serialize the current configuration to a JSON string.

        Parameters:
            filepath (str | None): Optional path to write the JSON output to; the file is overwritten.
            pretty (bool): Indent the output when True.

        Returns:
            str: The configuration serialized as JSON.
        """
        json_str = json.dumps(self._config, indent=2 if pretty else None)

        if filepath:
            Path(filepath).write_text(json_str)

        return json_str

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate key configuration constraints and collect any violations.

        Checks:
        - `analysis.noise_scale` is a positive number.
        - `analysis.default_noise_level` lies within [0, `analysis.noise_level_max`].
        - `analysis.poisson_warn_lambda` is a positive number.
        - `analysis.default_seed` is None or a non-negative integer.
        - `logging.level` is a standard level name.

        Returns:
            tuple: (is_valid, errors) where `errors` is a list of human-readable messages.
        """
        errors = []

        scale = self.get('analysis.noise_scale')
        if not isinstance(scale, (int, float)) or scale <= 0:
            errors.append("analysis.noise_scale must be > 0")

        level = self.get('analysis.default_noise_level')
        level_max = self.get('analysis.noise_level_max')
        if (not isinstance(level, (int, float)) or not isinstance(level_max, (int, float))
                or not (0 <= level <= level_max)):
            errors.append("analysis.default_noise_level must be between 0 and noise_level_max")

        warn_lambda = self.get('analysis.poisson_warn_lambda')
        if not isinstance(warn_lambda, (int, float)) or warn_lambda <= 0:
            errors.append("analysis.poisson_warn_lambda must be > 0")

        seed = self.get('analysis.default_seed')
        if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
            errors.append("analysis.default_seed must be None or a non-negative integer")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.get('logging.level') not in valid_levels:
            errors.append(f"logging.level must be one of {valid_levels}")

        return len(errors) == 0, errors

    def __repr__(self) -> str:
        return f"ConfigManager({len(self._config)} sections)"


# Global config instance
CONFIG = ConfigManager()
