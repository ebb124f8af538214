"""
Configuration management for the check-in reconciler
"""
import os
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from checkin_etl.common.datetime_utils import parse_time, parse_weekdays
from checkin_etl.common.exceptions import ConfigurationError
from checkin_etl.common.models import GenerationPolicy, Quota


DEFAULT_SETTINGS_FILE = "settings.yaml"


class Config:
    """Configuration manager"""

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            config_file: Path to YAML configuration file
            env_file: Path to .env file
        """
        # Load environment variables
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()  # Load from .env in current directory

        self._config = {}
        if config_file:
            self._load_yaml(config_file)

    def _load_yaml(self, config_file: str) -> None:
        """Load configuration from YAML file"""
        try:
            with open(config_file, 'r') as f:
                self._config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigurationError(f"Config file not found: {config_file}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping at the top level: {config_file}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Supports dot notation for nested values (e.g., 'entries_per_visitor.Jane Doe')
        Checks environment variables first, then YAML config

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        env_key = key.upper().replace('.', '_')
        env_value = os.getenv(env_key)
        if env_value is not None:
            return env_value

        keys = key.split('.')
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get integer configuration value"""
        value = self.get(key, default)
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ConfigurationError(f"'{key}' must be an integer, got {value!r}")

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean configuration value"""
        value = self.get(key, default)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('true', '1', 'yes', 'on'):
                return True
            if lowered in ('false', '0', 'no', 'off', ''):
                return False
        raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")

    def get_list(self, key: str) -> List[str]:
        """Get a list value; comma separated strings (e.g. from the environment) are split"""
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(',') if part.strip()]
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        raise ConfigurationError(f"'{key}' must be a list, got {value!r}")

    def get_time(self, key: str, default: str) -> time:
        """Get a time-of-day configuration value"""
        value = self.get(key, default)
        try:
            return parse_time(value)
        except ValueError as e:
            raise ConfigurationError(f"'{key}': {e}")


@dataclass
class Settings:
    """Validated settings for one run"""
    input_folder: str
    output_folder: str
    output_filename_suffix: str
    filename_format_regex: str
    date_format: str
    policy: GenerationPolicy
    default_quota: Quota
    entries_per_visitor: Dict[str, Quota] = field(default_factory=dict)
    ask_for_missing_entries: bool = False


def _quota(min_value: Any, max_value: Any, where: str) -> Quota:
    try:
        return Quota(int(min_value), int(max_value))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid visit quota for {where}: {e}")


def _parse_entries(raw: Any) -> Dict[str, Quota]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError("'entries_per_visitor' must be a mapping of visitor name to {min, max}")

    entries = {}
    for name, spec in raw.items():
        if not isinstance(spec, dict) or 'min' not in spec or 'max' not in spec:
            raise ConfigurationError(
                f"Entry for '{name}' must have 'min' and 'max' keys. Got: {spec}"
            )
        entries[str(name)] = _quota(spec['min'], spec['max'], f"'{name}'")
    return entries


def load_settings(config: Config) -> Settings:
    """
    Build validated run settings from a Config

    The date window of the generation policy is a placeholder; the batch
    driver rebinds it to each input file's month.

    Raises:
        ConfigurationError: If any value is missing or invalid
    """
    try:
        weekdays = parse_weekdays(config.get_list('valid_days'))
    except ValueError as e:
        raise ConfigurationError(f"'valid_days': {e}")

    min_time = config.get_time('min_time', "09:00")
    max_time = config.get_time('max_time', "17:00")

    try:
        policy = GenerationPolicy(
            valid_window=(date.min, date.min),
            time_window=(min_time, max_time),
            allowed_weekdays=weekdays,
            can_repeat_days=config.get_bool('can_repeat_days', False),
            max_retries=config.get_int('max_retries', 1000),
        )
    except ValueError as e:
        raise ConfigurationError(str(e))

    default_quota = _quota(
        config.get('unknown_visitor_min_entries', 1),
        config.get('unknown_visitor_max_entries', 1),
        "unknown visitors",
    )

    return Settings(
        input_folder=str(config.get('input_folder', 'input')),
        output_folder=str(config.get('output_folder', 'output')),
        output_filename_suffix=str(config.get('output_filename_suffix', '_processed')),
        filename_format_regex=str(
            config.get('filename_format_regex', r'^(?P<date>\d{4}-\d{2}).*\.csv$')
        ),
        date_format=str(config.get('date_format', '%Y-%m')),
        policy=policy,
        default_quota=default_quota,
        entries_per_visitor=_parse_entries(config.get('entries_per_visitor')),
        ask_for_missing_entries=config.get_bool('ask_for_missing_entries', False),
    )
