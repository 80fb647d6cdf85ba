"""YAML configuration loading and validation.

Configuration file structure (all keys optional):
    confluence:
      server: "https://wiki.example.com"
      user: "someone@example.com"
      token: "..."
      default_space: "DOCS"
      cloud: false
      timeout: 30
      max_retries: 3
    defaults:
      limit: 25
      children_limit: 50

Credentials from the environment (see confluence_client.auth) take
precedence over the values stored here.
"""

import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .models import AppConfig


class ConfigLoader:
    """Loads AppConfig from a YAML file."""

    DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "atl", "config.yaml")

    @classmethod
    def default_path(cls) -> str:
        return os.path.expanduser(cls.DEFAULT_CONFIG_PATH)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> AppConfig:
        """Load and parse configuration.

        A missing file at the default location yields default settings; a
        missing file that was asked for explicitly is an error.

        Args:
            config_path: Path to the YAML file, or None for the default path

        Returns:
            AppConfig with parsed configuration

        Raises:
            ConfigError: If the file cannot be read or is malformed
        """
        explicit = config_path is not None
        path = os.path.expanduser(config_path) if explicit else cls.default_path()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            if explicit:
                raise ConfigError(f"Configuration file not found: {path}")
            return AppConfig()
        except PermissionError:
            raise ConfigError(f"Permission denied reading {path}")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}")

        if not content.strip():
            return AppConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return AppConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> AppConfig:
        confluence = cls._section(config_dict, 'confluence')
        defaults = cls._section(config_dict, 'defaults')
        base = AppConfig()

        return AppConfig(
            confluence_url=cls._optional_str(confluence, 'server'),
            user=cls._optional_str(confluence, 'user'),
            api_token=cls._optional_str(confluence, 'token'),
            default_space=cls._optional_str(confluence, 'default_space'),
            cloud=cls._bool(confluence, 'cloud', base.cloud),
            timeout=cls._positive_int(confluence, 'timeout', base.timeout),
            max_retries=cls._positive_int(confluence, 'max_retries', base.max_retries, allow_zero=True),
            limit=cls._positive_int(defaults, 'limit', base.limit),
            children_limit=cls._positive_int(defaults, 'children_limit', base.children_limit),
        )

    @staticmethod
    def _section(config_dict: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config_dict.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"must be a dictionary, got {type(section).__name__}", name)
        return section

    @staticmethod
    def _optional_str(section: Dict[str, Any], key: str) -> Optional[str]:
        value = section.get(key)
        if value is None:
            return None
        if not isinstance(value, (str, int)):
            raise ConfigError(f"must be a string, got {type(value).__name__}", key)
        value = str(value).strip()
        return value or None

    @staticmethod
    def _bool(section: Dict[str, Any], key: str, default: bool) -> bool:
        value = section.get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(f"must be a boolean, got {type(value).__name__}", key)
        return value

    @staticmethod
    def _positive_int(section: Dict[str, Any], key: str, default: int, allow_zero: bool = False) -> int:
        value = section.get(key, default)
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"must be an integer, got {type(value).__name__}", key)
        if value < 0 or (value == 0 and not allow_zero):
            raise ConfigError(f"must be positive, got {value}", key)
        return value
