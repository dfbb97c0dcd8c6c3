"""Configuration loader with YAML parsing and environment variable substitution."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from ..errors import ConfigError
from .models import CheckConfig


# Optional top-level key grouping the check settings in a shared file
SECTION_KEY = "nginx_check"


class ConfigLoader:
    """Load and validate check configuration."""

    @staticmethod
    def read_file(config_path: str) -> Dict[str, Any]:
        """
        Read the raw settings mapping from a YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Dict[str, Any]: Settings with ${VAR} placeholders substituted

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If YAML parsing fails or the document is not a mapping
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ConfigError(f"configuration in {config_path} must be a mapping")

        if isinstance(raw_config.get(SECTION_KEY), dict):
            raw_config = raw_config[SECTION_KEY]

        # Keys may be written with dashes, as on the command line
        raw_config = {str(k).replace('-', '_'): v for k, v in raw_config.items()}

        return ConfigLoader._substitute_env_vars(raw_config)

    @staticmethod
    def build(values: Dict[str, Any]) -> CheckConfig:
        """
        Validate settings into a CheckConfig.

        Raises:
            ConfigError: If validation fails
        """
        try:
            return CheckConfig(**values)
        except ValidationError as e:
            raise ConfigError(f"invalid configuration: {e}") from e

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
