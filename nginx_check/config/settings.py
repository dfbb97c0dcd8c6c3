"""Environment settings for the NGINX status check."""

import os
from typing import Dict, Optional


# Config field -> environment variable
ENV_VARS = {
    "hostname": "NGINX_CHECK_HOSTNAME",
    "port": "NGINX_CHECK_PORT",
    "status_path": "NGINX_CHECK_STATUS_PATH",
    "url": "NGINX_CHECK_URL",
    "timeout": "NGINX_CHECK_TIMEOUT",
    "log_level": "LOG_LEVEL",
}

CONFIG_FILE_VAR = "NGINX_CHECK_CONFIG"


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, empty if unset
        """
        value = os.getenv(key, default)
        return value or ""

    @staticmethod
    def overrides() -> Dict[str, str]:
        """
        Collect config values set through NGINX_CHECK_* variables.

        Unset and empty variables are left out so they do not mask values
        from the config file.

        Returns:
            Dict[str, str]: Config field -> raw string value
        """
        return {
            field: Settings.get(var)
            for field, var in ENV_VARS.items()
            if Settings.get(var)
        }

    @staticmethod
    def config_file() -> Optional[str]:
        """Path of the config file named by NGINX_CHECK_CONFIG, if any."""
        return Settings.get(CONFIG_FILE_VAR) or None
