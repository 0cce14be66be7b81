"""Configuration loader for twitch-auth

Loads configuration from multiple sources with the following priority:
1. Environment variables (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def _coerce(env_var: str, raw: str, default: Any) -> Any:
    """Convert a raw environment string to the type of ``default``"""
    # bool before int: bool is an int subclass
    if isinstance(default, bool):
        return raw.strip().lower() in _TRUE_VALUES
    if isinstance(default, (int, float)):
        try:
            return type(default)(raw)
        except ValueError:
            logger.warning(f"Failed to parse {env_var}={raw} as {type(default).__name__}, using default: {default}")
            return default
    return raw


class ConfigLoader:
    """Reads settings from the environment after loading an optional .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self.env_loaded = self._load_env_file()

    def _load_env_file(self) -> bool:
        if not self.env_path.exists():
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")
            return False

        # Existing environment variables are not overridden
        load_dotenv(dotenv_path=self.env_path, override=False)
        logger.debug(f"Loaded environment variables from {self.env_path}")
        return True

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        Args:
            env_var: Environment variable name to check
            default: Default value, also decides the returned type

        Returns:
            The configuration value from environment or default
        """
        raw = os.getenv(env_var)
        if raw is not None:
            return _coerce(env_var, raw, default)

        if isinstance(default, str) and default.startswith("~/"):
            return str(Path(default).expanduser())
        return default


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
