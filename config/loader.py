"""Configuration loader for the Minecraft login client

Values are looked up in the process environment first, then in an env file,
then fall back to the default passed by ``settings.py``. The env file is
``.env`` in the working directory unless ``MINECRAFT_LOGIN_ENV_FILE`` names
another one.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE_VAR = "MINECRAFT_LOGIN_ENV_FILE"

_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


def _coerce(raw: str, default: Any) -> Any:
    """Convert a raw environment string to the type of ``default``

    Raises:
        ValueError: If ``raw`` is not a valid value of that type
    """
    # bool before int: bool is a subclass of int
    if isinstance(default, bool):
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


class ConfigLoader:
    """Environment and env-file backed settings lookup

    Attributes:
        env_path: Env file that was looked for
        loaded_from: Same path if the file existed and was loaded, else None
    """

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Env file to load. Defaults to $MINECRAFT_LOGIN_ENV_FILE,
                then '.env' in the current directory.
        """
        self.env_path = Path(env_path or os.getenv(ENV_FILE_VAR) or ".env")
        self.loaded_from: Optional[Path] = None
        self._load_env_file()

    def _load_env_file(self):
        if not self.env_path.is_file():
            logger.debug(f"No env file at {self.env_path}, using environment and defaults")
            return
        # override=False keeps real environment variables ahead of the file
        load_dotenv(dotenv_path=self.env_path, override=False)
        self.loaded_from = self.env_path
        logger.debug(f"Loaded settings from {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a setting, typed like its default

        Args:
            env_var: Environment variable name to check
            default: Value used when the variable is unset, empty or unparsable

        Returns:
            The coerced environment value, or ``default``
        """
        raw = os.getenv(env_var)
        if raw is None or raw.strip() == "":
            return default

        try:
            return _coerce(raw, default)
        except ValueError:
            logger.warning(
                f"Ignoring {env_var}={raw!r}: expected {type(default).__name__}, using default {default!r}"
            )
            return default


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
