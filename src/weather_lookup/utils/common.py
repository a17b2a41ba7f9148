import os
import re
from typing import List, Optional

from src.weather_lookup.exceptions import ConfigError

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def get_env_var(name: str, default: Optional[str] = None) -> str:
    """Return the value of an environment variable.

    This helper reads an environment variable and falls back to `default`
    when it is unset or empty. Without a default the variable is treated as
    required configuration.

    Args:
        name (str): Name of the environment variable to read.
        default (Optional[str]): Value used when the variable is not set.

    Returns:
        str: The non-empty value of the variable, or `default`.

    Raises:
        ConfigError: If the variable is not set and no default was given.
    """
    value = os.environ.get(name)
    if not value:
        if default is None:
            raise ConfigError(f"{name} environment variable not set")
        return default
    return value


def split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def sanitize_filename_part(value: str) -> str:
    """Replace every non-alphanumeric character with a dash."""
    return _NON_ALNUM.sub("-", value)
