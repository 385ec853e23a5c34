"""
Configuration validation utilities.

Reads environment values and converts them with explicit error messages.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value is not None and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default.",
            UserWarning
        )
        return default

    return value


def parse_float(value: str, key: str) -> float:
    """
    Parse a float setting.

    :raises: ConfigurationError if value is not a number
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from None


def parse_int(value: str, key: str) -> int:
    """
    Parse an integer setting.

    :raises: ConfigurationError if value is not an integer
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None


def parse_bool(value: str, key: str) -> bool:
    """
    Parse a boolean setting (true/false, yes/no, on/off, 1/0).

    :raises: ConfigurationError for anything else
    """
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{key} must be true or false, got {value!r}")


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "changeme",
        "replace",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)
