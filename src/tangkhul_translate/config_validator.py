"""
Configuration validation utilities.

Small typed wrappers over environment variables that fail with a readable
ConfigurationError instead of a bare ValueError deep inside the engine.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)
    
    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default
    
    return value


def get_bool_env(key: str, default: bool) -> bool:
    """Read a boolean flag ("true"/"false", "1"/"0", "yes"/"no")."""
    value = get_optional_env(key)
    if value is None or value == "":
        return default

    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False

    raise ConfigurationError(f"{key} must be a boolean (true/false), got '{value}'")


def get_float_env(
    key: str,
    default: float,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    """
    Read a float with optional inclusive bounds.
    
    :raises: ConfigurationError if not a number or out of range
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default

    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{value}'")

    return validate_range(number, key, min_value, max_value)


def get_int_env(
    key: str,
    default: Optional[int],
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> Optional[int]:
    """
    Read an integer with optional inclusive bounds.
    
    :raises: ConfigurationError if not an integer or out of range
    """
    value = get_optional_env(key)
    if value is None or value == "":
        return default

    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'")

    return validate_range(number, key, min_value, max_value)


def validate_range(value, name: str, min_value=None, max_value=None):
    """
    Check that a numeric setting lies within inclusive bounds.
    
    :param value: Value to check
    :param name: Setting name (for error messages)
    :return: The value unchanged
    :raises: ConfigurationError if out of range
    """
    if min_value is not None and value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}, got {value}")
    
    if max_value is not None and value > max_value:
        raise ConfigurationError(f"{name} must be <= {max_value}, got {value}")
    
    return value


def validate_choice(value: str, name: str, choices) -> str:
    """
    Check that a string setting is one of the allowed values.
    
    :raises: ConfigurationError if not allowed
    """
    if value not in choices:
        raise ConfigurationError(
            f"{name} must be one of: {sorted(choices)}, got '{value}'"
        )
    return value


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False
    
    placeholder_patterns = [
        "your_",
        "placeholder",
        "changeme",
        "replace",
        "todo",
    ]
    
    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)
