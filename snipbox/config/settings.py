"""Configuration utilities for snipbox."""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from snipbox.exceptions import ConfigurationError

from .constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    ENV_VAR_DEFINITIONS,
    SNIPBOX_CONFIG_DIR,
    STORE_FILENAME,
)


def get_config_dir() -> Path:
    """Get the config directory, creating it if needed."""
    SNIPBOX_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return SNIPBOX_CONFIG_DIR


def get_store_path() -> Path:
    """Get the store file path, respecting SNIPBOX_STORE_PATH.

    When running tests, set SNIPBOX_STORE_PATH to a temp file path to prevent
    tests from polluting the real store.
    """
    override = os.environ.get("SNIPBOX_STORE_PATH")
    if override:
        return Path(override).expanduser()

    return get_config_dir() / STORE_FILENAME


def get_source_location() -> Optional[str]:
    """Get the configured external snippet list, or None for the bundled one."""
    value = os.environ.get("SNIPBOX_SOURCE")
    return value or None


def get_http_timeout() -> float:
    """Get the HTTP fetch timeout in seconds.

    Raises:
        ConfigurationError: If SNIPBOX_HTTP_TIMEOUT is not a positive number.
    """
    raw = os.environ.get("SNIPBOX_HTTP_TIMEOUT")
    if raw is None:
        return DEFAULT_HTTP_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigurationError(
            "Timeout must be a number", setting="SNIPBOX_HTTP_TIMEOUT", value=raw
        ) from e
    if timeout <= 0:
        raise ConfigurationError(
            "Timeout must be positive", setting="SNIPBOX_HTTP_TIMEOUT", value=raw
        )
    return timeout


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    if value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all snipbox environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_env_info() -> Dict[str, Dict]:
    """Get information about all snipbox environment variables.

    Returns:
        Dictionary mapping env var names to description, current value,
        validity and default.
    """
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)
        info[name] = {
            "description": definition.get("description", ""),
            "value": value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
        }
    return info
