"""
Configuration hierarchy for sockcomm.

Values are looked up in instance configuration first, then in ``SOCKCOMM_*``
environment variables, then fall back to the built-in defaults.
"""

import os
from typing import Any, Dict, Optional

ENV_PREFIX = "SOCKCOMM_"

DEFAULTS: Dict[str, Any] = {
    "default_channel": "local",
    "source_probe_host": "1.2.3.4",
    "source_probe_port": 31337,
    "enable_telemetry": True,
}


def get_env_config(key: str) -> Optional[str]:
    """Get a configuration value from the environment.

    Args:
        key: The configuration key, e.g. ``"default_channel"``.

    Returns:
        The raw string value of ``SOCKCOMM_<KEY>``, or None if it is not set.
    """
    return os.environ.get(f"{ENV_PREFIX}{key.upper()}")


def merge_configs(*configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge configuration dictionaries, later ones taking precedence.

    None entries are skipped.
    """
    result: Dict[str, Any] = {}
    for config in configs:
        if config:
            result.update(config)
    return result


def get_config(key: str, config: Optional[Dict[str, Any]] = None, default: Any = None) -> Any:
    """Get a configuration value from the hierarchy.

    Args:
        key: The configuration key.
        config: Optional instance configuration, checked first.
        default: Value used when neither the instance configuration, the
            environment nor ``DEFAULTS`` define the key.

    Returns:
        The configuration value.
    """
    # 1. Instance configuration
    if config and key in config:
        return config[key]

    # 2. Environment variables
    env_value = get_env_config(key)
    if env_value is not None:
        return env_value

    # 3. Built-in defaults
    return DEFAULTS.get(key, default)


def get_env_bool(name: str, default: bool = False) -> bool:
    """
    Get a boolean value from an environment variable.

    Args:
        name: The name of the environment variable
        default: The default value if the environment variable is not set

    Returns:
        The boolean value
    """
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "y", "t")


def get_env_dict(name: str, default: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Get a dictionary from a comma-separated environment variable.

    Args:
        name: The name of the environment variable
        default: The default value if the environment variable is not set

    Returns:
        The dictionary
    """
    value = os.environ.get(name)
    if not value:
        return default or {}

    result = {}
    for pair in value.split(","):
        if "=" in pair:
            key, val = pair.split("=", 1)
            result[key.strip()] = val.strip()
    return result


def as_bool(value: Any) -> bool:
    """Interpret a configuration value as a boolean.

    Strings coming from the environment are parsed the same way as
    ``get_env_bool``; other values use normal truthiness.
    """
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "y", "t")
    return bool(value)
