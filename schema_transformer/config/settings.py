"""
Static configuration for the schema-transformer server.

Values are read once from environment variables at import time. None of
them change dispatch behaviour; they only identify the process to MCP
clients and control log verbosity.

Usage:
    from schema_transformer.config.settings import get_setting

    logging.basicConfig(level=get_setting('log_level'))

Environment Variables:
    SCHEMA_TRANSFORMER_SERVER_NAME=...    - Name reported during MCP initialization
    SCHEMA_TRANSFORMER_SERVER_VERSION=... - Version reported during MCP initialization
    SCHEMA_TRANSFORMER_LOG_LEVEL=DEBUG    - Root logging level (default: INFO)
"""

import os
from typing import Dict


SETTINGS: Dict[str, str] = {
    'server_name': os.getenv('SCHEMA_TRANSFORMER_SERVER_NAME', 'schema-transformer'),
    'server_version': os.getenv('SCHEMA_TRANSFORMER_SERVER_VERSION', '0.1.0'),
    'log_level': os.getenv('SCHEMA_TRANSFORMER_LOG_LEVEL', 'INFO').upper(),
}


def get_setting(name: str) -> str:
    """
    Look up a configuration value.

    Args:
        name: Setting name (e.g., 'server_name')

    Returns:
        The configured value

    Raises:
        KeyError: If setting name is not recognized

    Example:
        >>> get_setting('server_name')
        'schema-transformer'
    """
    if name not in SETTINGS:
        available = ', '.join(SETTINGS.keys())
        raise KeyError(
            f"Unknown setting: '{name}'. "
            f"Available settings: {available}"
        )

    return SETTINGS[name]


def get_all_settings() -> Dict[str, str]:
    """Return a copy of all settings."""
    return SETTINGS.copy()


def set_setting(name: str, value: str) -> None:
    """
    Programmatically override a setting (for testing only).

    Raises:
        KeyError: If setting name is not recognized
    """
    if name not in SETTINGS:
        available = ', '.join(SETTINGS.keys())
        raise KeyError(
            f"Unknown setting: '{name}'. "
            f"Available settings: {available}"
        )

    SETTINGS[name] = value
