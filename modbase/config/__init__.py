"""
Config Module - Black Box Interface

Purpose: Framework-wide settings (default license, logging, extension catalog)
Interface: get_config(), reset_config()
Hidden: Config sources, environment parsing

Can be replaced with a different provider implementing ConfigProvider.
"""

from typing import Optional

from .provider import (
    DEFAULT_LICENSE,
    ConfigProvider,
    EnvConfigProvider,
    FrameworkConfig,
)

# Singleton instance
_instance: Optional[FrameworkConfig] = None


def get_config(provider: Optional[ConfigProvider] = None) -> FrameworkConfig:
    """Get the framework configuration singleton."""
    global _instance
    if _instance is None:
        _instance = (provider or EnvConfigProvider()).get_framework_config()
    return _instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _instance
    _instance = None


__all__ = [
    "DEFAULT_LICENSE",
    "ConfigProvider",
    "EnvConfigProvider",
    "FrameworkConfig",
    "get_config",
    "reset_config",
]
