"""Configuration provider following Black Box Design principles."""
import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

DEFAULT_LICENSE = "Framework License (BSD)"


@dataclass
class FrameworkConfig:
    """Framework-wide settings consumed by module construction."""
    default_license: str
    log_level: str
    extension_catalog_path: Optional[str]
    debug: bool

    @property
    def has_extension_catalog(self) -> bool:
        """Check if an external extension catalog is configured."""
        return bool(self.extension_catalog_path)


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_framework_config(self) -> FrameworkConfig:
        """Get framework configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_framework_config(self) -> FrameworkConfig:
        """Get framework configuration from environment variables."""
        debug = os.getenv("MODBASE_DEBUG", "false").lower() == "true"
        log_level = os.getenv("MODBASE_LOG_LEVEL", "DEBUG" if debug else "INFO").upper()

        # Reject levels the logging module does not know
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(
                f"MODBASE_LOG_LEVEL must be a logging level name, got {log_level!r}"
            )

        return FrameworkConfig(
            default_license=os.getenv("MODBASE_DEFAULT_LICENSE", DEFAULT_LICENSE),
            log_level=log_level,
            extension_catalog_path=os.getenv("MODBASE_EXTENSION_CATALOG") or None,
            debug=debug,
        )
