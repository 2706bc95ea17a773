"""
Logging configuration for the modbase logger tree
"""

import logging
import logging.config
from typing import Any, Dict, Optional


class ModuleContextFilter(logging.Filter):
    """Filter that guarantees every record carries a module_uuid attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Default module_uuid for records not emitted by a module instance."""
        if not hasattr(record, "module_uuid"):
            record.module_uuid = "-"
        return True  # Never drops records


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with module context injection."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "module_context": {
                "()": ModuleContextFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(module_uuid)s] %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["module_context"]
            }
        },
        "loggers": {
            "modbase": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the logging configuration, defaulting the level from framework config."""
    if level is None:
        from .config import get_config
        level = get_config().log_level
    logging.config.dictConfig(get_logging_config(level))
