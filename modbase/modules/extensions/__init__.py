"""
Extensions Module - Black Box Interface

Purpose: Optional capabilities recorded declaratively and applied to instances
Interface: Extension, ExtensionCatalog, ExtensionRegistry, default_catalog()
Hidden: Identifier resolution, YAML catalog loading

An extension is attached by binding its exported methods onto the module
instance; no code is generated at runtime.
"""

from .catalog import (
    Extension,
    ExtensionCatalog,
    ExtensionRef,
    default_catalog,
    extension_identifier,
)
from .registry import ExtensionRegistry

__all__ = [
    "Extension",
    "ExtensionCatalog",
    "ExtensionRef",
    "ExtensionRegistry",
    "default_catalog",
    "extension_identifier",
]
