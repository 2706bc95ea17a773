"""
Extension catalog: the fixed mapping from identifiers to implementations.

Catalogs are populated at load time (decorator, add(), or a YAML file) and
only read afterwards, so replicas on different threads can resolve against
the same catalog without locking.
"""

from __future__ import annotations

import inspect
import logging
from importlib import import_module
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Type, Union

import yaml

from ...errors import DuplicateExtension, UnknownExtension

logger = logging.getLogger("modbase.extensions")


class Extension:
    """
    Base class for capability extensions.

    Subclasses set ``extension_id`` and optionally ``exports``, the method
    names made callable on the module. Without ``exports`` every public
    method defined by the subclass is exported.
    """

    extension_id: ClassVar[str] = ""
    exports: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, module: Any):
        self.module = module

    @classmethod
    def exported_names(cls) -> Tuple[str, ...]:
        if cls.exports:
            return tuple(cls.exports)

        names = []
        for klass in cls.__mro__:
            if klass is Extension or not issubclass(klass, Extension):
                continue
            for name, member in vars(klass).items():
                if name.startswith("_") or name in names:
                    continue
                if inspect.isfunction(member):
                    names.append(name)
        return tuple(names)

    def original(self, name: str) -> Callable[..., Any]:
        """The module's class-level method, bypassing any extension override."""
        return getattr(type(self.module), name).__get__(self.module)


ExtensionRef = Union[str, Type[Extension]]


def extension_identifier(ref: ExtensionRef) -> str:
    """Resolve a stored reference (identifier or Extension subclass) to its identifier."""
    if isinstance(ref, str):
        return ref
    if inspect.isclass(ref) and issubclass(ref, Extension) and ref.extension_id:
        return ref.extension_id
    raise TypeError(f"Not an extension reference: {ref!r}")


class ExtensionCatalog:
    """Identifier to Extension subclass mapping."""

    def __init__(self) -> None:
        self._entries: Dict[str, Type[Extension]] = {}

    def add(self, extension_cls: Type[Extension], extension_id: Optional[str] = None) -> Type[Extension]:
        """
        Register an implementation.

        Re-adding the same class under the same identifier is a no-op;
        a different class under a taken identifier raises DuplicateExtension.
        """
        if not (inspect.isclass(extension_cls) and issubclass(extension_cls, Extension)):
            raise TypeError(f"{extension_cls!r} is not an Extension subclass")

        identifier = extension_id or extension_cls.extension_id
        if not identifier:
            raise ValueError(f"{extension_cls.__name__} has no extension_id")

        existing = self._entries.get(identifier)
        if existing is not None and existing is not extension_cls:
            raise DuplicateExtension(identifier)

        if not extension_cls.extension_id:
            extension_cls.extension_id = identifier
        self._entries[identifier] = extension_cls
        logger.debug(f"Cataloged extension {identifier} -> {extension_cls.__qualname__}")
        return extension_cls

    def extension(self, extension_id: str) -> Callable[[Type[Extension]], Type[Extension]]:
        """Class decorator form of add()."""
        def decorator(extension_cls: Type[Extension]) -> Type[Extension]:
            extension_cls.extension_id = extension_id
            return self.add(extension_cls, extension_id)
        return decorator

    def resolve(self, ref: ExtensionRef) -> Type[Extension]:
        identifier = extension_identifier(ref)
        try:
            return self._entries[identifier]
        except KeyError:
            raise UnknownExtension(identifier) from None

    def identifiers(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def load_yaml(self, path: Union[str, Path]) -> int:
        """
        Load entries from a YAML catalog file.

        Format::

            extensions:
              http_client: some.package.http:HttpClientExtension

        Returns:
            Number of entries loaded
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        entries = data.get("extensions", {}) if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            raise ValueError(f"{path}: 'extensions' must be a mapping of id -> python reference")

        for identifier, python_ref in entries.items():
            self.add(_import_ref(str(python_ref)), str(identifier))

        logger.info(f"Loaded {len(entries)} extensions from {path}")
        return len(entries)


def _import_ref(python_ref: str) -> Type[Extension]:
    if ":" in python_ref:
        module_name, attr = python_ref.split(":", 1)
    else:
        module_name, attr = python_ref.rsplit(".", 1)

    module = import_module(module_name)
    return getattr(module, attr)


# Singleton instance
_default: Optional[ExtensionCatalog] = None


def default_catalog() -> ExtensionCatalog:
    """Get the process-wide catalog, merging the configured YAML catalog on first use."""
    global _default
    if _default is None:
        from ...config import get_config

        catalog = ExtensionCatalog()
        config = get_config()
        if config.has_extension_catalog:
            catalog.load_yaml(config.extension_catalog_path)
        _default = catalog
    return _default
