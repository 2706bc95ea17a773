"""
Declarative extension bookkeeping and application.

Extensions are recorded by identifier under the reserved ReplicantExtensions
configuration key, so they survive replication along with the rest of the
configuration. apply() attaches them to a living instance.
"""

import logging
from collections.abc import Sequence
from typing import Any, Optional

from ...errors import InvalidExtensionConfiguration
from ..datastore import REPLICANT_EXTENSIONS
from .catalog import ExtensionCatalog, ExtensionRef, default_catalog, extension_identifier

logger = logging.getLogger("modbase.extensions")


def _is_list_like(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_blank(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, (str, Sequence)) and len(value) == 0)


class ExtensionRegistry:
    """Records extension identifiers and attaches their implementations."""

    def __init__(self, catalog: Optional[ExtensionCatalog] = None):
        """
        Initialize registry.

        Args:
            catalog: Catalog to resolve identifiers against (default: process catalog)
        """
        self._catalog = catalog

    @property
    def catalog(self) -> ExtensionCatalog:
        if self._catalog is None:
            self._catalog = default_catalog()
        return self._catalog

    def register(self, datastore: Any, *refs: ExtensionRef) -> list:
        """
        Append identifiers to the stored extension list.

        Order is preserved and identifiers already present are skipped.
        Nothing is attached until apply() runs.

        Returns:
            The stored extension list
        """
        current = datastore.get(REPLICANT_EXTENSIONS)
        if _is_blank(current):
            current = []
        elif not _is_list_like(current):
            raise InvalidExtensionConfiguration(current)

        extensions = list(current)
        for ref in refs:
            identifier = extension_identifier(ref)
            if identifier not in extensions:
                extensions.append(identifier)

        datastore[REPLICANT_EXTENSIONS] = extensions
        return extensions

    def apply(self, module: Any) -> int:
        """
        Attach every recorded extension to module.

        Attaching an extension that is already attached is a no-op.
        Resolution failures propagate; extensions attached before the
        failure stay attached.

        Returns:
            Number of extensions newly attached
        """
        stored = module.datastore.get(REPLICANT_EXTENSIONS)
        if _is_blank(stored):
            return 0
        if not _is_list_like(stored):
            logger.error(f"Refusing to apply extensions from {stored!r}")
            raise InvalidExtensionConfiguration(stored)

        attached = 0
        for ref in stored:
            identifier = extension_identifier(ref)
            if module.has_extension(identifier):
                continue

            extension_cls = self.catalog.resolve(identifier)
            module.attach_extension(identifier, extension_cls(module))
            attached += 1

        if attached:
            logger.debug(f"Attached {attached} extension(s) to {module.uuid}")
        return attached
