"""
Per-instance configuration store.

A ModuleDataStore is a string-keyed mapping holding user configuration and
the reserved lineage/extension bookkeeping keys. Key lookups are
case-insensitive while the first-seen spelling of each key is preserved.
"""

import copy
import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, MutableMapping, Optional, Set

from ...errors import ConfigImmutable

logger = logging.getLogger("modbase.datastore")

# Reserved keys (documented schema, round-tripped verbatim by persistence layers)
WORKSPACE = "WORKSPACE"
PROUSER = "PROUSER"
MODULE_OWNER = "MODULE_OWNER"
PARENT_UUID = "ParentUUID"
DEBUG = "DEBUG"
VERBOSE = "VERBOSE"
REPLICANT_EXTENSIONS = "ReplicantExtensions"

RESERVED_KEYS = (WORKSPACE, PROUSER, MODULE_OWNER, PARENT_UUID, DEBUG, REPLICANT_EXTENSIONS)


def _copy_value(value: Any) -> Any:
    """Deep copy value, or share it when it cannot be copied."""
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as e:
        logger.debug(f"Sharing {type(value).__name__} by reference: {e}")
        return value


class ModuleDataStore(MutableMapping):
    """
    Mutable configuration for exactly one module instance.

    Writes are checked against the option container's immutability policy.
    copy() produces a store that shares no mutable storage with this one.
    """

    def __init__(self, options: Optional[Any] = None):
        """
        Initialize an empty store.

        Args:
            options: Option container consulted for read-only keys (may be None)
        """
        self.options = options
        self._values: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}   # lowercase -> stored spelling
        self._defaulted: Set[str] = set()    # lowercase keys holding imported defaults

    def _find(self, key: str) -> Optional[str]:
        return self._aliases.get(key.lower())

    def _is_immutable(self, key: str) -> bool:
        return self.options is not None and bool(self.options.is_immutable(key))

    def _store(self, key: str, value: Any) -> None:
        stored = self._find(key)
        if stored is None:
            stored = key
            self._aliases[key.lower()] = key
        self._values[stored] = value

    def __getitem__(self, key: str) -> Any:
        stored = self._find(key)
        if stored is None:
            raise KeyError(key)
        return self._values[stored]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Configuration keys must be strings, got {type(key).__name__}")
        if self._is_immutable(key):
            raise ConfigImmutable(key)

        self._store(key, value)
        self._defaulted.discard(key.lower())

    def __delitem__(self, key: str) -> None:
        stored = self._find(key)
        if stored is None:
            raise KeyError(key)
        if self._is_immutable(key):
            raise ConfigImmutable(key)

        del self._values[stored]
        del self._aliases[key.lower()]
        self._defaulted.discard(key.lower())

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None

    def __repr__(self) -> str:
        return f"ModuleDataStore({self._values!r})"

    def import_defaults(self, specs: Iterable[Any]) -> int:
        """
        Seed declared option defaults without overwriting existing entries.

        Args:
            specs: Option specifications exposing ``name``, ``default`` and ``has_default``

        Returns:
            Number of defaults imported
        """
        imported = 0
        for spec in specs:
            if not spec.has_default or spec.name in self:
                continue
            # Defaults bypass the read-only policy; they are the initial value
            self._store(spec.name, _copy_value(spec.default))
            self._defaulted.add(spec.name.lower())
            imported += 1
        return imported

    def user_defined(self) -> Dict[str, Any]:
        """Entries set explicitly rather than imported as option defaults."""
        return {
            key: value
            for key, value in self._values.items()
            if key.lower() not in self._defaulted
        }

    def import_from(self, mapping: Mapping[str, Any]) -> None:
        """Set every entry of mapping, as if assigned one by one."""
        for key, value in mapping.items():
            self[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """
        Deep copy of every entry, reserved keys included, in their stored spelling.

        Values that cannot be copied (locks, sockets, handles) are shared.
        """
        return {key: _copy_value(value) for key, value in self._values.items()}

    def copy(self, options: Optional[Any] = None) -> "ModuleDataStore":
        """
        Produce an independent store with deep copies of every value.

        Values that cannot be copied are shared by reference.

        Args:
            options: Option container for the new store (defaults to this one's)

        Returns:
            New ModuleDataStore sharing no mutable storage with this one
        """
        other = ModuleDataStore(options if options is not None else self.options)
        other._values = {key: _copy_value(value) for key, value in self._values.items()}
        other._aliases = dict(self._aliases)
        other._defaulted = set(self._defaulted)
        return other

    def __copy__(self) -> "ModuleDataStore":
        return self.copy()

    def __deepcopy__(self, memo) -> "ModuleDataStore":
        return self.copy()
