"""
Default option container.

Holds option specifications by name. Type coercion and validation belong
to the full option system and are deliberately not modelled here.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ...clone import Cloneable

logger = logging.getLogger("modbase.options")


class OptionKind(str, Enum):
    """Declared value kind of an option."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    ADDRESS = "address"
    PORT = "port"
    PATH = "path"
    ENUM = "enum"
    RAW = "raw"


@dataclass(frozen=True)
class OptionSpec:
    """Specification of one configurable option."""

    name: str
    kind: OptionKind = OptionKind.STRING
    required: bool = False
    description: str = ""
    default: Any = None
    advanced: bool = False
    evasion: bool = False
    immutable: bool = False
    owner: Any = None

    @property
    def has_default(self) -> bool:
        return self.default is not None


def opt_string(name: str, required: bool = False, description: str = "",
               default: Optional[str] = None, **kwargs) -> OptionSpec:
    return OptionSpec(name, OptionKind.STRING, required, description, default, **kwargs)


def opt_bool(name: str, required: bool = False, description: str = "",
             default: Optional[bool] = None, **kwargs) -> OptionSpec:
    return OptionSpec(name, OptionKind.BOOL, required, description, default, **kwargs)


def opt_int(name: str, required: bool = False, description: str = "",
            default: Optional[int] = None, **kwargs) -> OptionSpec:
    return OptionSpec(name, OptionKind.INT, required, description, default, **kwargs)


class OptionSet(Cloneable):
    """Name-indexed container of OptionSpec records."""

    def __init__(self):
        self._specs: Dict[str, OptionSpec] = {}

    def _add(self, specs: Optional[Iterable[OptionSpec]], owner: Any, **flags) -> List[OptionSpec]:
        added = []
        for spec in specs or []:
            if not isinstance(spec, OptionSpec):
                raise TypeError(f"Expected OptionSpec, got {type(spec).__name__}")

            spec = replace(spec, owner=owner, **flags)
            key = spec.name.lower()
            if key in self._specs:
                logger.debug(f"Option {spec.name} redefined by {owner!r}")
            self._specs[key] = spec
            added.append(spec)
        return added

    def add_options(self, specs: Optional[Iterable[OptionSpec]], owner: Any = None) -> List[OptionSpec]:
        """Register basic options."""
        return self._add(specs, owner)

    def add_advanced_options(self, specs: Optional[Iterable[OptionSpec]], owner: Any = None) -> List[OptionSpec]:
        """Register advanced options."""
        return self._add(specs, owner, advanced=True)

    def add_evasion_options(self, specs: Optional[Iterable[OptionSpec]], owner: Any = None) -> List[OptionSpec]:
        """Register evasion options."""
        return self._add(specs, owner, evasion=True)

    def get(self, name: str) -> Optional[OptionSpec]:
        return self._specs.get(name.lower())

    def specs(self) -> List[OptionSpec]:
        return list(self._specs.values())

    def is_immutable(self, name: str) -> bool:
        spec = self.get(name)
        return spec is not None and spec.immutable

    def clone(self) -> "OptionSet":
        # Specs are frozen, so a new index over the same records is independent
        other = OptionSet()
        other._specs = dict(self._specs)
        return other

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._specs

    def __len__(self) -> int:
        return len(self._specs)
