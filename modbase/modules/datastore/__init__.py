"""
DataStore Module - Black Box Interface

Purpose: Per-instance configuration storage
Interface: ModuleDataStore (mapping API, import_defaults(), copy())
Hidden: Case folding, default tracking, copy semantics

Reserved keys are part of the interface: any persistence layer must
round-trip them verbatim.
"""

from .datastore import (
    DEBUG,
    MODULE_OWNER,
    PARENT_UUID,
    PROUSER,
    REPLICANT_EXTENSIONS,
    RESERVED_KEYS,
    VERBOSE,
    WORKSPACE,
    ModuleDataStore,
)

__all__ = [
    "DEBUG",
    "MODULE_OWNER",
    "PARENT_UUID",
    "PROUSER",
    "REPLICANT_EXTENSIONS",
    "RESERVED_KEYS",
    "VERBOSE",
    "WORKSPACE",
    "ModuleDataStore",
]
