"""
Module Module - Black Box Interface

Purpose: The composed module instance every capability is built on
Interface: Module (replicate(), register_parent(), owner(), register_extensions(), ...),
           ModuleTemplate, CheckCode
Hidden: Replication mechanics, lineage propagation, capability checks

Replication is the only sanctioned way to obtain an instance that can run
concurrently with others; each replica has a single owner for its lifetime.
"""

from ..descriptor import merge_info
from .lineage import UNKNOWN_OWNER, login_env_vars, register_parent, resolve_owner
from .module import CheckCode, Module, ModuleTemplate
from .queries import MATCH_KEYS, flag_enabled, platform_matches, user_data_is_match

__all__ = [
    "MATCH_KEYS",
    "UNKNOWN_OWNER",
    "CheckCode",
    "Module",
    "ModuleTemplate",
    "flag_enabled",
    "login_env_vars",
    "merge_info",
    "platform_matches",
    "register_parent",
    "resolve_owner",
    "user_data_is_match",
]
