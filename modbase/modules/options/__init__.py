"""
Options Module - Black Box Interface

Purpose: Contract between the module core and the option system
Interface: OptionContainer protocol, OptionSpec, OptionSet
Hidden: Option storage and lookup

The full option system (type coercion, validation) can replace OptionSet
as long as it satisfies OptionContainer.
"""

from .interfaces import OptionContainer
from .options import OptionKind, OptionSet, OptionSpec, opt_bool, opt_int, opt_string

__all__ = [
    "OptionContainer",
    "OptionKind",
    "OptionSet",
    "OptionSpec",
    "opt_bool",
    "opt_int",
    "opt_string",
]
