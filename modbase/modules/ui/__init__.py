"""
UI Module - Black Box Interface

Purpose: User input/output channels handed to module instances
Interface: ConsoleOutput (print_status, print_good, ...), ConsoleInput (prompt, confirm)
Hidden: Terminal rendering

Any object exposing the same methods can be attached instead.
"""

from .console import ConsoleInput, ConsoleOutput

__all__ = ["ConsoleInput", "ConsoleOutput"]
