"""
Value duplication used by module replication.

duplicate() is a single-dispatch function: types register how they are
copied, and anything implementing Cloneable copies itself. Values with no
registered strategy get a shallow copy, or are shared by reference when
they cannot be copied at all.
"""

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from functools import singledispatch
from typing import Any

logger = logging.getLogger("modbase.clone")


class Cloneable(ABC):
    """Values that know how to produce an independent copy of themselves."""

    @abstractmethod
    def clone(self) -> "Cloneable":
        ...


@singledispatch
def duplicate(value: Any) -> Any:
    """Return an independent copy of value, or value itself if it cannot be copied."""
    try:
        return copy.copy(value)
    except (TypeError, copy.Error) as e:
        logger.debug(f"Sharing {type(value).__name__} by reference: {e}")
        return value


@duplicate.register
def _(value: Cloneable) -> Cloneable:
    return value.clone()


# Immutable values are returned as-is
@duplicate.register(type(None))
@duplicate.register(bool)
@duplicate.register(int)
@duplicate.register(float)
@duplicate.register(complex)
@duplicate.register(Decimal)
@duplicate.register(str)
@duplicate.register(bytes)
@duplicate.register(tuple)
@duplicate.register(frozenset)
@duplicate.register(uuid.UUID)
def _(value: Any) -> Any:
    return value


@duplicate.register(list)
@duplicate.register(dict)
@duplicate.register(set)
@duplicate.register(bytearray)
def _(value: Any) -> Any:
    return value.copy()
