"""
Primitives the List type and the operator table are built on.

These are the collaborators the rest of the package consumes rather than
re-implements: truthiness, the ordered-sequence test and iteration over it,
type naming for error messages, and the prototype clone primitive.
"""

from __future__ import annotations

import collections.abc
from typing import Any, Iterator, Optional

from batteries.batteries_datatypes import Clonable, ContractViolation, Object


def truthy(value: Any) -> bool:
    """Every value is true except `None` and `False` (so `0` and `""` are true)."""
    return value is not None and value is not False


def is_sequence(value: Any) -> bool:
    """True for ordered, densely indexed containers; strings and mappings are not."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, collections.abc.Sequence)


def prototype(value: Any) -> str:
    """Returns the type name used in error messages and export declarations."""
    if isinstance(value, Object):
        return value.meta.get("type", "Object")
    if value is None:
        return "none"
    # bool is a subclass of int, so check it before int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, collections.abc.Mapping):
        return "mapping"
    if is_sequence(value):
        return "sequence"
    if callable(value):
        return "function"
    return type(value).__name__


def ielems(seq) -> Iterator[Any]:
    """Iterates the elements of an ordered sequence, first to last."""
    if not is_sequence(seq):
        raise ContractViolation(f"bad argument #1 to 'ielems' (sequence expected, got {prototype(seq)})")
    return iter(seq)


def ireverse(seq) -> list:
    """Returns a new plain list of the elements of `seq`, last to first."""
    return list(reversed(list(ielems(seq))))


def leaves(seq) -> Iterator[Any]:
    """Depth-first iteration over the non-sequence values nested inside `seq`."""
    for item in ielems(seq):
        if is_sequence(item):
            yield from leaves(item)
        else:
            yield item


def clone(proto: Clonable, init: Optional[collections.abc.Iterable] = None):
    """Makes a new object from `proto`, copying the elements of `init` into it."""
    if init is None:
        return proto()
    return proto(init)
