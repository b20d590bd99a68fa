"""
Defines the core data types shared by the batteries modules.

This module provides the error taxonomy, the capability base classes that
operator dispatch checks for, and the prototype `Object` that every
batteries object type is cloned from.
"""

import functools
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional


class BatteriesError(Exception):
    """Root of every error raised by the batteries modules."""


class ContractViolation(BatteriesError):
    """A caller broke an operation's contract (bad argument type, out-of-domain value)."""


class TypeMismatch(BatteriesError, TypeError):
    """An operator function received operands its operation cannot combine."""


# =================================================================
# Capabilities
# =================================================================

class Clonable(ABC):
    """Objects that produce new instances of themselves when called."""

    @abstractmethod
    def clone(self, *args, **kwargs):
        raise NotImplementedError

    def __call__(self, *args, **kwargs):
        return self.clone(*args, **kwargs)


class Appendable(ABC):
    """Objects whose `+` adds one new element."""

    @abstractmethod
    def __add__(self, other):
        raise NotImplementedError


class Concatenable(ABC):
    """Objects whose `@` joins whole sequences."""

    @abstractmethod
    def __matmul__(self, other):
        raise NotImplementedError


class Orderable(ABC):
    """Objects that define their own `<` and `<=`.

    The relational operators in `batteries_operator` delegate to these
    instead of falling back to primitive ordering; `>` and `>=` are always
    derived from them by swapping the operands.
    """

    @abstractmethod
    def __lt__(self, other):
        raise NotImplementedError

    @abstractmethod
    def __le__(self, other):
        raise NotImplementedError


# =================================================================
# Prototype objects
# =================================================================

class Object(Clonable):
    """A prototype object: new objects are made by calling an existing one.

    Every object carries a `meta` mapping shared with the prototype it was
    cloned from:
      - `type`: the type tag reported by `batteries_base.prototype`,
      - `methods`: the dispatch table used for method-style calls,
      - `parent`: the prototype whose dispatch table is consulted next.

    Method-style access (`obj.name(...)`) looks `name` up along that chain
    and binds the receiver as the first argument, so a method and the
    matching module function are always the same callable.
    """
    _meta: Dict[str, Any] = {"type": "Object", "parent": None, "methods": {}}

    def __init__(self, meta: Optional[Dict[str, Any]] = None):
        self.meta = meta if meta is not None else type(self)._meta

    def clone(self):
        return type(self)(meta=self.meta)

    def find_method(self, name: str) -> Optional[Callable]:
        """Finds `name` in this object's dispatch table or a prototype's."""
        meta = self.meta
        while meta is not None:
            methods = meta.get("methods", {})
            if name in methods:
                return methods[name]
            parent = meta.get("parent")
            meta = parent.meta if parent is not None else None
        return None

    def __getattr__(self, name: str):
        # Only reached when normal attribute lookup fails.
        if name.startswith("_") or name == "meta":
            raise AttributeError(name)
        method = self.find_method(name)
        if method is None:
            raise AttributeError(f"'{self.meta.get('type')}' object has no method '{name}'")
        return functools.partial(method, self)

    def __repr__(self) -> str:
        return f"<{self.meta.get('type')} #{id(self)}>"

