"""
Functional forms of the built-in operators.

Each operator is an ordinary function so it can be handed to `map`,
`functools.reduce`, and the like. `OPERATORS` maps each operator's spelling
(`"+"`, `"and"`, `"<="`, ...) to its function:

    >>> import functools
    >>> from batteries.batteries_operator import OPERATORS
    >>> functools.reduce(OPERATORS[".."], [10000, 100, 10], "=> ")
    '=> 1000010010'

Logical operators use batteries truthiness (only `None` and `False` are
false) and return one of their operands, exactly like short-circuit
evaluation. Relational operators defer to an operand's own ordering when it
implements `Orderable`.
"""

from __future__ import annotations

import collections.abc
import functools
import numbers
import operator as _op
import re
from types import MappingProxyType

from batteries.batteries_base import is_sequence, prototype, truthy
from batteries.batteries_datatypes import Object, Orderable, TypeMismatch
from batteries.batteries_printer import tostring


def _is_number(value) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _arithmetic(symbol):
    """Numbers combine primitively; prototype objects may overload; anything else mismatches."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(a=None, b=None):
            message = f"attempt to perform arithmetic '{symbol}' on {prototype(a)} and {prototype(b)} values"
            if not (_is_number(a) and _is_number(b)) and \
                    not (isinstance(a, Object) or isinstance(b, Object)):
                raise TypeMismatch(message)
            # Division by zero is not a type error and propagates unchanged
            try:
                return fn(a, b)
            except TypeError as e:
                raise TypeMismatch(message) from e
        return wrapper
    return decorator


def _ordered(result, symbol, a, b):
    if result is NotImplemented:
        raise TypeMismatch(f"attempt to compare {prototype(a)} with {prototype(b)} using '{symbol}'")
    return result


def _primitive_order(fn, symbol, a, b):
    try:
        return fn(a, b)
    except TypeError as e:
        raise TypeMismatch(f"attempt to compare {prototype(a)} with {prototype(b)} using '{symbol}'") from e


# --- Strings and containers ---

def concat(a=None, b=None):
    """Stringify and concatenate arguments.

    >>> concat(1, None)
    '1none'
    """
    return tostring(a) + tostring(b)


def deref(t=None, k=None):
    """Return `t[k]`, or `None` when `t` is false or has no such key.

    >>> deref({"foo": "bar"}, "foo")
    'bar'
    >>> deref(None, 1) is None
    True
    """
    if not truthy(t):
        return None
    if isinstance(t, collections.abc.Mapping):
        return t.get(k)
    if is_sequence(t):
        if isinstance(k, int) and not isinstance(k, bool) and -len(t) <= k < len(t):
            return t[k]
        return None
    raise TypeMismatch(f"attempt to index a {prototype(t)} value")


def pack(*args):
    """Return a new list of the arguments."""
    return [*args]


def find(s, pattern):
    """Return the 1-based inclusive `(start, end)` of the first regex match in `s`, or `None`."""
    if not isinstance(s, str) or not isinstance(pattern, str):
        raise TypeMismatch(f"attempt to match a {prototype(pattern)} pattern against a {prototype(s)} value")
    m = re.search(pattern, s)
    if m is None:
        return None
    return m.start() + 1, m.end()


def length(v):
    """Return the length of a string or sequence."""
    if isinstance(v, collections.abc.Sized):
        return len(v)
    raise TypeMismatch(f"attempt to get length of a {prototype(v)} value")


# --- Arithmetic ---

@_arithmetic("+")
def sum(a, b): return a + b

@_arithmetic("-")
def diff(a, b): return a - b

@_arithmetic("*")
def prod(a, b): return a * b

@_arithmetic("/")
def quot(a, b): return a / b

@_arithmetic("%")
def mod(a, b): return a % b

@_arithmetic("^")
def pow(a, b): return a ** b


# --- Logic ---

def conj(a=None, b=None):
    """Logical *a* and *b*: `a` when it is false, otherwise `b`."""
    return b if truthy(a) else a


def disj(a=None, b=None):
    """Logical *a* or *b*: `a` when it is true, otherwise `b`."""
    return a if truthy(a) else b


def neg(a=None):
    """Logical not *a*."""
    return not truthy(a)


# --- Relations ---

def eq(a=None, b=None): return a == b

def neq(a=None, b=None): return a != b


def lt(a=None, b=None):
    """Return whether the arguments are in ascending order."""
    if isinstance(a, Orderable):
        return _ordered(a.__lt__(b), "<", a, b)
    if isinstance(b, Orderable):
        return not _ordered(b.__le__(a), "<", a, b)
    return _primitive_order(_op.lt, "<", a, b)


def lte(a=None, b=None):
    """Return whether the arguments are not in descending order."""
    if isinstance(a, Orderable):
        return _ordered(a.__le__(b), "<=", a, b)
    if isinstance(b, Orderable):
        return not _ordered(b.__lt__(a), "<=", a, b)
    return _primitive_order(_op.le, "<=", a, b)


def gt(a=None, b=None):
    """Return whether the arguments are in descending order."""
    return lt(b, a)


def gte(a=None, b=None):
    """Return whether the arguments are not in ascending order."""
    return lte(b, a)


OPERATORS = MappingProxyType({
    "..": concat,
    "[]": deref,
    "{}": pack,
    '""': tostring,
    "~": find,
    "#": length,
    "+": sum,
    "-": diff,
    "*": prod,
    "/": quot,
    "%": mod,
    "^": pow,
    "and": conj,
    "or": disj,
    "not": neg,
    "==": eq,
    "~=": neq,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
})
