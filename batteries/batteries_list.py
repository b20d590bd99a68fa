"""
Lists as prototype objects.

Every List is also an Object, so new Lists are made by calling an existing
one:

    >>> from batteries.batteries_list import List
    >>> l = List(["foo", "bar"])
    >>> str(l.cons("baz"))
    "List {'baz', 'foo', 'bar'}"

Each operation can be called as a method on a List, or as a module function
with the List as the first argument; both spellings reach the same function:

    >>> from batteries import batteries_list as lists
    >>> lists.cons(l, "quux") == l.cons("quux")
    True

Lists never change after construction. `+` appends one element, while `@`
concatenates whole sequences:

    >>> List([1, 2]) + [3]
    List([1, 2, [3]])
    >>> List([1, 2]) @ [3]
    List([1, 2, 3])
"""

import collections.abc
import functools
import math
from types import MappingProxyType
from typing import Callable, Iterable, Optional

from batteries.batteries_base import clone, ielems, ireverse, is_sequence, leaves, prototype, truthy
from batteries.batteries_datatypes import Appendable, Concatenable, Object, Orderable
from batteries.batteries_debug import argerror, deprecated, export
from batteries.batteries_operator import deref, gt, gte, lt
from batteries.batteries_printer import tostring


class List(Object, collections.abc.Sequence, Appendable, Concatenable, Orderable):
    """An immutable, densely indexed sequence with prototype-style cloning.

    Python subscripting (`l[0]`, `l[-1]`, `l[1:3]`) is zero-based; the
    `sub` and `tail` operations keep the one-based, inclusive positions of
    string sub-ranging.
    """

    def __init__(self, elements: Iterable = (), meta=None):
        super().__init__(meta)
        if isinstance(elements, (str, bytes, bytearray, collections.abc.Mapping)) or \
                not isinstance(elements, collections.abc.Iterable):
            argerror("List", 1, "sequence", prototype(elements))
        self._elements = tuple(elements)

    def clone(self, elements: Optional[Iterable] = None) -> "List":
        """A new List sharing this one's prototype; with no argument, a copy."""
        return type(self)(self._elements if elements is None else elements, meta=self.meta)

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.clone(self._elements[index])
        return self._elements[index]

    def __iter__(self):
        return iter(self._elements)

    # --- Operators ---

    def __add__(self, x):
        return append(self, x)

    def __matmul__(self, other):
        return concat(self, other)

    def __rmatmul__(self, other):
        if not is_sequence(other):
            return NotImplemented
        return concat(self.clone(other), self)

    def __lt__(self, other):
        if not is_sequence(other):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other):
        if not is_sequence(other):
            return NotImplemented
        return compare(self, other) <= 0

    # A plain sequence on the left can't order a List, so these route through
    # the operator table, which swaps the operands onto `<` and `<=`.
    def __gt__(self, other):
        if not is_sequence(other):
            return NotImplemented
        return gt(self, other)

    def __ge__(self, other):
        if not is_sequence(other):
            return NotImplemented
        return gte(self, other)

    def __eq__(self, other):
        # Equal to any ordered sequence with equal elements, as `compare` is
        if not is_sequence(other):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self._elements, other))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._elements)!r})"

    def __str__(self) -> str:
        return tostring(self)


def _derive(l, elements) -> List:
    """A new List from the prototype of `l` (or the base List for plain sequences)."""
    if isinstance(l, List):
        return clone(l, elements)
    return List(elements)


# =================================================================
# Module functions
# =================================================================

@export("append (List, any)")
def append(l, x):
    """Return a new list containing the elements of `l` followed by `x`."""
    return _derive(l, (*ielems(l), x))


@export("compare (List, List|table)")
def compare(l, m) -> int:
    """Compare two lists element by element, from left to right.

    Returns -1 if `l` is less than `m`, 0 if they are the same, and 1 if
    `l` is greater than `m`. Elements are ordered with their own `<`, so
    nested Lists compare structurally; a strict prefix is less.
    """
    for i, seq in enumerate((l, m), start=1):
        if not is_sequence(seq):
            argerror("compare", i, "List or table", prototype(seq))
    for a, b in zip(l, m):
        if a == b:
            continue
        if lt(a, b):
            return -1
        if lt(b, a):
            return 1
    return (len(l) > len(m)) - (len(l) < len(m))


@export("concat (List, List|table*)")
def concat(l, *ls):
    """Return a new list of the elements of `l`, then those of each of `ls` in turn."""
    for i, seq in enumerate((l, *ls), start=1):
        if not is_sequence(seq):
            argerror("concat", i, "List or table", prototype(seq))
    elements = []
    for seq in (l, *ls):
        elements.extend(ielems(seq))
    return _derive(l, elements)


@export("cons (List, any)")
def cons(l, x):
    """Return a new list with `x` prepended to the elements of `l`."""
    return _derive(l, (x, *ielems(l)))


@export("rep (List, int)")
def rep(l, n: int):
    """Return a new list of `n` copies of `l` appended together."""
    if not isinstance(n, int) or isinstance(n, bool):
        argerror("rep", 2, "int", prototype(n))
    if n < 0:
        argerror("rep", 2, "non-negative int", str(n))
    return _derive(l, tuple(ielems(l)) * n)


@export("sub (List, int?, int?)")
def sub(l, from_: Optional[int] = None, to: Optional[int] = None):
    """Return the elements of `l` from position `from_` to `to`, inclusive.

    Positions count from 1; negative positions count back from the end, so
    `-1` is the last element. Out of range positions clip to the list.
    """
    elements = tuple(ielems(l))
    size = len(elements)
    from_ = 1 if from_ is None else from_
    to = size if to is None else to
    if from_ < 0:
        from_ += size + 1
    if to < 0:
        to += size + 1
    start, stop = max(from_, 1), min(to, size)
    if start > stop:
        return _derive(l, ())
    return _derive(l, elements[start - 1:stop])


@export("tail (List)")
def tail(l):
    """Return a new list with the first element of `l` removed."""
    return sub(l, 2)


# =================================================================
# Deprecations
# =================================================================
# Legacy operations kept working under their old names. Free-function forms
# take the list last, as they always did; method forms take it first.

def _depair(ls) -> dict:
    return {v[0]: v[1] for v in ielems(ls)}


def _enpair(t) -> List:
    if isinstance(t, collections.abc.Mapping):
        pairs = t.items()
    else:
        pairs = enumerate(ielems(t), start=1)
    return List([List([k, v]) for k, v in pairs])


def _filter(pfn: Callable, l) -> List:
    return List([e for e in ielems(l) if truthy(pfn(e))])


def _flatten(l) -> List:
    return List(leaves(l))


def _foldl(fn: Callable, d, t=None):
    if t is None:
        seq = list(ielems(d))
        d, t = (seq[0] if seq else None), seq[1:]
    return functools.reduce(fn, ielems(t), d)


def _foldr(fn: Callable, d, t=None):
    if t is None:
        seq = list(ielems(d))
        d, t = (seq[-1] if seq else None), seq[:-1]
    return functools.reduce(lambda acc, x: fn(x, acc), ireverse(t), d)


def _index_key(f, l) -> dict:
    r = {}
    for i, v in enumerate(ielems(l), start=1):
        k = deref(v, f)
        if truthy(k):
            r[k] = i
    return r


def _index_value(f, l) -> dict:
    r = {}
    for v in ielems(l):
        k = deref(v, f)
        if truthy(k):
            r[k] = v
    return r


def _map(fn: Callable, l) -> List:
    # None results are dropped
    results = (fn(e) for e in ielems(l))
    return List([v for v in results if v is not None])


def _map_with(fn: Callable, ls) -> List:
    return _map(lambda e: fn(*e), ls)


def _project(x, l) -> List:
    return _map(lambda t: deref(t, x), l)


def _relems(l):
    return iter(ireverse(l))


def _reverse(l) -> List:
    return List(ireverse(l))


_NO_ELEMENT = object()


def _shape(s, l) -> Optional[List]:
    """Reshape the leaves of `l` into nested Lists with dimensions `s`.

    At most one dimension may be 0, meaning "as many as needed"; with more
    than one the shape is ambiguous and the result is None.
    """
    flat = list(leaves(l))
    dims = list(s)
    size, zero = 1, None
    for i, v in enumerate(dims):
        if v == 0:
            if zero is not None:
                return None
            zero = i
        else:
            size *= v
    if zero is not None:
        dims[zero] = math.ceil(len(flat) / size)

    def fill(i, d):
        if d == len(dims):
            return (flat[i] if i < len(flat) else _NO_ELEMENT), i + 1
        row = []
        for _ in range(dims[d]):
            e, i = fill(i, d + 1)
            if e is not _NO_ELEMENT:
                row.append(e)
        return List(row), i

    return fill(0, 0)[0]


def _transpose(ls) -> List:
    rows = [tuple(ielems(r)) for r in ielems(ls)]
    width = max((len(r) for r in rows), default=0)
    return List([List([r[i] for r in rows if i < len(r)]) for i in range(width)])


def _zip_with(ls, fn: Callable) -> List:
    return _map_with(fn, _transpose(ls))


# Method forms: receiver first.

def _filter_method(self, p):
    return _filter(p, self)


def _foldl_method(self, fn, e=None):
    if e is not None:
        return _foldl(fn, e, self)
    return _foldl(fn, self)


def _foldr_method(self, fn, e=None):
    if e is not None:
        return _foldr(fn, e, self)
    return _foldr(fn, self)


def _index_key_method(self, f):
    return _index_key(f, self)


def _index_value_method(self, f):
    return _index_value(f, self)


def _map_method(self, fn):
    return _map(fn, self)


def _map_with_method(self, fn):
    return _map_with(fn, self)


def _project_method(self, x):
    return _project(x, self)


def _shape_method(self, s):
    return _shape(s, self)


depair = deprecated("41", "'batteries.list.depair'", _depair)
enpair = deprecated("41", "'batteries.list.enpair'", _enpair)
elems = deprecated("41", "'batteries.list.elems'", ielems, "use 'ielems' instead")
filter = deprecated("41", "'batteries.list.filter'", _filter, "use a comprehension instead")
flatten = deprecated("41", "'batteries.list.flatten'", _flatten, "use 'leaves' instead")
foldl = deprecated("41", "'batteries.list.foldl'", _foldl, "use 'functools.reduce' instead")
foldr = deprecated("41", "'batteries.list.foldr'", _foldr,
                   "use 'functools.reduce' over 'ireverse' instead")
index_key = deprecated("41", "'batteries.list.index_key'", _index_key,
                       "use a dict comprehension instead")
index_value = deprecated("41", "'batteries.list.index_value'", _index_value,
                         "use a dict comprehension instead")
map = deprecated("41", "'batteries.list.map'", _map, "use a comprehension instead")
map_with = deprecated("41", "'batteries.list.map_with'", _map_with,
                      "use 'itertools.starmap' instead")
project = deprecated("41", "'batteries.list.project'", _project, "use a comprehension instead")
relems = deprecated("41", "'batteries.list.relems'", _relems,
                    "compose 'ielems' and 'ireverse' instead")
reverse = deprecated("41", "'batteries.list.reverse'", _reverse, "use 'ireverse' instead")
shape = deprecated("41", "'batteries.list.shape'", _shape)
transpose = deprecated("41", "'batteries.list.transpose'", _transpose, "use 'zip' instead")
zip_with = deprecated("41", "'batteries.list.zip_with'", _zip_with,
                      "use 'itertools.starmap' over 'zip' instead")


FUNCTIONS = MappingProxyType({
    "append": append,
    "compare": compare,
    "concat": concat,
    "cons": cons,
    "rep": rep,
    "sub": sub,
    "tail": tail,

    "depair": depair,
    "elems": elems,
    "enpair": enpair,
    "filter": filter,
    "flatten": flatten,
    "foldl": foldl,
    "foldr": foldr,
    "index_key": index_key,
    "index_value": index_value,
    "map": map,
    "map_with": map_with,
    "project": project,
    "relems": relems,
    "reverse": reverse,
    "shape": shape,
    "transpose": transpose,
    "zip_with": zip_with,
})


METHODS = MappingProxyType({
    "append": append,
    "compare": compare,
    "concat": concat,
    "cons": cons,
    "rep": rep,
    "sub": sub,
    "tail": tail,

    "depair": deprecated("38", "'List.depair'", _depair),
    "map_with": deprecated("38", "'List.map_with'", _map_with_method),
    "transpose": deprecated("38", "'List.transpose'", _transpose),
    "zip_with": deprecated("38", "'List.zip_with'", _zip_with),

    "elems": deprecated("41", "'List.elems'", ielems, "use 'ielems' instead"),
    "enpair": deprecated("41", "'List.enpair'", _enpair),
    "filter": deprecated("41", "'List.filter'", _filter_method, "use a comprehension instead"),
    "flatten": deprecated("41", "'List.flatten'", _flatten, "use 'leaves' instead"),
    "foldl": deprecated("41", "'List.foldl'", _foldl_method, "use 'functools.reduce' instead"),
    "foldr": deprecated("41", "'List.foldr'", _foldr_method,
                        "use 'functools.reduce' over 'ireverse' instead"),
    "index_key": deprecated("41", "'List.index_key'", _index_key_method),
    "index_value": deprecated("41", "'List.index_value'", _index_value_method),
    "map": deprecated("41", "'List.map'", _map_method, "use a comprehension instead"),
    "project": deprecated("41", "'List.project'", _project_method, "use a comprehension instead"),
    "relems": deprecated("41", "'List.relems'", _relems),
    "reverse": deprecated("41", "'List.reverse'", _reverse, "use 'ireverse' instead"),
    "shape": deprecated("41", "'List.shape'", _shape_method),
})


List._meta = {"type": "List", "parent": Object(), "methods": METHODS, "functions": FUNCTIONS}
