"""
Renders batteries values as short, readable text.

`tostring` is what the `..` and `""` operators use, so absent values render
as `none` rather than an empty string.
"""
import collections.abc

from batteries.batteries_datatypes import Object


class Printer:
    """Formats values into their canonical textual representation."""

    def __init__(self):
        self._handlers = self._create_handlers()

    def pformat(self, obj) -> str:
        """Public entry point to format an object. Top-level strings are not quoted."""
        if isinstance(obj, str):
            return obj
        return self._pformat(obj, set())

    def _pformat(self, obj, seen):
        handler = self._get_handler(obj)
        return handler(obj, seen)

    def _get_handler(self, obj):
        """Dispatcher to find the correct formatting method."""
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        # Fallback for subclasses and container protocols
        if isinstance(obj, Object):
            return self._pformat_object
        if isinstance(obj, bool):
            return self._pformat_bool
        if isinstance(obj, (int, float)):
            return self._pformat_primitive
        if isinstance(obj, str):
            return self._pformat_str
        if isinstance(obj, collections.abc.Mapping):
            return self._pformat_mapping
        if isinstance(obj, collections.abc.Sequence) and not isinstance(obj, (bytes, bytearray)):
            return self._pformat_sequence
        # Default to Python's repr for unknown types
        return lambda o, s: repr(o)

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            int: self._pformat_primitive,
            float: self._pformat_primitive,
            bool: self._pformat_bool,
            type(None): self._pformat_none,
            list: self._pformat_sequence,
            tuple: self._pformat_sequence,
            dict: self._pformat_mapping,
        }

    def _pformat_primitive(self, obj, seen):
        return str(obj)

    def _pformat_str(self, obj, seen):
        # Nested strings are quoted so `{'1', 1}` stays distinguishable
        return f"'{obj}'"

    def _pformat_bool(self, obj, seen):
        return 'true' if obj else 'false'

    def _pformat_none(self, obj, seen):
        return 'none'

    def _pformat_key(self, key, seen):
        # String keys read as field names, so they stay unquoted
        if isinstance(key, str):
            return key
        return self._pformat(key, seen)

    def _pformat_items(self, items, seen):
        return ", ".join(self._pformat(item, seen) for item in items)

    def _guarded(self, obj, seen, render):
        if id(obj) in seen:
            return "{...}"
        seen.add(id(obj))
        try:
            return render()
        finally:
            seen.discard(id(obj))

    def _pformat_sequence(self, obj, seen):
        return self._guarded(obj, seen, lambda: "{" + self._pformat_items(obj, seen) + "}")

    def _pformat_mapping(self, obj, seen):
        def render():
            pairs = [f"{self._pformat_key(k, seen)}={self._pformat(v, seen)}" for k, v in obj.items()]
            return "{" + ", ".join(pairs) + "}"
        return self._guarded(obj, seen, render)

    def _pformat_object(self, obj, seen):
        type_name = obj.meta.get("type", "Object")
        if isinstance(obj, collections.abc.Sequence):
            body = self._guarded(obj, seen, lambda: self._pformat_items(obj, seen))
            return f"{type_name} {{{body}}}"
        return f"{type_name} {{}}"


_printer = Printer()


def tostring(obj=None) -> str:
    """Returns the canonical text of `obj`; `tostring()` is `'none'`."""
    return _printer.pformat(obj)
