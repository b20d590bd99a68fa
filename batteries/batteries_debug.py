"""
Debugging aids: tracing, argument checking for exported functions, and
deprecation shims for functions on their way out.

    @export("rep (List, int)")
    def rep(l, n): ...

    old_name = deprecated("41", "'batteries.list.old_name'", new_impl,
                          "use 'new_name' instead")

All three honour the switches in `batteries_config`.
"""

import functools
import sys
import threading
import warnings
from typing import Callable, Optional, Set

import pystache

from batteries.batteries_config import get_config
from batteries.batteries_datatypes import ContractViolation
from batteries.batteries_signature import Signature, bad_argument_message

DEPRECATION_TEMPLATE = (
    "{{name}} was deprecated in release {{version}}, and will be removed "
    "entirely in a future release{{#extramsg}}, {{extramsg}}{{/extramsg}}."
)

_renderer = pystache.Renderer(escape=lambda u: u)

_warned: Set[str] = set()
_warned_lock = threading.Lock()


def trace(*parts) -> None:
    if get_config().debug:
        print("[DBG]", *parts, file=sys.stderr)


def argerror(name: str, i: int, expected: str, got: str):
    """Raises the standard 'bad argument' ContractViolation."""
    message = bad_argument_message(name, i, expected, got)
    trace("argerror:", message)
    raise ContractViolation(message)


def export(decl: str):
    """Decorates a function with argument checking against `decl`.

    The declaration is parsed once, when the decorator is applied. Checks
    only run while argument checking is enabled; keyword arguments are
    passed through unchecked.
    """
    signature = Signature.parse(decl)
    trace("export:", str(signature))

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            if get_config().argcheck:
                try:
                    signature.check(args)
                except ContractViolation as e:
                    trace("argcheck:", e)
                    raise
            return fn(*args, **kwargs)
        wrapper.signature = signature
        return wrapper
    return decorator


def deprecation_message(version: str, name: str, extramsg: Optional[str] = None) -> str:
    """
    >>> deprecation_message("41", "'batteries.list.map'", "use 'map' instead")
    "'batteries.list.map' was deprecated in release 41, and will be removed entirely in a future release, use 'map' instead."
    """
    return _renderer.render(DEPRECATION_TEMPLATE, {
        "name": name,
        "version": version,
        "extramsg": extramsg or False,
    })


def deprecated(version: str, name: str, fn: Callable, extramsg: Optional[str] = None) -> Callable:
    """Wraps `fn` so calling it under its legacy `name` still works.

    The first call for each `name` issues a DeprecationWarning; the call is
    always forwarded unchanged. With `deprecate` set to `off` nothing is
    reported, and with `error` the call raises ContractViolation instead.
    """
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        mode = get_config().deprecate
        if mode == "error":
            message = deprecation_message(version, name, extramsg)
            trace("deprecated (error):", message)
            raise ContractViolation(message)
        if mode == "warn":
            with _warned_lock:
                first = name not in _warned
                _warned.add(name)
            if first:
                message = deprecation_message(version, name, extramsg)
                trace("deprecated:", message)
                warnings.warn(message, DeprecationWarning, stacklevel=2)
        return fn(*args, **kwargs)

    wrapper.deprecated_in = version
    wrapper.legacy_name = name
    return wrapper


def reset_deprecation_warnings() -> None:
    """Allows every legacy name to warn again."""
    with _warned_lock:
        _warned.clear()
