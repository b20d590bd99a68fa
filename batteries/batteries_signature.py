"""
Parses and applies export declarations such as `"sub (List, int?, int?)"`.

The declaration grammar lives in `grammar/signature_grammar.yaml` and is
compiled once per process with koine.
"""

from __future__ import annotations

import collections.abc
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from koine import Parser

from batteries.batteries_base import is_sequence, prototype
from batteries.batteries_datatypes import ContractViolation

GRAMMAR_PATH = Path(__file__).parent / "grammar" / "signature_grammar.yaml"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "any": lambda v: True,
    "List": lambda v: prototype(v) == "List",
    "int": _is_int,
    "number": _is_number,
    "string": lambda v: isinstance(v, str),
    "function": callable,
    "table": is_sequence,
    "sequence": is_sequence,
    "mapping": lambda v: isinstance(v, collections.abc.Mapping),
    "boolean": lambda v: isinstance(v, bool),
}


def bad_argument_message(name: str, i: int, expected: str, got: str) -> str:
    return f"bad argument #{i} to '{name}' ({expected} expected, got {got})"


def too_many_arguments_message(name: str, limit: int, got: int) -> str:
    return f"too many arguments to '{name}' (no more than {limit} expected, got {got})"


@dataclass(frozen=True)
class Parameter:
    types: Tuple[str, ...]
    optional: bool = False
    variadic: bool = False

    def accepts(self, value) -> bool:
        if value is None and self.optional:
            return True
        return any(TYPE_CHECKS[t](value) for t in self.types)

    def __str__(self) -> str:
        return " or ".join(self.types)


@dataclass(frozen=True)
class Signature:
    name: str
    parameters: Tuple[Parameter, ...]

    _parser = None
    _parser_lock = threading.Lock()

    @classmethod
    def get_parser(cls) -> Parser:
        if cls._parser is None:
            with cls._parser_lock:
                if cls._parser is None:
                    cls._parser = Parser.from_file(str(GRAMMAR_PATH))
        return cls._parser

    @classmethod
    def parse(cls, decl: str) -> "Signature":
        """Builds a Signature from a declaration string, or raises ValueError."""
        result = cls.get_parser().parse(decl)
        if result["status"] != "success":
            raise ValueError(f"malformed export declaration {decl!r}: {result['message']}")
        tokens = list(_leaves(result["ast"]))
        if not tokens or tokens[0]["tag"] != "function_name":
            raise ValueError(f"malformed export declaration {decl!r}: missing function name")
        name = tokens[0]["text"]

        groups: List[List[dict]] = [[]]
        for token in tokens[1:]:
            if token["tag"] == "comma":
                groups.append([])
            else:
                groups[-1].append(token)
        if groups == [[]]:
            groups = []

        parameters = tuple(_make_parameter(decl, group) for group in groups)
        for p in parameters[:-1]:
            if p.variadic:
                raise ValueError(f"malformed export declaration {decl!r}: only the last parameter may repeat")
        return cls(name, parameters)

    def check(self, args: Sequence[Any]) -> None:
        """Raises ContractViolation for the first argument that does not fit."""
        params = self.parameters
        variadic = params[-1] if params and params[-1].variadic else None
        if variadic is None and len(args) > len(params):
            raise ContractViolation(too_many_arguments_message(self.name, len(params), len(args)))

        for i, param in enumerate(params, start=1):
            if param.variadic:
                break
            if i > len(args):
                if not param.optional:
                    raise ContractViolation(bad_argument_message(self.name, i, str(param), "no value"))
                continue
            value = args[i - 1]
            if not param.accepts(value):
                raise ContractViolation(bad_argument_message(self.name, i, str(param), prototype(value)))

        if variadic is not None:
            # The repeating parameter matches zero or more trailing arguments
            for i in range(len(params), len(args) + 1):
                value = args[i - 1]
                if not variadic.accepts(value):
                    raise ContractViolation(bad_argument_message(self.name, i, str(variadic), prototype(value)))

    def __str__(self) -> str:
        def fmt(p):
            suffix = "*" if p.variadic else "?" if p.optional else ""
            return "|".join(p.types) + suffix
        return f"{self.name} ({', '.join(fmt(p) for p in self.parameters)})"


def _leaves(node):
    """Yields the leaf tokens of a koine AST in source order."""
    if isinstance(node, list):
        for child in node:
            yield from _leaves(child)
    elif isinstance(node, dict):
        children = node.get("children")
        if children is None:
            yield node
        elif isinstance(children, dict):
            for child in children.values():
                yield from _leaves(child)
        else:
            yield from _leaves(children)


def _make_parameter(decl: str, tokens: List[dict]) -> Parameter:
    types = tuple(t["text"] for t in tokens if t["tag"] == "type_name")
    modifiers = [t["text"] for t in tokens if t["tag"] == "modifier"]
    unknown = [t for t in types if t not in TYPE_CHECKS]
    if unknown:
        raise ValueError(f"malformed export declaration {decl!r}: unknown type '{unknown[0]}'")
    modifier: Optional[str] = modifiers[0] if modifiers else None
    return Parameter(types, optional=modifier == "?", variadic=modifier == "*")
