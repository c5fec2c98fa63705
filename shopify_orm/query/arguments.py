"""Rendering of inline GraphQL argument literals."""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from typing import Any, Optional

from graphql.language.print_string import print_string
from strawberry.utils.str_converters import to_camel_case

__all__ = [
    "QUOTED_KEYS",
    "Variable",
    "render_arguments",
    "render_value",
]

#: Arguments whose string values are always sent as string literals
QUOTED_KEYS = frozenset({"query", "after", "before", "namespace", "key"})

_ENUM_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")


class Variable(str):
    """Reference to an operation variable, rendered as `$name`."""

    __slots__ = ()


def render_value(value: Any, key: Optional[str] = None) -> str:
    """Render a python value as a GraphQL literal.

    Strings are quoted unless they look like enum values (`CREATED_AT`).
    Arguments listed in `QUOTED_KEYS` are always quoted.
    """
    if value is None:
        return "null"
    if isinstance(value, Variable):
        return f"${value}"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        if key in QUOTED_KEYS:
            return print_string(value)
        if _ENUM_RE.match(value):
            return value
        return print_string(value)
    if isinstance(value, Mapping):
        fields = ", ".join(
            f"{to_camel_case(str(k))}: {render_value(v, str(k))}"
            for k, v in value.items()
            if v is not None
        )
        return f"{{{fields}}}"
    if isinstance(value, (list, tuple)):
        return f"[{', '.join(render_value(v, key) for v in value)}]"

    return print_string(str(value))


def render_arguments(arguments: Optional[Mapping[str, Any]]) -> str:
    """Render `(key: value, ...)`, omitting arguments whose value is None.

    >>> render_arguments({"first": 10, "sort_key": "CREATED_AT", "after": None})
    '(first: 10, sortKey: CREATED_AT)'
    """
    if not arguments:
        return ""

    rendered = [
        f"{to_camel_case(str(k))}: {render_value(v, str(k))}"
        for k, v in arguments.items()
        if v is not None
    ]
    if not rendered:
        return ""

    return f"({', '.join(rendered)})"
