"""Shopify search syntax (`status:open AND created_at:>=2024-01-01`)."""

from __future__ import annotations

import datetime
import enum
import re
from collections.abc import Mapping
from typing import Any, Union

from shopify_orm.exceptions import SearchQueryError

__all__ = [
    "RANGE_OPERATORS",
    "SearchQuery",
    "bind_parameters",
    "format_conditions",
    "sanitize",
]

RANGE_OPERATORS = {
    "gt": ">",
    ">": ">",
    "gte": ">=",
    ">=": ">=",
    "lt": "<",
    "<": "<",
    "lte": "<=",
    "<=": "<=",
}

_NAMED_PARAM_RE = re.compile(r":(\w+)")

ConditionsType = Union[str, Mapping[str, Any], list, tuple, None]


def sanitize(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("'", "\\'")


def _format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _format_string(key: str, value: str) -> str:
    if re.search(r"\s", value) and not value.startswith('"'):
        escaped = value.replace('"', '\\"')
        return f'{key}:"{escaped}"'
    return f"{key}:{value}"


def _format_range(key: str, value: Mapping[Any, Any]) -> str:
    parts = []
    for operator, operand in value.items():
        name = operator.value if isinstance(operator, enum.Enum) else str(operator)
        try:
            symbol = RANGE_OPERATORS[name]
        except KeyError:
            raise SearchQueryError(
                f"Unsupported range operator {name!r} for {key!r}",
            ) from None
        parts.append(f"{key}:{symbol}{_format_scalar(operand)}")

    return " ".join(parts)


def _format_condition(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return _format_string(key, value)
    if isinstance(value, Mapping):
        return _format_range(key, value)
    if isinstance(value, (list, tuple, set, frozenset)):
        values = [v for v in value if v is not None]
        if not values:
            return ""
        if len(values) == 1:
            return _format_condition(key, values[0])
        return "({})".format(" OR ".join(_format_condition(key, v) for v in values))

    return f"{key}:{_format_scalar(value)}"


def format_conditions(conditions: Mapping[str, Any]) -> str:
    """Format a mapping of conditions, joining them with `AND`.

    >>> format_conditions({"status": "open", "id": [1, 2]})
    'status:open AND (id:1 OR id:2)'
    """
    parts = (_format_condition(str(k), v) for k, v in conditions.items())
    return " AND ".join(p for p in parts if p)


def _format_bound_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return f"'{sanitize(_format_scalar(value))}'"


def bind_parameters(query: str, *args: Any, **params: Any) -> str:
    """Bind positional (`?`) or named (`:name`) parameters into `query`.

    Bound values are quoted and escaped, placeholders without a value are kept.

    >>> bind_parameters("sku:? AND vendor:?", "A-1", "Acme Inc")
    "sku:'A-1' AND vendor:'Acme Inc'"
    >>> bind_parameters("sku::sku", sku="A-1")
    "sku:'A-1'"
    """
    if params:

        def replace_named(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in params:
                return match.group(0)
            return _format_bound_value(params[name])

        return _NAMED_PARAM_RE.sub(replace_named, query)

    values = iter(args)

    def replace_positional(match: re.Match[str]) -> str:
        for value in values:
            return _format_bound_value(value)
        return match.group(0)

    return re.sub(r"\?", replace_positional, query)


class SearchQuery:
    """The `query:` argument for collection queries.

    Conditions can be a mapping, a raw search string, or a string with bound
    parameters.

    Examples:
    --------
        >>> str(SearchQuery({"created_at": {"gte": "2024-01-01"}}))
        'created_at:>=2024-01-01'
        >>> str(SearchQuery("email:?", "jane@example.com"))
        "email:'jane@example.com'"

    """

    def __init__(self, conditions: ConditionsType = None, *args: Any, **params: Any):
        if isinstance(conditions, (list, tuple)) and conditions:
            conditions, *extra = conditions
            args = (*extra, *args)
            if len(args) == 1 and isinstance(args[0], Mapping) and not params:
                params = dict(args[0])
                args = ()

        self.conditions = conditions
        self.args = args
        self.params = params

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"<SearchQuery {self.to_string()!r}>"

    def __bool__(self):
        return bool(self.to_string())

    def to_string(self) -> str:
        conditions = self.conditions
        if not conditions:
            return ""
        if isinstance(conditions, Mapping):
            return format_conditions(conditions)
        if isinstance(conditions, str):
            if not self.args and not self.params:
                return conditions
            return bind_parameters(conditions, *self.args, **self.params)

        raise SearchQueryError(
            f"Unsupported search conditions: {conditions!r}",
        )
