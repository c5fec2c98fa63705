from __future__ import annotations

import datetime
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from django.utils.dateparse import parse_date, parse_datetime

__all__ = [
    "FALSE_VALUES",
    "coerce_value",
]

#: String values treated as false when coercing to boolean
FALSE_VALUES = frozenset({"false", "f", "0", "off", "no", "n"})

_NUMBER_PREFIX_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _number_prefix(value: str) -> Decimal:
    match = _NUMBER_PREFIX_RE.match(value)
    if match is None:
        return Decimal(0)
    try:
        return Decimal(match.group(0).strip())
    except InvalidOperation:
        return Decimal(0)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return int(value)
    return int(_number_prefix(str(value)))


def _to_float(value: Any) -> float:
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return float(_number_prefix(str(value)))


def _to_boolean(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        value = value.strip().lower()
        if not value:
            return None
        return value not in FALSE_VALUES
    return bool(value)


def _to_datetime(value: Any) -> Any:
    if isinstance(value, datetime.datetime):
        return value
    if not isinstance(value, str):
        return value

    parsed = parse_datetime(value)
    if parsed is None:
        date = parse_date(value)
        if date is not None:
            parsed = datetime.datetime(date.year, date.month, date.day)

    return parsed


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "string": _to_string,
    "integer": _to_integer,
    "float": _to_float,
    "boolean": _to_boolean,
    "datetime": _to_datetime,
}


def coerce_value(value: Any, type_: str) -> Any:
    """Coerce a scalar response value to the declared attribute type.

    `None` and lists are returned untouched whatever the declared type.
    Unparseable numbers coerce to zero. `json`, `array` and unknown types are
    passed through.
    """
    if value is None or isinstance(value, list):
        return value

    coercer = _COERCERS.get(type_)
    if coercer is None:
        return value

    return coercer(value)
