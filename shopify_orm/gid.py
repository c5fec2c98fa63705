"""Helpers for Shopify global IDs (`gid://shopify/Customer/1`)."""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Optional
from urllib.parse import quote

GID_RE = re.compile(
    r"^gid://(?P<app>[^/?#]+)/(?P<model_name>[^/?#]+)/(?P<model_id>[^/?#]+)"
    r"(?:\?(?P<params>[^#]*))?$",
)


@dataclasses.dataclass(frozen=True)
class GlobalID:
    app: str
    model_name: str
    model_id: str
    params: Optional[str] = None

    def __str__(self):
        gid = f"gid://{self.app}/{self.model_name}/{self.model_id}"
        if self.params:
            gid = f"{gid}?{self.params}"
        return gid


def parse_gid(value: Any) -> Optional[GlobalID]:
    if not isinstance(value, str):
        return None

    match = GID_RE.match(value)
    if match is None:
        return None

    return GlobalID(**match.groupdict())


def is_valid_gid(value: Any) -> bool:
    return parse_gid(value) is not None


def normalize_gid(id: Any, model_name: str) -> str:  # noqa: A002
    """Return `id` as a Shopify GID for `model_name`.

    Valid GIDs (from any app namespace) are returned unchanged, anything else
    is treated as the bare identifier.

    >>> normalize_gid(123, "Customer")
    'gid://shopify/Customer/123'
    >>> normalize_gid("gid://shopify/Customer/123", "Order")
    'gid://shopify/Customer/123'
    """
    if is_valid_gid(id):
        return id

    return str(GlobalID("shopify", model_name, quote(str(id), safe="")))


__all__ = [
    "GlobalID",
    "is_valid_gid",
    "normalize_gid",
    "parse_gid",
]
