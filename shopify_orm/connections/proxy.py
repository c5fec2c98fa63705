from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Optional,
    TypeVar,
    Union,
    overload,
)

from shopify_orm.fields.connection import populate_inverse_cache
from shopify_orm.utils.pyutils import compact_dict

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from typing_extensions import Self

    from shopify_orm.fields.connection import ShopifyConnection
    from shopify_orm.loaders.base import Loader
    from shopify_orm.model import Model

__all__ = [
    "ConnectionProxy",
    "build_connection_arguments",
    "load_connection",
]

_M = TypeVar("_M", bound="Model")


def build_connection_arguments(
    connection: ShopifyConnection,
    options: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Merge call time options over the connection's default arguments.

    Options set to None are dropped first, so they never mask a default.
    """
    return {**connection.default_arguments, **compact_dict(options or {})}


def connection_loader(parent: Model, connection: ShopifyConnection) -> Loader:
    loader_class = (
        connection.loader_class
        or type(parent).__shopify_definition__.default_loader_class
    )
    return loader_class(connection.target)


def load_connection(
    parent: Model,
    connection: ShopifyConnection,
    options: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Load the records of `connection` for `parent`.

    Has-many connections always return a list, has-one connections the record
    or None.
    """
    loader = connection_loader(parent, connection)
    assert connection.query_name is not None

    records = loader.load_connection_records(
        connection.query_name,
        build_connection_arguments(connection, options),
        parent=parent,
        connection=connection,
    )
    if records is None and not connection.is_singular:
        records = []

    populate_inverse_cache(parent, connection, records)
    return records


class ConnectionProxy(Generic[_M]):
    """Lazily loaded has-many connection.

    The records are fetched once, on the first access that needs them, and
    kept until `reload()` is called.
    """

    def __init__(
        self,
        parent: Model,
        connection: ShopifyConnection,
        options: Optional[Mapping[str, Any]] = None,
    ):
        self.parent = parent
        self.connection = connection
        self.options = dict(options or {})
        self._records: Optional[list[_M]] = None

    def __repr__(self):
        if self._records is None:
            return f"<ConnectionProxy {self.connection.name} (not loaded)>"
        return f"<ConnectionProxy {self.connection.name} {self._records!r}>"

    @property
    def loaded(self) -> bool:
        return self._records is not None

    @property
    def records(self) -> list[_M]:
        if self._records is None:
            self._records = load_connection(self.parent, self.connection, self.options)
        return self._records

    def load(self) -> Self:
        self.records  # noqa: B018
        return self

    def reload(self) -> Self:
        self._records = None
        return self

    def __iter__(self) -> Iterator[_M]:
        return iter(self.records)

    def __len__(self):
        return len(self.records)

    def __bool__(self):
        return bool(self.records)

    def __contains__(self, item: object):
        return item in self.records

    @overload
    def __getitem__(self, index: int) -> _M: ...

    @overload
    def __getitem__(self, index: slice) -> list[_M]: ...

    def __getitem__(self, index):
        return self.records[index]

    def __eq__(self, other: object):
        if isinstance(other, ConnectionProxy):
            return self.records == other.records
        if isinstance(other, list):
            return self.records == other
        return NotImplemented

    __hash__ = None  # type: ignore

    def to_list(self) -> list[_M]:
        return list(self.records)

    def is_empty(self) -> bool:
        return not self.records

    def count(self) -> int:
        return len(self.records)

    @overload
    def first(self) -> Optional[_M]: ...

    @overload
    def first(self, n: int) -> list[_M]: ...

    def first(self, n: Optional[int] = None) -> Union[_M, list[_M], None]:
        records = self.records
        if n is None:
            return records[0] if records else None
        return records[:n]

    @overload
    def last(self) -> Optional[_M]: ...

    @overload
    def last(self, n: int) -> list[_M]: ...

    def last(self, n: Optional[int] = None) -> Union[_M, list[_M], None]:
        records = self.records
        if n is None:
            return records[-1] if records else None
        if n <= 0:
            return []
        return records[-n:]
