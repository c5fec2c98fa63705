from __future__ import annotations

import dataclasses
from typing import (
    TYPE_CHECKING,
    Any,
    Iterable,
    Literal,
    Optional,
    Union,
    overload,
)

from strawberry.utils.str_converters import to_camel_case
from typing_extensions import Self

from shopify_orm.utils.inflection import singularize, to_pascal_case

if TYPE_CHECKING:
    from shopify_orm.loaders.base import Loader
    from shopify_orm.model import Model

__all__ = [
    "ConnectionType",
    "ShopifyConnection",
    "connection",
    "has_many_connected",
    "has_one_connected",
    "populate_inverse_cache",
]

ConnectionType = Literal["connection", "singular"]


@dataclasses.dataclass(eq=False)
class ShopifyConnection:
    """Metadata describing a relationship to another model.

    `default_arguments` holds exactly the GraphQL arguments given at declaration
    time, nothing is added to it implicitly.
    """

    name: str = ""
    class_name: Union[str, type[Model], None] = None
    query_name: Optional[str] = None
    type: ConnectionType = "connection"
    nested: bool = True
    default_arguments: dict[str, Any] = dataclasses.field(default_factory=dict)
    eager_load: bool = False
    inverse_of: Optional[str] = None
    loader_class: Optional[type[Loader]] = None

    def __set_name__(self, owner: type[Model], name: str):
        self.bind(name)

    def bind(self, name: str) -> Self:
        self.name = name

        if self.query_name is None:
            self.query_name = to_camel_case(name)
        if self.class_name is None:
            target = name if self.is_singular else singularize(to_camel_case(name))
            self.class_name = to_pascal_case(target)

        return self

    @overload
    def __get__(self, obj: Model, cls: type[Model]) -> Any: ...

    @overload
    def __get__(self, obj: None, cls: type[Model]) -> Self: ...

    def __get__(self, obj, cls=None):
        if obj is None:
            return self

        return obj.fetch_connection(self.name)

    def __set__(self, obj: Model, value: Any):
        obj._connection_cache[self.name] = value

    @property
    def is_singular(self) -> bool:
        return self.type == "singular"

    @property
    def target(self) -> type[Model]:
        from shopify_orm.model import get_model

        if isinstance(self.class_name, str):
            return get_model(self.class_name)

        assert self.class_name is not None
        return self.class_name

    @property
    def response_key(self) -> str:
        """Key holding this connection's data in a parent node."""
        return self.name

    @property
    def needs_alias(self) -> bool:
        return self.name != self.query_name

    def __repr__(self):
        return (
            f"<ShopifyConnection {self.name!r} query_name={self.query_name!r} "
            f"type={self.type!r}>"
        )


def connection(
    *,
    class_name: Union[str, type[Model], None] = None,
    query_name: Optional[str] = None,
    type: ConnectionType = "connection",  # noqa: A002
    nested: bool = True,
    default_arguments: Optional[dict[str, Any]] = None,
    eager_load: bool = False,
    inverse_of: Optional[str] = None,
    loader_class: Optional[type[Loader]] = None,
) -> Any:
    """Declare a connection to another model.

    Args:
    ----
        class_name:
            The target model, or its class name when it is declared later.
            Defaults to the singular PascalCase form of the connection name.
        query_name:
            GraphQL field holding the connection. Defaults to the camelCase
            form of the connection name. When it differs from the connection
            name the field is aliased in generated queries.
        type:
            `connection` for paginated has-many relations (`edges { node }`),
            `singular` for has-one relations.
        nested:
            False when the GraphQL root exposes the field directly, so it can be
            queried without going through the parent.
        default_arguments:
            Arguments sent with every query for this connection.
        eager_load:
            Always include the connection in the owner's fragment.
        inverse_of:
            Name of the reciprocal connection on the target model. Loaded
            records get the owner cached under that name.
        loader_class:
            Loader used to fetch the connection instead of the owner's.

    """
    return ShopifyConnection(
        class_name=class_name,
        query_name=query_name,
        type=type,
        nested=nested,
        default_arguments=dict(default_arguments or {}),
        eager_load=eager_load,
        inverse_of=inverse_of,
        loader_class=loader_class,
    )


def has_many_connected(**kwargs: Any) -> Any:
    return connection(type="connection", **kwargs)


def has_one_connected(**kwargs: Any) -> Any:
    return connection(type="singular", **kwargs)


def populate_inverse_cache(
    owner: Model,
    connection: ShopifyConnection,
    records: Union[Model, Iterable[Model], None],
):
    """Cache `owner` on each loaded record under the connection's inverse.

    Inverse names unknown to the target model are ignored, the reciprocal
    connection may simply not be declared.
    """
    if connection.inverse_of is None or records is None:
        return

    if not isinstance(records, (list, tuple)):
        records = [records]  # type: ignore

    for record in records:  # type: ignore
        inverse = type(record).__shopify_definition__.connections.get(
            connection.inverse_of,
        )
        if inverse is None:
            continue

        cache = record._connection_cache
        if inverse.is_singular:
            cache[inverse.name] = owner
            continue

        existing = cache.get(inverse.name)
        if isinstance(existing, list):
            if not any(item is owner for item in existing):
                existing.append(owner)
        else:
            cache[inverse.name] = [owner]
