from __future__ import annotations

import dataclasses
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Optional,
    Union,
)

from shopify_orm.exceptions import InvalidConnectionError
from shopify_orm.fields.attribute import ShopifyAttribute
from shopify_orm.fields.connection import ShopifyConnection, populate_inverse_cache
from shopify_orm.gid import normalize_gid
from shopify_orm.utils.pyutils import compact_dict

if TYPE_CHECKING:
    from shopify_orm.connections.proxy import ConnectionProxy
    from shopify_orm.loaders.base import Loader
    from shopify_orm.query.relation import Relation

__all__ = [
    "CONNECTION_CACHE_KEY",
    "Model",
    "ModelDefinition",
    "get_model",
]

#: Key under which loaders pass already resolved connections to the constructor
CONNECTION_CACHE_KEY = "_connection_cache"

_registry: dict[str, type[Model]] = {}


def get_model(name: str) -> type[Model]:
    try:
        return _registry[name]
    except KeyError:
        raise LookupError(f"No model named {name!r} has been declared") from None


@dataclasses.dataclass
class ModelDefinition:
    model: type[Model]
    graphql_type: str
    loader_class: Optional[type[Loader]] = None
    attributes: dict[str, ShopifyAttribute] = dataclasses.field(default_factory=dict)
    connections: dict[str, ShopifyConnection] = dataclasses.field(
        default_factory=dict,
    )
    loader_attributes: dict[type[Loader], dict[str, ShopifyAttribute]] = (
        dataclasses.field(default_factory=dict)
    )
    loader_graphql_types: dict[type[Loader], str] = dataclasses.field(
        default_factory=dict,
    )

    @property
    def default_loader_class(self) -> type[Loader]:
        if self.loader_class is not None:
            return self.loader_class

        from shopify_orm.loaders.admin_api import AdminApiLoader

        return AdminApiLoader

    @property
    def eager_connections(self) -> list[str]:
        return [name for name, c in self.connections.items() if c.eager_load]

    def attributes_for_loader(
        self,
        loader_class: Optional[type[Loader]] = None,
    ) -> dict[str, ShopifyAttribute]:
        """Return the attributes used by `loader_class`.

        Overrides registered for a loader (or one of its bases) replace the
        declared attribute with the same name.
        """
        attributes = dict(self.attributes)
        if loader_class is None:
            return attributes

        for klass in reversed(loader_class.__mro__):
            attributes.update(self.loader_attributes.get(klass, {}))

        return attributes

    def graphql_type_for_loader(self, loader_class: Optional[type[Loader]] = None):
        if loader_class is not None:
            for klass in loader_class.__mro__:
                if klass in self.loader_graphql_types:
                    return self.loader_graphql_types[klass]

        return self.graphql_type


class Model:
    """Base class for models backed by a Shopify GraphQL type.

    Examples:
    --------
        >>> class Customer(Model, graphql_type="Customer"):
        ...     id = attribute()
        ...     display_name = attribute()
        ...     orders = has_many_connected(default_arguments={"first": 10})

    """

    __shopify_definition__: ClassVar[ModelDefinition]

    _connection_cache: dict[str, Any]
    _connection_proxies: dict[str, ConnectionProxy]

    def __init_subclass__(
        cls,
        *,
        graphql_type: Optional[str] = None,
        loader_class: Optional[type[Loader]] = None,
        **kwargs: Any,
    ):
        super().__init_subclass__(**kwargs)

        parent: Optional[ModelDefinition] = getattr(cls, "__shopify_definition__", None)
        definition = ModelDefinition(
            model=cls,
            graphql_type=graphql_type or cls.__name__,
            loader_class=loader_class or (parent and parent.loader_class),
        )
        if parent is not None:
            definition.attributes.update(parent.attributes)
            definition.connections.update(parent.connections)
            for klass, overrides in parent.loader_attributes.items():
                definition.loader_attributes[klass] = dict(overrides)
            definition.loader_graphql_types.update(parent.loader_graphql_types)

        for name, value in cls.__dict__.items():
            if isinstance(value, ShopifyAttribute):
                definition.attributes[name] = value
            elif isinstance(value, ShopifyConnection):
                definition.connections[name] = value

        cls.__shopify_definition__ = definition
        _registry[cls.__name__] = cls

    def __init__(self, **attributes: Any):
        self._connection_cache = {}
        self._connection_proxies = {}

        connection_cache = attributes.pop(CONNECTION_CACHE_KEY, None)

        cls = type(self)
        for name, value in attributes.items():
            if not isinstance(
                getattr(cls, name, None),
                (ShopifyAttribute, ShopifyConnection),
            ):
                raise TypeError(
                    f"{cls.__name__}() got an unexpected keyword argument {name!r}",
                )
            setattr(self, name, value)

        if connection_cache:
            self._connection_cache.update(connection_cache)
            self._populate_inverse_caches()

    def __repr__(self):
        values = ", ".join(
            f"{name}={self.__dict__.get(name)!r}"
            for name in self.__shopify_definition__.attributes
            if name in self.__dict__
        )
        return f"<{type(self).__name__} {values}>"

    @property
    def gid(self) -> Optional[str]:
        id_ = self.__dict__.get("id")
        if id_ is None:
            return None

        return normalize_gid(id_, self.__shopify_definition__.graphql_type)

    def _populate_inverse_caches(self):
        connections = self.__shopify_definition__.connections
        for name, records in self._connection_cache.items():
            connection = connections.get(name)
            if connection is None or connection.inverse_of is None:
                continue

            if isinstance(records, list):
                records = [r for r in records if r is not None]
            populate_inverse_cache(self, connection, records)

    def fetch_connection(self, name: str, **options: Any) -> Any:
        """Return the value of connection `name`.

        Without options, cached values are returned first, has-many connections
        return a memoized proxy and has-one connections are loaded and cached.
        Each call with options returns a fresh proxy or load.
        """
        from shopify_orm.connections.proxy import ConnectionProxy, load_connection

        connection = self.__shopify_definition__.connections.get(name)
        if connection is None:
            raise InvalidConnectionError(type(self), [name])

        options = compact_dict(options)
        if options:
            if connection.is_singular:
                return load_connection(self, connection, options)
            return ConnectionProxy(self, connection, options)

        if name in self._connection_cache:
            return self._connection_cache[name]

        if connection.is_singular:
            record = load_connection(self, connection)
            self._connection_cache[name] = record
            return record

        proxy = self._connection_proxies.get(name)
        if proxy is None:
            proxy = ConnectionProxy(self, connection)
            self._connection_proxies[name] = proxy

        return proxy

    @classmethod
    def override_for_loader(
        cls,
        loader_class: type[Loader],
        *,
        graphql_type: Optional[str] = None,
        **attributes: ShopifyAttribute,
    ):
        """Register attributes and a GraphQL type used only by `loader_class`.

        Usage:
            Customer.override_for_loader(
                CustomerAccountApiLoader,
                email=attribute(path="emailAddress.emailAddress"),
            )
        """
        definition = cls.__shopify_definition__
        if graphql_type is not None:
            definition.loader_graphql_types[loader_class] = graphql_type

        overrides = definition.loader_attributes.setdefault(loader_class, {})
        for name, descriptor in attributes.items():
            descriptor.bind(name)
            overrides[name] = descriptor
            if not isinstance(getattr(cls, name, None), ShopifyAttribute):
                setattr(cls, name, dataclasses.replace(descriptor))

    @classmethod
    def graphql_type_for_loader(cls, loader_class: Optional[type[Loader]] = None):
        return cls.__shopify_definition__.graphql_type_for_loader(loader_class)

    @classmethod
    def attributes_for_loader(cls, loader_class: Optional[type[Loader]] = None):
        return cls.__shopify_definition__.attributes_for_loader(loader_class)

    @classmethod
    def connections(cls) -> dict[str, ShopifyConnection]:
        return cls.__shopify_definition__.connections

    @classmethod
    def all(cls) -> Relation:
        from shopify_orm.query.relation import Relation

        return Relation(cls)

    @classmethod
    def with_loader(cls, loader_class: type[Loader], **loader_kwargs: Any) -> Relation:
        from shopify_orm.query.relation import Relation

        return Relation(cls, loader_class=loader_class, loader_kwargs=loader_kwargs)

    @classmethod
    def with_admin_api(cls) -> Relation:
        from shopify_orm.loaders.admin_api import AdminApiLoader

        return cls.with_loader(AdminApiLoader)

    @classmethod
    def with_customer_account_api(cls, token: Optional[str] = None) -> Relation:
        from shopify_orm.loaders.customer_account_api import CustomerAccountApiLoader

        return cls.with_loader(CustomerAccountApiLoader, token=token)

    @classmethod
    def find(cls, id: Any = None):  # noqa: A002
        return cls.all().find(id)

    @classmethod
    def find_by(cls, conditions: Optional[dict[str, Any]] = None, **kwargs: Any):
        return cls.all().find_by(conditions, **kwargs)

    @classmethod
    def where(
        cls,
        conditions: Union[str, dict[str, Any], None] = None,
        *args,
        **kwargs,
    ):
        return cls.all().where(conditions, *args, **kwargs)

    @classmethod
    def includes(cls, *connections: Union[str, dict[str, Any]]) -> Relation:
        return cls.all().includes(*connections)

    @classmethod
    def select(cls, *attributes: str) -> Relation:
        return cls.all().select(*attributes)
