from .configuration import (
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
)
from .connections import ConnectionProxy
from .context import LoaderContext
from .exceptions import (
    ClientNotConfiguredError,
    InvalidAttributeError,
    InvalidConnectionError,
    MissingAttributesError,
    NullAttributeError,
    ObjectNotFoundError,
    SearchQueryError,
    ShopifyORMError,
    UnsupportedOperationError,
)
from .fields.attribute import attribute, metafield_attribute
from .fields.connection import connection, has_many_connected, has_one_connected
from .gid import is_valid_gid, normalize_gid, parse_gid
from .loaders import AdminApiLoader, CustomerAccountApiLoader, Loader
from .model import Model
from .query.relation import Relation
from .query.search import SearchQuery
from .response.pagination import PageInfo, PaginatedResult

__all__ = [
    "AdminApiLoader",
    "ClientNotConfiguredError",
    "Configuration",
    "ConnectionProxy",
    "CustomerAccountApiLoader",
    "InvalidAttributeError",
    "InvalidConnectionError",
    "Loader",
    "LoaderContext",
    "MissingAttributesError",
    "Model",
    "NullAttributeError",
    "ObjectNotFoundError",
    "PageInfo",
    "PaginatedResult",
    "Relation",
    "SearchQuery",
    "SearchQueryError",
    "ShopifyORMError",
    "UnsupportedOperationError",
    "attribute",
    "configure",
    "connection",
    "get_configuration",
    "has_many_connected",
    "has_one_connected",
    "is_valid_gid",
    "metafield_attribute",
    "normalize_gid",
    "parse_gid",
    "reset_configuration",
]
