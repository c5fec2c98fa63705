"""Mapping of GraphQL JSON responses back into attributes and model instances."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from shopify_orm.exceptions import NullAttributeError, SearchQueryError
from shopify_orm.fields.connection import populate_inverse_cache
from shopify_orm.model import CONNECTION_CACHE_KEY
from shopify_orm.utils.pyutils import dig

from .coercion import coerce_value

if TYPE_CHECKING:
    from shopify_orm.context import LoaderContext
    from shopify_orm.fields.attribute import ShopifyAttribute
    from shopify_orm.fields.connection import ShopifyConnection
    from shopify_orm.model import Model
    from shopify_orm.utils.pyutils import DictTree

__all__ = [
    "ResponseMapper",
    "check_search_warnings",
    "map_node",
    "resolve_attribute",
]


def _raw_value(node: Mapping[str, Any], attr: ShopifyAttribute) -> Any:
    parts = attr.path_parts
    if attr.raw_graphql:
        # Raw selections are aliased with the attribute name, the rest of the
        # path is relative to that alias
        value = node.get(attr.name)
        return dig(value, parts[1:]) if len(parts) > 1 else value

    if len(parts) == 1:
        if attr.name in node:
            return node[attr.name]
        return node.get(parts[0])

    return dig(node, parts)


def resolve_attribute(node: Mapping[str, Any], attr: ShopifyAttribute) -> Any:
    """Resolve one attribute from a response node.

    Lists pass through untouched. Scalars are coerced, then a null value takes
    the default (skipping the transform) or fails when the attribute is not
    nullable. The transform applies to everything else.
    """
    value = _raw_value(node, attr)
    if isinstance(value, list):
        return value

    value = coerce_value(value, attr.type)

    if value is None:
        if attr.has_default:
            return attr.default
        if not attr.null:
            raise NullAttributeError(attr.name, attr.path or attr.name)

    if attr.transform is not None:
        value = attr.transform(value)

    return value


def map_node(
    node: Optional[Mapping[str, Any]],
    attributes: Mapping[str, ShopifyAttribute],
) -> dict[str, Any]:
    if not node:
        return {}

    return {name: resolve_attribute(node, attr) for name, attr in attributes.items()}


def check_search_warnings(response: Optional[Mapping[str, Any]]):
    """Raise for `extensions.search[].warnings[]` in a collection response."""
    searches = dig(response, ["extensions", "search"]) or []
    warnings = [
        warning
        for search in searches
        if isinstance(search, Mapping)
        for warning in search.get("warnings") or []
    ]
    if not warnings:
        return

    messages = ", ".join(f"{w.get('field')}: {w.get('message')}" for w in warnings)
    raise SearchQueryError(f"Shopify query validation failed: {messages}")


class ResponseMapper:
    def __init__(self, context: LoaderContext):
        self.context = context

    def map_record(self, response: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        """Map `data.<queryName>`, returning `{}` when the record is null."""
        return self.map_node(self.root_node(response))

    def map_node(self, node: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        return map_node(node, self.context.defined_attributes)

    def map_collection(
        self,
        response: Optional[Mapping[str, Any]],
        query_name: str,
    ) -> list[Model]:
        check_search_warnings(response)
        nodes = dig(response, ["data", query_name, "nodes"]) or []
        return [self.build_instance(node) for node in nodes if node]

    def root_node(
        self,
        response: Optional[Mapping[str, Any]],
    ) -> Optional[Mapping[str, Any]]:
        return dig(response, ["data", self.context.query_name])

    def build_instance(
        self,
        node: Mapping[str, Any],
        *,
        parent: Optional[Model] = None,
        connection: Optional[ShopifyConnection] = None,
    ) -> Model:
        """Instantiate the context model from `node` with its included connections."""
        attributes = self.map_node(node)
        instance = self.context.model_class(**attributes)

        if parent is not None and connection is not None:
            populate_inverse_cache(parent, connection, instance)

        for name, records in self.extract_connections_from_node(node, instance).items():
            instance._connection_cache[name] = records

        return instance

    def extract_connection_data(
        self,
        response: Optional[Mapping[str, Any]],
        parent: Optional[Model] = None,
    ) -> dict[str, Any]:
        """Included connections of the root record, keyed by connection name.

        Records are cached under their inverse on `parent` when one is given.
        """
        if not self.context.included_connections:
            return {}

        root = self.root_node(response)
        if not root:
            return {}

        return self.extract_connections_from_node(root, parent)

    def extract_connections_from_node(
        self,
        node: Mapping[str, Any],
        parent: Optional[Model] = None,
    ) -> dict[str, Any]:
        """Map every included connection present in `node`.

        Connections are read from their alias, which is the connection name.
        """
        ret: dict[str, Any] = {}
        for connection, nested in self.context.included():
            if connection.response_key not in node:
                continue

            ret[connection.name] = self.map_connection_node(
                node.get(connection.response_key),
                connection,
                nested,
                parent=parent,
            )

        return ret

    def map_connection_node(
        self,
        data: Any,
        connection: ShopifyConnection,
        nested_includes: Optional[DictTree] = None,
        *,
        parent: Optional[Model] = None,
    ) -> Union[Model, list[Model], None]:
        context = self.context.for_model(connection.target, nested_includes)
        mapper = ResponseMapper(context)

        if connection.is_singular:
            if not data:
                return None
            return mapper.build_instance(data, parent=parent, connection=connection)

        edges = dig(data, ["edges"]) or []
        return [
            mapper.build_instance(edge["node"], parent=parent, connection=connection)
            for edge in edges
            if isinstance(edge, Mapping) and edge.get("node")
        ]

    def map_connection(
        self,
        response: Optional[Mapping[str, Any]],
        field_name: str,
        connection: Optional[ShopifyConnection] = None,
        *,
        parent_query_name: Optional[str] = None,
    ) -> Union[Model, list[Model], None]:
        """Map the result of a connection query.

        The context is the one of the connection's target model. Nested queries
        read the connection below `data.<parentQueryName>`.
        """
        path = ["data"]
        if parent_query_name is not None:
            path.append(parent_query_name)
        path.append(field_name)
        data = dig(response, path)

        singular = connection is not None and connection.is_singular
        if singular:
            return self.build_instance(data) if data else None

        edges = dig(data, ["edges"]) or []
        return [
            self.build_instance(edge["node"])
            for edge in edges
            if isinstance(edge, Mapping) and edge.get("node")
        ]

    def build_attributes_with_connections(
        self,
        response: Optional[Mapping[str, Any]],
    ) -> Optional[dict[str, Any]]:
        """Attributes for `Model(**attrs)`, including eagerly loaded connections."""
        root = self.root_node(response)
        if not root:
            return {}

        attributes = self.map_node(root)
        connections = self.extract_connection_data(response)
        if connections:
            attributes[CONNECTION_CACHE_KEY] = connections

        return attributes
