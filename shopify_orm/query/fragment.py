from __future__ import annotations

from typing import TYPE_CHECKING

from shopify_orm.exceptions import MissingAttributesError

from .node import (
    ConnectionNode,
    FieldNode,
    FragmentNode,
    QueryNode,
    RawNode,
    SingularNode,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shopify_orm.context import LoaderContext
    from shopify_orm.fields.attribute import ShopifyAttribute
    from shopify_orm.fields.connection import ShopifyConnection
    from shopify_orm.utils.pyutils import DictTree

__all__ = [
    "FragmentBuilder",
    "attribute_node",
    "build_selection",
]


def attribute_node(attr: ShopifyAttribute) -> QueryNode:
    """Return the selection for a single attribute.

    Nested paths return their outermost field, merging is left to the parent.
    """
    if attr.raw_graphql:
        return RawNode(f"{attr.name}: {attr.raw_graphql}")

    if attr.is_metafield:
        value_field = "jsonValue" if attr.type == "json" else "value"
        return FieldNode(
            "metafield",
            alias=attr.metafield_alias,
            arguments={
                "namespace": attr.metafield_namespace,
                "key": attr.metafield_key,
            },
            children=[FieldNode(value_field)],
        )

    parts = attr.path_parts
    if len(parts) == 1:
        return FieldNode(parts[0], alias=attr.name)

    node = FieldNode(parts[-1])
    for part in reversed(parts[:-1]):
        node = FieldNode(part, children=[node])
    return node


def build_selection(
    parent: QueryNode,
    attributes: Mapping[str, ShopifyAttribute],
) -> QueryNode:
    for attr in attributes.values():
        parent.add_child(attribute_node(attr))
    return parent


class FragmentBuilder:
    """Builds `fragment <Type>Fragment on <Type> { ... }` for a loader context."""

    def __init__(self, context: LoaderContext):
        self.context = context

    def build(self) -> FragmentNode:
        context = self.context
        if not context.defined_attributes:
            raise MissingAttributesError(context.model_class)

        fragment = FragmentNode(context.fragment_name, context.graphql_type)
        build_selection(fragment, context.defined_attributes)
        for node in self.connection_nodes(context.included_connections):
            fragment.add_child(node)

        return fragment

    def connection_nodes(self, includes: DictTree) -> list[QueryNode]:
        connections = self.context.connections
        return [
            self.connection_node(connections[name], nested)
            for name, nested in includes.items()
            if name in connections
        ]

    def connection_node(
        self,
        connection: ShopifyConnection,
        nested_includes: DictTree,
    ) -> QueryNode:
        target_context = self.context.for_model(connection.target, nested_includes)
        alias = connection.name if connection.needs_alias else None
        assert connection.query_name is not None

        node: QueryNode
        if connection.is_singular:
            node = SingularNode(
                connection.query_name,
                alias=alias,
                arguments=connection.default_arguments,
            )
        else:
            node = ConnectionNode(
                connection.query_name,
                alias=alias,
                arguments=connection.default_arguments,
            )

        if target_context.defined_attributes:
            build_selection(node, target_context.defined_attributes)
        else:
            node.add_child(FieldNode("id"))

        for child in FragmentBuilder(target_context).connection_nodes(
            nested_includes,
        ):
            node.add_child(child)

        return node
