"""Complete GraphQL documents built around a model fragment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from shopify_orm.configuration import get_configuration
from shopify_orm.utils.inflection import pluralize, to_lower_camel_case

from .arguments import Variable
from .fragment import FragmentBuilder, build_selection
from .node import (
    ConnectionNode,
    FieldNode,
    FragmentSpreadNode,
    OperationNode,
    QueryNode,
    SingularNode,
    render_document,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shopify_orm.context import LoaderContext

__all__ = [
    "PAGE_INFO_FIELDS",
    "CollectionQuery",
    "ConnectionQuery",
    "CurrentRecordQuery",
    "PaginatedCollectionQuery",
    "RecordQuery",
]

PAGE_INFO_FIELDS = ("hasNextPage", "hasPreviousPage", "startCursor", "endCursor")


class BaseQuery:
    def __init__(self, context: LoaderContext, *, compact: Optional[bool] = None):
        self.context = context
        self.compact = (
            get_configuration().compact_queries if compact is None else compact
        )

    def render(self, *nodes: QueryNode) -> str:
        return render_document(*nodes, compact=self.compact)

    def fragment_spread(self) -> FragmentSpreadNode:
        return FragmentSpreadNode(self.context.fragment_name)


class RecordQuery(BaseQuery):
    """`query get<Type>($id: ID!) { <type>(id: $id) { ...<Type>Fragment } }`."""

    def build(self, model_type: Optional[str] = None) -> str:
        type_ = model_type or self.context.graphql_type
        operation = OperationNode(
            f"get{type_}",
            variables={"id": "ID!"},
            children=[
                FieldNode(
                    to_lower_camel_case(type_),
                    arguments={"id": Variable("id")},
                    children=[self.fragment_spread()],
                ),
            ],
        )
        return self.render(FragmentBuilder(self.context).build(), operation)


class CurrentRecordQuery(BaseQuery):
    """Record query for token scoped APIs, where the record needs no id."""

    def build(self) -> str:
        type_ = self.context.graphql_type
        operation = OperationNode(
            f"getCurrent{type_}",
            children=[
                FieldNode(self.context.query_name, children=[self.fragment_spread()]),
            ],
        )
        return self.render(FragmentBuilder(self.context).build(), operation)


class CollectionQuery(BaseQuery):
    """Root level search, always selecting `nodes`."""

    def build(self) -> str:
        type_ = self.context.graphql_type
        operation = OperationNode(
            f"get{pluralize(type_)}",
            variables={"query": "String", "first": "Int!"},
            children=[
                ConnectionNode(
                    pluralize(self.context.query_name),
                    wrapper="nodes",
                    arguments={"query": Variable("query"), "first": Variable("first")},
                    children=[self.fragment_spread()],
                ),
            ],
        )
        return self.render(FragmentBuilder(self.context).build(), operation)


class PaginatedCollectionQuery(BaseQuery):
    """Collection query with cursors and `pageInfo`."""

    variables = {
        "query": "String",
        "first": "Int",
        "last": "Int",
        "after": "String",
        "before": "String",
    }

    def build(self) -> str:
        type_ = self.context.graphql_type
        operation = OperationNode(
            f"get{pluralize(type_)}",
            variables=self.variables,
            children=[
                FieldNode(
                    pluralize(self.context.query_name),
                    arguments={name: Variable(name) for name in self.variables},
                    children=[
                        FieldNode(
                            "pageInfo",
                            children=[FieldNode(f) for f in PAGE_INFO_FIELDS],
                        ),
                        FieldNode("nodes", children=[self.fragment_spread()]),
                    ],
                ),
            ],
        )
        return self.render(FragmentBuilder(self.context).build(), operation)


class ConnectionQuery(BaseQuery):
    """Fetch a relation, either from the query root or through its parent.

    Arguments are rendered inline on the connection field, only the parent id
    is sent as a variable.
    """

    def build(
        self,
        query_name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        *,
        singular: bool = False,
        parent_query_name: Optional[str] = None,
    ) -> str:
        field = self.connection_field(query_name, arguments, singular=singular)

        if parent_query_name is None:
            operation = OperationNode(children=[field])
        else:
            operation = OperationNode(
                variables={"id": "ID!"},
                children=[
                    FieldNode(
                        parent_query_name,
                        arguments={"id": Variable("id")},
                        children=[field],
                    ),
                ],
            )

        return self.render(operation)

    def connection_field(
        self,
        query_name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        *,
        singular: bool = False,
    ) -> QueryNode:
        node: QueryNode
        if singular:
            node = SingularNode(query_name, arguments=dict(arguments or {}))
        else:
            node = ConnectionNode(query_name, arguments=dict(arguments or {}))

        if self.context.defined_attributes:
            build_selection(node, self.context.defined_attributes)
        else:
            node.add_child(FieldNode("id"))

        builder = FragmentBuilder(self.context)
        for child in builder.connection_nodes(self.context.included_connections):
            node.add_child(child)

        return node
