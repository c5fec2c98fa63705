from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from shopify_orm.configuration import Configuration, get_configuration
from shopify_orm.context import IncludesType, LoaderContext
from shopify_orm.gid import normalize_gid
from shopify_orm.query.builders import (
    CollectionQuery,
    ConnectionQuery,
    PaginatedCollectionQuery,
    RecordQuery,
)
from shopify_orm.query.search import ConditionsType, SearchQuery
from shopify_orm.response.mapper import ResponseMapper, check_search_warnings
from shopify_orm.response.pagination import PageInfo, PaginatedResult
from shopify_orm.utils.inflection import pluralize, to_lower_camel_case
from shopify_orm.utils.pyutils import dig

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shopify_orm.fields.connection import ShopifyConnection
    from shopify_orm.model import Model

__all__ = [
    "Loader",
]

logger = logging.getLogger(__name__)


class Loader:
    """Runs queries for one model through a transport.

    Subclasses implement `execute`, everything else (query building, response
    mapping and logging) is shared.
    """

    def __init__(
        self,
        model_class: type[Model],
        *,
        selected_attributes: Optional[Iterable[str]] = None,
        included_connections: IncludesType = None,
        configuration: Optional[Configuration] = None,
    ):
        self.model_class = model_class
        self._configuration = configuration
        self.context = LoaderContext.build(
            model_class,
            type(self),
            selected_attributes=selected_attributes,
            included_connections=included_connections,
        )

    def __repr__(self):
        return f"<{type(self).__name__} {self.context.graphql_type}>"

    @property
    def configuration(self) -> Configuration:
        if self._configuration is not None:
            return self._configuration
        return get_configuration()

    @property
    def compact(self) -> bool:
        return self.configuration.compact_queries

    @property
    def mapper(self) -> ResponseMapper:
        return ResponseMapper(self.context)

    def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
    ) -> Optional[Mapping[str, Any]]:
        raise NotImplementedError

    def perform_graphql_query(
        self,
        query: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Mapping[str, Any]]:
        variables = variables if variables is not None else {}
        config = self.configuration
        if config.log_queries and config.logger is not None:
            config.logger.info("GraphQL query: %s", query)
            config.logger.info("GraphQL variables: %s", variables)

        logger.debug(
            "%s executing query for %s",
            type(self).__name__,
            self.context.graphql_type,
        )
        return self.execute(query, variables)

    def load_attributes(self, id: Any = None) -> Optional[dict[str, Any]]:  # noqa: A002
        """Fetch one record by id.

        Returns None when the transport returns nothing, and an empty mapping
        when the record does not exist.
        """
        if id is None:
            raise ValueError(
                f"{type(self).__name__} needs an id to load a "
                f"{self.context.graphql_type}",
            )

        query = RecordQuery(self.context, compact=self.compact).build()
        variables = {"id": normalize_gid(id, self.context.graphql_type)}
        return self.fetch_attributes(query, variables)

    def fetch_attributes(
        self,
        query: str,
        variables: Mapping[str, Any],
    ) -> Optional[dict[str, Any]]:
        response = self.perform_graphql_query(query, variables)
        if response is None:
            return None

        return self.mapper.build_attributes_with_connections(response)

    def load_collection(
        self,
        conditions: ConditionsType = None,
        limit: int = 250,
    ) -> list[Model]:
        query = CollectionQuery(self.context, compact=self.compact).build()
        variables = {
            "query": SearchQuery(conditions).to_string() or None,
            "first": limit,
        }

        response = self.perform_graphql_query(query, variables)
        if response is None:
            return []

        return self.mapper.map_collection(
            response,
            pluralize(self.context.query_name),
        )

    def load_paginated_collection(
        self,
        conditions: ConditionsType = None,
        per_page: int = 250,
        after: Optional[str] = None,
        before: Optional[str] = None,
    ) -> PaginatedResult[Model]:
        per_page = min(per_page, self.configuration.max_objects_per_paginated_query)

        variables: dict[str, Any] = {
            "query": SearchQuery(conditions).to_string() or None,
        }
        if before is not None:
            variables.update(last=per_page, before=before)
        else:
            variables.update(first=per_page, after=after)

        query = PaginatedCollectionQuery(self.context, compact=self.compact).build()
        response = self.perform_graphql_query(query, variables)
        fetch_page = functools.partial(
            self.load_paginated_collection,
            conditions,
            per_page,
        )
        if response is None:
            return PaginatedResult([], PageInfo(), fetch_page)

        check_search_warnings(response)
        data = dig(response, ["data", pluralize(self.context.query_name)]) or {}
        mapper = self.mapper
        nodes = data.get("nodes") or []
        records = [mapper.build_instance(node) for node in nodes if node]

        return PaginatedResult(
            records,
            PageInfo.from_response(data.get("pageInfo")),
            fetch_page,
        )

    def load_connection_records(
        self,
        query_name: str,
        variables: Optional[Mapping[str, Any]] = None,
        parent: Optional[Model] = None,
        connection: Optional[ShopifyConnection] = None,
    ) -> Union[Model, list[Model], None]:
        """Fetch a relation of this loader's model.

        When a parent is given (and the connection is not reachable from the
        query root) the relation is queried through the parent, identified by
        its GID.
        """
        singular = connection is not None and connection.is_singular
        builder = ConnectionQuery(self.context, compact=self.compact)

        parent_query_name = None
        if parent is not None and (connection is None or connection.nested):
            parent_type = type(parent).graphql_type_for_loader(type(self))
            parent_id = parent.__dict__.get("id")
            if parent_id is None:
                raise ValueError(
                    f"Cannot load {parent_type}.{query_name} for a "
                    f"{type(parent).__name__} without an id",
                )

            parent_query_name = to_lower_camel_case(parent_type)
            query = builder.build(
                query_name,
                variables,
                singular=singular,
                parent_query_name=parent_query_name,
            )
            response = self.perform_graphql_query(
                query,
                {"id": normalize_gid(parent_id, parent_type)},
            )
        else:
            query = builder.build(query_name, variables, singular=singular)
            response = self.perform_graphql_query(query, {})

        if response is None:
            return None if singular else []

        return self.mapper.map_connection(
            response,
            query_name,
            connection,
            parent_query_name=parent_query_name,
        )
