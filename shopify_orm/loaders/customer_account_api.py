from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any, Optional

from shopify_orm.exceptions import ClientNotConfiguredError, UnsupportedOperationError
from shopify_orm.query.builders import CurrentRecordQuery

from .base import Loader

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shopify_orm.configuration import Configuration
    from shopify_orm.context import IncludesType
    from shopify_orm.model import Model

__all__ = [
    "CustomerAccountApiLoader",
]


class CustomerAccountApiLoader(Loader):
    """Loader for the token scoped Customer Account API.

    Records are scoped to the customer owning `token`. `Customer` is always
    loaded as the current customer (`customer { ... }`), ignoring any id.
    """

    def __init__(
        self,
        model_class: type[Model],
        token: Optional[str] = None,
        *,
        selected_attributes: Optional[Iterable[str]] = None,
        included_connections: IncludesType = None,
        configuration: Optional[Configuration] = None,
    ):
        self.token = token
        super().__init__(
            model_class,
            selected_attributes=selected_attributes,
            included_connections=included_connections,
            configuration=configuration,
        )

    @cached_property
    def client(self) -> Any:
        if not self.token:
            raise UnsupportedOperationError(
                "Customer Account API support needs token handling implementation",
            )

        client_class = self.configuration.customer_account_client_class
        if client_class is None:
            raise ClientNotConfiguredError(
                "Customer Account API client class",
                "shopify_orm.configure(customer_account_client_class=...)",
            )

        return client_class.from_config(self.token)

    def load_attributes(self, id: Any = None) -> Optional[dict[str, Any]]:  # noqa: A002
        if self.context.graphql_type != "Customer":
            return super().load_attributes(id)

        query = CurrentRecordQuery(self.context, compact=self.compact).build()
        return self.fetch_attributes(query, {})

    def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
    ) -> Optional[Mapping[str, Any]]:
        return self.client.query(query, variables)
