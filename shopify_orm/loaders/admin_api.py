from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from shopify_orm.exceptions import ClientNotConfiguredError

from .base import Loader

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "AdminApiLoader",
]


class AdminApiLoader(Loader):
    """Loader sending queries through the configured `admin_api_client`."""

    def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
    ) -> Optional[Mapping[str, Any]]:
        client = self.configuration.admin_api_client
        if client is None:
            raise ClientNotConfiguredError(
                "Admin API client",
                "shopify_orm.configure(admin_api_client=...)",
            )

        return client.execute(query, variables)
