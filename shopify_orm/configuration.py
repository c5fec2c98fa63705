"""Process-wide configuration read by loaders."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

from .settings import shopify_orm_settings


@dataclasses.dataclass
class Configuration:
    """Clients and flags used when executing queries.

    Attributes
    ----------
        admin_api_client:
            Object exposing `execute(query, variables)` for the Admin API.
        customer_account_client_class:
            Class exposing `from_config(token)` whose instances expose
            `query(query, variables)` for the Customer Account API.
        logger:
            Logger that receives executed queries when `log_queries` is set.
        log_queries:
            Log each query and its variables before executing it.
        compact_queries:
            Render generated documents on a single line.
        max_objects_per_paginated_query:
            Upper bound for page sizes.

    """

    admin_api_client: Any = None
    customer_account_client_class: Any = None
    logger: Optional[logging.Logger] = None
    log_queries: bool = False
    compact_queries: bool = False
    max_objects_per_paginated_query: int = 250

    @classmethod
    def from_settings(cls) -> Configuration:
        settings = shopify_orm_settings()
        return cls(
            log_queries=settings["LOG_QUERIES"],
            compact_queries=settings["COMPACT_QUERIES"],
            max_objects_per_paginated_query=settings[
                "MAX_OBJECTS_PER_PAGINATED_QUERY"
            ],
        )


_configuration: Optional[Configuration] = None


def get_configuration() -> Configuration:
    global _configuration  # noqa: PLW0603

    if _configuration is None:
        _configuration = Configuration.from_settings()

    return _configuration


def configure(**options: Any) -> Configuration:
    """Update the process-wide configuration.

    Usage:
        shopify_orm.configure(admin_api_client=client, log_queries=True)
    """
    global _configuration  # noqa: PLW0603

    _configuration = dataclasses.replace(get_configuration(), **options)
    return _configuration


def reset_configuration() -> Configuration:
    global _configuration  # noqa: PLW0603

    _configuration = Configuration.from_settings()
    return _configuration


__all__ = [
    "Configuration",
    "configure",
    "get_configuration",
    "reset_configuration",
]
