"""Code for interacting with Django settings."""

from typing import cast

from django.conf import settings
from typing_extensions import TypedDict


class ShopifyORMSettings(TypedDict):
    """Dictionary defining the shape `settings.SHOPIFY_ORM` should have.

    All settings are optional and have defaults as described in their docstrings and
    defined in `DEFAULT_SHOPIFY_ORM_SETTINGS`.
    """

    #: If True, every executed query and its variables are sent to the
    #: configured logger before the request is made.
    LOG_QUERIES: bool

    #: If True, generated GraphQL documents are rendered on a single line.
    COMPACT_QUERIES: bool

    #: Upper bound for the page size used by paginated collection queries.
    MAX_OBJECTS_PER_PAGINATED_QUERY: int


DEFAULT_SHOPIFY_ORM_SETTINGS = ShopifyORMSettings(
    LOG_QUERIES=False,
    COMPACT_QUERIES=False,
    MAX_OBJECTS_PER_PAGINATED_QUERY=250,
)


def shopify_orm_settings() -> ShopifyORMSettings:
    """Get shopify_orm settings.

    Return the dictionary from `settings.SHOPIFY_ORM`, with defaults
    for missing keys. Outside of a configured Django project only the
    defaults are returned.

    Preferred to direct access for the type hints and defaults.
    """
    defaults = DEFAULT_SHOPIFY_ORM_SETTINGS
    if not settings.configured:
        return cast("ShopifyORMSettings", dict(defaults))

    return cast(
        "ShopifyORMSettings",
        {**defaults, **getattr(settings, "SHOPIFY_ORM", {})},
    )
