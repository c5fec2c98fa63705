from .attribute import ShopifyAttribute, attribute, metafield_attribute
from .connection import (
    ShopifyConnection,
    connection,
    has_many_connected,
    has_one_connected,
    populate_inverse_cache,
)

__all__ = [
    "ShopifyAttribute",
    "ShopifyConnection",
    "attribute",
    "connection",
    "has_many_connected",
    "has_one_connected",
    "metafield_attribute",
    "populate_inverse_cache",
]
