from .coercion import coerce_value
from .mapper import ResponseMapper, check_search_warnings, map_node
from .pagination import PageInfo, PaginatedResult

__all__ = [
    "PageInfo",
    "PaginatedResult",
    "ResponseMapper",
    "check_search_warnings",
    "coerce_value",
    "map_node",
]
