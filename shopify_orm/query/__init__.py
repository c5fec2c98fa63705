from .builders import (
    CollectionQuery,
    ConnectionQuery,
    CurrentRecordQuery,
    PaginatedCollectionQuery,
    RecordQuery,
)
from .fragment import FragmentBuilder
from .search import SearchQuery

__all__ = [
    "CollectionQuery",
    "ConnectionQuery",
    "CurrentRecordQuery",
    "FragmentBuilder",
    "PaginatedCollectionQuery",
    "RecordQuery",
    "SearchQuery",
]
