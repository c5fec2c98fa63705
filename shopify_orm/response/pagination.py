from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Optional,
    Sequence,
    TypeVar,
    overload,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "PageInfo",
    "PaginatedResult",
]

_T = TypeVar("_T")


@dataclasses.dataclass(frozen=True)
class PageInfo:
    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]) -> PageInfo:
        data = data or {}
        return cls(
            has_next_page=bool(data.get("hasNextPage")),
            has_previous_page=bool(data.get("hasPreviousPage")),
            start_cursor=data.get("startCursor"),
            end_cursor=data.get("endCursor"),
        )

    @property
    def is_empty(self) -> bool:
        return self.start_cursor is None and self.end_cursor is None


class PaginatedResult(Sequence[_T], Generic[_T]):
    """One page of records and the cursors needed to move around.

    `fetch_page` is called with `after=` or `before=` to load neighbour pages.
    """

    def __init__(
        self,
        records: list[_T],
        page_info: PageInfo,
        fetch_page: Optional[Callable[..., PaginatedResult[_T]]] = None,
    ):
        self.records = records
        self.page_info = page_info
        self.fetch_page = fetch_page

    def __repr__(self):
        return f"<PaginatedResult {len(self.records)} records {self.page_info}>"

    @overload
    def __getitem__(self, index: int) -> _T: ...

    @overload
    def __getitem__(self, index: slice) -> list[_T]: ...

    def __getitem__(self, index):
        return self.records[index]

    def __len__(self):
        return len(self.records)

    def __iter__(self) -> Iterator[_T]:
        return iter(self.records)

    @property
    def has_next_page(self) -> bool:
        return self.page_info.has_next_page

    @property
    def has_previous_page(self) -> bool:
        return self.page_info.has_previous_page

    @property
    def start_cursor(self) -> Optional[str]:
        return self.page_info.start_cursor

    @property
    def end_cursor(self) -> Optional[str]:
        return self.page_info.end_cursor

    def next_page(self) -> Optional[PaginatedResult[_T]]:
        if not self.has_next_page or self.fetch_page is None:
            return None
        return self.fetch_page(after=self.end_cursor)

    def previous_page(self) -> Optional[PaginatedResult[_T]]:
        if not self.has_previous_page or self.fetch_page is None:
            return None
        return self.fetch_page(before=self.start_cursor)

    def to_list(self) -> list[_T]:
        return list(self.records)

    def all_records(self) -> list[_T]:
        """Return the records of this page and every following page."""
        records = list(self.records)
        current: Optional[PaginatedResult[_T]] = self
        while current is not None and current.has_next_page:
            current = current.next_page()
            if current is not None:
                records.extend(current.records)

        return records
