from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Optional,
    TypeVar,
    Union,
    overload,
)

from shopify_orm.configuration import get_configuration
from shopify_orm.context import normalize_includes
from shopify_orm.exceptions import (
    InvalidAttributeError,
    InvalidConnectionError,
    ObjectNotFoundError,
)
from shopify_orm.gid import normalize_gid
from shopify_orm.response.pagination import PageInfo, PaginatedResult
from shopify_orm.utils.pyutils import DictTree, dicttree_merge

if TYPE_CHECKING:
    from collections.abc import Iterator

    from typing_extensions import Self

    from shopify_orm.loaders.base import Loader
    from shopify_orm.model import Model

__all__ = [
    "DEFAULT_PER_PAGE",
    "Relation",
]

DEFAULT_PER_PAGE = 250

_M = TypeVar("_M", bound="Model")


@dataclasses.dataclass
class _RelationState:
    conditions: Any = None
    included_connections: DictTree = dataclasses.field(default_factory=dict)
    selected_attributes: Optional[tuple[str, ...]] = None
    total_limit: Optional[int] = None
    per_page: int = DEFAULT_PER_PAGE


class Relation(Generic[_M]):
    """Chainable query for a model, executed when records are accessed.

    Examples:
    --------
        >>> Customer.where(email="jane@example.com").first()
        >>> Customer.includes("orders").find(123)
        >>> for page in Order.where(status="open").in_pages(of=50):
        ...     process(page)

    """

    def __init__(
        self,
        model_class: type[_M],
        *,
        loader_class: Optional[type[Loader]] = None,
        loader_kwargs: Optional[dict[str, Any]] = None,
        state: Optional[_RelationState] = None,
    ):
        self.model_class = model_class
        self.loader_class = (
            loader_class or model_class.__shopify_definition__.default_loader_class
        )
        self.loader_kwargs = dict(loader_kwargs or {})
        self.state = state or _RelationState()
        self._records: Optional[list[_M]] = None

    def __repr__(self):
        parts = [self.model_class.__name__]
        if self.state.included_connections:
            parts.append(f"includes({', '.join(self.state.included_connections)})")
        if self.state.selected_attributes:
            parts.append(f"select({', '.join(self.state.selected_attributes)})")
        if self.state.conditions:
            parts.append(f"where({self.state.conditions!r})")
        if self.state.total_limit is not None:
            parts.append(f"limit({self.state.total_limit})")
        return f"<Relation {'.'.join(parts)}>"

    def _spawn(self, **changes: Any) -> Self:
        return type(self)(
            self.model_class,
            loader_class=self.loader_class,
            loader_kwargs=self.loader_kwargs,
            state=dataclasses.replace(self.state, **changes),
        )

    @property
    def max_per_page(self) -> int:
        return get_configuration().max_objects_per_paginated_query

    def build_loader(self) -> Loader:
        return self.loader_class(
            self.model_class,
            selected_attributes=self.state.selected_attributes,
            included_connections=self.state.included_connections,
            **self.loader_kwargs,
        )

    def where(
        self,
        conditions: Union[str, Mapping[str, Any], None] = None,
        *args: Any,
        **kwargs: Any,
    ) -> Self:
        """Filter with a condition mapping or a search string.

        Usage:
            Product.where(vendor="Acme", status=["active", "draft"])
            Product.where("sku:? AND vendor:?", "A-1", "Acme")
            Product.where("sku::sku", sku="A-1")
        """
        if isinstance(conditions, str):
            if args:
                new_conditions: Any = [conditions, *args]
            elif kwargs:
                new_conditions = [conditions, kwargs]
            else:
                new_conditions = conditions
        elif conditions:
            new_conditions = {**conditions, **kwargs}
        else:
            new_conditions = kwargs

        if self.state.conditions and new_conditions:
            raise ValueError(
                "Chaining multiple where clauses is not supported. "
                "Combine conditions in a single where call instead.",
            )

        return self._spawn(conditions=new_conditions)

    def includes(self, *connections: Union[str, Mapping[str, Any]]) -> Self:
        includes = normalize_includes(list(connections))
        self._validate_includes(self.model_class, includes)

        definition = self.model_class.__shopify_definition__
        merged = dicttree_merge(self.state.included_connections, includes)
        eager = normalize_includes(definition.eager_connections)
        merged = dicttree_merge(merged, eager)
        return self._spawn(included_connections=merged)

    def select(self, *attributes: str) -> Self:
        available = self.model_class.attributes_for_loader(self.loader_class)
        invalid = [name for name in attributes if name not in available]
        if invalid:
            raise InvalidAttributeError(self.model_class, invalid)

        return self._spawn(selected_attributes=tuple(attributes))

    def limit(self, count: int) -> Self:
        return self._spawn(total_limit=count)

    def find(self, id: Any = None) -> _M:  # noqa: A002
        """Load one record by id.

        Only loaders that expose a current record (the Customer Account API
        for `Customer`) accept a missing id, others raise `ValueError`.

        Raises `ObjectNotFoundError` when nothing is returned.
        """
        loader = self.build_loader()
        if id is None:
            attributes = loader.load_attributes()
        else:
            graphql_type = self.model_class.graphql_type_for_loader(self.loader_class)
            gid = normalize_gid(id, graphql_type)
            attributes = loader.load_attributes(gid)

        if not attributes:
            raise ObjectNotFoundError(
                self.model_class.__name__,
                "current record" if id is None else f"id={id}",
            )

        return self.model_class(**attributes)

    def find_by(
        self,
        conditions: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Optional[_M]:
        return self.where(conditions, **kwargs).first()

    def page(
        self,
        of: Optional[int] = None,
        *,
        after: Optional[str] = None,
        before: Optional[str] = None,
    ) -> PaginatedResult[_M]:
        per_page = min(of or self.state.per_page, self.max_per_page)
        if self.state.total_limit is not None:
            per_page = min(per_page, self.state.total_limit)

        return self.build_loader().load_paginated_collection(  # type: ignore
            self.state.conditions,
            per_page,
            after=after,
            before=before,
        )

    def in_pages(self, of: int = DEFAULT_PER_PAGE) -> Iterator[PaginatedResult[_M]]:
        """Yield pages until the last page or the relation's limit is reached."""
        remaining = self.state.total_limit
        page: Optional[PaginatedResult[_M]] = self.page(of)

        while page is not None and len(page):
            if remaining is not None:
                if remaining <= 0:
                    return
                if len(page) > remaining:
                    page = PaginatedResult(page.records[:remaining], PageInfo())
                remaining -= len(page)

            yield page

            if remaining is not None and remaining <= 0:
                return
            page = page.next_page()

    def __iter__(self) -> Iterator[_M]:
        return iter(self.to_list())

    def to_list(self) -> list[_M]:
        if self._records is None:
            self._records = [
                record for page in self.in_pages(self.state.per_page) for record in page
            ]
        return list(self._records)

    def __len__(self):
        return len(self.to_list())

    @overload
    def __getitem__(self, index: int) -> _M: ...

    @overload
    def __getitem__(self, index: slice) -> list[_M]: ...

    def __getitem__(self, index):
        return self.to_list()[index]

    @overload
    def first(self) -> Optional[_M]: ...

    @overload
    def first(self, count: int) -> list[_M]: ...

    def first(self, count: Optional[int] = None):
        if count is None:
            records = self._spawn(total_limit=1, per_page=1).to_list()
            return records[0] if records else None

        per_page = min(count, self.max_per_page)
        return self._spawn(total_limit=count, per_page=per_page).to_list()

    def exists(self) -> bool:
        return bool(self.first(1))

    def _validate_includes(self, model_class: type[Model], includes: DictTree):
        connections = model_class.__shopify_definition__.connections
        invalid = [name for name in includes if name not in connections]
        if invalid:
            raise InvalidConnectionError(model_class, invalid)

        for name, nested in includes.items():
            if nested:
                self._validate_includes(connections[name].target, nested)
