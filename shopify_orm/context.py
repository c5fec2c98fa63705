from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from shopify_orm.utils.inflection import to_lower_camel_case
from shopify_orm.utils.pyutils import DictTree, dicttree_merge

if TYPE_CHECKING:
    from shopify_orm.fields.attribute import ShopifyAttribute
    from shopify_orm.fields.connection import ShopifyConnection
    from shopify_orm.loaders.base import Loader
    from shopify_orm.model import Model

__all__ = [
    "IncludesType",
    "LoaderContext",
    "normalize_includes",
]

IncludesType = Union[str, Mapping[str, Any], Iterable[Any], None]


def normalize_includes(includes: IncludesType) -> DictTree:
    """Normalize include declarations into a tree of connection names.

    >>> normalize_includes(["orders", {"line_items": "variant"}])
    {'orders': {}, 'line_items': {'variant': {}}}
    """
    if includes is None:
        return {}
    if isinstance(includes, str):
        return {includes: {}}
    if isinstance(includes, Mapping):
        ret: DictTree = {}
        for name, nested in includes.items():
            ret = dicttree_merge(ret, {str(name): normalize_includes(nested)})
        return ret

    ret = {}
    for item in includes:
        ret = dicttree_merge(ret, normalize_includes(item))

    return ret


@dataclasses.dataclass(frozen=True)
class LoaderContext:
    """Everything needed to build and map queries for one model and loader.

    Contexts are values, copies are made with `with_connections` and
    `for_model`.
    """

    graphql_type: str
    loader_class: Optional[type[Loader]]
    defined_attributes: Mapping[str, ShopifyAttribute]
    model_class: type[Model]
    included_connections: DictTree = dataclasses.field(default_factory=dict)

    @classmethod
    def build(
        cls,
        model_class: type[Model],
        loader_class: Optional[type[Loader]] = None,
        *,
        selected_attributes: Optional[Iterable[str]] = None,
        included_connections: IncludesType = None,
        eager: bool = True,
    ) -> LoaderContext:
        definition = model_class.__shopify_definition__
        attributes = definition.attributes_for_loader(loader_class)
        if selected_attributes is not None:
            selected = set(selected_attributes)
            selected.add("id")
            attributes = {k: v for k, v in attributes.items() if k in selected}

        return cls(
            graphql_type=definition.graphql_type_for_loader(loader_class),
            loader_class=loader_class,
            defined_attributes=attributes,
            model_class=model_class,
            included_connections=dicttree_merge(
                normalize_includes(definition.eager_connections if eager else None),
                normalize_includes(included_connections),
            ),
        )

    @property
    def query_name(self) -> str:
        return to_lower_camel_case(self.graphql_type)

    @property
    def fragment_name(self) -> str:
        return f"{self.graphql_type}Fragment"

    @property
    def connections(self) -> Mapping[str, ShopifyConnection]:
        return self.model_class.__shopify_definition__.connections

    def included(self) -> list[tuple[ShopifyConnection, DictTree]]:
        """Return the included connections known to the model, in order."""
        connections = self.connections
        return [
            (connections[name], nested)
            for name, nested in self.included_connections.items()
            if name in connections
        ]

    def with_connections(self, includes: IncludesType) -> LoaderContext:
        return dataclasses.replace(
            self,
            included_connections=normalize_includes(includes),
        )

    def for_model(
        self,
        model_class: type[Model],
        includes: IncludesType = None,
    ) -> LoaderContext:
        """Build the context for a related model served by the same loader."""
        return LoaderContext.build(
            model_class,
            self.loader_class,
            included_connections=includes,
            eager=False,
        )
