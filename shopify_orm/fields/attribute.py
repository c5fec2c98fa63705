from __future__ import annotations

import dataclasses
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Optional,
    overload,
)

from strawberry.utils.str_converters import to_camel_case
from typing_extensions import Self

if TYPE_CHECKING:
    from shopify_orm.model import Model

__all__ = [
    "ShopifyAttribute",
    "attribute",
    "metafield_attribute",
]


@dataclasses.dataclass(eq=False)
class ShopifyAttribute:
    """Metadata describing how a model field maps to the GraphQL response.

    Instances act as data descriptors on the model class, values are stored in
    the instance's `__dict__` under the attribute name.
    """

    name: str = ""
    path: Optional[str] = None
    type: str = "string"
    null: bool = True
    default: Any = None
    transform: Optional[Callable[[Any], Any]] = None
    raw_graphql: Optional[str] = None
    is_metafield: bool = False
    metafield_alias: Optional[str] = None
    metafield_namespace: Optional[str] = None
    metafield_key: Optional[str] = None

    def __set_name__(self, owner: type[Model], name: str):
        self.bind(name)

    def bind(self, name: str) -> Self:
        self.name = name

        if self.is_metafield:
            self.metafield_alias = f"{to_camel_case(name)}Metafield"
            value_field = "jsonValue" if self.type == "json" else "value"
            self.path = f"{self.metafield_alias}.{value_field}"
        elif self.path is None:
            self.path = to_camel_case(name)

        return self

    @overload
    def __get__(self, obj: Model, cls: type[Model]) -> Any: ...

    @overload
    def __get__(self, obj: None, cls: type[Model]) -> Self: ...

    def __get__(self, obj, cls=None):
        if obj is None:
            return self

        return obj.__dict__.get(self.name)

    def __set__(self, obj: Model, value: Any):
        obj.__dict__[self.name] = value

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def path_parts(self) -> list[str]:
        assert self.path is not None
        return self.path.split(".")

    @property
    def is_nested(self) -> bool:
        return "." in (self.path or "")

    def __repr__(self):
        return f"<ShopifyAttribute {self.name!r} path={self.path!r} type={self.type!r}>"


def attribute(
    *,
    path: Optional[str] = None,
    type: str = "string",  # noqa: A002
    null: bool = True,
    default: Any = None,
    transform: Optional[Callable[[Any], Any]] = None,
    raw_graphql: Optional[str] = None,
) -> Any:
    """Declare a model attribute.

    Args:
    ----
        path:
            Dotted path into the GraphQL node, e.g. `"totalPriceSet.shopMoney.amount"`.
            Defaults to the camelCase form of the attribute name.
        type:
            One of `string`, `integer`, `float`, `boolean`, `datetime`, `json`
            or `array`. Array values are never coerced.
        null:
            When False, a null value without a default raises
            `NullAttributeError` while mapping the response.
        default:
            Value used when the response value is null. A transform is not
            applied to the default.
        transform:
            Callable applied to the resolved value.
        raw_graphql:
            Literal GraphQL selection used instead of the generated one. It is
            aliased with the attribute name.

    Examples:
    --------
        >>> class Order(Model):
        ...     id = attribute()
        ...     total = attribute(path="totalPriceSet.shopMoney.amount", type="float")

    """
    return ShopifyAttribute(
        path=path,
        type=type,
        null=null,
        default=default,
        transform=transform,
        raw_graphql=raw_graphql,
    )


def metafield_attribute(
    *,
    namespace: str,
    key: str,
    type: str = "string",  # noqa: A002
    null: bool = True,
    default: Any = None,
    transform: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Declare an attribute backed by a `metafield(namespace:, key:)` selection.

    `json` metafields select `jsonValue`, every other type selects `value`.
    """
    return ShopifyAttribute(
        type=type,
        null=null,
        default=default,
        transform=transform,
        is_metafield=True,
        metafield_namespace=namespace,
        metafield_key=key,
    )
