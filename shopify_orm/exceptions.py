from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ImproperlyConfigured, ObjectDoesNotExist
from strawberry.exceptions.exception import StrawberryException
from strawberry.exceptions.utils.source_finder import SourceFinder

if TYPE_CHECKING:
    from strawberry.exceptions.exception_source import ExceptionSource


class ShopifyORMError(Exception):
    """Base class for every runtime error raised by shopify_orm."""


class ClientNotConfiguredError(ShopifyORMError, ImproperlyConfigured):
    def __init__(self, client_name: str, configure_call: str):
        self.client_name = client_name
        self.configure_call = configure_call
        super().__init__(
            f"{client_name} not configured. Please configure it using {configure_call}",
        )


class NullAttributeError(ShopifyORMError, ValueError):
    def __init__(self, attribute: str, path: str):
        self.attribute = attribute
        self.path = path
        super().__init__(
            f"Attribute '{attribute}' (GraphQL path: '{path}') cannot be null "
            "but received nil",
        )


class SearchQueryError(ShopifyORMError, ValueError):
    pass


class UnsupportedOperationError(ShopifyORMError, NotImplementedError):
    pass


class ObjectNotFoundError(ShopifyORMError, ObjectDoesNotExist):
    def __init__(self, model_name: str, lookup: Any):
        self.model_name = model_name
        self.lookup = lookup
        super().__init__(f"Couldn't find {model_name} with {lookup}")


class MissingAttributesError(StrawberryException, NotImplementedError):
    def __init__(self, model_class: type):
        self.model_class = model_class

        self.message = (
            f"{model_class.__name__} must define attributes to build a fragment"
        )
        self.rich_message = (
            f"Model `[underline]{model_class.__name__}[/]` has no attributes"
        )
        self.suggestion = (
            "To fix this error, declare at least one field with `attribute()`"
        )
        self.annotation_message = "model without attributes"

        super().__init__(self.message)

    @cached_property
    def exception_source(self) -> ExceptionSource | None:  # pragma: no cover
        source_finder = SourceFinder()

        return source_finder.find_class_from_object(self.model_class)


class InvalidConnectionError(StrawberryException, ValueError):
    def __init__(self, model_class: type, names: list[str]):
        self.model_class = model_class
        self.names = names

        self.message = (
            f"Invalid connection(s) for {model_class.__name__}: {', '.join(names)}"
        )
        self.rich_message = (
            f"Unknown {self.names_str} on "
            f"`[underline]{model_class.__name__}[/]`"
        )
        self.suggestion = (
            "To fix this error, declare the connection on the model first"
        )
        self.annotation_message = "unknown connection"

        super().__init__(self.message)

    @property
    def names_str(self) -> str:
        if len(self.names) == 1:
            return f'connection "{self.names[0]}"'

        head = ", ".join(self.names[:-1])
        return f'connections "{head}" and "{self.names[-1]}"'

    @cached_property
    def exception_source(self) -> ExceptionSource | None:  # pragma: no cover
        source_finder = SourceFinder()

        return source_finder.find_class_from_object(self.model_class)


class InvalidAttributeError(StrawberryException, ValueError):
    def __init__(self, model_class: type, names: list[str]):
        self.model_class = model_class
        self.names = names

        self.message = (
            f"Invalid attribute(s) for {model_class.__name__}: {', '.join(names)}"
        )
        self.rich_message = (
            f"Unknown attribute(s) {', '.join(names)} on "
            f"`[underline]{model_class.__name__}[/]`"
        )
        self.annotation_message = "unknown attribute"

        super().__init__(self.message)

    @cached_property
    def exception_source(self) -> ExceptionSource | None:  # pragma: no cover
        source_finder = SourceFinder()

        return source_finder.find_class_from_object(self.model_class)


__all__ = [
    "ClientNotConfiguredError",
    "InvalidAttributeError",
    "InvalidConnectionError",
    "MissingAttributesError",
    "NullAttributeError",
    "ObjectNotFoundError",
    "SearchQueryError",
    "ShopifyORMError",
    "UnsupportedOperationError",
]
