import contextlib
import dataclasses
from collections import deque
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from graphql import DocumentNode, parse

from shopify_orm.configuration import configure, get_configuration

ResponseType = Union[
    Optional[Mapping[str, Any]],
    Callable[[str, Mapping[str, Any]], Optional[Mapping[str, Any]]],
]


@dataclasses.dataclass
class Call:
    query: str
    variables: Dict[str, Any]

    @property
    def document(self) -> DocumentNode:
        return parse(self.query)


class TestClient:
    """Stub transport recording every executed query.

    Responses are returned in order, callables are called with the query and
    its variables. Once the queue is empty `default` is returned.
    """

    __test__ = False

    def __init__(
        self,
        responses: Iterable[ResponseType] = (),
        default: ResponseType = None,
    ):
        self.responses = deque(responses)
        self.default = default
        self.calls: List[Call] = []

    def add_response(self, response: ResponseType):
        self.responses.append(response)

    def execute(self, query: str, variables: Mapping[str, Any]):
        self.calls.append(Call(query, dict(variables)))

        response = self.responses.popleft() if self.responses else self.default
        if callable(response):
            return response(query, variables)
        return response

    query = execute

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> Optional[Call]:
        return self.calls[-1] if self.calls else None

    @contextlib.contextmanager
    def configured(self):
        """Use this client as the Admin API client for the duration of the block."""
        previous = get_configuration().admin_api_client
        configure(admin_api_client=self)
        try:
            yield self
        finally:
            configure(admin_api_client=previous)
