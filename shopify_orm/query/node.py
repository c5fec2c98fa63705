"""A small selection-set tree rendered into GraphQL text."""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, Literal, Optional

from .arguments import render_arguments

__all__ = [
    "ConnectionNode",
    "FieldNode",
    "FragmentNode",
    "FragmentSpreadNode",
    "OperationNode",
    "QueryNode",
    "RawNode",
    "SingularNode",
    "render_document",
]

INDENT = "  "


class QueryNode:
    kind: ClassVar[str] = "field"

    def __init__(
        self,
        name: str,
        *,
        alias: Optional[str] = None,
        arguments: Optional[dict[str, Any]] = None,
        children: Iterable[QueryNode] = (),
    ):
        self.name = name
        self.alias = alias if alias != name else None
        self.arguments = dict(arguments or {})
        self.children: list[QueryNode] = []
        for child in children:
            self.add_child(child)

    def __repr__(self):
        return f"<{type(self).__name__} {self.head}>"

    @property
    def head(self) -> str:
        prefix = f"{self.alias}: " if self.alias else ""
        return f"{prefix}{self.name}{render_arguments(self.arguments)}"

    @property
    def merge_key(self) -> tuple[Any, ...]:
        return (self.kind, self.alias, self.name, render_arguments(self.arguments))

    def add_child(self, node: QueryNode) -> QueryNode:
        """Add `node`, merging it into an equivalent existing child.

        Children sharing kind, alias, name and arguments are combined, so that
        `a.b.c` and `a.b.d` end up in a single `a { b { c d } }` block.
        """
        for existing in self.children:
            if existing.merge_key == node.merge_key:
                for child in node.children:
                    existing.add_child(child)
                return existing

        self.children.append(node)
        return node

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        if not self.children:
            return self.head

        return render_block(self.head, self.children, compact=compact, indent=indent)


class FieldNode(QueryNode):
    kind = "field"


class SingularNode(QueryNode):
    """Has-one relation, children are selected directly on the field."""

    kind = "singular"

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        return render_block(self.head, self.children, compact=compact, indent=indent)


class ConnectionNode(QueryNode):
    """Paginated relation rendered as `edges { node { ... } }` or `nodes { ... }`."""

    kind = "connection"

    def __init__(
        self,
        name: str,
        *,
        wrapper: Literal["edges", "nodes"] = "edges",
        alias: Optional[str] = None,
        arguments: Optional[dict[str, Any]] = None,
        children: Iterable[QueryNode] = (),
    ):
        self.wrapper = wrapper
        super().__init__(name, alias=alias, arguments=arguments, children=children)

    @property
    def merge_key(self) -> tuple[Any, ...]:
        return (*super().merge_key, self.wrapper)

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        if self.wrapper == "nodes":
            inner: QueryNode = FieldNode("nodes")
            inner.children = self.children
        else:
            node = FieldNode("node")
            node.children = self.children
            inner = FieldNode("edges", children=[node])

        return render_block(self.head, [inner], compact=compact, indent=indent)


class FragmentNode(QueryNode):
    kind = "fragment"

    def __init__(self, name: str, on_type: str, children: Iterable[QueryNode] = ()):
        self.on_type = on_type
        super().__init__(name, children=children)

    @property
    def head(self) -> str:
        return f"fragment {self.name} on {self.on_type}"

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        return render_block(self.head, self.children, compact=compact, indent=indent)


class RawNode(QueryNode):
    """Literal GraphQL text, rendered verbatim."""

    kind = "raw"

    def __init__(self, text: str):
        self.text = text
        super().__init__("raw")

    @property
    def merge_key(self) -> tuple[Any, ...]:
        return (self.kind, self.text)

    def add_child(self, node: QueryNode) -> QueryNode:
        raise TypeError("Raw nodes cannot have children")

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        return self.text


class FragmentSpreadNode(QueryNode):
    kind = "spread"

    @property
    def head(self) -> str:
        return f"...{self.name}"


class OperationNode(QueryNode):
    """A `query`/`mutation` operation with its variable definitions."""

    kind = "operation"

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        operation: Literal["query", "mutation"] = "query",
        variables: Optional[dict[str, str]] = None,
        children: Iterable[QueryNode] = (),
    ):
        self.operation = operation
        self.variables = dict(variables or {})
        super().__init__(name or "", children=children)

    @property
    def head(self) -> str:
        head = self.operation
        if self.name:
            head = f"{head} {self.name}"
        if self.variables:
            definitions = ", ".join(
                f"${name}: {type_}" for name, type_ in self.variables.items()
            )
            head = f"{head}({definitions})"
        return head

    def render(self, *, compact: bool = False, indent: int = 0) -> str:
        return render_block(self.head, self.children, compact=compact, indent=indent)


def render_block(
    head: str,
    children: list[QueryNode],
    *,
    compact: bool = False,
    indent: int = 0,
) -> str:
    if compact:
        inner = " ".join(child.render(compact=True) for child in children)
        return f"{head} {{ {inner} }}"

    padding = INDENT * (indent + 1)
    lines = [
        f"{padding}{child.render(indent=indent + 1)}" for child in children
    ]
    return "{} {{\n{}\n{}}}".format(head, "\n".join(lines), INDENT * indent)


def render_document(*nodes: QueryNode, compact: bool = False) -> str:
    """Render top level definitions (fragments and operations) as one document."""
    separator = " " if compact else "\n"
    return separator.join(node.render(compact=compact) for node in nodes)
