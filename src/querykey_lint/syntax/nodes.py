"""SyntaxNode, Span and NodeKind: pure data, no logic beyond child iteration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class NodeKind(str, Enum):
    PROGRAM = "program"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    IDENTIFIER = "identifier"
    ARRAY_EXPRESSION = "array_expression"
    OBJECT_EXPRESSION = "object_expression"
    PROPERTY = "property"
    SPREAD_ELEMENT = "spread_element"
    STRING_LITERAL = "string_literal"
    TEMPLATE_LITERAL = "template_literal"
    LITERAL = "literal"                # number, boolean, null, regex, bigint
    TYPE_ASSERTION = "type_assertion"  # x as T, x satisfies T, <T>x, x!
    OTHER = "other"


@dataclass(frozen=True)
class Span:
    line: int        # 1-based
    column: int      # 1-based
    end_line: int
    end_column: int  # one past the last character


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    kind: NodeKind
    span: Span
    name: str | None = None      # identifier name, static member/property name
    value: object = None         # literal value (str for strings, raw text otherwise)
    fields: dict[str, SyntaxNode] = field(default_factory=dict)  # callee, object, key, value, ...
    items: tuple[SyntaxNode, ...] = ()  # arguments, elements, properties, statements
    type_name: str = ""          # originating parser node type, for debugging

    def children(self) -> Iterator[SyntaxNode]:
        """Yield child nodes in source order: named fields first, then items."""
        yield from self.fields.values()
        yield from self.items

    # ── Accessors for the shapes the rules inspect ──────────────────────

    @property
    def callee(self) -> SyntaxNode | None:
        return self.fields.get("callee")

    @property
    def arguments(self) -> tuple[SyntaxNode, ...]:
        if self.kind is NodeKind.CALL_EXPRESSION:
            return self.items
        return ()

    @property
    def member_object(self) -> SyntaxNode | None:
        return self.fields.get("object")

    @property
    def property_value(self) -> SyntaxNode | None:
        return self.fields.get("value")

    @property
    def expression(self) -> SyntaxNode | None:
        return self.fields.get("expression")


def walk(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Pre-order iteration over node and all of its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.children())))
