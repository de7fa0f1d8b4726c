"""tree-sitter frontend: parses JS/JSX/TS/TSX source into SyntaxNode trees.

The produced tree is ESTree-shaped where the rules care about the shape
(calls, member access, literals, objects, properties) and generic
everywhere else: unknown node types become NodeKind.OTHER with their
children preserved, so nothing below them is lost to the walker.

Parenthesized expressions are removed. Comments are collected on the side
for inline disable directives and never appear in the tree.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from querykey_lint.syntax.nodes import NodeKind, Span, SyntaxNode

log = logging.getLogger(__name__)


class Dialect(str, Enum):
    JAVASCRIPT = "javascript"  # also covers JSX
    TYPESCRIPT = "typescript"
    TSX = "tsx"


_DIALECT_BY_SUFFIX: dict[str, Dialect] = {
    ".js": Dialect.JAVASCRIPT,
    ".jsx": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".cjs": Dialect.JAVASCRIPT,
    ".ts": Dialect.TYPESCRIPT,
    ".mts": Dialect.TYPESCRIPT,
    ".cts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
}

# Subtrees that can never hold an expression the rules look at
_SKIPPED_TYPES = {
    "type_annotation",
    "type_arguments",
    "type_parameters",
    "type_alias_declaration",
    "interface_declaration",
    "import_statement",
}

_LITERAL_TYPES = {"number", "true", "false", "null", "regex"}

_TYPE_ASSERTION_TYPES = {
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
}


@dataclass
class Comment:
    line: int
    end_line: int
    text: str


@dataclass
class ParsedSource:
    tree: SyntaxNode
    source: str
    dialect: Dialect
    has_errors: bool = False
    comments: list[Comment] = field(default_factory=list)


def dialect_for_path(path: Path) -> Dialect | None:
    """Return the dialect for a file suffix, or None if it is not JS/TS."""
    return _DIALECT_BY_SUFFIX.get(path.suffix.lower())


@functools.lru_cache(maxsize=None)
def _language(dialect: Dialect) -> Language:
    if dialect is Dialect.TYPESCRIPT:
        return Language(tsts.language_typescript())
    if dialect is Dialect.TSX:
        return Language(tsts.language_tsx())
    return Language(tsjs.language())


def parse_source(source: str, dialect: Dialect = Dialect.JAVASCRIPT) -> ParsedSource:
    """Parse source text and convert the tree-sitter tree into a SyntaxNode tree."""
    data = source.encode("utf-8")
    # Parser objects are not shared between calls
    parser = Parser(_language(dialect))
    ts_tree = parser.parse(data)

    converter = _Converter(data)
    root = converter.convert(ts_tree.root_node)
    if root is None:
        root = SyntaxNode(kind=NodeKind.PROGRAM, span=Span(1, 1, 1, 1), type_name="program")

    has_errors = ts_tree.root_node.has_error
    if has_errors:
        log.debug("tree-sitter reported syntax errors (%s)", dialect.value)

    return ParsedSource(
        tree=root,
        source=source,
        dialect=dialect,
        has_errors=has_errors,
        comments=_collect_comments(ts_tree.root_node),
    )


def parse_file(path: Path, dialect: Dialect | None = None) -> ParsedSource:
    """Read and parse a file, picking the dialect from its suffix when not given."""
    if dialect is None:
        dialect = dialect_for_path(path) or Dialect.JAVASCRIPT
    source = path.read_text(encoding="utf-8", errors="replace")
    return parse_source(source, dialect)


class _Converter:
    """Iterative tree-sitter -> SyntaxNode conversion for a single source buffer.

    Each supported node type has a parts function (the tree-sitter children
    to convert, tagged with the field they fill, "" for an item) and a build
    function that assembles the SyntaxNode once those children are done.
    Conversion runs post-order over an explicit stack, so nesting depth is
    bounded by memory only.
    """

    def __init__(self, data: bytes) -> None:
        self._lines = data.split(b"\n")

    # ── Positions ───────────────────────────────────────────────────────

    def _column(self, row: int, byte_col: int) -> int:
        # tree-sitter columns are byte offsets; report character columns
        if row < len(self._lines):
            prefix = self._lines[row][:byte_col]
            return len(prefix.decode("utf-8", errors="replace")) + 1
        return byte_col + 1

    def _span(self, node: Node) -> Span:
        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        return Span(
            line=start_row + 1,
            column=self._column(start_row, start_col),
            end_line=end_row + 1,
            end_column=self._column(end_row, end_col),
        )

    # ── Driver ──────────────────────────────────────────────────────────

    def convert(self, root: Node) -> SyntaxNode | None:
        done: list[SyntaxNode | None] = []
        # (node, parts) frames; parts is None until the node has been expanded
        stack: list[tuple[Node, list[tuple[str, Node]] | None]] = [(root, None)]
        while stack:
            node, parts = stack.pop()
            if parts is not None:
                start = len(done) - len(parts)
                converted = done[start:]
                del done[start:]
                done.append(self._build(node, parts, converted))
                continue

            target = _target(node)
            if target is None:
                done.append(None)
                continue
            parts = _PARTS.get(target.type, _Converter._items)(self, target)
            stack.append((target, parts))
            stack.extend((part, None) for _, part in reversed(parts))
        return done[0] if done else None

    def _build(
        self,
        node: Node,
        parts: list[tuple[str, Node]],
        converted: list[SyntaxNode | None],
    ) -> SyntaxNode:
        fields: dict[str, SyntaxNode] = {}
        items: list[SyntaxNode] = []
        for (slot, _), child in zip(parts, converted):
            if child is None:
                continue
            if slot:
                fields[slot] = child
            else:
                items.append(child)
        build = _BUILDERS.get(node.type, _Converter._other)
        return build(self, node, fields, tuple(items))

    # ── Parts ───────────────────────────────────────────────────────────

    def _no_parts(self, node: Node) -> list[tuple[str, Node]]:
        return []

    def _items(self, node: Node) -> list[tuple[str, Node]]:
        return [("", c) for c in _named(node)]

    def _call_parts(self, node: Node) -> list[tuple[str, Node]]:
        parts: list[tuple[str, Node]] = []
        function = node.child_by_field_name("function")
        if function is not None:
            parts.append(("callee", function))
        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "arguments":
            parts.extend(("", a) for a in _named(arguments))
        elif arguments is not None:
            # tagged template: gql`...`
            parts.append(("template", arguments))
        return parts

    def _member_parts(self, node: Node) -> list[tuple[str, Node]]:
        parts: list[tuple[str, Node]] = []
        obj = node.child_by_field_name("object")
        if obj is not None:
            parts.append(("object", obj))
        if node.type == "subscript_expression":
            # computed access, no static name
            index = node.child_by_field_name("index")
            if index is not None:
                parts.append(("property", index))
        return parts

    def _pair_parts(self, node: Node) -> list[tuple[str, Node]]:
        parts: list[tuple[str, Node]] = []
        key = node.child_by_field_name("key")
        if key is not None and key.type == "computed_property_name":
            parts.append(("key", key))
        value = node.child_by_field_name("value")
        if value is not None:
            parts.append(("value", value))
        return parts

    def _first_part(self, node: Node) -> list[tuple[str, Node]]:
        inner = _named(node)
        return [("argument", inner[0])] if inner else []

    def _assertion_parts(self, node: Node) -> list[tuple[str, Node]]:
        named = _named(node)
        if not named:
            return []
        # `<T>x` puts the expression last; `x as T`, `x satisfies T` and `x!` put it first
        target = named[-1] if node.type == "type_assertion" else named[0]
        return [("expression", target)]

    # ── Builders ────────────────────────────────────────────────────────

    def _other(self, node: Node, fields: dict[str, SyntaxNode], items: tuple[SyntaxNode, ...]) -> SyntaxNode:
        return SyntaxNode(
            kind=NodeKind.PROGRAM if node.type == "program" else NodeKind.OTHER,
            span=self._span(node),
            items=items,
            type_name=node.type,
        )

    def _call(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.CALL_EXPRESSION,
            span=self._span(node),
            fields=fields,
            items=items,
            type_name=node.type,
        )

    def _member(self, node, fields, items):
        name: str | None = None
        if node.type == "member_expression":
            prop = node.child_by_field_name("property")
            if prop is not None:
                name = _text(prop)
                fields["property"] = self._name_node(prop)
        return SyntaxNode(
            kind=NodeKind.MEMBER_EXPRESSION,
            span=self._span(node),
            name=name,
            fields=fields,
            type_name=node.type,
        )

    def _name_node(self, node: Node) -> SyntaxNode:
        """A property name that is not a variable reference (obj.name, { name: ... })."""
        return SyntaxNode(
            kind=NodeKind.OTHER,
            span=self._span(node),
            name=_text(node),
            type_name=node.type,
        )

    def _identifier(self, node, fields=None, items=()):
        return SyntaxNode(
            kind=NodeKind.IDENTIFIER,
            span=self._span(node),
            name=_text(node),
            type_name=node.type,
        )

    def _array(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.ARRAY_EXPRESSION,
            span=self._span(node),
            items=items,
            type_name=node.type,
        )

    def _object(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.OBJECT_EXPRESSION,
            span=self._span(node),
            items=items,
            type_name=node.type,
        )

    def _pair(self, node, fields, items):
        name: str | None = None
        key = node.child_by_field_name("key")
        if key is not None and key.type != "computed_property_name":
            name = _property_key_name(key)
            fields["key"] = self._name_node(key)
        return SyntaxNode(
            kind=NodeKind.PROPERTY,
            span=self._span(node),
            name=name,
            fields=fields,
            type_name=node.type,
        )

    def _shorthand_property(self, node, fields, items):
        # { queryKey } is { queryKey: queryKey }
        return SyntaxNode(
            kind=NodeKind.PROPERTY,
            span=self._span(node),
            name=_text(node),
            fields={"value": self._identifier(node)},
            type_name=node.type,
        )

    def _spread(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.SPREAD_ELEMENT,
            span=self._span(node),
            fields=fields,
            type_name=node.type,
        )

    def _string(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.STRING_LITERAL,
            span=self._span(node),
            value=_text(node)[1:-1],
            type_name=node.type,
        )

    def _template(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.TEMPLATE_LITERAL,
            span=self._span(node),
            value=_text(node),
            items=items,
            type_name=node.type,
        )

    def _literal(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.LITERAL,
            span=self._span(node),
            value=_text(node),
            type_name=node.type,
        )

    def _type_assertion(self, node, fields, items):
        return SyntaxNode(
            kind=NodeKind.TYPE_ASSERTION,
            span=self._span(node),
            fields=fields,
            type_name=node.type,
        )


# Types not listed here convert all named children into items
_PARTS = {
    "call_expression": _Converter._call_parts,
    "member_expression": _Converter._member_parts,
    "subscript_expression": _Converter._member_parts,
    "pair": _Converter._pair_parts,
    "spread_element": _Converter._first_part,
    **{t: _Converter._no_parts for t in (
        "identifier", "this", "undefined", "string", "shorthand_property_identifier",
    )},
    **{t: _Converter._no_parts for t in _LITERAL_TYPES},
    **{t: _Converter._assertion_parts for t in _TYPE_ASSERTION_TYPES},
}

# Types not listed here become NodeKind.OTHER (or PROGRAM)
_BUILDERS = {
    "call_expression": _Converter._call,
    "member_expression": _Converter._member,
    "subscript_expression": _Converter._member,
    "identifier": _Converter._identifier,
    "this": _Converter._identifier,
    "undefined": _Converter._identifier,
    "array": _Converter._array,
    "object": _Converter._object,
    "pair": _Converter._pair,
    "shorthand_property_identifier": _Converter._shorthand_property,
    "spread_element": _Converter._spread,
    "string": _Converter._string,
    "template_string": _Converter._template,
    **{t: _Converter._literal for t in _LITERAL_TYPES},
    **{t: _Converter._type_assertion for t in _TYPE_ASSERTION_TYPES},
}


def _target(node: Node) -> Node | None:
    """The node to convert in place of node: None for dropped subtrees, parentheses removed."""
    while True:
        if node.type == "comment" or node.type in _SKIPPED_TYPES:
            return None
        if node.type != "parenthesized_expression":
            return node
        inner = _named(node)
        if len(inner) != 1:
            return node
        node = inner[0]


def _named(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type != "comment"]


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _property_key_name(key: Node) -> str | None:
    if key.type == "string":
        return _text(key)[1:-1]
    if key.type in ("property_identifier", "private_property_identifier", "number", "identifier"):
        return _text(key)
    return None


def _collect_comments(root: Node) -> list[Comment]:
    """All comments in the tree, in source order (they can sit under any node)."""
    comments: list[Comment] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            comments.append(Comment(
                line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
                text=_text(node),
            ))
            continue
        stack.extend(reversed(node.children))
    return comments
