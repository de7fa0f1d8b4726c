"""Syntax package: the tree model and the tree-sitter frontend that builds it.

Provides:
    parse_source(source, dialect) -> ParsedSource
    parse_file(path) -> ParsedSource
"""

from __future__ import annotations

from querykey_lint.syntax.frontend import (
    Comment,
    Dialect,
    ParsedSource,
    dialect_for_path,
    parse_file,
    parse_source,
)
from querykey_lint.syntax.nodes import NodeKind, Span, SyntaxNode, walk

__all__ = [
    "Comment",
    "Dialect",
    "NodeKind",
    "ParsedSource",
    "Span",
    "SyntaxNode",
    "dialect_for_path",
    "parse_file",
    "parse_source",
    "walk",
]
