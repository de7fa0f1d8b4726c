"""Key expression classifier: maps an expression's shape to Allowed or Violation.

The rule targets literal *construction* of keys. Any indirection (a
variable, a member access, a call of any kind) is trusted without checking
that it really resolves to a key factory.
"""

from __future__ import annotations

from enum import Enum

from querykey_lint.syntax.nodes import NodeKind, SyntaxNode


class KeyVerdict(str, Enum):
    ALLOWED = "allowed"
    VIOLATION = "violation"


# One entry per shape the rule has an opinion on. Kinds absent from the
# table (numbers, objects, template literals, spreads, functions, ...)
# fall through to ALLOWED in classify_key_expression.
_VERDICT_BY_KIND: dict[NodeKind, KeyVerdict] = {
    NodeKind.IDENTIFIER: KeyVerdict.ALLOWED,
    NodeKind.MEMBER_EXPRESSION: KeyVerdict.ALLOWED,
    NodeKind.CALL_EXPRESSION: KeyVerdict.ALLOWED,
    # Shape decides, not contents: [], [""] and [...keys.all, "x"] all violate
    NodeKind.ARRAY_EXPRESSION: KeyVerdict.VIOLATION,
    NodeKind.STRING_LITERAL: KeyVerdict.VIOLATION,
}


def classify_key_expression(node: SyntaxNode) -> KeyVerdict:
    """Classify a key-bearing expression by its outermost shape."""
    if node.kind is NodeKind.TYPE_ASSERTION:
        # ["todos"] as const is still a literal
        inner = node.expression
        return classify_key_expression(inner) if inner is not None else KeyVerdict.ALLOWED
    return _VERDICT_BY_KIND.get(node.kind, KeyVerdict.ALLOWED)


def is_violation(node: SyntaxNode) -> bool:
    return classify_key_expression(node) is KeyVerdict.VIOLATION
