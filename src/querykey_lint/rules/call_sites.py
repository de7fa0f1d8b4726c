"""Call-site recognition: tracked queryClient methods, tracked hooks, the wrapper."""

from __future__ import annotations

from dataclasses import dataclass

from querykey_lint.config import RuleConfig
from querykey_lint.rules.registry import KEY_PROPERTY_NAMES, SiteKind, lookup_site_kind
from querykey_lint.syntax.nodes import NodeKind, SyntaxNode


@dataclass(frozen=True)
class CallSite:
    kind: SiteKind
    name: str                        # method or hook name
    call: SyntaxNode
    candidate_index: int = 0
    candidate: SyntaxNode | None = None   # None when the call has no arguments


def recognize_call(call: SyntaxNode, config: RuleConfig) -> CallSite | None:
    """Return the key-bearing site of a call, or None if the call is not tracked.

    Tracked: `<client>.<method>(...)` with the receiver being exactly the
    configured client identifier, and `<hook>(...)` with a bare identifier
    callee. Everything else is inert.
    """
    callee = call.callee
    if callee is None:
        return None

    if callee.kind is NodeKind.MEMBER_EXPRESSION:
        receiver = callee.member_object
        if (
            receiver is None
            or receiver.kind is not NodeKind.IDENTIFIER
            or receiver.name != config.client_identifier_name
            or callee.name is None
        ):
            return None
        name = callee.name
        kind = lookup_site_kind(name, is_member_call=True)
    elif callee.kind is NodeKind.IDENTIFIER and callee.name:
        name = callee.name
        kind = lookup_site_kind(name, is_member_call=False)
    else:
        return None

    if kind is None:
        return None

    args = call.arguments
    return CallSite(
        kind=kind,
        name=name,
        call=call,
        candidate_index=0,
        candidate=args[0] if args else None,
    )


def is_wrapper_call(call: SyntaxNode, config: RuleConfig) -> bool:
    """True for `queryOptions(...)` and `ns.queryOptions(...)` (configured name)."""
    callee = call.callee
    if callee is None:
        return False
    if callee.kind in (NodeKind.IDENTIFIER, NodeKind.MEMBER_EXPRESSION):
        return callee.name == config.wrapper_function_name
    return False


def has_key_property(node: SyntaxNode) -> bool:
    """True when an object literal spells out a queryKey / mutationKey property."""
    if node.kind is not NodeKind.OBJECT_EXPRESSION:
        return False
    return any(
        item.kind is NodeKind.PROPERTY and item.name in KEY_PROPERTY_NAMES
        for item in node.items
    )
