"""no-plain-query-keys: report raw arrays / strings used as query keys.

Single pre-order pass over one file's tree. Key-bearing sites are:

  - the first argument of a tracked queryClient method or tracked hook
  - the value of a `queryKey` / `mutationKey` object property

Property sites inside the arguments of the options-builder wrapper
(`queryOptions(...)` by default) are exempt: that call is where a literal
key is meant to be paired with its fetch function.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from querykey_lint.config import RuleConfig
from querykey_lint.rules.call_sites import has_key_property, is_wrapper_call, recognize_call
from querykey_lint.rules.classifier import is_violation
from querykey_lint.rules.models import Diagnostic, Location
from querykey_lint.rules.registry import KEY_PROPERTY_NAMES
from querykey_lint.rules.suppression import SuppressionContext
from querykey_lint.syntax.nodes import NodeKind, SyntaxNode

log = logging.getLogger(__name__)

_ENTER_WRAPPER = "enter-wrapper"
_EXIT_WRAPPER = "exit-wrapper"


@dataclass
class _Traversal:
    """Per-analysis state threaded through the walk."""
    config: RuleConfig
    suppression: SuppressionContext = field(default_factory=SuppressionContext)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, node: SyntaxNode) -> None:
        self.diagnostics.append(Diagnostic(location=Location.from_span(node.span)))


def analyze(tree: SyntaxNode, config: RuleConfig | None = None) -> list[Diagnostic]:
    """Return one diagnostic per raw query key in tree, in traversal order."""
    state = _Traversal(config=config or RuleConfig())
    _visit(tree, state)
    log.debug("no-plain-query-keys: %d diagnostics", len(state.diagnostics))
    return state.diagnostics


def _visit(root: SyntaxNode, state: _Traversal) -> None:
    # Explicit stack: pre-order, children pushed in reverse. The markers
    # bracket a wrapper call's arguments.
    stack: list[SyntaxNode | str] = [root]
    while stack:
        item = stack.pop()
        if item is _ENTER_WRAPPER:
            state.suppression.enter()
            continue
        if item is _EXIT_WRAPPER:
            state.suppression.exit()
            continue

        node = item
        if node.kind is NodeKind.CALL_EXPRESSION:
            _check_call(node, state)
            if is_wrapper_call(node, state.config):
                stack.append(_EXIT_WRAPPER)
                stack.extend(reversed(node.arguments))
                stack.append(_ENTER_WRAPPER)
                if node.callee is not None:
                    stack.append(node.callee)
                continue
        elif node.kind is NodeKind.PROPERTY:
            _check_property(node, state)

        stack.extend(reversed(list(node.children())))


def _check_call(call: SyntaxNode, state: _Traversal) -> None:
    site = recognize_call(call, state.config)
    if site is None or site.candidate is None:
        return
    # { queryKey: ... } is judged at the property itself
    if has_key_property(site.candidate):
        return
    if is_violation(site.candidate):
        state.report(site.candidate)


def _check_property(prop: SyntaxNode, state: _Traversal) -> None:
    if prop.name not in KEY_PROPERTY_NAMES or state.suppression.active:
        return
    value = prop.property_value
    if value is not None and is_violation(value):
        state.report(value)
