"""Rules package.

Provides:
    analyze(tree, config) -> list[Diagnostic]
"""

from __future__ import annotations

from querykey_lint.rules.classifier import KeyVerdict, classify_key_expression
from querykey_lint.rules.models import Diagnostic, Location
from querykey_lint.rules.no_plain_query_keys import analyze
from querykey_lint.rules.registry import NO_PLAIN_QUERY_KEYS, RULES, RuleMeta

__all__ = [
    "Diagnostic",
    "KeyVerdict",
    "Location",
    "NO_PLAIN_QUERY_KEYS",
    "RULES",
    "RuleMeta",
    "analyze",
    "classify_key_expression",
]
