"""Pydantic models for rule output."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from querykey_lint.rules.registry import NO_PLAIN_QUERY_KEYS
from querykey_lint.syntax.nodes import Span


class Location(BaseModel):
    line: int
    column: int
    end_line: int
    end_column: int

    model_config = {"frozen": True}

    @classmethod
    def from_span(cls, span: Span) -> Location:
        return cls(
            line=span.line,
            column=span.column,
            end_line=span.end_line,
            end_column=span.end_column,
        )


class Diagnostic(BaseModel):
    """One reported raw query key."""

    kind: Literal["RAW_QUERY_KEY"] = "RAW_QUERY_KEY"
    location: Location
    rule: str = NO_PLAIN_QUERY_KEYS.name
    message_id: str = NO_PLAIN_QUERY_KEYS.message_id
    message: str = NO_PLAIN_QUERY_KEYS.message

    model_config = {"frozen": True}
