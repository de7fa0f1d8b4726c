"""Depth-counted suppression for the options-builder wrapper call.

One SuppressionContext is created per analysis. The walker calls `enter()`
before a wrapper call's arguments and `exit()` after them, so every entry
is undone on the way back up. `entered()` wraps the pair for callers that
recurse.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class SuppressionContext:
    def __init__(self) -> None:
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def active(self) -> bool:
        return self._depth > 0

    def enter(self) -> None:
        self._depth += 1

    def exit(self) -> None:
        if self._depth == 0:
            raise RuntimeError("suppression exit without a matching enter")
        self._depth -= 1

    @contextmanager
    def entered(self) -> Iterator[None]:
        """Mark the enclosed traversal as inside a wrapper call's arguments."""
        self.enter()
        try:
            yield
        finally:
            self.exit()
