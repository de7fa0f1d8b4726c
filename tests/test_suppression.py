"""Tests for the wrapper-call suppression context."""

from __future__ import annotations

import pytest

from querykey_lint.rules.suppression import SuppressionContext


def test_starts_inactive():
    ctx = SuppressionContext()
    assert ctx.depth == 0
    assert not ctx.active


def test_entered_activates_and_restores():
    ctx = SuppressionContext()
    with ctx.entered():
        assert ctx.active
        assert ctx.depth == 1
    assert not ctx.active


def test_nested_exit_keeps_outer_suppression():
    ctx = SuppressionContext()
    with ctx.entered():
        with ctx.entered():
            assert ctx.depth == 2
        assert ctx.active
        assert ctx.depth == 1
    assert ctx.depth == 0


def test_depth_restored_when_traversal_raises():
    ctx = SuppressionContext()
    with pytest.raises(RuntimeError):
        with ctx.entered():
            raise RuntimeError("boom")
    assert ctx.depth == 0


def test_contexts_are_independent():
    a, b = SuppressionContext(), SuppressionContext()
    with a.entered():
        assert a.active
        assert not b.active


def test_enter_exit_pair():
    ctx = SuppressionContext()
    ctx.enter()
    ctx.enter()
    assert ctx.depth == 2
    ctx.exit()
    assert ctx.active
    ctx.exit()
    assert not ctx.active


def test_unmatched_exit_raises():
    ctx = SuppressionContext()
    with pytest.raises(RuntimeError):
        ctx.exit()
    assert ctx.depth == 0
