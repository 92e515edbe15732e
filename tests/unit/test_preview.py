"""Tests for PreviewRegistry handle bookkeeping."""

from src.services.preview import PreviewRegistry


def test_allocate_and_resolve():
    """A fresh handle resolves to its content."""
    registry = PreviewRegistry()
    handle = registry.allocate(b"img")
    assert registry.resolve(handle) == b"img"
    assert registry.live_count == 1


def test_release_frees_handle():
    """Released handles no longer resolve."""
    registry = PreviewRegistry()
    handle = registry.allocate(b"img")
    assert registry.release(handle) is True
    assert registry.resolve(handle) is None
    assert registry.live_count == 0
    assert registry.allocated == registry.released == 1


def test_double_release_reported():
    """A second release is refused and not counted."""
    registry = PreviewRegistry()
    handle = registry.allocate(b"img")
    registry.release(handle)
    assert registry.release(handle) is False
    assert registry.released == 1


def test_handles_are_unique():
    registry = PreviewRegistry()
    assert registry.allocate(b"a") != registry.allocate(b"a")
