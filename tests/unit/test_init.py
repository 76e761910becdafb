r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import aresproxy


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(aresproxy.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    # Should have at least one dot (e.g., "0.0.0" or "0.1.0")
    assert "." in aresproxy.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in aresproxy.__all__:
        assert hasattr(aresproxy, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_unique() -> None:
    """Test that __all__ has no duplicates."""
    assert len(set(aresproxy.__all__)) == len(aresproxy.__all__)


def test_main_entry_points_exported() -> None:
    """Test that the main classes are importable from the package root."""
    from aresproxy import JsonRestProxy, RequestExecutor, TransportHandlePool

    assert JsonRestProxy.__module__ == "aresproxy.client"
    assert RequestExecutor.__module__ == "aresproxy.executor"
    assert TransportHandlePool.__module__ == "aresproxy.pool"
