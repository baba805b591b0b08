"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_browser`), the event
loop, and the ambient config/logging setup.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the bootstrap to keep package imports lightweight."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = ["run_browser"]
