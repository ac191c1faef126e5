"""Terminal runtime: bootstrap, terminal control, rendering and editor launch."""

from __future__ import annotations


def run_editor(*args, **kwargs):
    """Lazily import the bootstrap to keep package imports lightweight."""
    from .application import run_editor as _run_editor

    return _run_editor(*args, **kwargs)


__all__ = ["run_editor"]
