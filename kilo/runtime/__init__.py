"""Public runtime entry points.

``run_editor`` is the bootstrap; ``run_main_loop`` is the lower-level loop
used by tests and composition code.
"""

from __future__ import annotations


def run_editor(*args, **kwargs):
    """Lazily import the bootstrap to keep package imports lightweight."""
    from .app import run_editor as _run_editor

    return _run_editor(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_editor", "run_main_loop"]
