"""Public package surface for zipview.

Exports ``main`` for programmatic CLI invocation.
The navigation core lives in ``viewport``, ``json_tree``, ``search`` and
``text_panel``; screens and collaborators build on top of it.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
