"""Public package surface for coco.

Exports ``main`` for programmatic CLI invocation.
The selection engine lives in ``coco.session`` and its helper modules.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
