"""Public package surface for dirnav.

Exports ``main`` for programmatic CLI invocation and ``HistorySession`` for
Python-hosted shells that drive directory history in-process.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def __getattr__(name: str):
    if name == "HistorySession":
        from .session import HistorySession

        return HistorySession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["HistorySession", "main"]
