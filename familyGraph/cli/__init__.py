from __future__ import annotations

"""CLI entrypoint exposing ``main`` for console_scripts.

The click group lives in ``__main__`` so ``python -m familyGraph.cli`` and the
``familyGraph`` script share it; it is imported lazily to keep
``python -m`` from loading that module twice.
"""

__all__ = ["main"]


def main() -> None:  # pragma: no cover - thin wrapper
    from .__main__ import cli

    cli()
