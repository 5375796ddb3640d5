# File: extmodel/__main__.py
"""
extmodel - Module entry point.

Allows running the generator directly via::

    python -m extmodel --model user.yaml --format touch2

This module simply delegates to the CLI entry point defined in ``extmodel.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from extmodel.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
