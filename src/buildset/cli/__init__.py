"""
CLI layer for buildset.

Provides a Typer application whose sub-commands delegate to the
resolution and execution packages.  This package handles only terminal
transport: argument parsing, coloured output, and table formatting.

Entry point::

    buildset --help
"""

from buildset.cli.app import app

__all__ = ["app"]
