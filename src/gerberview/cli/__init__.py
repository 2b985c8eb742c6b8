"""Command-line interface for gerberview.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Rendering a document to a JSON draw list
- Placement and debug overlay options
- Parallel building of several documents
- Detailed error reporting
"""

from gerberview.cli.app import cli, main

__all__ = ["cli", "main"]
