"""Command-line interface for rastertrace.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for batch tracing
- Verbose/quiet output modes
- Dry-run mode for inspecting ring counts
- Detailed error reporting
"""

from rastertrace.cli.app import cli, main

__all__ = ["cli", "main"]
