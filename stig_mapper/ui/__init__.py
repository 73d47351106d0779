"""Command-line interface.

Public API:
    - main: CLI entry point function
    - build_parser: argparse parser factory
    - format_summary_text: Human-readable mapping statistics
"""

from __future__ import annotations

from stig_mapper.ui.cli import main, build_parser, format_summary_text

__all__ = [
    "main",
    "build_parser",
    "format_summary_text",
]
