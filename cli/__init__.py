"""CLI package for Pwned Range Check.

Provides the command-line breach check flow.
"""

from cli.checker import main, build_parser, render_result

__all__ = [
    "main",
    "build_parser",
    "render_result",
]
