"""Command-line interface for font-to-svg."""

from font_to_svg.cli.main import cli, main

__all__ = ["cli", "main"]
