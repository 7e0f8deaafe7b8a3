"""CLI commands for font-to-svg."""

from font_to_svg.cli.commands.cache import cache
from font_to_svg.cli.commands.fonts import fonts
from font_to_svg.cli.commands.render import metrics, path, svg

__all__ = ["svg", "path", "metrics", "fonts", "cache"]
