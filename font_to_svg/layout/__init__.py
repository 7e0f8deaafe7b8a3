"""Text layout for font-to-svg.

This subpackage provides:
- Metrics for single-line, multi-line and vertical text
- Glyph outline assembly into absolute path commands
"""

from font_to_svg.layout.metrics import LineMetrics, TextMetrics, compute_metrics
from font_to_svg.layout.synthesis import synthesize_path, synthesize_path_data

__all__ = ["LineMetrics", "TextMetrics", "compute_metrics", "synthesize_path", "synthesize_path_data"]
