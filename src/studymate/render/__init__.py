"""Mixed-content rendering.

Module structure:
- content.py: splitting text into prose and chart segments, block parsing
- chart.py: chart specification decoding and the renderer protocol
- models.py: block and document data structures
- rich_render.py: terminal presentation with Rich
- latex.py: LaTeX cleanup for plain terminals
"""

from .chart import ChartBlock, ChartRenderer, ChartSpec, chart_rows, parse_chart
from .content import CHART_FENCE, render_content, split_segments, wrap_chart
from .models import (
    ChartSegment,
    Document,
    HeadingBlock,
    InlineSpan,
    ListBlock,
    ParagraphBlock,
    PendingChartBlock,
    PendingChartSegment,
    ProseSegment,
)
from .rich_render import TableChartRenderer, render_document, render_markdown_text

__all__ = [
    "CHART_FENCE",
    "ChartBlock",
    "ChartRenderer",
    "ChartSegment",
    "ChartSpec",
    "Document",
    "HeadingBlock",
    "InlineSpan",
    "ListBlock",
    "ParagraphBlock",
    "PendingChartBlock",
    "PendingChartSegment",
    "ProseSegment",
    "TableChartRenderer",
    "chart_rows",
    "parse_chart",
    "render_content",
    "render_document",
    "render_markdown_text",
    "split_segments",
    "wrap_chart",
]
