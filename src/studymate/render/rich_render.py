"""Rich presentation of rendered documents.

Hides how blocks look in a terminal: heading styles, list markers, inline
emphasis, chart tables and error boxes, and the streaming caret.
"""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .chart import CHART_ERROR_TEXT, ChartBlock, chart_rows
from .content import parse_inline, render_content
from .latex import clean_latex
from .models import Document, HeadingBlock, ListBlock, ParagraphBlock, PendingChartBlock

STREAM_CURSOR = "▍"
CHART_PENDING_TEXT = "Drawing chart…"

_HEADING_STYLES = {
    1: "bold underline bright_white",
    2: "bold bright_white",
    3: "bold",
}

_SPAN_STYLES = {
    "text": "",
    "bold": "bold",
    "code": "bold magenta on grey19",
}


class TableChartRenderer:
    """Draws a chart's inline data as a table.

    Terminals cannot show Vega-Lite graphics, so the data behind the chart
    is shown instead, one column per encoded field.
    """

    def __init__(self, max_rows: int = 50) -> None:
        self._max_rows = max_rows

    def render(self, chart: ChartBlock) -> RenderableType:
        if not chart.ok or chart.spec is None:
            message = Text(CHART_ERROR_TEXT, style="red")
            if chart.error:
                message.append(f"\n{chart.error}", style="dim")
            return Panel(
                message,
                border_style="red",
                title="Chart",
                title_align="left",
            )

        spec = chart.spec
        columns, rows = chart_rows(spec)
        caption = spec.description if isinstance(spec.description, str) else None
        table = Table(caption=caption, show_lines=False, expand=False)
        for column in columns:
            table.add_column(column)
        for row in rows[: self._max_rows]:
            table.add_row(*row)
        if len(rows) > self._max_rows:
            table.add_row(*(["…"] * len(columns)))

        title = f"Chart ({spec.mark_type})" if spec.mark_type else "Chart"
        if isinstance(spec.title, str):
            title = f"{title}: {spec.title}"
        return Panel(table, title=title, title_align="left", border_style="cyan", expand=False)


def render_heading(block: HeadingBlock) -> Text:
    return Text(clean_latex(block.text), style=_HEADING_STYLES[block.level])


def render_list(block: ListBlock) -> Text:
    lines = Text()
    for index, item in enumerate(block.items, 1):
        marker = f"{index}. " if block.ordered else "• "
        if index > 1:
            lines.append("\n")
        lines.append(marker, style="cyan")
        lines.append_text(render_spans(item))
    return lines


def render_spans(text: str) -> Text:
    """Render list item text, which may itself carry bold markers."""
    return render_paragraph(ParagraphBlock(spans=parse_inline(text)))


def render_paragraph(block: ParagraphBlock) -> Text:
    result = Text(overflow="fold")
    for span in block.spans:
        text = span.text if span.kind == "code" else clean_latex(span.text)
        result.append(text, style=_SPAN_STYLES[span.kind])
    return result


def render_document(document: Document, chart_renderer=None) -> Group:
    """Convert a Document into a Rich renderable group.

    Args:
        document: Parsed message body
        chart_renderer: Collaborator for chart blocks (defaults to tables)

    Returns:
        Group of renderables separated by blank lines, with the streaming
        caret after the last block when the document is still streaming
    """
    charts = chart_renderer or TableChartRenderer()
    renderables: list[RenderableType] = []

    for block in document.blocks():
        if isinstance(block, ChartBlock):
            renderables.append(charts.render(block))
        elif isinstance(block, PendingChartBlock):
            renderables.append(Text(CHART_PENDING_TEXT, style="dim italic"))
        elif isinstance(block, HeadingBlock):
            renderables.append(render_heading(block))
        elif isinstance(block, ListBlock):
            renderables.append(render_list(block))
        else:
            renderables.append(render_paragraph(block))

    if document.cursor:
        if renderables and isinstance(renderables[-1], Text):
            renderables[-1].append(STREAM_CURSOR, style="blink")
        else:
            renderables.append(Text(STREAM_CURSOR, style="blink"))

    spaced: list[RenderableType] = []
    for index, renderable in enumerate(renderables):
        if index:
            spaced.append(Text(""))
        spaced.append(renderable)
    return Group(*spaced)


def render_markdown_text(
    text: str,
    is_streaming: bool = False,
    inline_code: bool = False,
    chart_renderer=None,
) -> Group:
    """Parse and present a message body in one step."""
    return render_document(render_content(text, is_streaming, inline_code), chart_renderer)
