"""Mixed markdown and chart content parsing.

Hides the details of the minimal markdown subset the assistant answers in:
- Where chart specifications are fenced inside prose
- How prose splits into blocks and how blocks are classified
- Which inline emphasis is recognised in which view

Parsing is pure: the same text and streaming flag always give an equal
Document, so views can re-parse after every streamed delta.
"""

import re

from .chart import parse_chart
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

CHART_FENCE_OPEN = "```json vega-lite\n"
CHART_FENCE_CLOSE = "```"
CHART_FENCE = re.compile(r"```json vega-lite\n([\s\S]*?)```")

_BLOCK_BREAK = re.compile(r"\n{2,}")
_ORDERED_ITEM = re.compile(r"^\d+\.\s")
_BOLD = re.compile(r"(\*\*.*?\*\*)")
_BOLD_OR_CODE = re.compile(r"(\*\*.*?\*\*|`.*?`)")

_HEADING_PREFIXES = (("### ", 3), ("## ", 2), ("# ", 1))


def split_segments(text: str) -> list[tuple[str, str]]:
    """Split text into alternating prose and chart parts.

    Returns:
        List of (kind, text) pairs where kind is "prose" or "chart". Even
        positions are prose, odd positions are chart bodies; the list always
        starts and ends with prose (possibly empty).
    """
    parts = CHART_FENCE.split(text)
    return [("chart" if index % 2 else "prose", part) for index, part in enumerate(parts)]


def parse_inline(block: str, inline_code: bool = False) -> tuple[InlineSpan, ...]:
    """Split paragraph text into plain, bold and (optionally) code spans."""
    pattern = _BOLD_OR_CODE if inline_code else _BOLD
    spans = []
    for index, part in enumerate(pattern.split(block)):
        if not part:
            continue
        if index % 2 == 0:
            spans.append(InlineSpan(kind="text", text=part))
        elif part.startswith("**"):
            spans.append(InlineSpan(kind="bold", text=part[2:-2]))
        else:
            spans.append(InlineSpan(kind="code", text=part[1:-1]))
    return tuple(spans)


def parse_block(block: str, inline_code: bool = False) -> HeadingBlock | ListBlock | ParagraphBlock | None:
    """Classify one paragraph-separated block.

    Returns:
        The block, or None when it holds only whitespace
    """
    if not block.strip():
        return None

    for prefix, level in _HEADING_PREFIXES:
        if block.startswith(prefix):
            return HeadingBlock(level=level, text=block[len(prefix):])

    if block.startswith(("* ", "- ")):
        items = tuple(line[2:] for line in block.split("\n") if line.strip())
        return ListBlock(ordered=False, items=items)

    if _ORDERED_ITEM.match(block):
        items = tuple(_ORDERED_ITEM.sub("", line, count=1) for line in block.split("\n") if line.strip())
        return ListBlock(ordered=True, items=items)

    return ParagraphBlock(spans=parse_inline(block, inline_code))


def parse_prose(text: str, inline_code: bool = False) -> tuple[HeadingBlock | ListBlock | ParagraphBlock, ...]:
    """Split prose on blank-line runs and classify each block in order."""
    blocks = []
    for raw_block in _BLOCK_BREAK.split(text):
        block = parse_block(raw_block, inline_code)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


def render_content(text: str, is_streaming: bool = False, inline_code: bool = False) -> Document:
    """Turn a message body into a Document.

    Args:
        text: Full body received so far
        is_streaming: Whether more text may still be appended to ``text``
        inline_code: Recognise single-backtick code spans (tutor view)

    Returns:
        Document with prose and chart segments in source order. Prose
        segments holding only whitespace are omitted. While streaming, a
        chart fence that has opened but not closed becomes one trailing
        pending chart, so earlier blocks never change as the body grows.
    """
    parts = split_segments(text)
    pending = None
    if is_streaming:
        tail = parts[-1][1]
        start = tail.find(CHART_FENCE_OPEN)
        if start != -1:
            parts[-1] = ("prose", tail[:start])
            pending = PendingChartBlock(raw=tail[start + len(CHART_FENCE_OPEN):])

    segments: list[ProseSegment | ChartSegment | PendingChartSegment] = []
    for kind, part in parts:
        if kind == "chart":
            segments.append(ChartSegment(chart=parse_chart(part)))
            continue
        blocks = parse_prose(part, inline_code)
        if blocks:
            segments.append(ProseSegment(text=part, blocks=blocks))
    if pending is not None:
        segments.append(PendingChartSegment(chart=pending))
    return Document(segments=tuple(segments), cursor=is_streaming)


def wrap_chart(spec_json: str) -> str:
    """Wrap a chart body in the fence recognised by render_content."""
    body = spec_json if spec_json.endswith("\n") else spec_json + "\n"
    return f"{CHART_FENCE_OPEN}{body}{CHART_FENCE_CLOSE}"
