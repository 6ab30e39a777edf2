"""Structured blocks produced by the mixed-content renderer.

These models describe what to draw, independent of the presentation layer
(Rich in the terminal, plain text in tests).
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .chart import ChartBlock


class InlineSpan(BaseModel):
    """A run of paragraph text with one emphasis style."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text", "bold", "code"] = "text"
    text: str


class HeadingBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=3)
    text: str


class ListBlock(BaseModel):
    """Ordered or unordered list; ordinals are not preserved."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    ordered: bool = False
    items: tuple[str, ...] = ()


class ParagraphBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    spans: tuple[InlineSpan, ...] = ()

    @property
    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)


class PendingChartBlock(BaseModel):
    """Body of a chart fence that has opened but not closed yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pending_chart"] = "pending_chart"
    raw: str = ""


TextBlock = Annotated[HeadingBlock | ListBlock | ParagraphBlock, Field(discriminator="kind")]
Block = HeadingBlock | ListBlock | ParagraphBlock | ChartBlock | PendingChartBlock


class ProseSegment(BaseModel):
    """Markdown text between chart fences, already split into blocks."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["prose"] = "prose"
    text: str
    blocks: tuple[TextBlock, ...] = ()


class ChartSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["chart"] = "chart"
    chart: ChartBlock


class PendingChartSegment(BaseModel):
    """Trailing chart still arriving; only present while streaming."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pending_chart"] = "pending_chart"
    chart: PendingChartBlock


Segment = Annotated[ProseSegment | ChartSegment | PendingChartSegment, Field(discriminator="kind")]


class Document(BaseModel):
    """Rendered form of one message body.

    ``cursor`` is set while the body is still streaming; the presentation
    layer draws a caret after the last block of the last segment.
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[Segment, ...] = ()
    cursor: bool = False

    def blocks(self) -> list[Block]:
        """All blocks in document order, charts included."""
        flat: list[Block] = []
        for segment in self.segments:
            if isinstance(segment, (ChartSegment, PendingChartSegment)):
                flat.append(segment.chart)
            else:
                flat.extend(segment.blocks)
        return flat

    @property
    def chart_count(self) -> int:
        return sum(1 for segment in self.segments if isinstance(segment, ChartSegment))

    @property
    def prose_segments(self) -> list[ProseSegment]:
        return [segment for segment in self.segments if isinstance(segment, ProseSegment)]

    @property
    def is_empty(self) -> bool:
        return not self.segments
