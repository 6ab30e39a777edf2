"""Chart embedding for mixed-content documents.

Hides the design decisions about:
- How a fenced chart body is decoded (JSON object, lenient Vega-Lite model)
- How decode failures are contained (an error block, never an exception)
- Which collaborator draws the chart (anything satisfying ChartRenderer)
"""

import json
import logging
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CHART_ERROR_TEXT = "Could not render the chart due to an error in the data."


class FieldEncoding(BaseModel):
    """One encoding channel of a chart (x, y, color, ...)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    field: str | None = Field(default=None, description="Data field bound to the channel")
    type: str | None = Field(default=None, description="Measurement type, e.g. 'quantitative'")
    title: str | None = Field(default=None, description="Axis or legend title")


class ChartData(BaseModel):
    """Inline data of a chart specification."""

    model_config = ConfigDict(frozen=True, extra="allow")

    values: list[dict[str, Any]] = Field(default_factory=list)


class ChartSpec(BaseModel):
    """Lenient view of a Vega-Lite specification.

    Only the parts the terminal renderer needs are typed; every other key
    is preserved as an extra field so the spec can be handed on unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    schema_url: str | None = Field(default=None, alias="$schema")
    description: str | None = None
    title: str | dict[str, Any] | None = None
    data: ChartData | None = None
    mark: str | dict[str, Any] | None = None
    encoding: dict[str, Any] = Field(default_factory=dict)

    @property
    def mark_type(self) -> str | None:
        """Mark name whether given as a string or as a mark definition object."""
        if isinstance(self.mark, dict):
            mark_type = self.mark.get("type")
            return str(mark_type) if mark_type is not None else None
        return self.mark

    @property
    def values(self) -> list[dict[str, Any]]:
        return self.data.values if self.data else []

    def channels(self) -> dict[str, FieldEncoding]:
        """Encoding channels that are single field definitions.

        List-valued channels (e.g. a tooltip array) are skipped.
        """
        channels = {}
        for name, definition in self.encoding.items():
            if isinstance(definition, dict):
                channels[name] = FieldEncoding.model_validate(definition)
        return channels

    def to_dict(self) -> dict[str, Any]:
        """Return the specification as plain JSON-compatible data."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ChartBlock(BaseModel):
    """A chart segment after decoding.

    Exactly one of ``spec`` and ``error`` is set.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["chart"] = "chart"
    raw: str = Field(description="Chart body exactly as it appeared between the fences")
    spec: ChartSpec | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChartRenderer(Protocol):
    """Collaborator that turns a decoded chart into something displayable."""

    def render(self, chart: ChartBlock) -> Any:
        ...


def parse_chart(raw: str) -> ChartBlock:
    """Decode one fenced chart body.

    Args:
        raw: Text between the opening and closing chart fences

    Returns:
        ChartBlock with ``spec`` on success, or with ``error`` describing
        why the body could not be used
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Chart body is not valid JSON: %s", e)
        return ChartBlock(raw=raw, error=f"Invalid chart JSON: {e.msg} (line {e.lineno})")

    if not isinstance(payload, dict):
        logger.warning("Chart body is a %s, expected an object", type(payload).__name__)
        return ChartBlock(raw=raw, error="Chart specification must be a JSON object")

    try:
        spec = ChartSpec.model_validate(payload)
    except ValidationError as e:
        logger.warning("Chart specification rejected: %s", e)
        return ChartBlock(raw=raw, error=f"Invalid chart specification: {e.error_count()} error(s)")

    return ChartBlock(raw=raw, spec=spec)


def chart_rows(spec: ChartSpec) -> tuple[list[str], list[list[str]]]:
    """Tabular view of a chart's inline data.

    Columns follow the encoding channels that name a field, in declaration
    order; without such channels every key seen in the data is a column.

    Returns:
        Tuple of (column names, rows of cell strings)
    """
    columns: list[str] = []
    for definition in spec.channels().values():
        if definition.field and definition.field not in columns:
            columns.append(definition.field)

    if not columns:
        for item in spec.values:
            for key in item:
                if key not in columns:
                    columns.append(key)

    rows = [[_cell(item.get(column, "")) for column in columns] for item in spec.values]
    return columns, rows


def _cell(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
