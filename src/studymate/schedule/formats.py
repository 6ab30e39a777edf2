"""Conversions between schedule data and text.

Hides the wire format of generated schedules (a JSON array of days) and
the plain-text form used for copying.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from ..errors import ScheduleFormatError
from .models import ScheduleData, ScheduleDay

logger = logging.getLogger(__name__)

_SCHEDULE_ADAPTER = TypeAdapter(list[ScheduleDay])

# Response schema handed to the structured-generation call
SCHEDULE_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "day": {
                "type": "STRING",
                "description": "The day of the week (e.g., Monday, Tuesday).",
            },
            "events": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "id": {
                            "type": "STRING",
                            "description": "A unique identifier for the event (e.g., 'event-1').",
                        },
                        "time": {
                            "type": "STRING",
                            "description": "The time for the event (e.g., '9:00 AM - 10:30 AM').",
                        },
                        "title": {
                            "type": "STRING",
                            "description": "A concise title for the event.",
                        },
                        "description": {
                            "type": "STRING",
                            "description": "A brief description of the event or task.",
                        },
                    },
                    "required": ["id", "time", "title", "description"],
                },
            },
        },
        "required": ["day", "events"],
    },
}


def parse_schedule(json_text: str) -> ScheduleData:
    """Validate a generated schedule payload.

    Events without an id (or with an empty one) get a generated id.

    Raises:
        ScheduleFormatError: If the text is not JSON matching the schema
    """
    try:
        days = _SCHEDULE_ADAPTER.validate_json(json_text.strip())
    except ValidationError as e:
        logger.error("Failed to parse schedule JSON: %s", e)
        raise ScheduleFormatError(str(e)) from e
    return tuple(days)


def schedule_to_text(data: ScheduleData) -> str:
    """Plain-text form of a schedule, one block per day."""
    blocks = []
    for day in data:
        lines = [f"{day.day}:"]
        lines.extend(f"- {event.time}: {event.title} ({event.description})" for event in day.events)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def schedule_to_json(data: ScheduleData) -> str:
    """Serialise schedule data back to the generation wire format."""
    return _SCHEDULE_ADAPTER.dump_json(list(data), indent=2).decode("utf-8")
