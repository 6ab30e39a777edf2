"""Copy-on-write mutations of schedule data.

Hides how days are addressed (by position, there is no day id) and how a
change is applied: each operation returns a new top-level tuple in which
only the touched day is replaced. Untouched days keep their identity.
"""

import logging
import re

from ..errors import EventNotFoundError
from .models import EventDraft, ScheduleData, ScheduleDay, ScheduleEvent, new_event_id

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"(\d+)")


def time_sort_key(time: str) -> tuple:
    """Order key for a free-form time string.

    Digit runs compare by value and the text between them compares
    case-insensitively, so "9:00 AM" precedes "12:00 PM". AM/PM is not
    interpreted: "1:00 PM" still precedes "9:00 AM".
    """
    parts = _DIGITS.split(time.strip())
    return tuple(int(part) if index % 2 else part.lower() for index, part in enumerate(parts))


def _replace_day(data: ScheduleData, day_index: int, day: ScheduleDay) -> ScheduleData:
    return data[:day_index] + (day,) + data[day_index + 1:]


def _day(data: ScheduleData, day_index: int) -> ScheduleDay:
    if not 0 <= day_index < len(data):
        raise IndexError(f"Day index {day_index} out of range for {len(data)} day(s)")
    return data[day_index]


def add_event(
    data: ScheduleData,
    day_index: int,
    draft: EventDraft,
    event_id: str | None = None,
) -> tuple[ScheduleData, ScheduleEvent]:
    """Insert an event and re-sort the day by its ``time`` text.

    See ``time_sort_key`` for the ordering; ties keep insertion order.

    Returns:
        Tuple of (new schedule data, the inserted event)
    """
    day = _day(data, day_index)
    event = draft.to_event(event_id or new_event_id())
    events = sorted((*day.events, event), key=lambda e: time_sort_key(e.time))
    updated = day.model_copy(update={"events": tuple(events)})
    return _replace_day(data, day_index, updated), event


def edit_event(data: ScheduleData, day_index: int, updated_event: ScheduleEvent) -> ScheduleData:
    """Replace the event with a matching id, keeping its position.

    Raises:
        IndexError: If ``day_index`` does not address a day
        EventNotFoundError: If the day has no event with that id
    """
    day = _day(data, day_index)
    if not any(event.id == updated_event.id for event in day.events):
        raise EventNotFoundError(day_index, updated_event.id)
    events = tuple(updated_event if event.id == updated_event.id else event for event in day.events)
    return _replace_day(data, day_index, day.model_copy(update={"events": events}))


def delete_event(data: ScheduleData, day_index: int, event_id: str) -> ScheduleData:
    """Remove the event with the given id; unknown ids leave the day as is."""
    day = _day(data, day_index)
    events = tuple(event for event in day.events if event.id != event_id)
    if len(events) == len(day.events):
        return data
    return _replace_day(data, day_index, day.model_copy(update={"events": events}))


class ScheduleStore:
    """Holds the current schedule of the scheduler mode.

    States: empty (``data`` is None) until a schedule is loaded, populated
    afterwards; ``reset`` returns to empty.
    """

    def __init__(self) -> None:
        self._data: ScheduleData | None = None

    @property
    def data(self) -> ScheduleData | None:
        return self._data

    @property
    def is_empty(self) -> bool:
        return self._data is None

    def load(self, data: ScheduleData) -> None:
        self._data = tuple(data)
        logger.debug("Schedule loaded with %d day(s)", len(self._data))

    def reset(self) -> None:
        self._data = None

    def _require(self) -> ScheduleData:
        if self._data is None:
            raise LookupError("No schedule loaded")
        return self._data

    def add(self, day_index: int, draft: EventDraft) -> ScheduleEvent:
        """Validate and insert a new event into a day."""
        draft.validate_draft()
        self._data, event = add_event(self._require(), day_index, draft)
        logger.debug("Added event %s to day %d", event.id, day_index)
        return event

    def edit(self, day_index: int, updated_event: ScheduleEvent) -> None:
        self._data = edit_event(self._require(), day_index, updated_event)
        logger.debug("Edited event %s in day %d", updated_event.id, day_index)

    def delete(self, day_index: int, event_id: str) -> None:
        self._data = delete_event(self._require(), day_index, event_id)
        logger.debug("Deleted event %s from day %d", event_id, day_index)
