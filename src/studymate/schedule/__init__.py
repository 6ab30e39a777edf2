"""Weekly schedule data and its local mutations."""

from .formats import SCHEDULE_RESPONSE_SCHEMA, parse_schedule, schedule_to_json, schedule_to_text
from .models import EventDraft, ScheduleData, ScheduleDay, ScheduleEvent, new_event_id
from .store import ScheduleStore, add_event, delete_event, edit_event, time_sort_key

__all__ = [
    "EventDraft",
    "SCHEDULE_RESPONSE_SCHEMA",
    "ScheduleData",
    "ScheduleDay",
    "ScheduleEvent",
    "ScheduleStore",
    "add_event",
    "delete_event",
    "edit_event",
    "new_event_id",
    "parse_schedule",
    "schedule_to_json",
    "schedule_to_text",
    "time_sort_key",
]
