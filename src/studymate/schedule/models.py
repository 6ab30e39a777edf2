"""Data models for weekly schedules.

Events and days are immutable; every change produces new objects so views
can detect changes by identity.
"""

import secrets
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import DraftValidationError


def new_event_id() -> str:
    """Fresh id for a manually added event."""
    return str(uuid4())


def fallback_event_id() -> str:
    """Id for a generated event that arrived without one."""
    return f"event-{secrets.token_hex(5)[:9]}"


class ScheduleEvent(BaseModel):
    """One scheduled item. Identity is ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", validate_default=True, description="Opaque unique identifier")
    time: str = Field(description="Free-form time, e.g. '9:00 AM - 10:30 AM'")
    title: str = Field(description="Concise title")
    description: str = Field(default="", description="Brief description of the task")

    @field_validator("id", mode="after")
    @classmethod
    def _fill_missing_id(cls, value: str) -> str:
        return value or fallback_event_id()


class ScheduleDay(BaseModel):
    """A labelled day and its events, kept sorted by ``time`` after inserts."""

    model_config = ConfigDict(frozen=True)

    day: str = Field(description="Day label, e.g. 'Monday'")
    events: tuple[ScheduleEvent, ...] = ()


ScheduleData = tuple[ScheduleDay, ...]


class EventDraft(BaseModel):
    """User-entered event fields before an id is assigned."""

    model_config = ConfigDict(frozen=True)

    time: str = ""
    title: str = ""
    description: str = ""

    def validate_draft(self) -> "EventDraft":
        """Require a non-blank time and title.

        Raises:
            DraftValidationError: If either is empty after trimming
        """
        if not self.time.strip() or not self.title.strip():
            raise DraftValidationError()
        return self

    def to_event(self, event_id: str | None = None) -> ScheduleEvent:
        return ScheduleEvent(
            id=event_id or new_event_id(),
            time=self.time,
            title=self.title,
            description=self.description,
        )
