"""Exception hierarchy for studymate.

Hides the mapping between failure kinds and what callers may show to users:
- Validation failures carry a translation key instead of a message
- External failures carry the collaborator's message
- Schedule format failures carry a fixed message
"""


class StudymateError(Exception):
    """Base class for all studymate errors."""


class MissingInputError(StudymateError):
    """Required local input is missing; nothing was sent to the network."""

    def __init__(self, message: str, translation_key: str | None = None) -> None:
        super().__init__(message)
        self.translation_key = translation_key


class DraftValidationError(MissingInputError):
    """A manually entered schedule event lacks a time or a title."""

    def __init__(self) -> None:
        super().__init__(
            "Please fill in at least the time and title for the event.",
            translation_key="addModal.validationAlert",
        )


class ExternalServiceError(StudymateError):
    """The generative-AI service rejected a request or returned nothing usable."""


class ScheduleFormatError(ExternalServiceError):
    """The structured schedule payload was not valid JSON for the schema."""

    MESSAGE = "The AI returned an invalid schedule format. Please try again."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.MESSAGE)
        self.detail = detail


class EventNotFoundError(StudymateError, KeyError):
    """No event with the requested id exists in the addressed day."""

    def __init__(self, day_index: int, event_id: str) -> None:
        super().__init__(f"No event '{event_id}' in day {day_index}")
        self.day_index = day_index
        self.event_id = event_id

    def __str__(self) -> str:
        return self.args[0]
