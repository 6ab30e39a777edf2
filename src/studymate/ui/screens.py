"""Modal screens for the TUI.

This module hides the design decisions about:
- Event dialog appearance (CSS, layout)
- Which fields the add and edit dialogs show
- Keyboard shortcuts for dialogs

To change how event dialogs look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from ..errors import DraftValidationError
from ..i18n import LanguageContext
from ..schedule import EventDraft, ScheduleEvent


class EventFormScreen(ModalScreen[EventDraft | None]):
    """Modal dialog for adding a new event or editing an existing one.

    Dismisses with the entered ``EventDraft``, or ``None`` when cancelled.
    In add mode the draft must have a time and a title; the dialog stays
    open and shows the validation message otherwise.
    """

    CSS = """
    EventFormScreen {
        align: center middle;
        background: $background 70%;
    }

    #event-dialog {
        width: 70;
        height: auto;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #event-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
        border-bottom: solid $border;
        margin-bottom: 1;
    }

    #event-dialog Label {
        color: $text-muted;
        margin-top: 1;
    }

    #event-error {
        color: $error;
        height: auto;
        margin-top: 1;
    }

    #event-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    #event-buttons Button {
        margin: 0 1;
        min-width: 12;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, language: LanguageContext, event: ScheduleEvent | None = None) -> None:
        super().__init__()
        self._language = language
        self._event = event

    @property
    def is_edit(self) -> bool:
        return self._event is not None

    def compose(self) -> ComposeResult:
        t = self._language.translate
        event = self._event
        title = t("editModal.title") if self.is_edit else t("addModal.title")
        submit = t("buttons.saveChanges") if self.is_edit else t("buttons.addEvent")

        with Vertical(id="event-dialog"):
            yield Static(title, id="event-title")
            yield Label(t("editModal.time"))
            yield Input(
                value=event.time if event else "",
                placeholder=t("addModal.timePlaceholder"),
                id="event-time",
            )
            yield Label(t("editModal.eventTitle"))
            yield Input(
                value=event.title if event else "",
                placeholder=t("addModal.titlePlaceholder"),
                id="event-name",
            )
            yield Label(t("editModal.description"))
            yield Input(
                value=event.description if event else "",
                placeholder=t("addModal.descriptionPlaceholder"),
                id="event-description",
            )
            yield Static("", id="event-error")
            with Horizontal(id="event-buttons"):
                yield Button(submit, id="btn-save", variant="success")
                yield Button(t("buttons.cancel"), id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#event-time", Input).focus()

    def _draft(self) -> EventDraft:
        return EventDraft(
            time=self.query_one("#event-time", Input).value,
            title=self.query_one("#event-name", Input).value,
            description=self.query_one("#event-description", Input).value,
        )

    def _submit(self) -> None:
        draft = self._draft()
        if not self.is_edit:
            try:
                draft.validate_draft()
            except DraftValidationError as e:
                self.query_one("#event-error", Static).update(
                    self._language.translate(e.translation_key)
                )
                return
        self.dismiss(draft)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self._submit()
        elif event.button.id == "btn-cancel":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def action_cancel(self) -> None:
        self.dismiss(None)
