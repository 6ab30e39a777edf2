"""Main Textual TUI application.

Orchestrates the UI components and routes user interaction to the
StudyAssistant. All request state lives in the assistant; the app only
starts handlers as workers and repaints views from that state.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Button,
    ContentSwitcher,
    Footer,
    Header,
    Input,
    Static,
    Tab,
    Tabs,
    TextArea,
)

from ..assistant import Mode, StudyAssistant, sketch_filename
from ..errors import DraftValidationError, EventNotFoundError
from ..i18n import LanguageContext
from ..llm import StudyModel
from ..schedule import EventDraft, schedule_to_text
from ..service import StudyService
from ..tutor import ChatHistory
from .config import ROOT_LOGGER_NAME, SKETCH_SAVE_DIR, LogLevel
from .screens import EventFormScreen
from .styles import APP_CSS
from .themes import CHALKBOARD
from .widgets import (
    ContentView,
    DebugPanel,
    PanelLogHandler,
    ScheduleView,
    SketchPanel,
    SolverView,
    TutorChatView,
)

logger = logging.getLogger(__name__)

_SUBMIT_LABELS = {
    Mode.SOLVER: ("buttons.solve", "buttons.solving"),
    Mode.SKETCHER: ("buttons.generateSketch", "buttons.sketching"),
    Mode.SCHEDULER: ("buttons.generateSchedule", "buttons.planning"),
    Mode.TUTOR: ("buttons.sendMessage", "buttons.replying"),
}


class StudymateApp(App):
    """Textual TUI for the study assistant."""

    CSS = APP_CSS
    TITLE = "Studymate"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+j", "submit", "Submit"),
        Binding("ctrl+t", "toggle_language", "Language"),
        Binding("ctrl+y", "copy_output", "Copy"),
        Binding("ctrl+s", "save_sketch", "Save Sketch"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        service: StudyService,
        language: LanguageContext,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._language = language
        self._log_level = log_level
        self._assistant = StudyAssistant(service, language, on_chat_change=self._on_chat_change)
        self._log_handler: PanelLogHandler | None = None
        self._logger_propagate = True

    @property
    def assistant(self) -> StudyAssistant:
        return self._assistant

    def compose(self) -> ComposeResult:
        t = self._language.translate
        yield Header(show_clock=True)
        yield Tabs(
            *[Tab(t(f"modes.{mode.value}"), id=f"tab-{mode.value}") for mode in Mode],
            id="mode-tabs",
        )

        with Horizontal(id="main"):
            with Vertical(id="input-panel"):
                prompt = TextArea(id="prompt", show_line_numbers=False)
                prompt.cursor_blink = False
                yield prompt
                yield Input(id="image-path")
                yield Button("", id="submit-btn", variant="success").with_tooltip("Submit (Ctrl+J)")

            with VerticalScroll(id="output-panel"):
                with ContentSwitcher(initial="view-solver", id="views"):
                    yield SolverView(self._language, id="view-solver")
                    yield SketchPanel(self._language, id="view-sketcher")
                    yield ScheduleView(self._language, id="view-scheduler")
                    yield TutorChatView(self._language, id="view-tutor")

        yield DebugPanel(id="debug-panel")
        yield Static("", id="disclaimer")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(CHALKBOARD)
        self.theme = "chalkboard"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._attach_log_panel(log_panel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            logger.info("Log panel enabled with level: %s", self._log_level.upper())

        self._language.subscribe(lambda _locale: self._relabel())
        self._relabel()
        self.query_one("#prompt", TextArea).focus()

    def on_unmount(self) -> None:
        """Detach the log panel from the logging tree."""
        if self._log_handler is not None:
            package_logger = logging.getLogger(ROOT_LOGGER_NAME)
            package_logger.removeHandler(self._log_handler)
            package_logger.propagate = self._logger_propagate
            self._log_handler = None

    def _attach_log_panel(self, panel: DebugPanel) -> None:
        # Records must not reach stderr handlers while the screen is owned by Textual
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._log_handler = PanelLogHandler(panel)
        self._log_handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(self._log_handler)
        package_logger.setLevel(logging.DEBUG)
        self._logger_propagate = package_logger.propagate
        package_logger.propagate = False

    # Painting

    def _relabel(self) -> None:
        """Apply the active locale to every static label, then repaint."""
        t = self._language.translate
        self.title = t("header.title")
        for mode in Mode:
            self.query_one(f"#tab-{mode.value}", Tab).label = t(f"modes.{mode.value}")
        self.query_one("#image-path", Input).placeholder = (
            f"{t('homeworkInput.uploadButton')} ({t('homeworkInput.uploadHint')})"
        )
        self.query_one("#sketch-edit", Input).placeholder = t("sketchDisplay.editPlaceholder")
        self.query_one("#disclaimer", Static).update(t("disclaimer.accuracy"))
        self._sync()

    def _sync(self) -> None:
        """Repaint input controls and the active view from assistant state."""
        t = self._language.translate
        assistant = self._assistant
        mode = assistant.mode
        busy = assistant.is_busy

        self.query_one("#prompt", TextArea).placeholder = t(f"homeworkInput.{mode.value}Placeholder")
        idle_key, busy_key = _SUBMIT_LABELS[mode]
        submit = self.query_one("#submit-btn", Button)
        submit.label = t(busy_key) if busy else t(idle_key)
        submit.disabled = busy

        image_input = self.query_one("#image-path", Input)
        image_input.display = mode == Mode.SOLVER
        input_panel = self.query_one("#input-panel", Vertical)
        input_panel.border_subtitle = (
            f"{t('homeworkInput.attachImage')}: {assistant.image.mime_type}" if assistant.image else ""
        )

        self.query_one("#views", ContentSwitcher).current = f"view-{mode.value}"
        self.query_one("#view-solver", SolverView).sync(assistant.solver)
        self.query_one("#view-sketcher", SketchPanel).sync(assistant.sketcher)
        self.query_one("#view-scheduler", ScheduleView).sync(assistant.scheduler)
        self.query_one("#view-tutor", TutorChatView).sync(assistant.tutor)

    def _on_chat_change(self, history: ChatHistory) -> None:
        self.query_one("#view-tutor", TutorChatView).sync(self._assistant.tutor)

    # Requests

    @work(group="request")
    async def _run(self, handler: Callable[[], Awaitable[object]]) -> None:
        """Run one assistant handler as a background async worker.

        The handler sets its loading flag before its first suspension, so
        the repaint queued here shows the loading state.
        """
        self.call_after_refresh(self._sync)
        try:
            await handler()
        finally:
            self._sync()

    async def _apply_sketch_edit(self) -> None:
        panel = self.query_one("#view-sketcher", SketchPanel)
        if await self._assistant.edit_sketch(panel.edit_prompt):
            panel.clear_edit_prompt()

    def action_submit(self) -> None:
        """Send the prompt with the current mode's handler."""
        assistant = self._assistant
        if assistant.is_busy:
            return
        if assistant.mode == Mode.SOLVER:
            self._run(assistant.solve)
        elif assistant.mode == Mode.SKETCHER:
            self._run(assistant.generate_sketch)
        elif assistant.mode == Mode.SCHEDULER:
            self._run(assistant.generate_schedule)
        elif assistant.prompt:
            self._run(assistant.send_message)
            self.query_one("#prompt", TextArea).text = ""

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "submit-btn":
            self.action_submit()
        elif self._assistant.is_busy:
            return
        elif button_id == "cheat-sheet-btn":
            self._run(self._assistant.create_cheat_sheet)
        elif button_id == "practice-btn":
            self._run(self._assistant.generate_practice_problems)
        elif button_id == "apply-edit-btn":
            self._run(self._apply_sketch_edit)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "image-path":
            path = event.value.strip()
            if path:
                self._assistant.attach_image(Path(path).expanduser())
            else:
                self._assistant.remove_image()
            self._sync()
        elif event.input.id == "sketch-edit" and not self._assistant.is_busy:
            self._run(self._apply_sketch_edit)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "prompt":
            self._assistant.prompt = event.text_area.text.strip()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if event.tab is None or event.tab.id is None:
            return
        mode = Mode(event.tab.id.removeprefix("tab-"))
        if mode == self._assistant.mode:
            return
        self._assistant.set_mode(mode)
        self.query_one("#prompt", TextArea).text = ""
        self.query_one("#image-path", Input).value = ""
        self.query_one("#view-sketcher", SketchPanel).clear_edit_prompt()
        self._sync()

    # Actions

    def action_toggle_language(self) -> None:
        locale = self._language.toggle()
        self.notify(f"Language: {locale}", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_output(self) -> None:
        """Copy the current mode's result to the clipboard."""
        assistant = self._assistant
        text: str | None = None
        if assistant.mode == Mode.SOLVER:
            text = self.query_one("#solution", ContentView).raw or None
        elif assistant.mode == Mode.SCHEDULER and assistant.scheduler.schedule is not None:
            text = schedule_to_text(assistant.scheduler.schedule)
        elif assistant.mode == Mode.TUTOR:
            text = self.query_one("#view-tutor", TutorChatView).last_reply(assistant.tutor)

        if not text:
            self.notify("Nothing to copy", severity="warning", timeout=2)
            return
        self.copy_to_clipboard(text)
        self.notify(self._language.translate("buttons.copied"), timeout=2)

    def action_save_sketch(self) -> None:
        """Write the current sketch next to the working directory."""
        sketcher = self._assistant.sketcher
        if not sketcher.sketch:
            self.notify(self._language.translate("errors.noSketchToEdit"), severity="warning")
            return
        path = Path(SKETCH_SAVE_DIR) / sketch_filename(sketcher.sketch_prompt)
        try:
            path.write_bytes(sketcher.sketch)
        except OSError as e:
            logger.error("Could not save sketch to %s: %s", path, e)
            self.notify(f"Error: {e}", severity="error", timeout=5)
            return
        logger.info("Saved sketch to %s", path)
        self.notify(f"Saved {path}", timeout=3)

    def _schedule_view(self) -> ScheduleView | None:
        if self._assistant.mode != Mode.SCHEDULER or self._assistant.scheduler.schedule is None:
            return None
        return self.query_one("#view-scheduler", ScheduleView)

    def action_add_event(self) -> None:
        view = self._schedule_view()
        if view is None:
            return
        selected = view.selected()
        day_index = selected[0] if selected else 0

        def _added(draft: EventDraft | None) -> None:
            if draft is None:
                return
            try:
                self._assistant.add_event(day_index, draft)
            except DraftValidationError as e:
                self.notify(self._language.translate(e.translation_key), severity="error")
            self._sync()

        self.push_screen(EventFormScreen(self._language), _added)

    def action_edit_event(self) -> None:
        view = self._schedule_view()
        selected = view.selected() if view else None
        if selected is None or selected[1] is None:
            return
        day_index, event_id = selected
        day = self._assistant.scheduler.schedule[day_index]
        event = next(e for e in day.events if e.id == event_id)

        def _edited(draft: EventDraft | None) -> None:
            if draft is None:
                return
            try:
                self._assistant.edit_event(day_index, draft.to_event(event.id))
            except EventNotFoundError as e:
                logger.warning("Edit skipped: %s", e)
            self._sync()

        self.push_screen(EventFormScreen(self._language, event), _edited)

    def action_delete_event(self) -> None:
        view = self._schedule_view()
        selected = view.selected() if view else None
        if selected is None or selected[1] is None:
            return
        self._assistant.delete_event(*selected)
        self._sync()


async def run_tui(model: StudyModel, language: LanguageContext, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        model: Generative-AI provider instance
        language: Locale holder shared by every view
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = StudymateApp(StudyService(model), language, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await model.close()
