"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- How each mode's state is painted (placeholders, loading, errors)
- Chat transcript rendering with the live streaming caret
- Schedule table layout and row-to-event mapping
- Sketch display in the terminal
- Log rendering, level filtering and the logging bridge
"""

import io
import logging
from datetime import datetime

# Import before the app starts so terminal graphics support is detected
import textual_image.renderable  # noqa: F401
from PIL import Image as PILImage
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.widgets import Button, DataTable, Input, RichLog, Static
from textual_image.widget import Image as TextualImageWidget

from ..assistant import SchedulerState, SketcherState, SolverState
from ..i18n import LanguageContext
from ..render import TableChartRenderer, render_markdown_text
from ..schedule import ScheduleData
from ..tutor import TutorDriver
from .config import CHART_MAX_ROWS, LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, LogLevel

_charts = TableChartRenderer(max_rows=CHART_MAX_ROWS)


def _placeholder(title: str, text: str) -> Text:
    result = Text(title, style="bold")
    result.append("\n")
    result.append(text, style="dim")
    return result


def _loading(title: str, hint: str = "") -> Text:
    result = Text(title, style="bold yellow")
    if hint:
        result.append("\n")
        result.append(hint, style="dim")
    return result


def _error_panel(title: str, message: str) -> Panel:
    return Panel(Text(message), title=title, border_style="red", title_align="left")


class ContentView(Static):
    """A Static that paints a message body with the content renderer.

    Clicking copies the raw text, the way chat messages are copied.
    """

    def __init__(self, *args, inline_code: bool = False, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._inline_code = inline_code
        self._raw = ""

    @property
    def raw(self) -> str:
        return self._raw

    def show_text(self, text: str, is_streaming: bool = False) -> None:
        self._raw = text
        self.update(render_markdown_text(text, is_streaming, self._inline_code, _charts))

    def show(self, renderable: RenderableType) -> None:
        self._raw = ""
        self.update(renderable)

    def on_click(self, event: Click) -> None:
        if not self._raw:
            return
        event.stop()
        self.app.copy_to_clipboard(self._raw)
        self.app.notify("Copied to clipboard", timeout=2)


class SolverView(Vertical):
    """Solution with cheat sheet and practice problem sections."""

    def __init__(self, language: LanguageContext, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._language = language

    def compose(self) -> ComposeResult:
        t = self._language.translate
        yield ContentView(id="solution", classes="content-view")
        with Horizontal(id="solver-actions"):
            yield Button(t("buttons.cheatSheet"), id="cheat-sheet-btn", variant="primary")
            yield Button(t("buttons.practice"), id="practice-btn", variant="primary")
        yield ContentView(id="cheat-sheet", classes="content-view section")
        yield ContentView(id="practice", classes="content-view section")

    def sync(self, state: SolverState) -> None:
        t = self._language.translate
        solution = self.query_one("#solution", ContentView)
        if state.is_loading:
            solution.show(_loading(t("solutionDisplay.generating"), t("solutionDisplay.generatingHint")))
        elif state.error:
            solution.show(_error_panel(t("solutionDisplay.errorTitle"), state.error))
        elif state.solution:
            solution.show_text(state.solution)
        else:
            solution.show(_placeholder(
                t("solutionDisplay.placeholderTitle"), t("solutionDisplay.placeholderText")
            ))

        actions = self.query_one("#solver-actions", Horizontal)
        actions.display = bool(state.solution) and not state.is_loading
        cheat_btn = self.query_one("#cheat-sheet-btn", Button)
        cheat_btn.label = t("buttons.creating") if state.is_creating_cheat_sheet else t("buttons.cheatSheet")
        cheat_btn.disabled = state.busy
        practice_btn = self.query_one("#practice-btn", Button)
        practice_btn.label = t("buttons.generating") if state.is_generating_practice else t("buttons.practice")
        practice_btn.disabled = state.busy

        self._sync_section(
            "#cheat-sheet",
            t("buttons.cheatSheet"),
            state.cheat_sheet,
            state.cheat_sheet_error,
            state.is_creating_cheat_sheet,
            t("solutionDisplay.creatingCheatSheet"),
        )
        self._sync_section(
            "#practice",
            t("solutionDisplay.practiceProblems"),
            state.practice_problems,
            state.practice_problems_error,
            state.is_generating_practice,
            t("solutionDisplay.generatingPracticeProblems"),
        )

    def _sync_section(
        self,
        selector: str,
        title: str,
        text: str,
        error: str,
        loading: bool,
        loading_text: str,
    ) -> None:
        view = self.query_one(selector, ContentView)
        view.display = bool(text or error or loading)
        view.border_title = title
        if loading:
            view.show(_loading(loading_text))
        elif error:
            view.show(Text(error, style="red"))
        elif text:
            view.show_text(text)


class SketchPanel(Vertical):
    """Current sketch, its edit field and the save hint.

    Uses textual_image's Image widget, which picks Sixel, TGP or halfcell
    rendering for the terminal it runs in.
    """

    BORDER_TITLE = "Sketch"

    def __init__(self, language: LanguageContext, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._language = language
        self._shown: bytes = b""

    def compose(self) -> ComposeResult:
        t = self._language.translate
        yield Static("", id="sketch-status")
        yield TextualImageWidget(None, id="sketch-image")
        with Horizontal(id="sketch-edit-bar"):
            yield Input(placeholder=t("sketchDisplay.editPlaceholder"), id="sketch-edit")
            yield Button(t("buttons.applyEdit"), id="apply-edit-btn", variant="success")
        yield Static("", id="sketch-edit-error")

    def sync(self, state: SketcherState) -> None:
        t = self._language.translate
        status = self.query_one("#sketch-status", Static)
        image = self.query_one("#sketch-image", TextualImageWidget)

        if state.is_loading:
            status.update(_loading(t("sketchDisplay.creating"), t("sketchDisplay.creatingHint")))
        elif state.error:
            status.update(_error_panel(t("sketchDisplay.errorTitle"), state.error))
        elif not state.sketch:
            status.update(_placeholder(
                t("sketchDisplay.placeholderTitle"), t("sketchDisplay.placeholderText")
            ))
        else:
            status.update(Text(f"{t('sketchDisplay.editTitle')}  [ctrl+s] {t('buttons.downloadSketch')}", style="dim"))

        if state.sketch != self._shown:
            image.image = PILImage.open(io.BytesIO(state.sketch)) if state.sketch else None
            self._shown = state.sketch
        image.display = bool(state.sketch)

        self.query_one("#sketch-edit-bar", Horizontal).display = bool(state.sketch)
        apply_btn = self.query_one("#apply-edit-btn", Button)
        apply_btn.label = t("buttons.applying") if state.is_editing else t("buttons.applyEdit")
        apply_btn.disabled = state.busy
        self.query_one("#sketch-edit-error", Static).update(Text(state.edit_error, style="red"))

    @property
    def edit_prompt(self) -> str:
        return self.query_one("#sketch-edit", Input).value.strip()

    def clear_edit_prompt(self) -> None:
        self.query_one("#sketch-edit", Input).value = ""


class ScheduleView(Vertical):
    """Weekly plan as a table, one row per event.

    Rows are mapped back to ``(day_index, event_id)``; days without events
    get a single placeholder row whose event id is ``None``.
    """

    BINDINGS = [
        ("a", "add_event", "Add"),
        ("e", "edit_event", "Edit"),
        ("d", "delete_event", "Delete"),
    ]

    def __init__(self, language: LanguageContext, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._language = language
        self._rows: list[tuple[int, str | None]] = []
        self._data: ScheduleData | None = None

    def compose(self) -> ComposeResult:
        yield Static("", id="schedule-status")
        yield DataTable(id="schedule-table", cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        table = self.query_one("#schedule-table", DataTable)
        table.add_columns("Day", "Time", "Title", "Description")

    def sync(self, state: SchedulerState) -> None:
        t = self._language.translate
        status = self.query_one("#schedule-status", Static)
        table = self.query_one("#schedule-table", DataTable)

        if state.is_loading:
            status.update(_loading(t("scheduleDisplay.planning"), t("scheduleDisplay.planningHint")))
        elif state.error:
            status.update(_error_panel(t("scheduleDisplay.errorTitle"), state.error))
        elif state.schedule is None:
            status.update(_placeholder(
                t("scheduleDisplay.placeholderTitle"), t("scheduleDisplay.placeholderText")
            ))
        else:
            status.update(Text(f"{t('scheduleDisplay.weeklyPlan')}  [a] [e] [d]", style="bold"))

        table.display = state.schedule is not None
        if state.schedule is self._data:
            return
        self._data = state.schedule

        cursor = table.cursor_row
        table.clear()
        self._rows = []
        for day_index, day in enumerate(state.schedule or ()):
            if not day.events:
                table.add_row(day.day, "", Text(t("scheduleDisplay.noEvents"), style="dim"), "")
                self._rows.append((day_index, None))
                continue
            for position, event in enumerate(day.events):
                table.add_row(day.day if position == 0 else "", event.time, event.title, event.description)
                self._rows.append((day_index, event.id))
        if self._rows:
            table.move_cursor(row=min(cursor, len(self._rows) - 1))

    def selected(self) -> tuple[int, str | None] | None:
        """Day index and event id under the cursor, if any row exists."""
        table = self.query_one("#schedule-table", DataTable)
        if not self._rows or table.cursor_row < 0:
            return None
        return self._rows[min(table.cursor_row, len(self._rows) - 1)]

    def action_add_event(self) -> None:
        self.app.action_add_event()

    def action_edit_event(self) -> None:
        self.app.action_edit_event()

    def action_delete_event(self) -> None:
        self.app.action_delete_event()


class TutorChatView(VerticalScroll):
    """Tutor conversation with the reply streamed in place."""

    BORDER_TITLE = "Tutor"

    def __init__(self, language: LanguageContext, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._language = language

    def compose(self) -> ComposeResult:
        yield Static("", id="tutor-transcript")

    def sync(self, tutor: TutorDriver) -> None:
        t = self._language.translate
        transcript = self.query_one("#tutor-transcript", Static)
        history = tutor.history

        if not history and not tutor.error:
            transcript.update(_placeholder(
                t("tutorDisplay.placeholderTitle"), t("tutorDisplay.placeholderText")
            ))
            return

        parts: list[RenderableType] = []
        for index, message in enumerate(history):
            if message.role == "user":
                parts.append(Panel(Text(message.text), title="You", title_align="left", border_style="cyan"))
            else:
                streaming = tutor.is_replying and index == len(history) - 1
                body = render_markdown_text(message.text, streaming, True, _charts)
                parts.append(Panel(body, title="Tutor", title_align="left", border_style="green"))
        if tutor.error:
            parts.append(Text(tutor.error, style="red"))
        transcript.update(Group(*parts))
        self.scroll_end(animate=False)

    def last_reply(self, tutor: TutorDriver) -> str | None:
        for message in reversed(tutor.history):
            if message.role == "model" and message.text:
                return message.text
        return None


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped records from all studymate loggers.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=False,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def write_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Logger name the record came from
            message: Log message
            level: Numeric level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        entry = Text()
        entry.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT), style="dim")
        entry.append(" ")
        entry.append(f"{LogLevel.name(level):<7}", style=level_colors.get(level, "bold red"))
        entry.append(f" [{component}] ", style="magenta")
        entry.append(message)
        self.write(entry)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def get_plain_text(self) -> str:
        """Get plain text content of the log for copying."""
        return "\n".join(line.text for line in self.lines)

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = self.get_plain_text()
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        self.app.copy_to_clipboard(text)
        self.app.notify("Log copied", timeout=2)


class PanelLogHandler(logging.Handler):
    """Forwards ``logging`` records into a DebugPanel."""

    def __init__(self, panel: DebugPanel, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._panel.write_entry(record.name, self.format(record), record.levelno)
        except Exception:
            self.handleError(record)
