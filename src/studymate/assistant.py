"""Per-mode assistant state and request handlers.

Hides the interaction rules shared by every surface (TUI, CLI):
- Which local inputs are required before a request is sent
- Which loading flag and error string belong to which request
- What a mode switch resets

Handlers never raise for expected failures. They record a user-facing
error string and always leave the state interactive again.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import MissingInputError
from .i18n import LanguageContext
from .llm import ImageInput
from .schedule import EventDraft, ScheduleData, ScheduleEvent, ScheduleStore
from .service import StudyService
from .tutor import ChatHistory, TutorDriver

logger = logging.getLogger(__name__)

SOLVE_FALLBACK_ERROR = "An unexpected error occurred. Please try again."
SKETCH_FALLBACK_ERROR = "Could not generate the sketch. Please try again."
EDIT_FALLBACK_ERROR = "Could not edit the sketch. Please try again."
SCHEDULE_FALLBACK_ERROR = "Could not generate the schedule. Please try again."
CHEAT_SHEET_FALLBACK_ERROR = "Could not create cheat sheet. Please try again."
PRACTICE_FALLBACK_ERROR = "Could not generate practice problems. Please try again."


class Mode(str, Enum):
    """The four things the assistant can do."""

    SOLVER = "solver"
    SKETCHER = "sketcher"
    SCHEDULER = "scheduler"
    TUTOR = "tutor"


@dataclass
class SolverState:
    solution: str = ""
    error: str = ""
    is_loading: bool = False
    cheat_sheet: str = ""
    cheat_sheet_error: str = ""
    is_creating_cheat_sheet: bool = False
    practice_problems: str = ""
    practice_problems_error: str = ""
    is_generating_practice: bool = False

    @property
    def busy(self) -> bool:
        return self.is_loading or self.is_creating_cheat_sheet or self.is_generating_practice


@dataclass
class SketcherState:
    """Sketch bytes survive failed requests; only success replaces them."""

    sketch: bytes = b""
    error: str = ""
    is_loading: bool = False
    edit_error: str = ""
    is_editing: bool = False
    # Prompt the current sketch was drawn from, used for the file name
    sketch_prompt: str = ""

    @property
    def busy(self) -> bool:
        return self.is_loading or self.is_editing


@dataclass
class SchedulerState:
    store: ScheduleStore = field(default_factory=ScheduleStore)
    error: str = ""
    is_loading: bool = False

    @property
    def schedule(self) -> ScheduleData | None:
        return self.store.data


def _error_text(error: Exception, fallback: str) -> str:
    return str(error) or fallback


def sketch_filename(prompt: str) -> str:
    """File name for a saved sketch: non-alphanumerics become underscores."""
    safe = re.sub(r"[^a-z0-9]", "_", prompt, flags=re.IGNORECASE).lower()
    return f"{safe or 'sketch'}.jpeg"


class StudyAssistant:
    """State holder and controller for all four modes.

    One instance backs one UI session. State lives in memory only and is
    replaced on every mode switch. Each handler writes into the state object
    it started with, so a request still running after a switch only updates
    state nobody displays any more.
    """

    def __init__(
        self,
        service: StudyService,
        language: LanguageContext,
        on_chat_change: Callable[[ChatHistory], None] | None = None,
    ) -> None:
        self._service = service
        self._language = language
        self._on_chat_change = on_chat_change
        self.mode = Mode.SOLVER
        self.prompt = ""
        self.image: ImageInput | None = None
        self.solver = SolverState()
        self.sketcher = SketcherState()
        self.scheduler = SchedulerState()
        self.tutor = TutorDriver(service, on_change=on_chat_change)

    @property
    def service(self) -> StudyService:
        return self._service

    @property
    def language(self) -> LanguageContext:
        return self._language

    @property
    def is_busy(self) -> bool:
        """True while any request is in flight; new submissions must wait."""
        return (
            self.solver.busy
            or self.sketcher.busy
            or self.scheduler.is_loading
            or self.tutor.is_replying
        )

    def _t(self, key: str) -> str:
        return self._language.translate(key)

    # Mode handling

    def set_mode(self, mode: Mode | str) -> bool:
        """Switch mode, clearing the prompt and every mode's state.

        Returns:
            True if the mode changed
        """
        new_mode = Mode(mode)
        if new_mode == self.mode:
            return False
        logger.info("Switching mode %s -> %s", self.mode.value, new_mode.value)
        self.mode = new_mode
        self.prompt = ""
        self.image = None
        self.solver = SolverState()
        self.sketcher = SketcherState()
        self.scheduler = SchedulerState()
        self.tutor = TutorDriver(self._service, on_change=self._on_chat_change)
        return True

    def attach_image(self, path: str | Path) -> bool:
        """Attach an image file to the next solver request.

        Returns:
            False (with the solver error set) if the file cannot be read
        """
        try:
            self.image = ImageInput.from_path(path)
        except OSError as e:
            logger.warning("Cannot attach image %s: %s", path, e)
            self.solver.error = self._t("errors.imageNotFound")
            return False
        self.solver.error = ""
        return True

    def remove_image(self) -> None:
        self.image = None

    # Solver

    async def solve(self) -> None:
        if not self.prompt and self.image is None:
            self.solver.error = self._t("errors.noPrompt")
            return

        image = self.image
        state = self.solver = SolverState(is_loading=True)
        self.image = None
        try:
            state.solution = await self._service.solve_homework(
                self.prompt, image, self._language.locale
            )
        except MissingInputError as e:
            state.error = self._t(e.translation_key) if e.translation_key else str(e)
        except Exception as e:
            logger.error("Solve failed: %s", e)
            state.error = _error_text(e, SOLVE_FALLBACK_ERROR)
        finally:
            state.is_loading = False

    async def create_cheat_sheet(self) -> None:
        if not self.solver.solution or not self.prompt:
            return
        state = self.solver
        state.is_creating_cheat_sheet = True
        state.cheat_sheet_error = ""
        state.cheat_sheet = ""
        try:
            state.cheat_sheet = await self._service.create_cheat_sheet(state.solution, self.prompt)
        except Exception as e:
            logger.error("Cheat sheet failed: %s", e)
            state.cheat_sheet_error = _error_text(e, CHEAT_SHEET_FALLBACK_ERROR)
        finally:
            state.is_creating_cheat_sheet = False

    async def generate_practice_problems(self) -> None:
        if not self.solver.solution or not self.prompt:
            return
        state = self.solver
        state.is_generating_practice = True
        state.practice_problems_error = ""
        state.practice_problems = ""
        try:
            state.practice_problems = await self._service.generate_practice_problems(
                self.prompt, state.solution
            )
        except Exception as e:
            logger.error("Practice problems failed: %s", e)
            state.practice_problems_error = _error_text(e, PRACTICE_FALLBACK_ERROR)
        finally:
            state.is_generating_practice = False

    # Sketcher

    async def generate_sketch(self) -> None:
        if not self.prompt:
            self.sketcher.error = self._t("errors.noSketchPrompt")
            return

        prompt = self.prompt
        state = self.sketcher
        state.is_loading = True
        state.error = ""
        state.edit_error = ""
        try:
            state.sketch = await self._service.generate_sketch(prompt)
            state.sketch_prompt = prompt
        except Exception as e:
            logger.error("Sketch generation failed: %s", e)
            state.error = _error_text(e, SKETCH_FALLBACK_ERROR)
        finally:
            state.is_loading = False

    async def edit_sketch(self, edit_prompt: str) -> bool:
        """Apply an edit to the current sketch.

        Returns:
            True if the sketch was replaced (callers clear their edit field)
        """
        if not edit_prompt:
            self.sketcher.edit_error = self._t("errors.noEditPrompt")
            return False
        if not self.sketcher.sketch:
            self.sketcher.edit_error = self._t("errors.noSketchToEdit")
            return False

        state = self.sketcher
        state.is_editing = True
        state.edit_error = ""
        try:
            state.sketch = await self._service.edit_sketch(state.sketch, edit_prompt)
            return True
        except Exception as e:
            logger.error("Sketch edit failed: %s", e)
            state.edit_error = _error_text(e, EDIT_FALLBACK_ERROR)
            return False
        finally:
            state.is_editing = False

    # Scheduler

    async def generate_schedule(self) -> None:
        if not self.prompt:
            self.scheduler.error = self._t("errors.noSchedulePrompt")
            return

        state = self.scheduler
        state.is_loading = True
        state.error = ""
        state.store.reset()
        try:
            state.store.load(await self._service.generate_schedule(self.prompt))
        except Exception as e:
            logger.error("Schedule generation failed: %s", e)
            state.error = _error_text(e, SCHEDULE_FALLBACK_ERROR)
        finally:
            state.is_loading = False

    def add_event(self, day_index: int, draft: EventDraft) -> ScheduleEvent:
        """Add a manually entered event.

        Raises:
            DraftValidationError: If time or title is blank
        """
        return self.scheduler.store.add(day_index, draft)

    def edit_event(self, day_index: int, updated_event: ScheduleEvent) -> None:
        self.scheduler.store.edit(day_index, updated_event)

    def delete_event(self, day_index: int, event_id: str) -> None:
        self.scheduler.store.delete(day_index, event_id)

    # Tutor

    async def send_message(self) -> bool:
        """Send the current prompt as a tutor turn and clear the prompt."""
        if not self.prompt:
            return False
        prompt = self.prompt
        self.prompt = ""
        return await self.tutor.send(prompt)
