"""Unit tests for per-mode assistant state and handlers."""
import asyncio
import json

import pytest

from studymate.assistant import (
    SKETCH_FALLBACK_ERROR,
    Mode,
    StudyAssistant,
    sketch_filename,
)
from studymate.errors import DraftValidationError, ExternalServiceError
from studymate.schedule import EventDraft, ScheduleDay, ScheduleEvent


@pytest.fixture
def assistant(service, language):
    return StudyAssistant(service, language)


@pytest.fixture
def week_data():
    return (ScheduleDay(day="Monday", events=(
        ScheduleEvent(id="event-1", time="9:00 AM", title="Class"),
    )),)


@pytest.fixture
def schedule_json():
    return json.dumps([{"day": "Monday", "events": [
        {"id": "event-1", "time": "9:00 AM", "title": "Class", "description": "Math"},
    ]}])


class TestModeSwitch:
    """Tests for mode changes."""

    def test_starts_in_solver(self, assistant):
        assert assistant.mode == Mode.SOLVER

    @pytest.mark.asyncio
    async def test_switch_clears_everything(self, assistant, model):
        assistant.prompt = "2+2?"
        await assistant.solve()
        assistant.solver.error = "x"

        assert assistant.set_mode("tutor")

        assert assistant.mode == Mode.TUTOR
        assert assistant.prompt == ""
        assert assistant.solver.solution == ""
        assert assistant.solver.error == ""

    def test_same_mode_is_noop(self, assistant):
        assistant.prompt = "keep"
        assert not assistant.set_mode(Mode.SOLVER)
        assert assistant.prompt == "keep"

    @pytest.mark.asyncio
    async def test_switch_resets_schedule_and_chat(self, assistant, model, schedule_json):
        model.json_text = schedule_json
        assistant.set_mode(Mode.SCHEDULER)
        assistant.prompt = "my week"
        await assistant.generate_schedule()
        assert assistant.scheduler.schedule is not None

        assistant.set_mode(Mode.TUTOR)
        assistant.prompt = "hi"
        await assistant.send_message()
        assistant.set_mode(Mode.SCHEDULER)

        assert assistant.scheduler.schedule is None
        assert assistant.tutor.history == ()


class TestLateReplies:
    """Tests for requests still running when the mode changes."""

    @pytest.fixture
    def gate(self):
        return asyncio.Event()

    @pytest.mark.asyncio
    async def test_late_solution_stays_out_of_new_state(self, assistant, service, gate, monkeypatch):
        async def _slow(prompt, image=None, fallback_locale="en"):
            await gate.wait()
            return "late answer"

        monkeypatch.setattr(service, "solve_homework", _slow)
        assistant.prompt = "2+2?"
        request = asyncio.create_task(assistant.solve())
        await asyncio.sleep(0)
        assert assistant.is_busy

        assistant.set_mode(Mode.SKETCHER)
        assistant.set_mode(Mode.SOLVER)
        assert not assistant.is_busy

        gate.set()
        await request

        assert assistant.solver.solution == ""
        assert not assistant.is_busy

    @pytest.mark.asyncio
    async def test_late_schedule_stays_out_of_new_state(self, assistant, service, gate, monkeypatch, week_data):
        async def _slow(prompt):
            await gate.wait()
            return week_data

        monkeypatch.setattr(service, "generate_schedule", _slow)
        assistant.set_mode(Mode.SCHEDULER)
        assistant.prompt = "my week"
        request = asyncio.create_task(assistant.generate_schedule())
        await asyncio.sleep(0)

        assistant.set_mode(Mode.TUTOR)
        assistant.set_mode(Mode.SCHEDULER)
        gate.set()
        await request

        assert assistant.scheduler.schedule is None

    @pytest.mark.asyncio
    async def test_late_tutor_reply_stays_out_of_new_chat(self, assistant, service, model, gate, monkeypatch):
        async def _slow(prompt):
            await gate.wait()
            return "English"

        monkeypatch.setattr(service, "detect_language", _slow)
        model.chat_replies.append(["late"])
        assistant.set_mode(Mode.TUTOR)
        assistant.prompt = "hi"
        request = asyncio.create_task(assistant.send_message())
        await asyncio.sleep(0)
        assert assistant.tutor.is_replying

        assistant.set_mode(Mode.SOLVER)
        assistant.set_mode(Mode.TUTOR)
        gate.set()
        await request

        assert assistant.tutor.history == ()
        assert not assistant.tutor.is_replying


class TestSolver:
    """Tests for solver handlers."""

    @pytest.mark.asyncio
    async def test_empty_prompt_is_validation_error(self, assistant, model):
        await assistant.solve()

        assert assistant.solver.error == "Please enter a question or upload an image."
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_validation_error_in_active_locale(self, assistant, model, language):
        language.set_locale("ru")
        await assistant.solve()
        assert assistant.solver.error == "Пожалуйста, введите вопрос или загрузите изображение."

    @pytest.mark.asyncio
    async def test_solution(self, assistant, model):
        model.text = "The answer is **4**."
        assistant.prompt = "2+2?"

        await assistant.solve()

        assert assistant.solver.solution == "The answer is **4**."
        assert not assistant.solver.is_loading
        assert not assistant.is_busy

    @pytest.mark.asyncio
    async def test_failure_message(self, assistant, model):
        model.text = ExternalServiceError("quota exceeded")
        assistant.prompt = "2+2?"

        await assistant.solve()

        assert assistant.solver.error == "quota exceeded"
        assert assistant.solver.solution == ""
        assert not assistant.solver.is_loading

    @pytest.mark.asyncio
    async def test_image_attachment_consumed(self, assistant, model, tmp_path):
        image = tmp_path / "problem.png"
        image.write_bytes(b"\x89PNG")

        assert assistant.attach_image(image)
        assert assistant.image.mime_type == "image/png"
        await assistant.solve()

        assert assistant.image is None
        _, call = model.calls[-1]
        assert call["image"].data == b"\x89PNG"

    def test_missing_image_file(self, assistant, tmp_path):
        assert not assistant.attach_image(tmp_path / "nope.png")
        assert assistant.solver.error == "Image file not found."
        assert assistant.image is None

    @pytest.mark.asyncio
    async def test_cheat_sheet_and_practice(self, assistant, model):
        assistant.prompt = "2+2?"
        await assistant.solve()

        model.text = "* sums"
        await assistant.create_cheat_sheet()
        model.text = "1. 3+3?"
        await assistant.generate_practice_problems()

        assert assistant.solver.cheat_sheet == "* sums"
        assert assistant.solver.practice_problems == "1. 3+3?"

    @pytest.mark.asyncio
    async def test_aids_need_a_solution(self, assistant, model):
        assistant.prompt = "2+2?"
        await assistant.create_cheat_sheet()
        await assistant.generate_practice_problems()
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_cheat_sheet_failure_keeps_solution(self, assistant, model):
        assistant.prompt = "2+2?"
        await assistant.solve()
        model.text = ExternalServiceError("")

        await assistant.create_cheat_sheet()

        assert assistant.solver.solution == "answer"
        assert assistant.solver.cheat_sheet_error == "Could not create cheat sheet. Please try again."


class TestSketcher:
    """Tests for sketch handlers."""

    @pytest.fixture(autouse=True)
    def _sketcher(self, assistant):
        assistant.set_mode(Mode.SKETCHER)

    @pytest.mark.asyncio
    async def test_missing_prompt(self, assistant, model):
        await assistant.generate_sketch()
        assert assistant.sketcher.error == "Please describe the sketch you want to create."
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_generate(self, assistant, model):
        assistant.prompt = "a plant cell"
        await assistant.generate_sketch()

        assert assistant.sketcher.sketch == model.image
        assert assistant.sketcher.sketch_prompt == "a plant cell"

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_sketch(self, assistant, model):
        assistant.prompt = "a plant cell"
        await assistant.generate_sketch()
        previous = assistant.sketcher.sketch

        model.image = ExternalServiceError("")
        assistant.prompt = "an animal cell"
        await assistant.generate_sketch()

        assert assistant.sketcher.sketch == previous
        assert assistant.sketcher.error == SKETCH_FALLBACK_ERROR
        assert not assistant.sketcher.is_loading

    @pytest.mark.asyncio
    async def test_edit_needs_instruction_and_sketch(self, assistant, model):
        assert not await assistant.edit_sketch("")
        assert assistant.sketcher.edit_error == "Please describe how you want to edit the sketch."

        assert not await assistant.edit_sketch("add a sun")
        assert assistant.sketcher.edit_error == "There is no sketch to edit."
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_edit_replaces_sketch(self, assistant, model):
        assistant.prompt = "a plant cell"
        await assistant.generate_sketch()

        assert await assistant.edit_sketch("add a sun")

        assert assistant.sketcher.sketch == model.edited
        _, call = model.calls[-1]
        assert call["image"].data == model.image

    @pytest.mark.asyncio
    async def test_edit_failure_keeps_sketch(self, assistant, model):
        assistant.prompt = "a plant cell"
        await assistant.generate_sketch()
        model.edited = ExternalServiceError("edit refused")

        assert not await assistant.edit_sketch("add a sun")

        assert assistant.sketcher.sketch == model.image
        assert assistant.sketcher.edit_error == "edit refused"

    @pytest.mark.parametrize("prompt,expected", [
        ("A Plant Cell!", "a_plant_cell_.jpeg"),
        ("", "sketch.jpeg"),
        ("x", "x.jpeg"),
    ])
    def test_filename(self, prompt, expected):
        assert sketch_filename(prompt) == expected


class TestScheduler:
    """Tests for schedule handlers."""

    @pytest.fixture(autouse=True)
    def _scheduler(self, assistant):
        assistant.set_mode(Mode.SCHEDULER)

    @pytest.mark.asyncio
    async def test_missing_prompt(self, assistant, model):
        await assistant.generate_schedule()
        assert assistant.scheduler.error == "Please describe the schedule you want to create."
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_generate_and_edit(self, assistant, model, schedule_json):
        model.json_text = schedule_json
        assistant.prompt = "Class Monday 9"
        await assistant.generate_schedule()

        event = assistant.add_event(0, EventDraft(time="7:00 AM", title="Gym"))
        assert [e.title for e in assistant.scheduler.schedule[0].events] == ["Gym", "Class"]

        assistant.edit_event(0, event.model_copy(update={"title": "Yoga"}))
        assistant.delete_event(0, "event-1")
        assert [e.title for e in assistant.scheduler.schedule[0].events] == ["Yoga"]

    @pytest.mark.asyncio
    async def test_invalid_draft(self, assistant, model, schedule_json):
        model.json_text = schedule_json
        assistant.prompt = "Class Monday 9"
        await assistant.generate_schedule()

        with pytest.raises(DraftValidationError):
            assistant.add_event(0, EventDraft(time="", title="Gym"))

    @pytest.mark.asyncio
    async def test_format_error_clears_schedule(self, assistant, model, schedule_json):
        model.json_text = schedule_json
        assistant.prompt = "week"
        await assistant.generate_schedule()

        model.json_text = "not json"
        await assistant.generate_schedule()

        assert assistant.scheduler.schedule is None
        assert assistant.scheduler.error == "The AI returned an invalid schedule format. Please try again."


class TestTutor:
    """Tests for tutor messages."""

    @pytest.mark.asyncio
    async def test_send_clears_prompt(self, assistant, model):
        assistant.set_mode(Mode.TUTOR)
        model.chat_replies.append(["4"])
        assistant.prompt = "2+2?"

        assert await assistant.send_message()

        assert assistant.prompt == ""
        assert [m.text for m in assistant.tutor.history] == ["2+2?", "4"]

    @pytest.mark.asyncio
    async def test_empty_prompt_not_sent(self, assistant, model):
        assistant.set_mode(Mode.TUTOR)
        assert not await assistant.send_message()
        assert model.calls == []
