"""Unit tests for the study service request assembly."""
import json

import pytest

from studymate.errors import ExternalServiceError, MissingInputError, ScheduleFormatError
from studymate.llm import ImageInput
from studymate.prompts import load_prompt, render_prompt
from studymate.schedule import SCHEDULE_RESPONSE_SCHEMA
from studymate.service import DEFAULT_LANGUAGE, IMAGE_ONLY_PROMPT


class TestPrompts:
    """Tests for prompt templates."""

    @pytest.mark.parametrize("name", [
        "detect_language", "solver", "cheat_sheet", "practice_problems",
        "practice_request", "sketch", "schedule", "tutor",
    ])
    def test_templates_exist(self, name: str):
        assert load_prompt(name).strip()

    def test_render_fills_placeholders(self):
        rendered = render_prompt("tutor", language="Russian")
        assert "Russian" in rendered
        assert "{{language}}" not in rendered

    def test_solver_keeps_chart_example(self):
        assert "```json vega-lite" in render_prompt("solver", language="English")

    def test_missing_template(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("no_such_prompt")


class TestDetectLanguage:
    """Tests for prompt language detection."""

    @pytest.mark.asyncio
    async def test_empty_prompt_skips_call(self, service, model):
        assert await service.detect_language("   ") == DEFAULT_LANGUAGE
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_detected_name_is_trimmed(self, service, model):
        model.language = "  Spanish\n"
        assert await service.detect_language("¿Qué es?") == "Spanish"
        assert model.count("detect") == 1

    @pytest.mark.asyncio
    async def test_long_answer_falls_back(self, service, model):
        model.language = "The language of this text is Spanish"
        assert await service.detect_language("¿Qué es?") == DEFAULT_LANGUAGE

    @pytest.mark.asyncio
    async def test_empty_answer_falls_back(self, service, model):
        model.language = ""
        assert await service.detect_language("hello") == DEFAULT_LANGUAGE

    @pytest.mark.asyncio
    async def test_failure_falls_back(self, service, model):
        model.language = ExternalServiceError("quota exceeded")
        assert await service.detect_language("hello") == DEFAULT_LANGUAGE


class TestSolveHomework:
    """Tests for the solver request."""

    @pytest.mark.asyncio
    async def test_requires_prompt_or_image(self, service, model):
        with pytest.raises(MissingInputError) as exc_info:
            await service.solve_homework("")
        assert exc_info.value.translation_key == "errors.noPrompt"
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_answer_language_from_detection(self, service, model):
        model.language = "German"
        model.text = "**42**"

        assert await service.solve_homework("Was ist 6 mal 7?") == "**42**"
        name, call = model.calls[-1]
        assert name == "text"
        assert "German" in call["system_instruction"]
        assert call["prompt"] == "Was ist 6 mal 7?"

    @pytest.mark.asyncio
    async def test_image_only_uses_ui_locale(self, service, model):
        image = ImageInput(data=b"png", mime_type="image/png")

        await service.solve_homework("", image, fallback_locale="ru")

        assert model.count("detect") == 0
        _, call = model.calls[-1]
        assert call["prompt"] == IMAGE_ONLY_PROMPT
        assert call["image"] is image
        assert "Russian" in call["system_instruction"]

    @pytest.mark.asyncio
    async def test_service_error_propagates(self, service, model):
        model.text = ExternalServiceError("boom")
        with pytest.raises(ExternalServiceError):
            await service.solve_homework("2+2?")


class TestStudyAids:
    """Tests for cheat sheets and practice problems."""

    @pytest.mark.asyncio
    async def test_cheat_sheet_sends_solution(self, service, model):
        model.text = "* key point"
        assert await service.create_cheat_sheet("full solution", "question") == "* key point"
        _, call = model.calls[-1]
        assert call["prompt"] == "full solution"

    @pytest.mark.asyncio
    async def test_practice_includes_question_and_solution(self, service, model):
        await service.generate_practice_problems("What is 2+2?", "It is 4.")
        _, call = model.calls[-1]
        assert "What is 2+2?" in call["prompt"]
        assert "It is 4." in call["prompt"]


class TestSketches:
    """Tests for image requests."""

    @pytest.mark.asyncio
    async def test_sketch_wraps_concept(self, service, model):
        assert await service.generate_sketch("a plant cell") == model.image
        _, call = model.calls[-1]
        assert "a plant cell" in call["prompt"]

    @pytest.mark.asyncio
    async def test_edit_accepts_raw_bytes(self, service, model):
        result = await service.edit_sketch(b"\xff\xd8old", "add a sun")

        assert result == model.edited
        _, call = model.calls[-1]
        assert call["image"].data == b"\xff\xd8old"
        assert call["image"].mime_type == "image/jpeg"
        assert call["instruction"] == "add a sun"


class TestGenerateSchedule:
    """Tests for structured schedule generation."""

    @pytest.mark.asyncio
    async def test_schedule_uses_response_schema(self, service, model):
        model.json_text = json.dumps([{"day": "Monday", "events": [
            {"id": "", "time": "9:00 AM", "title": "Class", "description": "Math"},
        ]}])

        data = await service.generate_schedule("Classes Monday at 9")

        assert data[0].day == "Monday"
        assert data[0].events[0].id.startswith("event-")
        _, call = model.calls[-1]
        assert call["schema"] is SCHEDULE_RESPONSE_SCHEMA

    @pytest.mark.asyncio
    async def test_invalid_payload(self, service, model):
        model.json_text = "Sorry, I cannot help with that."
        with pytest.raises(ScheduleFormatError) as exc_info:
            await service.generate_schedule("my week")
        assert str(exc_info.value) == "The AI returned an invalid schedule format. Please try again."


class TestTutorChat:
    """Tests for opening tutor sessions."""

    def test_persona_language(self, service, model):
        session = service.start_tutor_chat("French")

        assert session is model.sessions[-1]
        assert "French" in session.system_instruction
