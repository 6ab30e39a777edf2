"""Pytest configuration and shared fixtures."""
from collections.abc import AsyncIterator
from typing import Any

import pytest

from studymate.i18n import LanguageContext
from studymate.llm import ChatSession, ImageInput, LLMResponse, StreamingResponse, StudyModel
from studymate.service import StudyService


class ScriptedChatSession(ChatSession):
    """Chat session replaying scripted replies as streamed deltas.

    Each entry of ``replies`` is either a list of deltas or an exception
    raised once the stream is being read.
    """

    def __init__(self, system_instruction: str, replies: list[Any]) -> None:
        self.system_instruction = system_instruction
        self.replies = replies
        self.sent: list[str] = []

    async def send_message_stream(self, message: str) -> StreamingResponse:
        self.sent.append(message)
        reply = self.replies.pop(0) if self.replies else ["ok"]

        async def _deltas() -> AsyncIterator[str]:
            if isinstance(reply, Exception):
                raise reply
            for delta in reply:
                yield delta

        stream = StreamingResponse(_deltas())
        stream.set_usage({"prompt_tokens": 1, "completion_tokens": len(reply) if isinstance(reply, list) else 0})
        return stream


class ScriptedModel(StudyModel):
    """In-memory StudyModel recording calls and replaying scripted results.

    Set ``language`` for detection answers, ``text`` for other text calls,
    ``json_text`` for structured calls and ``image`` for image calls. Any of
    them may be an exception instance, which is raised instead.
    """

    def __init__(self) -> None:
        self.language: Any = "English"
        self.text: Any = "answer"
        self.json_text: Any = "[]"
        self.image: Any = b"\xff\xd8sketch"
        self.edited: Any = b"\xff\xd8edited"
        self.chat_replies: list[Any] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.sessions: list[ScriptedChatSession] = []
        self.closed = False

    def _result(self, value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    async def generate_text(
        self,
        prompt: str | None,
        system_instruction: str,
        image: ImageInput | None = None,
        thinking: bool = True,
        **kwargs: Any
    ) -> LLMResponse:
        name = "detect" if not thinking else "text"
        self.calls.append((name, {
            "prompt": prompt,
            "system_instruction": system_instruction,
            "image": image,
        }))
        content = self._result(self.language if name == "detect" else self.text)
        return LLMResponse(content=content, model="scripted")

    async def generate_json(
        self,
        prompt: str,
        system_instruction: str,
        response_schema: dict[str, Any],
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(("json", {
            "prompt": prompt,
            "system_instruction": system_instruction,
            "schema": response_schema,
        }))
        return LLMResponse(content=self._result(self.json_text), model="scripted")

    async def generate_image(self, prompt: str, **kwargs: Any) -> bytes:
        self.calls.append(("image", {"prompt": prompt}))
        return self._result(self.image)

    async def edit_image(self, image: ImageInput, instruction: str, **kwargs: Any) -> bytes:
        self.calls.append(("edit", {"image": image, "instruction": instruction}))
        return self._result(self.edited)

    def start_chat(self, system_instruction: str, **kwargs: Any) -> ChatSession:
        self.calls.append(("chat", {"system_instruction": system_instruction}))
        session = ScriptedChatSession(system_instruction, self.chat_replies)
        self.sessions.append(session)
        return session

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def model() -> ScriptedModel:
    """Scripted in-memory model."""
    return ScriptedModel()


@pytest.fixture
def service(model: ScriptedModel) -> StudyService:
    return StudyService(model)


@pytest.fixture
def language() -> LanguageContext:
    return LanguageContext("en")


@pytest.fixture
def chart_json() -> str:
    """A small valid Vega-Lite bar chart."""
    return (
        '{"$schema": "https://vega.github.io/schema/vega-lite/v5.json",'
        ' "description": "Fruit counts",'
        ' "data": {"values": [{"fruit": "apple", "count": 3}, {"fruit": "pear", "count": 5}]},'
        ' "mark": "bar",'
        ' "encoding": {"x": {"field": "fruit", "type": "nominal"},'
        ' "y": {"field": "count", "type": "quantitative"}}}'
    )
