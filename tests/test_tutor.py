"""Unit tests for the tutor conversation driver."""
import pytest

from studymate.errors import ExternalServiceError
from studymate.tutor import DEFAULT_ERROR, ChatMessage, TutorDriver


@pytest.fixture
def snapshots():
    return []


@pytest.fixture
def driver(service, snapshots):
    return TutorDriver(service, on_change=snapshots.append)


class TestTutorDriver:
    """Tests for streamed tutor turns."""

    @pytest.mark.asyncio
    async def test_first_turn(self, driver, model, snapshots):
        model.chat_replies.append(["2+2 ", "equals ", "**4**."])

        assert await driver.send("2+2?")

        assert model.count("detect") == 1
        assert model.count("chat") == 1
        assert driver.history == (
            ChatMessage(role="user", text="2+2?"),
            ChatMessage(role="model", text="2+2 equals **4**."),
        )
        assert not driver.is_replying
        assert driver.error == ""

    @pytest.mark.asyncio
    async def test_deltas_replace_last_message(self, driver, model, snapshots):
        model.chat_replies.append(["a", "b", "c"])

        await driver.send("hi")

        model_texts = [h[-1].text for h in snapshots if h[-1].role == "model"]
        assert model_texts == ["", "a", "ab", "abc"]
        assert all(len(h) <= 2 for h in snapshots)

    @pytest.mark.asyncio
    async def test_session_reused_across_turns(self, driver, model):
        model.language = "Spanish"
        model.chat_replies.extend([["uno"], ["dos"]])

        await driver.send("hola")
        await driver.send("otra vez")

        assert model.count("detect") == 1
        assert model.count("chat") == 1
        assert driver.language == "Spanish"
        assert "Spanish" in driver.session.system_instruction
        assert driver.session.sent == ["hola", "otra vez"]
        assert [m.role for m in driver.history] == ["user", "model", "user", "model"]

    @pytest.mark.asyncio
    async def test_stream_failure_drops_placeholder(self, driver, model):
        model.chat_replies.append(ExternalServiceError("stream broke"))

        assert not await driver.send("explain vectors")

        assert driver.history == (ChatMessage(role="user", text="explain vectors"),)
        assert driver.error == "stream broke"
        assert not driver.is_replying

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_default(self, driver, model):
        model.chat_replies.append(RuntimeError())

        await driver.send("hi")

        assert driver.error == DEFAULT_ERROR

    @pytest.mark.asyncio
    async def test_failure_opening_session_keeps_user_message(self, service, model, monkeypatch):
        def _broken(language):
            raise ExternalServiceError("no chat")

        monkeypatch.setattr(service, "start_tutor_chat", _broken)
        driver = TutorDriver(service)

        assert not await driver.send("hi")
        assert driver.history == (ChatMessage(role="user", text="hi"),)
        assert driver.session is None

    @pytest.mark.asyncio
    async def test_later_turn_after_failure(self, driver, model):
        model.chat_replies.extend([ExternalServiceError("oops"), ["fine"]])

        await driver.send("first")
        assert await driver.send("second")

        assert driver.error == ""
        assert [m.text for m in driver.history] == ["first", "second", "fine"]

    @pytest.mark.asyncio
    async def test_empty_prompt_ignored(self, driver, model):
        assert not await driver.send("")
        assert driver.history == ()
        assert model.calls == []

    @pytest.mark.asyncio
    async def test_reset(self, driver, model, snapshots):
        model.chat_replies.append(["hey"])
        await driver.send("hi")

        driver.reset()

        assert driver.history == ()
        assert driver.session is None
        assert snapshots[-1] == ()

    @pytest.mark.asyncio
    async def test_usage_recorded(self, driver, model):
        model.chat_replies.append(["a", "b"])
        await driver.send("hi")
        assert driver.last_usage == {"prompt_tokens": 1, "completion_tokens": 2}
