"""Tutor conversation driver.

Hides the turn-taking and streaming contract with the chat service:
- When the session is opened and which persona language it gets
- How streamed deltas become the visible model message
- How a failed turn is rolled back

The driver holds no lock. Callers must not start a turn while
``is_replying`` is true; the UI disables submission for that.
"""

import logging
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .llm import ChatSession
from .service import StudyService

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "An error occurred. Please try again."


class ChatMessage(BaseModel):
    """One entry of the tutor conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


ChatHistory = tuple[ChatMessage, ...]


class TutorDriver:
    """Runs tutor turns against a lazily opened chat session.

    ``history`` is replaced as a whole on every change, so observers can
    compare by identity. ``on_change`` is called with the new history after
    each change, including after every streamed delta.
    """

    def __init__(
        self,
        service: StudyService,
        on_change: Callable[[ChatHistory], None] | None = None,
    ) -> None:
        self._service = service
        self._on_change = on_change
        self._session: ChatSession | None = None
        self._language: str | None = None
        self.history: ChatHistory = ()
        self.error = ""
        self.is_replying = False
        self.last_usage: dict | None = None
        self._turn_open = False

    @property
    def session(self) -> ChatSession | None:
        return self._session

    @property
    def language(self) -> str | None:
        """Persona language fixed at the first turn."""
        return self._language

    def _set_history(self, history: ChatHistory) -> None:
        self.history = history
        if self._on_change is not None:
            self._on_change(history)

    def _has_placeholder(self) -> bool:
        return bool(self.history) and self.history[-1].role == "model" and self._turn_open

    async def send(self, prompt: str) -> bool:
        """Run one user turn to completion.

        Returns:
            True if the model reply finished, False if the turn failed (the
            reason is in ``error`` and the model placeholder is removed)
        """
        if not prompt:
            return False

        self._set_history((*self.history, ChatMessage(role="user", text=prompt)))
        self.is_replying = True
        self.error = ""
        self._turn_open = False

        try:
            if self._session is None:
                self._language = await self._service.detect_language(prompt)
                self._session = self._service.start_tutor_chat(self._language)

            self._set_history((*self.history, ChatMessage(role="model", text="")))
            self._turn_open = True

            stream = await self._session.send_message_stream(prompt)
            reply = ""
            async for delta in stream:
                reply += delta
                self._set_history((*self.history[:-1], ChatMessage(role="model", text=reply)))
            self.last_usage = stream.usage
            return True
        except Exception as e:
            logger.error("Tutor turn failed: %s", e)
            self.error = str(e) or DEFAULT_ERROR
            if self._has_placeholder():
                self._set_history(self.history[:-1])
            return False
        finally:
            self._turn_open = False
            self.is_replying = False

    def reset(self) -> None:
        """Forget the session, the conversation and any error."""
        self._session = None
        self._language = None
        self.error = ""
        self.is_replying = False
        self._set_history(())
