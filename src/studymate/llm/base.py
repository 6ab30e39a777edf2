from abc import ABC, abstractmethod
from typing import Any

from .models import ImageInput, LLMResponse, StreamingResponse


class ChatSession(ABC):
    """An open multi-turn conversation with a fixed persona.

    The persona (system instruction) is chosen when the session is opened
    and stays the same for every later turn.
    """

    @abstractmethod
    async def send_message_stream(self, message: str) -> StreamingResponse:
        """Send one user turn and stream the reply.

        Returns:
            StreamingResponse yielding text deltas until the reply is complete
        """


class StudyModel(ABC):
    """Abstract base class for the generative-AI service.

    This module hides the design decision of which service answers the
    assistant's requests. Implementations must handle provider-specific
    details like:
    - API client setup and authentication
    - Request/response format conversion, image transport included
    - Retries for known transient empty responses

    Supports async context manager protocol for proper resource cleanup:
        async with model:
            response = await model.generate_text(prompt, instruction)
    """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str | None,
        system_instruction: str,
        image: ImageInput | None = None,
        thinking: bool = True,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a single text completion.

        Args:
            prompt: User text (may be None when only an image is sent)
            system_instruction: Instruction fixing role, format and language
            image: Optional image attachment, sent before the text
            thinking: Allow the model to spend tokens on reasoning
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing the generated text
        """

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        system_instruction: str,
        response_schema: dict[str, Any],
        **kwargs: Any
    ) -> LLMResponse:
        """Generate text constrained to JSON matching ``response_schema``."""

    @abstractmethod
    async def generate_image(self, prompt: str, **kwargs: Any) -> bytes:
        """Generate one raster image.

        Raises:
            ExternalServiceError: If the service returns no image
        """

    @abstractmethod
    async def edit_image(self, image: ImageInput, instruction: str, **kwargs: Any) -> bytes:
        """Produce a new image from an existing one and an edit instruction.

        Raises:
            ExternalServiceError: If the service returns no image
        """

    @abstractmethod
    def start_chat(self, system_instruction: str, **kwargs: Any) -> ChatSession:
        """Open a chat session with the given persona instruction."""

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "StudyModel":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
