"""Google Gemini provider implementation.

Uses the official Google GenAI SDK for async text, JSON, image and chat calls.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can return empty responses due to safety filtering or service issues.
This implementation includes retry logic and relaxed safety settings.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from google import genai
from google.genai import errors, types

from ...errors import ExternalServiceError
from ..base import ChatSession, StudyModel
from ..models import ImageInput, LLMResponse, StreamingResponse

logger = logging.getLogger(__name__)

# Relaxed so homework about e.g. chemistry or history is not blocked
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]

# Function calling off: prompts with function-like syntax otherwise end in UNEXPECTED_TOOL_CALL
_NO_TOOLS = types.ToolConfig(
    function_calling_config=types.FunctionCallingConfig(mode="NONE")
)


def _usage(metadata: Any) -> dict[str, int] | None:
    if not metadata:
        return None
    return {
        "prompt_tokens": metadata.prompt_token_count or 0,
        "completion_tokens": metadata.candidates_token_count or 0,
        "total_tokens": metadata.total_token_count or 0,
    }


def _extract_text(response: Any) -> str:
    """Extract text content from a Gemini response, handling empty responses."""
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts)

    try:
        return response.text or ""
    except (ValueError, AttributeError):
        return ""


class GeminiChatSession(ChatSession):
    """Chat session backed by ``client.aio.chats``."""

    def __init__(self, chat: Any) -> None:
        self._chat = chat

    async def send_message_stream(self, message: str) -> StreamingResponse:
        try:
            stream = await self._chat.send_message_stream(message)
        except errors.APIError as e:
            raise ExternalServiceError(f"Chat request failed: {e.message or e}") from e

        # Each stream reports usage to its own response object
        response = StreamingResponse(self._deltas(stream, lambda usage: response.set_usage(usage)))
        return response

    async def _deltas(
        self,
        stream: AsyncIterator[Any],
        on_usage: Callable[[dict[str, int]], None],
    ) -> AsyncIterator[str]:
        """Yield text deltas, then report usage from the final chunk."""
        usage = None
        try:
            async for chunk in stream:
                usage = _usage(chunk.usage_metadata) or usage
                text = _extract_text(chunk)
                if text:
                    yield text
        except errors.APIError as e:
            raise ExternalServiceError(f"Chat stream failed: {e.message or e}") from e

        if usage:
            on_usage(usage)


class GeminiProvider(StudyModel):
    """Google Gemini implementation of the study model.

    Hidden design decisions:
    - Google GenAI client initialization
    - Which model serves text, image generation and image editing
    - Retry logic for empty text responses (known Gemini issue)
    - Relaxed safety settings
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        image_model: str = "imagen-4.0-generate-001",
        image_edit_model: str = "gemini-2.5-flash-image-preview",
        max_retries: int = 3,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Text and chat model
            image_model: Imagen model used for sketch generation
            image_edit_model: Multimodal model used for sketch edits
            max_retries: Max retries for empty text responses (default 3)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._image_model = image_model
        self._image_edit_model = image_edit_model
        self._max_retries = max_retries
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default text model name."""
        return self._model

    def _config(self, system_instruction: str, thinking: bool = True, **kwargs: Any) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            tool_config=_NO_TOOLS,
            **kwargs
        )
        if not thinking:
            config.thinking_config = types.ThinkingConfig(thinking_budget=0)
        return config

    async def _generate(self, parts: list[types.Part], config: types.GenerateContentConfig) -> LLMResponse:
        """Run one generate_content call, retrying while the text comes back empty."""
        contents = [types.Content(role="user", parts=parts)]
        content = ""
        usage = None

        for attempt in range(self._max_retries):
            try:
                response = await self._client.aio.models.generate_content(
                    model=self._model,
                    contents=contents,
                    config=config
                )
            except errors.APIError as e:
                raise ExternalServiceError(e.message or str(e)) from e

            usage = _usage(response.usage_metadata) or usage
            content = _extract_text(response)
            if content:
                break

            logger.warning("Empty response from %s (attempt %d/%d)", self._model, attempt + 1, self._max_retries)
            if attempt < self._max_retries - 1:
                await asyncio.sleep(0.5 * (attempt + 1))

        return LLMResponse(content=content, model=self._model, usage=usage)

    async def generate_text(
        self,
        prompt: str | None,
        system_instruction: str,
        image: ImageInput | None = None,
        thinking: bool = True,
        **kwargs: Any
    ) -> LLMResponse:
        parts = []
        if image is not None:
            parts.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
        if prompt:
            parts.append(types.Part(text=prompt))
        if not parts:
            raise ValueError("generate_text needs a prompt or an image")

        return await self._generate(parts, self._config(system_instruction, thinking, **kwargs))

    async def generate_json(
        self,
        prompt: str,
        system_instruction: str,
        response_schema: dict[str, Any],
        **kwargs: Any
    ) -> LLMResponse:
        config = self._config(
            system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
            **kwargs
        )
        return await self._generate([types.Part(text=prompt)], config)

    async def generate_image(self, prompt: str, **kwargs: Any) -> bytes:
        config = types.GenerateImagesConfig(
            number_of_images=1,
            output_mime_type="image/jpeg",
            aspect_ratio="1:1",
            **kwargs
        )
        try:
            response = await self._client.aio.models.generate_images(
                model=self._image_model,
                prompt=prompt,
                config=config
            )
        except errors.APIError as e:
            raise ExternalServiceError(e.message or str(e)) from e

        if response.generated_images:
            image = response.generated_images[0].image
            if image is not None and image.image_bytes:
                return image.image_bytes

        raise ExternalServiceError("Image generation failed. No images were returned.")

    async def edit_image(self, image: ImageInput, instruction: str, **kwargs: Any) -> bytes:
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            safety_settings=DEFAULT_SAFETY_SETTINGS,
            **kwargs
        )
        parts = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            types.Part(text=instruction),
        ]
        try:
            response = await self._client.aio.models.generate_content(
                model=self._image_edit_model,
                contents=[types.Content(role="user", parts=parts)],
                config=config
            )
        except errors.APIError as e:
            raise ExternalServiceError(e.message or str(e)) from e

        if response.candidates and response.candidates[0].content:
            for part in response.candidates[0].content.parts or []:
                if part.inline_data and part.inline_data.data:
                    return part.inline_data.data

        raise ExternalServiceError("Image editing failed. No edited image was returned.")

    def start_chat(self, system_instruction: str, **kwargs: Any) -> ChatSession:
        chat = self._client.aio.chats.create(
            model=self._model,
            config=self._config(system_instruction, **kwargs),
        )
        return GeminiChatSession(chat)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
