from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}


class StreamingResponse:
    """Wrapper for streaming responses that captures usage info.

    Acts as an async iterator for text deltas while storing token usage
    that becomes available at the end of the stream.

    Usage:
        stream = await session.send_message_stream("What is a vector?")
        async for delta in stream:
            print(delta, end="")
        print(stream.usage)  # {"prompt_tokens": 100, "completion_tokens": 50, ...}
    """

    def __init__(self, async_iter: AsyncIterator[str]):
        self._iter = async_iter
        self._usage: dict[str, Any] | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        """Get token usage info (available after iteration completes)."""
        return self._usage

    def set_usage(self, usage: dict[str, Any]) -> None:
        """Set token usage info (called by provider at end of stream)."""
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        return await self._iter.__anext__()


class ImageInput(BaseModel):
    """Raster image attached to a request."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw image bytes")
    mime_type: str = Field(default="image/jpeg", description="IANA media type of the bytes")

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageInput":
        """Read an image file, inferring the media type from its suffix.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)
        mime_type = _MIME_TYPES.get(file_path.suffix.lower(), "image/jpeg")
        return cls(data=file_path.read_bytes(), mime_type=mime_type)


class LLMResponse(BaseModel):
    """Text response from a provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
