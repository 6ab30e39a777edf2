from .base import ChatSession, StudyModel
from .factory import create_study_model
from .models import ImageInput, LLMResponse, StreamingResponse
from .providers import GeminiProvider

__all__ = [
    "ChatSession",
    "GeminiProvider",
    "ImageInput",
    "LLMResponse",
    "StreamingResponse",
    "StudyModel",
    "create_study_model",
]
