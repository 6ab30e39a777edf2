from .gemini import GeminiChatSession, GeminiProvider

__all__ = ["GeminiChatSession", "GeminiProvider"]
