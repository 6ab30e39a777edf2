from typing import Any

from .base import StudyModel
from .providers import GeminiProvider


def create_study_model(provider: str, **config: Any) -> StudyModel:
    """Create a study model instance.

    This factory function hides the instantiation logic for providers.

    Args:
        provider: Provider type (only 'gemini' offers every capability the
            assistant needs: text, JSON, image generation, image edit, chat)
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')
                - image_model: str (default: 'imagen-4.0-generate-001')
                - image_edit_model: str (default: 'gemini-2.5-flash-image-preview')

    Returns:
        Initialized study model instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> model = create_study_model(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower in ("gemini", "google"):
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
