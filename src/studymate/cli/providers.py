"""Provider factory functions for CLI.

Centralizes creation of the model and locale from environment variables.
Hides configuration details from command implementations.
"""

import os

from rich.console import Console

from ..i18n import LanguageContext, detect_locale
from ..llm import StudyModel, create_study_model

# Default console for output
_console = Console()


def get_api_key() -> str | None:
    """Gemini API key, accepting the Google SDK's variable as a fallback."""
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


def get_model(console: Console | None = None) -> StudyModel | None:
    """Create the study model from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Gemini provider instance, or None if no API key is configured

    Environment variables:
        GEMINI_API_KEY: Gemini API key (GOOGLE_API_KEY also accepted)
        GEMINI_MODEL: Text and chat model (default: gemini-2.5-flash)
        GEMINI_IMAGE_MODEL: Sketch model (default: imagen-4.0-generate-001)
        GEMINI_IMAGE_EDIT_MODEL: Sketch edit model (default: gemini-2.5-flash-image-preview)
    """
    con = console or _console
    api_key = get_api_key()
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, AI features disabled[/yellow]")
        return None
    return create_study_model(
        "gemini",
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        image_model=os.getenv("GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001"),
        image_edit_model=os.getenv("GEMINI_IMAGE_EDIT_MODEL", "gemini-2.5-flash-image-preview"),
    )


def require_model(console: Console | None = None) -> StudyModel:
    """Get the study model, raising error if not configured.

    Raises:
        typer.Exit: If the model is not configured
    """
    import typer

    con = console or _console
    model = get_model(con)
    if not model:
        con.print("[red]Error: Gemini model not configured[/red]")
        raise typer.Exit(code=1)
    return model


def get_language(locale: str | None = None) -> LanguageContext:
    """Locale from an explicit option, else STUDYMATE_LANGUAGE or LANG."""
    return LanguageContext(locale or detect_locale())
