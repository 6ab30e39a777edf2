"""Translation lookup for the studymate UI."""

from .context import LanguageContext, detect_locale, language_name, lookup
from .translations import DEFAULT_LOCALE, TRANSLATIONS

__all__ = [
    "DEFAULT_LOCALE",
    "LanguageContext",
    "TRANSLATIONS",
    "detect_locale",
    "language_name",
    "lookup",
]
