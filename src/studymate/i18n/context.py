"""Language context passed explicitly to every text-rendering component.

Hides how the active locale is chosen and how dotted translation keys are
resolved against the catalogue.
"""

import os
from collections.abc import Mapping

from .translations import DEFAULT_LOCALE, TRANSLATIONS

SUPPORTED_LOCALES = tuple(TRANSLATIONS)

_LANGUAGE_NAMES = {
    "ru": "Russian",
    "en": "English",
}


def lookup(catalogue: Mapping[str, object], key: str) -> str | None:
    """Walk a nested mapping along a dotted key.

    Returns:
        The string at the end of the path, or None when any segment is
        missing or the leaf is not a string.
    """
    node: object = catalogue
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def detect_locale(environ: Mapping[str, str] | None = None) -> str:
    """Pick the initial UI locale from the environment.

    ``STUDYMATE_LANGUAGE`` wins over ``LANG``; only the language prefix
    matters (``ru_RU.UTF-8`` -> ``ru``). Anything that is not Russian
    resolves to English.
    """
    env = os.environ if environ is None else environ
    raw = env.get("STUDYMATE_LANGUAGE") or env.get("LANG") or ""
    prefix = raw.replace("_", "-").split("-")[0].split(".")[0].lower()
    return "ru" if prefix == "ru" else DEFAULT_LOCALE


def language_name(locale: str) -> str:
    """Map a UI locale to the language name used in model instructions."""
    return _LANGUAGE_NAMES.get(locale, "English")


class LanguageContext:
    """Active locale plus key resolution.

    One instance is created at the application root and handed to the
    components that render text. Changing the locale notifies listeners so
    views can repaint.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self._locale = locale if locale in TRANSLATIONS else DEFAULT_LOCALE
        self._listeners: list = []

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def language_name(self) -> str:
        return language_name(self._locale)

    def set_locale(self, locale: str) -> None:
        """Switch locale; unknown locales fall back to the default."""
        new_locale = locale if locale in TRANSLATIONS else DEFAULT_LOCALE
        if new_locale == self._locale:
            return
        self._locale = new_locale
        for listener in list(self._listeners):
            listener(new_locale)

    def toggle(self) -> str:
        """Cycle to the next supported locale and return it."""
        index = SUPPORTED_LOCALES.index(self._locale)
        self.set_locale(SUPPORTED_LOCALES[(index + 1) % len(SUPPORTED_LOCALES)])
        return self._locale

    def subscribe(self, listener) -> None:
        """Register a callable invoked with the new locale after a switch."""
        self._listeners.append(listener)

    def translate(self, key: str) -> str:
        """Resolve a dotted key: active locale, then default locale, then the key itself."""
        primary = lookup(TRANSLATIONS[self._locale], key)
        if primary is not None:
            return primary
        fallback = lookup(TRANSLATIONS[DEFAULT_LOCALE], key)
        if fallback is not None:
            return fallback
        return key

    t = translate
