"""Unit tests for translation lookup."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from studymate.i18n import (
    DEFAULT_LOCALE,
    TRANSLATIONS,
    LanguageContext,
    detect_locale,
    language_name,
    lookup,
)


def _keys(node, prefix=""):
    for name, value in node.items():
        path = f"{prefix}{name}"
        if isinstance(value, dict):
            yield from _keys(value, f"{path}.")
        else:
            yield path


class TestLookup:
    """Tests for dotted key resolution."""

    def test_nested_key(self):
        assert lookup(TRANSLATIONS["en"], "buttons.solve") == "Solve Problem"

    def test_missing_segment(self):
        assert lookup(TRANSLATIONS["en"], "buttons.nope") is None
        assert lookup(TRANSLATIONS["en"], "nope.solve") is None

    def test_section_is_not_a_string(self):
        assert lookup(TRANSLATIONS["en"], "buttons") is None

    def test_path_through_string(self):
        assert lookup(TRANSLATIONS["en"], "buttons.solve.extra") is None


class TestLanguageContext:
    """Tests for the active locale holder."""

    def test_primary_locale(self):
        assert LanguageContext("ru").translate("modes.solver") == "Решатель"

    def test_falls_back_to_default_locale(self):
        ctx = LanguageContext("ru")
        assert lookup(TRANSLATIONS["ru"], "errors.imageNotFound") is None
        assert ctx.translate("errors.imageNotFound") == TRANSLATIONS["en"]["errors"]["imageNotFound"]

    def test_falls_back_to_key(self):
        assert LanguageContext("en").t("no.such.key") == "no.such.key"

    def test_unknown_locale_uses_default(self):
        assert LanguageContext("fr").locale == DEFAULT_LOCALE

    def test_toggle_cycles_and_notifies(self):
        ctx = LanguageContext("en")
        seen = []
        ctx.subscribe(seen.append)

        assert ctx.toggle() == "ru"
        assert ctx.toggle() == "en"
        assert seen == ["ru", "en"]

    def test_set_same_locale_is_silent(self):
        ctx = LanguageContext("en")
        seen = []
        ctx.subscribe(seen.append)
        ctx.set_locale("en")
        assert seen == []

    def test_language_name(self):
        assert LanguageContext("ru").language_name == "Russian"
        assert LanguageContext("en").language_name == "English"

    @given(st.text(max_size=30))
    def test_translate_never_raises(self, key: str):
        """Property test: any key resolves to some string."""
        assert isinstance(LanguageContext("ru").translate(key), str)

    @pytest.mark.parametrize("key", list(_keys(TRANSLATIONS["en"])))
    def test_every_english_key_resolves_in_russian(self, key: str):
        assert LanguageContext("ru").translate(key) != key


class TestDetectLocale:
    """Tests for the initial locale."""

    @pytest.mark.parametrize("environ,expected", [
        ({"STUDYMATE_LANGUAGE": "ru"}, "ru"),
        ({"LANG": "ru_RU.UTF-8"}, "ru"),
        ({"LANG": "en_US.UTF-8"}, "en"),
        ({"LANG": "de_DE.UTF-8"}, "en"),
        ({"STUDYMATE_LANGUAGE": "en", "LANG": "ru_RU.UTF-8"}, "en"),
        ({}, "en"),
    ])
    def test_environment(self, environ, expected):
        assert detect_locale(environ) == expected

    def test_language_names(self):
        assert language_name("ru") == "Russian"
        assert language_name("en") == "English"
        assert language_name("xx") == "English"
