import pytest

from app.services.translation.tone import add_warmth


def test_persian_gets_endearment_and_heart():
    assert add_warmth("سلام", "fa", []) == "عزیزم سلام ❤️"


def test_persian_skips_heart_when_context_has_one():
    assert add_warmth("سلام", "fa", ["good night ❤️"]) == "عزیزم سلام"


def test_persian_keeps_existing_endearment():
    assert add_warmth("سلام عزیزم", "fa", []) == "سلام عزیزم ❤️"


def test_english_gets_trailing_heart():
    assert add_warmth("hello", "en", []) == "hello ❤️"


def test_other_locales_unchanged():
    assert add_warmth("bonjour", "fr", []) == "bonjour"


@pytest.mark.parametrize(
    "text,locale,context",
    [
        ("سلام", "fa", []),
        ("سلام", "fa", ["❤️"]),
        ("hello", "en", []),
        ("hello ❤️", "en", []),
    ],
)
def test_reapplying_changes_nothing(text, locale, context):
    once = add_warmth(text, locale, context)
    assert add_warmth(once, locale, context) == once
