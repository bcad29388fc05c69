import math

import pytest

from app.services.translation.models import TranslationCandidate, TranslationDirection
from app.services.translation.scoring import (
    affection_score,
    has_context_affinity,
    score_candidate,
    select_best_candidate,
)

EN_TO_FA = TranslationDirection.EN_TO_FA
FA_TO_EN = TranslationDirection.FA_TO_EN


def test_shorter_cheaper_candidate_wins_hi_there():
    ollama = TranslationCandidate(provider="ollama", text="سلام", latency_ms=10)
    google = TranslationCandidate(provider="google", text="سلام خداحافظ", latency_ms=5)

    assert score_candidate("Hi there", ollama, EN_TO_FA) == pytest.approx(0.45)
    assert score_candidate("Hi there", google, EN_TO_FA) == pytest.approx(-0.045)
    assert select_best_candidate("Hi there", [google, ollama], EN_TO_FA) is ollama


def test_single_candidate_is_returned_unscored():
    empty = TranslationCandidate(provider="google", text="", latency_ms=1)
    assert select_best_candidate("hello", [empty], FA_TO_EN) is empty


def test_no_candidates_is_an_error():
    with pytest.raises(ValueError):
        select_best_candidate("hello", [], FA_TO_EN)


def test_ties_keep_configuration_order():
    first = TranslationCandidate(provider="a", text="salam", latency_ms=0)
    second = TranslationCandidate(provider="b", text="salam", latency_ms=0)

    assert select_best_candidate("hello", [first, second], FA_TO_EN) is first
    assert select_best_candidate("hello", [second, first], FA_TO_EN) is second


def test_empty_candidate_never_beats_non_empty():
    empty = TranslationCandidate(provider="ollama", text="   ", latency_ms=0)
    slow = TranslationCandidate(provider="google", text="hello hello hello", latency_ms=30000)

    assert score_candidate("سلام", empty, FA_TO_EN) == -math.inf
    assert select_best_candidate("سلام", [empty, slow], FA_TO_EN) is slow


def test_identity_is_penalized():
    echo = TranslationCandidate(provider="a", text="HELLO", latency_ms=0)
    real = TranslationCandidate(provider="b", text="سلام", latency_ms=0)

    assert score_candidate("hello", echo, EN_TO_FA) == pytest.approx(-5.0)
    assert select_best_candidate("hello", [echo, real], EN_TO_FA) is real


def test_affection_cues_raise_score():
    plain = TranslationCandidate(provider="google", text="how are you", latency_ms=0)
    warm = TranslationCandidate(provider="google", text="how are you dear", latency_ms=0)
    hearty = TranslationCandidate(provider="google", text="how are you ❤️", latency_ms=0)

    plain_score = score_candidate("حالت چطوره", plain, FA_TO_EN)
    assert score_candidate("حالت چطوره", warm, FA_TO_EN) > plain_score
    assert score_candidate("حالت چطوره", hearty, FA_TO_EN) > plain_score


def test_latency_is_monotonically_penalized():
    fast = TranslationCandidate(provider="google", text="hi love", latency_ms=100)
    slow = TranslationCandidate(provider="google", text="hi love", latency_ms=900)

    assert score_candidate("سلام", fast, FA_TO_EN) > score_candidate("سلام", slow, FA_TO_EN)


def test_context_affinity_bonus():
    candidate = TranslationCandidate(provider="google", text="goodnight my friend", latency_ms=0)
    with_context = score_candidate("شب بخیر", candidate, FA_TO_EN, ["goodnight everyone"])
    without_context = score_candidate("شب بخیر", candidate, FA_TO_EN, ["something else"])

    assert with_context - without_context == pytest.approx(0.5)


def test_directional_bonus_only_for_preferred_provider():
    ollama = TranslationCandidate(provider="ollama", text="سلام", latency_ms=0)
    google = TranslationCandidate(provider="google", text="سلام", latency_ms=0)

    assert score_candidate("hi", ollama, EN_TO_FA) - score_candidate("hi", google, EN_TO_FA) == pytest.approx(0.5)
    assert score_candidate("hi", ollama, FA_TO_EN) == score_candidate("hi", google, FA_TO_EN)


def test_affection_score_is_case_insensitive_for_english():
    assert affection_score("Good morning, Sweetheart", "en") == pytest.approx(1.5)
    assert affection_score("عزیزم ❤️", "fa") == pytest.approx(2.5)
    assert affection_score("plain", "fa") == 0


def test_context_affinity_ignores_blank_lines():
    assert has_context_affinity("anything", ["", ""]) is False
