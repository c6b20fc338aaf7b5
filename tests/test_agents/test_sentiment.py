"""
Unit tests for the Sentiment Scorer.
"""

import pytest
from src.models.lexicon import SentimentLexicon
from src.models.review import NormalizedRecord
from src.agents.sentiment import SentimentScorer, cleanse, tokenize


@pytest.fixture
def scorer():
    lexicon = SentimentLexicon(entries={
        "great": "positive",
        "friendly": "positive",
        "bad": "negative",
        "slow": "negative",
    })
    return SentimentScorer(lexicon)


def _record(record_id, text):
    return NormalizedRecord(
        record_id=record_id,
        store_location=None,
        avg_rating=4.0,
        rating_count=10,
        latitude=0.0,
        longitude=0.0,
        review_text=text,
    )


def test_cleanse_removes_disallowed_characters():
    assert cleanse("Great!!  coffee :) #1, really?") == "Great!! coffee 1 really?"


def test_cleanse_collapses_whitespace():
    assert cleanse("  a \t\n b  ") == "a b"
    assert cleanse(None) == ""


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("GREAT.service!Slow?") == ["great", "service", "slow"]


def test_repeated_words_count_each_time(scorer):
    """great, great, bad -> 2 - 1 = 1."""
    breakdown = scorer.score_text("great great bad")

    assert breakdown.positive == 2
    assert breakdown.negative == 1
    assert breakdown.score == 1


def test_no_matches_scores_zero(scorer):
    assert scorer.score_text("the coffee was served").score == 0
    assert scorer.score_text("").score == 0
    assert scorer.score_text(None).score == 0


def test_word_order_does_not_matter(scorer):
    text = "friendly staff but slow and bad line great muffins"
    reversed_text = " ".join(reversed(text.split()))

    assert scorer.score_text(text).score == scorer.score_text(reversed_text).score


def test_case_and_punctuation_do_not_block_matches(scorer):
    assert scorer.score_text("GREAT! Friendly... SLOW?").score == 1


def test_multi_word_phrases_are_not_recognized():
    lexicon = SentimentLexicon(entries={"not bad": "positive"})
    assert SentimentScorer(lexicon).score_text("not bad").score == 0


def test_score_keys_by_record_id(scorer):
    """Duplicate texts keep one score per record."""
    records = [_record("a", "great"), _record("b", "great"), _record("c", "slow")]

    scores = scorer.score(records)

    assert set(scores) == {"a", "b", "c"}
    assert scores["a"].score == 1
    assert scores["b"].score == 1
    assert scores["c"].score == -1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
