import pytest

from sentiment import analyze_sentiment


def test_positive_text():
    result = analyze_sentiment("Great product I love it")
    assert result.sentiment == "positive"
    assert result.confidence == 1.0


def test_negative_text():
    result = analyze_sentiment("terrible and broken waste of money honestly")
    assert result.sentiment == "negative"
    assert result.confidence == 1.0


def test_confidence_scales_with_ratio():
    text = "good " + " ".join(["word"] * 14)
    result = analyze_sentiment(text)
    assert result.sentiment == "positive"
    assert result.confidence == pytest.approx(10 / 15)


def test_sparse_keywords_are_neutral():
    text = "good " + " ".join(["word"] * 24)
    assert analyze_sentiment(text).sentiment == "neutral"


def test_balanced_text_is_neutral():
    result = analyze_sentiment("good bad")
    assert result.sentiment == "neutral"
    assert result.confidence == 0.5


def test_empty_text_is_neutral():
    result = analyze_sentiment("   ")
    assert result.sentiment == "neutral"
    assert result.confidence == 0.5


def test_leading_whitespace_counts_as_a_token():
    # "", "good" and 13 fillers: 1/15 positive
    text = "  good " + " ".join(["word"] * 13)
    result = analyze_sentiment(text)
    assert result.sentiment == "positive"
    assert result.confidence == pytest.approx(10 / 15)


def test_empty_string_is_neutral():
    assert analyze_sentiment("").sentiment == "neutral"
