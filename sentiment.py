"""Keyword-based sentiment signal for review text."""

import re
from typing import Literal

from pydantic import BaseModel

POSITIVE_WORDS = frozenset({
    "amazing", "excellent", "great", "good", "wonderful", "fantastic", "perfect", "love", "like",
    "best", "outstanding", "superb", "brilliant", "awesome", "incredible", "satisfied", "happy",
    "pleased", "impressed", "recommend", "worth", "quality", "reliable", "durable", "efficient",
})

NEGATIVE_WORDS = frozenset({
    "terrible", "awful", "bad", "poor", "worst", "disappointed", "hate", "dislike", "waste",
    "broken", "defective", "useless", "cheap", "unreliable", "faulty", "problem", "issue",
    "complaint", "return", "refund", "avoid", "regret", "expensive", "overpriced",
})

MIN_RATIO = 0.05


class Sentiment(BaseModel):
    sentiment: Literal["positive", "negative", "neutral"]
    confidence: float


def analyze_sentiment(text: str) -> Sentiment:
    if not isinstance(text, str):
        return Sentiment(sentiment="neutral", confidence=0.5)
    # leading or trailing whitespace yields empty tokens that still count as words
    words = re.split(r"\s+", text.lower())

    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    positive_ratio = positive / len(words)
    negative_ratio = negative / len(words)

    if positive_ratio > negative_ratio and positive_ratio > MIN_RATIO:
        return Sentiment(sentiment="positive", confidence=min(positive_ratio * 10, 1.0))
    if negative_ratio > positive_ratio and negative_ratio > MIN_RATIO:
        return Sentiment(sentiment="negative", confidence=min(negative_ratio * 10, 1.0))
    return Sentiment(sentiment="neutral", confidence=0.5)
