"""
Trust score model for reviews.

A review's trust score is a 0-100 integer built from five normalized
signals: content quality, engagement, credibility, recency and media
presence. Every function here is pure and total: a missing or malformed
field simply contributes nothing to its sub-score.
"""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, FrozenSet, Mapping, Optional

from pydantic import BaseModel

from schemas import as_utc, utcnow

WEIGHTS = {
    "content_quality": 0.25,
    "engagement": 0.20,
    "credibility": 0.25,
    "recency": 0.15,
    "media_presence": 0.15,
}

RELEVANT_TAGS = frozenset({"Honest", "Brutal", "Praise", "Warning"})

# Highest applicable bonus only
CREDIBILITY_TAG_BONUS = (
    ("Honest", 0.4),
    ("Brutal", 0.3),
    ("Praise", 0.2),
    ("Warning", 0.2),
)


class TrustFactors(BaseModel):
    content_quality: float
    engagement: float
    credibility: float
    recency: float
    media_presence: float

    def weighted_total(self) -> float:
        return sum(getattr(self, name) * weight for name, weight in WEIGHTS.items())


class TrustLevel(BaseModel):
    level: str
    description: str


def round_half_up(value: float) -> int:
    # Snap float noise (66.49999999999999) before rounding halves up
    return int(Decimal(str(round(value, 6))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _length(value: Any) -> int:
    return len(value) if isinstance(value, str) else 0


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


def _tags(value: Any) -> FrozenSet[str]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(t for t in value if isinstance(t, str))
    return frozenset()


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _author_name(review: Mapping) -> Optional[str]:
    author = review.get("author")
    name = author if isinstance(author, str) else _field(author, "name")
    return name if isinstance(name, str) and name else None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def content_quality(review: Mapping) -> float:
    score = 0.0

    title_length = _length(review.get("title"))
    if 10 <= title_length <= 100:
        score += 0.2
    elif 5 <= title_length <= 150:
        score += 0.1

    desc_length = _length(review.get("description"))
    if 100 <= desc_length <= 2000:
        score += 0.3
    elif 50 <= desc_length <= 5000:
        score += 0.2
    elif desc_length >= 20:
        score += 0.1

    rating = _number(review.get("rating"))
    if 3 <= rating <= 5:
        score += 0.2
    elif 1 <= rating <= 5:
        score += 0.1

    if _tags(review.get("tags")) & RELEVANT_TAGS:
        score += 0.3

    return _clamp(score)


def engagement(review: Mapping) -> float:
    score = 0.0
    views = _number(review.get("views"))
    upvotes = _number(review.get("upvotes"))

    if views >= 100:
        score += 0.4
    elif views >= 50:
        score += 0.3
    elif views >= 20:
        score += 0.2
    elif views >= 5:
        score += 0.1

    if upvotes >= 20:
        score += 0.4
    elif upvotes >= 10:
        score += 0.3
    elif upvotes >= 5:
        score += 0.2
    elif upvotes >= 1:
        score += 0.1

    ratio = upvotes / views if views > 0 else 0
    if ratio >= 0.3:
        score += 0.2
    elif ratio >= 0.1:
        score += 0.1

    return _clamp(score)


def credibility(review: Mapping) -> float:
    score = 0.0

    name = _author_name(review)
    if name and name != "Anonymous":
        score += 0.3

    tags = _tags(review.get("tags"))
    for tag, bonus in CREDIBILITY_TAG_BONUS:
        if tag in tags:
            score += bonus
            break

    rating = _number(review.get("rating"))
    if 3 <= rating <= 4:
        score += 0.3
    elif 2 <= rating <= 5:
        score += 0.2
    elif 1 <= rating <= 5:
        score += 0.1

    return _clamp(score)


def recency(review: Mapping, now: Optional[datetime] = None) -> float:
    now = as_utc(now) if now else utcnow()
    raw = review.get("created_at")
    if raw is None:
        # Drafts are scored as if created right now
        created_at = now
    else:
        created_at = _parse_timestamp(raw)
        if created_at is None:
            return 0.0

    days = math.floor((now - created_at).total_seconds() / 86400)
    if days <= 1:
        return 1.0
    if days <= 7:
        return 0.9
    if days <= 30:
        return 0.8
    if days <= 90:
        return 0.6
    if days <= 365:
        return 0.4
    return 0.2


def media_presence(review: Mapping) -> float:
    media = review.get("media")
    if not isinstance(media, (list, tuple)) or not media:
        return 0.1

    score = 0.1
    count = len(media)
    if count >= 5:
        score += 0.4
    elif count >= 3:
        score += 0.3
    elif count >= 2:
        score += 0.2
    else:
        score += 0.1

    types = {_field(m, "type") for m in media}
    has_images = "image" in types
    has_videos = "video" in types
    if has_images and has_videos:
        score += 0.3
    elif has_images or has_videos:
        score += 0.2

    if all(_length(_field(m, "url")) > 10 for m in media):
        score += 0.2

    return _clamp(score)


def analyze_trust_factors(review: Mapping, now: Optional[datetime] = None) -> TrustFactors:
    return TrustFactors(
        content_quality=content_quality(review),
        engagement=engagement(review),
        credibility=credibility(review),
        recency=recency(review, now),
        media_presence=media_presence(review),
    )


def compute_trust_score(review: Mapping, now: Optional[datetime] = None) -> int:
    """Score a review (stored document or draft) on a 0-100 scale."""
    if not isinstance(review, Mapping):
        review = {}
    total = analyze_trust_factors(review, now).weighted_total()
    return max(0, min(round_half_up(total * 100), 100))


def get_trust_level(trust_score: int) -> TrustLevel:
    if trust_score >= 80:
        return TrustLevel(level="High", description="Very trustworthy review")
    if trust_score >= 60:
        return TrustLevel(level="Good", description="Reliable review")
    if trust_score >= 40:
        return TrustLevel(level="Fair", description="Moderately trustworthy")
    if trust_score >= 20:
        return TrustLevel(level="Low", description="Limited trust indicators")
    return TrustLevel(level="Poor", description="Low trust indicators")
