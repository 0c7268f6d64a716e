"""
Ranking policies for trending reviews, weekly most-viewed reviews and the
user leaderboard.

Each policy is a pure function over documents so it can be tested without a
database; the store-backed wrappers read current state and apply the policy.
Nothing is cached: every call reflects the collection as it is now.
"""

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel
from pymongo.database import Database

import settings
from authors import author_user_id, display_name, load_authors, present_review
from rollup import aggregate_scores
from schemas import as_utc, utcnow

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

VISIBLE = {"is_removed_by_admin": {"$ne": True}}


class UserSummary(BaseModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    avatar: Optional[str] = None
    review_count: int
    trust_score: int


def _count(value: Any) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def _created_at(review: Mapping) -> datetime:
    value = review.get("created_at")
    return as_utc(value) if isinstance(value, datetime) else EPOCH


def _recent_view_count(review: Mapping, cutoff: datetime) -> int:
    viewed_by = review.get("viewed_by")
    if not isinstance(viewed_by, list):
        return 0
    count = 0
    for view in viewed_by:
        viewed_at = view.get("viewed_at") if isinstance(view, Mapping) else None
        if isinstance(viewed_at, datetime) and as_utc(viewed_at) >= cutoff:
            count += 1
    return count


def rank_trending(reviews: Iterable[Mapping], limit: int = settings.TRENDING_LIMIT) -> List[Mapping]:
    """Order by views, then upvotes, then newest first."""
    ranked = sorted(
        reviews,
        key=lambda r: (_count(r.get("views")), _count(r.get("upvotes")), _created_at(r)),
        reverse=True,
    )
    return ranked[:limit]


def rank_weekly_most_viewed(
    reviews: Iterable[Mapping],
    now: Optional[datetime] = None,
    limit: int = settings.WEEKLY_LIMIT,
    window_days: int = settings.WEEKLY_WINDOW_DAYS,
) -> List[Dict[str, Any]]:
    """Order reviews viewed inside the window by how many views fell inside it."""
    now = as_utc(now) if now else utcnow()
    cutoff = now - timedelta(days=window_days)

    candidates = []
    for review in reviews:
        recent = _recent_view_count(review, cutoff)
        if recent:
            candidates.append({**review, "recent_views": recent})

    candidates.sort(
        key=lambda r: (r["recent_views"], _count(r.get("upvotes")), _created_at(r)),
        reverse=True,
    )
    return candidates[:limit]


def rank_leaderboard(
    users: Iterable[Mapping],
    reviews: Iterable[Mapping],
    limit: int = settings.LEADERBOARD_LIMIT,
) -> List[UserSummary]:
    """Public users with reviews, ordered by mean trust score then activity."""
    scores: Dict[str, List] = defaultdict(list)
    for review in reviews:
        user_id = author_user_id(review)
        if user_id:
            scores[user_id].append(review.get("trust_score"))

    board = []
    for user in users:
        if _count(user.get("review_count")) <= 0 or user.get("is_public_profile", True) is not True:
            continue
        user_id = str(user.get("_id", user.get("id")))
        aggregate = aggregate_scores(scores.get(user_id, []))
        if aggregate.review_count == 0:
            continue
        board.append(UserSummary(
            id=user_id,
            first_name=user.get("first_name") or "",
            last_name=user.get("last_name") or "",
            name=display_name(user),
            avatar=user.get("avatar") or None,
            review_count=aggregate.review_count,
            trust_score=aggregate.trust_score,
        ))

    board.sort(key=lambda u: (u.trust_score, u.review_count), reverse=True)
    return board[:limit]


def _present(db: Database, reviews: List[Mapping]) -> List[Dict[str, Any]]:
    users_by_id = load_authors(db, reviews)
    return [present_review(r, users_by_id) for r in reviews]


def trending(db: Database) -> List[Dict[str, Any]]:
    # reviews hidden by an admin never trend
    return _present(db, rank_trending(db["review"].find(VISIBLE)))


def weekly_most_viewed(db: Database, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    now = as_utc(now) if now else utcnow()
    # stored datetimes are naive UTC
    cutoff = (now - timedelta(days=settings.WEEKLY_WINDOW_DAYS)).replace(tzinfo=None)
    query = {**VISIBLE, "viewed_by.viewed_at": {"$gte": cutoff}}
    return _present(db, rank_weekly_most_viewed(db["review"].find(query), now))


def leaderboard(db: Database) -> List[UserSummary]:
    users = list(db["user"].find(
        {"review_count": {"$gt": 0}, "is_public_profile": {"$ne": False}},
        {"first_name": 1, "last_name": 1, "avatar": 1, "review_count": 1, "is_public_profile": 1},
    ))
    if not users:
        return []
    ids = [str(u["_id"]) for u in users]
    reviews = db["review"].find({"author.user_id": {"$in": ids}}, {"author.user_id": 1, "trust_score": 1})
    return rank_leaderboard(users, reviews)
