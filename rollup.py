"""
User trust rollup.

``user.review_count`` and ``user.trust_score`` are denormalized from the
user's reviews. They are recomputed after every new review by that author
and can be rebuilt for all users at once to correct drift.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from bson import ObjectId
from pydantic import BaseModel
from pymongo import UpdateOne
from pymongo.database import Database

import settings
from authors import author_user_id
from schemas import utcnow
from trust import round_half_up

logger = logging.getLogger(__name__)


class Aggregate(BaseModel):
    review_count: int
    trust_score: int


def aggregate_scores(scores: Iterable) -> Aggregate:
    """Mean trust score of a user's reviews, defaulting when there are none."""
    values = [s if isinstance(s, (int, float)) and not isinstance(s, bool) else 0 for s in scores]
    if not values:
        return Aggregate(review_count=0, trust_score=settings.DEFAULT_USER_TRUST_SCORE)
    return Aggregate(review_count=len(values), trust_score=round_half_up(sum(values) / len(values)))


def recompute_user_aggregate(db: Database, user_id: str) -> Aggregate:
    reviews = db["review"].find({"author.user_id": user_id}, {"trust_score": 1})
    aggregate = aggregate_scores(r.get("trust_score") for r in reviews)
    db["user"].update_one(
        {"_id": ObjectId(user_id)},
        {"$set": {**aggregate.model_dump(), "updated_at": utcnow()}},
    )
    logger.info(
        "Recomputed aggregate for user %s: %d reviews, trust %d",
        user_id, aggregate.review_count, aggregate.trust_score,
    )
    return aggregate


def recompute_all_users(db: Database) -> int:
    """Rebuild every user's aggregate in one bulk write. Safe to re-run."""
    scores: Dict[str, List] = defaultdict(list)
    for review in db["review"].find({}, {"author.user_id": 1, "trust_score": 1}):
        user_id = author_user_id(review)
        if user_id:
            scores[user_id].append(review.get("trust_score"))

    now = utcnow()
    operations = []
    for user in db["user"].find({}, {"_id": 1}):
        aggregate = aggregate_scores(scores.get(str(user["_id"]), []))
        operations.append(UpdateOne(
            {"_id": user["_id"]},
            {"$set": {**aggregate.model_dump(), "updated_at": now}},
        ))

    if operations:
        db["user"].bulk_write(operations, ordered=False)
    logger.info("Recomputed aggregates for %d users", len(operations))
    return len(operations)
