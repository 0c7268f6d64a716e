"""
Upvote and view counters.

Each change is a single atomic document update: the membership predicate in
the filter and the ``$inc`` travel together, so concurrent toggles by
different identities never overwrite one another.
"""

from datetime import datetime
from typing import Optional

from bson import ObjectId
from pymongo.database import Database
from pymongo.results import UpdateResult

from schemas import utcnow


def toggle_upvote(db: Database, review_id: ObjectId, identity: str) -> Optional[bool]:
    """Add or remove ``identity``'s upvote.

    Returns True when the upvote was added, False when it was removed and None
    when the review does not exist.
    """
    added: UpdateResult = db["review"].update_one(
        {"_id": review_id, "upvoted_by": {"$ne": identity}},
        {"$addToSet": {"upvoted_by": identity}, "$inc": {"upvotes": 1}},
    )
    if added.modified_count:
        return True

    removed = db["review"].update_one(
        {"_id": review_id, "upvoted_by": identity},
        {"$pull": {"upvoted_by": identity}, "$inc": {"upvotes": -1}},
    )
    if removed.matched_count:
        return False
    return None


def register_view(db: Database, review_id: ObjectId, identity: str, now: Optional[datetime] = None) -> bool:
    """Record one view per identity. Returns True if this was a new view."""
    result = db["review"].update_one(
        {"_id": review_id, "viewed_by.user_id": {"$ne": identity}},
        {
            "$push": {"viewed_by": {"user_id": identity, "viewed_at": now or utcnow()}},
            "$inc": {"views": 1},
        },
    )
    return bool(result.modified_count)
