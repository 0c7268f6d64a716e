from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from bson import ObjectId

from engagement import register_view, toggle_upvote


def new_review(db):
    return db["review"].insert_one({"title": "t", "upvotes": 0, "upvoted_by": [], "views": 0, "viewed_by": []}).inserted_id


def test_upvote_toggles(db):
    review_id = new_review(db)
    assert toggle_upvote(db, review_id, "alice") is True
    assert toggle_upvote(db, review_id, "alice") is False
    review = db["review"].find_one({"_id": review_id})
    assert review["upvotes"] == 0
    assert review["upvoted_by"] == []


def test_upvotes_from_distinct_identities_are_both_kept(db):
    review_id = new_review(db)
    toggle_upvote(db, review_id, "alice")
    toggle_upvote(db, review_id, "bob")
    review = db["review"].find_one({"_id": review_id})
    assert review["upvotes"] == 2
    assert sorted(review["upvoted_by"]) == ["alice", "bob"]


def test_upvote_missing_review(db):
    assert toggle_upvote(db, ObjectId(), "alice") is None


def test_views_count_once_per_identity(db):
    review_id = new_review(db)
    when = datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert register_view(db, review_id, "alice", now=when) is True
    assert register_view(db, review_id, "alice", now=when + timedelta(days=1)) is False
    assert register_view(db, review_id, "anon_42") is True
    review = db["review"].find_one({"_id": review_id})
    assert review["views"] == 2
    assert len(review["viewed_by"]) == review["views"]


def test_concurrent_upvotes_are_not_lost(db):
    review_id = new_review(db)
    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(lambda who: toggle_upvote(db, review_id, who), ["alice", "bob"]))
    assert results == [True, True]
    review = db["review"].find_one({"_id": review_id})
    assert review["upvotes"] == len(review["upvoted_by"]) == 2
