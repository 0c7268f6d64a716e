from bson import ObjectId

from rollup import aggregate_scores, recompute_all_users, recompute_user_aggregate


def add_user(db, **fields):
    return db["user"].insert_one({"first_name": "A", "last_name": "B", **fields}).inserted_id


def add_review(db, user_id, trust_score):
    db["review"].insert_one({"author": {"name": "A B", "user_id": str(user_id)}, "trust_score": trust_score})


def test_aggregate_defaults_to_fifty():
    aggregate = aggregate_scores([])
    assert (aggregate.review_count, aggregate.trust_score) == (0, 50)


def test_aggregate_rounds_mean_half_up():
    assert aggregate_scores([70, 81]).trust_score == 76
    assert aggregate_scores([70, None]).trust_score == 35


def test_recompute_user_without_reviews(db):
    user_id = add_user(db, review_count=7, trust_score=12)
    aggregate = recompute_user_aggregate(db, str(user_id))
    assert (aggregate.review_count, aggregate.trust_score) == (0, 50)
    user = db["user"].find_one({"_id": user_id})
    assert (user["review_count"], user["trust_score"]) == (0, 50)


def test_recompute_user_with_reviews(db):
    user_id = add_user(db)
    other_id = add_user(db)
    add_review(db, user_id, 70)
    add_review(db, user_id, 81)
    add_review(db, other_id, 10)
    aggregate = recompute_user_aggregate(db, str(user_id))
    assert (aggregate.review_count, aggregate.trust_score) == (2, 76)


def test_recompute_all_users_is_idempotent(db):
    busy = add_user(db, review_count=0, trust_score=50)
    idle = add_user(db, review_count=3, trust_score=90)
    add_review(db, busy, 60)
    add_review(db, busy, 64)
    add_review(db, ObjectId(), 100)

    assert recompute_all_users(db) == 2
    first = {u["_id"]: (u["review_count"], u["trust_score"]) for u in db["user"].find()}
    assert first == {busy: (2, 62), idle: (0, 50)}

    recompute_all_users(db)
    second = {u["_id"]: (u["review_count"], u["trust_score"]) for u in db["user"].find()}
    assert second == first


def test_recompute_all_users_on_empty_collection(db):
    assert recompute_all_users(db) == 0
