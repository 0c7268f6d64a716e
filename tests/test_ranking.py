from datetime import datetime, timedelta, timezone

from bson import ObjectId

import ranking
from ranking import rank_leaderboard, rank_trending, rank_weekly_most_viewed

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def review(title, views=0, upvotes=0, age_days=0, viewed_days_ago=(), author_id=None, trust_score=50):
    return {
        "title": title,
        "views": views,
        "upvotes": upvotes,
        "created_at": NOW - timedelta(days=age_days),
        "viewed_by": [
            {"user_id": f"u{i}", "viewed_at": NOW - timedelta(days=d)} for i, d in enumerate(viewed_days_ago)
        ],
        "author": {"name": "x", "user_id": author_id},
        "trust_score": trust_score,
    }


def test_trending_orders_by_views_then_upvotes_then_newest():
    reviews = [
        review("old tie", views=10, upvotes=2, age_days=5),
        review("new tie", views=10, upvotes=2, age_days=1),
        review("more upvotes", views=10, upvotes=3, age_days=9),
        review("most views", views=50),
        review("quiet"),
    ]
    titles = [r["title"] for r in rank_trending(reviews)]
    assert titles == ["most views", "more upvotes", "new tie", "old tie", "quiet"]


def test_trending_is_capped_and_sorted():
    reviews = [review(str(i), views=i % 7, upvotes=i % 3, age_days=i) for i in range(25)]
    ranked = rank_trending(reviews)
    assert len(ranked) == 10
    keys = [(r["views"], r["upvotes"], r["created_at"]) for r in ranked]
    assert keys == sorted(keys, reverse=True)


def test_trending_tolerates_missing_fields():
    ranked = rank_trending([{"title": "bare"}, review("viewed", views=1)])
    assert [r["title"] for r in ranked] == ["viewed", "bare"]


def test_weekly_excludes_stale_views_even_with_high_totals():
    reviews = [
        review("stale giant", views=5000, viewed_days_ago=[8, 9, 30]),
        review("fresh", views=2, viewed_days_ago=[1, 2]),
        review("never viewed"),
    ]
    ranked = rank_weekly_most_viewed(reviews, now=NOW)
    assert [r["title"] for r in ranked] == ["fresh"]
    assert ranked[0]["recent_views"] == 2


def test_weekly_orders_by_recent_views_then_upvotes():
    reviews = [
        review("one recent", upvotes=100, viewed_days_ago=[1, 10, 11]),
        review("two recent", viewed_days_ago=[1, 6]),
        review("two recent popular", upvotes=4, viewed_days_ago=[2, 3]),
        review("three recent", viewed_days_ago=[0, 1, 2]),
    ]
    ranked = rank_weekly_most_viewed(reviews, now=NOW)
    assert [r["title"] for r in ranked] == ["three recent", "two recent popular", "two recent"]


def test_leaderboard_filters_private_and_inactive_users():
    public_id, private_id, idle_id = ObjectId(), ObjectId(), ObjectId()
    users = [
        {"_id": public_id, "first_name": "Ada", "last_name": "L", "review_count": 1, "is_public_profile": True},
        {"_id": private_id, "first_name": "Pri", "last_name": "V", "review_count": 3, "is_public_profile": False},
        {"_id": idle_id, "first_name": "Idle", "last_name": "U", "review_count": 0, "is_public_profile": True},
    ]
    reviews = [
        review("a", author_id=str(public_id), trust_score=70),
        review("b", author_id=str(private_id), trust_score=99),
    ]
    board = rank_leaderboard(users, reviews)
    assert [u.id for u in board] == [str(public_id)]
    assert board[0].name == "Ada L"
    assert board[0].trust_score == 70


def test_leaderboard_uses_actual_reviews_and_orders_by_trust_then_count():
    a, b, c = ObjectId(), ObjectId(), ObjectId()
    users = [
        {"_id": a, "first_name": "A", "last_name": "A", "review_count": 9},
        {"_id": b, "first_name": "B", "last_name": "B", "review_count": 1},
        {"_id": c, "first_name": "C", "last_name": "C", "review_count": 2},
    ]
    reviews = [
        review("a1", author_id=str(a), trust_score=60),
        review("b1", author_id=str(b), trust_score=80),
        review("c1", author_id=str(c), trust_score=81),
        review("c2", author_id=str(c), trust_score=79),
    ]
    board = rank_leaderboard(users, reviews)
    assert [(u.id, u.review_count, u.trust_score) for u in board] == [
        (str(c), 2, 80),
        (str(b), 1, 80),
        (str(a), 1, 60),
    ]


def test_leaderboard_drops_users_whose_reviews_are_gone():
    ghost = ObjectId()
    users = [{"_id": ghost, "first_name": "G", "last_name": "H", "review_count": 4}]
    assert rank_leaderboard(users, []) == []


def test_store_backed_rankings(db):
    author_id = db["user"].insert_one({"first_name": "Jane", "last_name": "Doe", "review_count": 2, "trust_score": 0}).inserted_id
    now = datetime.now(timezone.utc)
    db["review"].insert_many([
        {**review("hot", views=9, author_id=str(author_id), trust_score=90), "created_at": now,
         "viewed_by": [{"user_id": "u1", "viewed_at": now - timedelta(days=1)}]},
        {**review("cold", views=3, author_id=str(author_id), trust_score=40), "created_at": now,
         "viewed_by": [{"user_id": "u1", "viewed_at": now - timedelta(days=10)}]},
        {**review("hidden", views=99, author_id=str(ObjectId())), "is_removed_by_admin": True},
    ])

    trending = ranking.trending(db)
    assert [r["title"] for r in trending] == ["hot", "cold"]
    assert trending[0]["author"] == {"kind": "known", "id": str(author_id), "name": "Jane Doe", "avatar": None}
    assert "viewed_by" not in trending[0]

    weekly = ranking.weekly_most_viewed(db, now=now)
    assert [r["title"] for r in weekly] == ["hot"]

    board = ranking.leaderboard(db)
    assert [(u.name, u.review_count, u.trust_score) for u in board] == [("Jane Doe", 2, 65)]
