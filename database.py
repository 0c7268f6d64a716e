"""
MongoDB connection for the review platform.

A single client is created lazily; routes receive the database through the
``get_db`` dependency so tests can swap it out.
"""

import logging
from typing import Dict, Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

import settings

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        logger.info("Connecting to MongoDB database %s", settings.DATABASE_NAME)
        _client = MongoClient(settings.DATABASE_URL, serverSelectionTimeoutMS=5000)
    return _client


def get_db() -> Database:
    return get_client()[settings.DATABASE_NAME]


def ensure_indexes(db: Database) -> None:
    """Create the indexes the listing and ranking queries rely on."""
    db["user"].create_index([("email", ASCENDING)], unique=True)
    db["user"].create_index([("phone_number", ASCENDING)], unique=True)
    db["user"].create_index([("trust_score", DESCENDING), ("review_count", DESCENDING)])
    db["review"].create_index([("author.user_id", ASCENDING)])
    db["review"].create_index([("views", DESCENDING), ("upvotes", DESCENDING), ("created_at", DESCENDING)])
    db["review"].create_index([("viewed_by.viewed_at", DESCENDING)])
    db["review"].create_index([("category", ASCENDING), ("subcategory", ASCENDING)])
    db["report"].create_index([("review_id", ASCENDING), ("reported_by", ASCENDING)], unique=True)


def sanitize(doc: Dict) -> Dict:
    if not doc:
        return doc
    d = {**doc}
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d
