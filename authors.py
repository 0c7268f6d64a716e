"""
Author resolution for reviews.

Reviews keep a soft reference to their author. At read time the reference is
resolved exactly once into either a known author or the anonymous identity;
a deleted or missing user always degrades to anonymous.
"""

from typing import Annotated, Any, Dict, Iterable, Literal, Mapping, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, Field
from pymongo.database import Database

from database import sanitize

ANONYMOUS_NAME = "Anonymous"


class KnownAuthor(BaseModel):
    kind: Literal["known"] = "known"
    id: str
    name: str
    avatar: Optional[str] = None


class AnonymousAuthor(BaseModel):
    kind: Literal["anonymous"] = "anonymous"
    name: Literal["Anonymous"] = ANONYMOUS_NAME
    avatar: None = None


Author = Annotated[Union[KnownAuthor, AnonymousAuthor], Field(discriminator="kind")]


def display_name(user: Mapping) -> str:
    return f"{user.get('first_name') or ''} {user.get('last_name') or ''}".strip()


def author_user_id(review: Mapping) -> Optional[str]:
    author = review.get("author")
    if isinstance(author, Mapping) and author.get("user_id"):
        return str(author["user_id"])
    return None


def resolve_author(review: Mapping, users_by_id: Mapping[str, Mapping]) -> Author:
    user_id = author_user_id(review)
    user = users_by_id.get(user_id) if user_id else None
    if not user:
        return AnonymousAuthor()
    name = display_name(user)
    if not name:
        return AnonymousAuthor()
    return KnownAuthor(id=user_id, name=name, avatar=user.get("avatar") or None)


def load_authors(db: Database, reviews: Iterable[Mapping]) -> Dict[str, Dict[str, Any]]:
    """Fetch the users referenced by ``reviews``, keyed by string id."""
    ids = []
    for review in reviews:
        user_id = author_user_id(review)
        try:
            ids.append(ObjectId(user_id))
        except (InvalidId, TypeError):
            continue
    if not ids:
        return {}
    projection = {"first_name": 1, "last_name": 1, "avatar": 1}
    return {str(u["_id"]): u for u in db["user"].find({"_id": {"$in": ids}}, projection)}


def present_review(review: Mapping, users_by_id: Mapping[str, Mapping]) -> Dict[str, Any]:
    doc = sanitize(dict(review))
    doc["author"] = resolve_author(review, users_by_id).model_dump()
    # viewer identities stay server side
    doc.pop("viewed_by", None)
    return doc
