"""
Database Schemas for the Review Platform

MongoDB collections are defined below using Pydantic models. Each class name is
converted to lowercase for the collection name (User -> "user").

We will use these collections:
- user: registered users and admins
- review: user reviews with media, upvotes and views
- report: user reports against reviews, handled by admins
- category: browsable categories and their subcategories
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

Role = Literal["admin", "user"]
Tag = Literal["Brutal", "Honest", "Praise", "Rant", "Warning", "Recommended", "Caution", "Fair"]
MediaType = Literal["image", "video"]
ReportReason = Literal[
    "Inappropriate Content",
    "Spam",
    "Fake Review",
    "Offensive Language",
    "Copyright Violation",
    "Other",
]
ReportStatus = Literal["pending", "accepted", "rejected"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Mongo hands back naive datetimes that are already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Location(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class User(BaseModel):
    email: EmailStr
    password_hash: str = Field(..., description="BCrypt hash of password")
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    phone_number: str = Field(..., pattern=r"^\d{10}$")
    date_of_birth: Optional[datetime] = None
    location: Optional[Location] = None
    bio: Optional[str] = Field(None, max_length=500)
    role: Role = Field("user")
    avatar: str = ""
    review_count: int = Field(0, ge=0, description="Denormalized count of authored reviews")
    trust_score: int = Field(50, ge=0, le=100, description="Denormalized mean trust of authored reviews")
    is_public_profile: bool = True
    last_login: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class Media(BaseModel):
    type: MediaType
    url: str
    filename: Optional[str] = None


class AuthorRef(BaseModel):
    """Soft reference to the author as stored on the review."""
    name: str = "Anonymous"
    avatar: Optional[str] = None
    user_id: Optional[str] = Field(None, description="Reference to user _id")


class ViewEntry(BaseModel):
    user_id: str
    viewed_at: datetime = Field(default_factory=utcnow)


class Review(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=10000)
    category: str = Field(..., min_length=1)
    subcategory: str = Field(..., min_length=1)
    tags: List[Tag] = Field(default_factory=list)
    media: List[Media] = Field(default_factory=list)
    rating: int = Field(..., ge=1, le=5)
    author: AuthorRef = Field(default_factory=AuthorRef)
    upvotes: int = Field(0, ge=0)
    upvoted_by: List[str] = Field(default_factory=list)
    views: int = Field(0, ge=0)
    viewed_by: List[ViewEntry] = Field(default_factory=list)
    featured: bool = False
    trust_score: int = Field(0, ge=0, le=100)
    is_removed_by_admin: bool = False
    admin_removal_reason: Optional[str] = Field(None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))


class Report(BaseModel):
    review_id: str = Field(..., description="Reference to review _id")
    reported_by: str = Field(..., description="Reference to user _id")
    reason: ReportReason
    description: Optional[str] = Field(None, max_length=500)
    status: ReportStatus = Field("pending")
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class Category(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    subcategories: List[str] = Field(default_factory=list)
    review_count: int = 0
    trending: bool = False
