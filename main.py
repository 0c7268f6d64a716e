import logging
import re
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Any, Dict

from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field, EmailStr, field_validator
from jose import jwt, JWTError
from passlib.context import CryptContext
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

import ranking
import settings
from authors import load_authors, present_review, author_user_id
from database import get_db, ensure_indexes, sanitize
from engagement import toggle_upvote, register_view
from rollup import recompute_user_aggregate, recompute_all_users
from schemas import (
    User as UserSchema,
    Review as ReviewSchema,
    Report as ReportSchema,
    AuthorRef,
    Location,
    Media,
    ReportReason,
    Tag,
    utcnow,
)
from secret_store import AdminSecretStore
from sentiment import analyze_sentiment, Sentiment
from trust import compute_trust_score, analyze_trust_factors, get_trust_level, TrustFactors, TrustLevel

settings.setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_factory = app.dependency_overrides.get(get_db, get_db)
    try:
        ensure_indexes(db_factory())
    except PyMongoError as e:
        logger.warning("Could not ensure indexes at startup: %s", e)
    yield


# App and CORS
app = FastAPI(title="Review Platform API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.secret_store = AdminSecretStore(settings.ADMIN_SECRET_CODE)

# Auth setup
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

REVIEW_SORT_FIELDS = {"created_at", "views", "upvotes", "trust_score", "rating"}


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})

# Helpers

def to_obj_id(id_str: str) -> ObjectId:
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid id")


def public_user(doc: Dict) -> Dict:
    d = sanitize(doc)
    if d:
        d.pop("password_hash", None)
    return d


def verify_password_policy(password: str) -> None:
    # 8-64 chars, at least one uppercase and one special char
    if not (8 <= len(password) <= 64):
        raise HTTPException(status_code=422, detail="Password must be 8-64 characters long")
    if not re.search(r"[A-Z]", password):
        raise HTTPException(status_code=422, detail="Password must include at least one uppercase letter")
    if not re.search(r"[^A-Za-z0-9]", password):
        raise HTTPException(status_code=422, detail="Password must include at least one special character")


def hash_password(password: str) -> str:
    verify_password_policy(password)
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _user_from_token(token: str, db: Database) -> Optional[Dict]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    try:
        user = db["user"].find_one({"_id": ObjectId(user_id)})
    except (InvalidId, TypeError):
        return None
    return public_user(user) if user else None


async def get_current_user(token: str = Depends(oauth2_scheme), db: Database = Depends(get_db)):
    user = _user_from_token(token, db)
    if not user:
        raise HTTPException(status_code=401, detail="Could not validate credentials")
    return user


async def get_optional_user(token: Optional[str] = Depends(optional_oauth2_scheme), db: Database = Depends(get_db)):
    # a bad token degrades to an anonymous request
    return _user_from_token(token, db) if token else None


def require_role(*roles: str):
    async def role_dep(current_user=Depends(get_current_user)):
        if current_user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current_user
    return role_dep


def get_secret_store(request: Request) -> AdminSecretStore:
    return request.app.state.secret_store


def get_review_or_404(db: Database, review_id: str) -> Dict:
    review = db["review"].find_one({"_id": to_obj_id(review_id)})
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


def present_one(db: Database, review: Dict) -> Dict:
    return present_review(review, load_authors(db, [review]))


def refresh_author_aggregate(db: Database, review: Dict) -> None:
    user_id = author_user_id(review)
    if user_id and ObjectId.is_valid(user_id):
        recompute_user_aggregate(db, user_id)


def ranking_unavailable(name: str, e: PyMongoError) -> JSONResponse:
    logger.error("Ranking %s unavailable: %s", name, e)
    return JSONResponse(status_code=503, content=[])

# Request/Response Models
class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    email: EmailStr
    phone_number: str = Field(..., pattern=r"^\d{10}$")
    password: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Dict[str, Any]

class UpdatePasswordRequest(BaseModel):
    old_password: str
    new_password: str

class ProfileUpdateRequest(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=60)
    last_name: Optional[str] = Field(None, min_length=1, max_length=60)
    phone_number: Optional[str] = Field(None, pattern=r"^\d{10}$")
    date_of_birth: Optional[datetime] = None
    location: Optional[Location] = None
    bio: Optional[str] = Field(None, max_length=500)
    is_public_profile: Optional[bool] = None

    @field_validator("first_name", "last_name", "phone_number", "is_public_profile", mode="before")
    @classmethod
    def not_null(cls, v):
        # omit a field to leave it unchanged; these cannot be cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class CreateReviewRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=10000)
    category: str = Field(..., min_length=1)
    subcategory: str = Field(..., min_length=1)
    tags: List[Tag] = Field(default_factory=list)
    media: List[Media] = Field(default_factory=list)
    rating: int = Field(..., ge=1, le=5)

class ViewRequest(BaseModel):
    anonymous_id: Optional[str] = Field(None, min_length=1, max_length=100)

class CreateReportRequest(BaseModel):
    review_id: str
    reason: ReportReason
    description: Optional[str] = Field(None, max_length=500)

class SecretCodeRequest(BaseModel):
    new_secret_code: str

class CreateAdminRequest(RegisterRequest):
    secret_code: str

class RemoveReviewRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)

class SentimentRequest(BaseModel):
    text: str = Field(..., max_length=10000)

class TrustPreviewRequest(BaseModel):
    title: str = ""
    description: str = ""
    rating: int = Field(3, ge=1, le=5)
    tags: List[Tag] = Field(default_factory=list)
    media: List[Media] = Field(default_factory=list)
    author_name: Optional[str] = None

class TrustPreviewResponse(BaseModel):
    trust_score: int
    factors: TrustFactors
    level: TrustLevel


def _create_user(db: Database, payload: RegisterRequest, role: str) -> Dict:
    email = payload.email.lower()
    if db["user"].find_one({"email": email}):
        raise HTTPException(status_code=409, detail="Email already registered")
    if db["user"].find_one({"phone_number": payload.phone_number}):
        raise HTTPException(status_code=409, detail="Phone number already registered")
    user_doc = UserSchema(
        email=email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone_number=payload.phone_number,
        role=role,
        # admin profiles stay off the leaderboard
        is_public_profile=role != "admin",
    ).model_dump()
    try:
        res = db["user"].insert_one(user_doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="Email or phone number already registered")
    user_doc["_id"] = res.inserted_id
    logger.info("Created %s account %s", role, res.inserted_id)
    return user_doc

# Auth Routes
@app.post("/auth/register", response_model=TokenResponse, status_code=201)
def register(payload: RegisterRequest, db: Database = Depends(get_db)):
    user_doc = _create_user(db, payload, "user")
    token = create_access_token({"sub": str(user_doc["_id"])})
    return TokenResponse(access_token=token, user=public_user(user_doc))

@app.post("/auth/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    user = db["user"].find_one({"email": payload.email.lower()})
    if not user or not verify_password(payload.password, user.get("password_hash", "")):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    db["user"].update_one({"_id": user["_id"]}, {"$set": {"last_login": utcnow()}})
    token = create_access_token({"sub": str(user["_id"])})
    return TokenResponse(access_token=token, user=public_user(user))

@app.get("/me")
def me(current_user=Depends(get_current_user)):
    return current_user

@app.put("/auth/password")
def update_password(payload: UpdatePasswordRequest, current_user=Depends(get_current_user), db: Database = Depends(get_db)):
    user = db["user"].find_one({"_id": to_obj_id(current_user["id"])})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not verify_password(payload.old_password, user.get("password_hash", "")):
        raise HTTPException(status_code=400, detail="Old password incorrect")
    new_hash = hash_password(payload.new_password)
    db["user"].update_one({"_id": user["_id"]}, {"$set": {"password_hash": new_hash, "updated_at": utcnow()}})
    return {"message": "Password updated"}

# Review Routes
@app.get("/reviews")
def list_reviews(
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    tag: Optional[Tag] = None,
    sort: str = Query("created_at"),
    page: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    db: Database = Depends(get_db),
):
    if sort not in REVIEW_SORT_FIELDS:
        raise HTTPException(status_code=400, detail=f"Cannot sort by {sort}")
    q: Dict[str, Any] = dict(ranking.VISIBLE)
    if category:
        q["category"] = category
    if subcategory:
        q["subcategory"] = subcategory
    if tag:
        q["tags"] = tag
    total = db["review"].count_documents(q)
    reviews = list(db["review"].find(q).sort([(sort, -1), ("_id", -1)]).skip((page - 1) * limit).limit(limit))
    users_by_id = load_authors(db, reviews)
    total_pages = (total + limit - 1) // limit
    return {
        "reviews": [present_review(r, users_by_id) for r in reviews],
        "pagination": {
            "current_page": page,
            "total_pages": total_pages,
            "total_reviews": total,
            "has_next_page": page < total_pages,
            "has_prev_page": page > 1,
        },
    }

@app.get("/reviews/trending")
def trending_reviews(db: Database = Depends(get_db)):
    try:
        return ranking.trending(db)
    except PyMongoError as e:
        return ranking_unavailable("trending", e)

@app.get("/reviews/most-viewed-week")
def most_viewed_week(db: Database = Depends(get_db)):
    try:
        return ranking.weekly_most_viewed(db)
    except PyMongoError as e:
        return ranking_unavailable("most-viewed-week", e)

@app.get("/reviews/{review_id}")
def get_review(review_id: str, current_user=Depends(get_optional_user), db: Database = Depends(get_db)):
    review = get_review_or_404(db, review_id)
    if review.get("is_removed_by_admin"):
        raise HTTPException(status_code=404, detail="Review not found")
    if current_user and register_view(db, review["_id"], current_user["id"]):
        review = get_review_or_404(db, review_id)
    return present_one(db, review)

@app.post("/reviews", status_code=201)
def create_review(payload: CreateReviewRequest, current_user=Depends(get_current_user), db: Database = Depends(get_db)):
    now = utcnow()
    author = AuthorRef(
        name=f"{current_user.get('first_name', '')} {current_user.get('last_name', '')}".strip() or "Anonymous",
        avatar=current_user.get("avatar") or None,
        user_id=current_user["id"],
    )
    review_doc = ReviewSchema(**payload.model_dump(), author=author, created_at=now, updated_at=now).model_dump()
    review_doc["trust_score"] = compute_trust_score(review_doc, now=now)
    res = db["review"].insert_one(review_doc)
    review_doc["_id"] = res.inserted_id
    logger.info("Review %s created by %s with trust score %d", res.inserted_id, current_user["id"], review_doc["trust_score"])
    recompute_user_aggregate(db, current_user["id"])
    return present_one(db, review_doc)

@app.patch("/reviews/{review_id}/upvote")
def upvote_review(review_id: str, current_user=Depends(get_current_user), db: Database = Depends(get_db)):
    upvoted = toggle_upvote(db, to_obj_id(review_id), current_user["id"])
    if upvoted is None:
        raise HTTPException(status_code=404, detail="Review not found")
    review = present_one(db, get_review_or_404(db, review_id))
    review["upvoted"] = upvoted
    return review

@app.patch("/reviews/{review_id}/view")
def view_review(
    review_id: str,
    payload: Optional[ViewRequest] = None,
    current_user=Depends(get_optional_user),
    db: Database = Depends(get_db),
):
    review = get_review_or_404(db, review_id)
    identity = None
    if current_user:
        identity = current_user["id"]
    elif payload and payload.anonymous_id:
        identity = f"anon_{payload.anonymous_id}"
    new_view = bool(identity) and register_view(db, review["_id"], identity)
    current = db["review"].find_one({"_id": review["_id"]}, {"views": 1}) or review
    views = current.get("views", 0)
    return {"success": True, "views": views, "new_view": new_view}

# User Routes
@app.put("/users/profile")
def update_profile(payload: ProfileUpdateRequest, current_user=Depends(get_current_user), db: Database = Depends(get_db)):
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        return current_user
    changes["updated_at"] = utcnow()
    try:
        db["user"].update_one({"_id": to_obj_id(current_user["id"])}, {"$set": changes})
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="Phone number already registered")
    return public_user(db["user"].find_one({"_id": to_obj_id(current_user["id"])}))

@app.get("/users/leaderboard", response_model=List[ranking.UserSummary])
def user_leaderboard(db: Database = Depends(get_db)):
    try:
        return ranking.leaderboard(db)
    except PyMongoError as e:
        return ranking_unavailable("leaderboard", e)

def _public_profile_or_error(db: Database, user_id: str) -> Dict:
    user = db["user"].find_one({"_id": to_obj_id(user_id)})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not user.get("is_public_profile", True):
        raise HTTPException(status_code=403, detail="Profile is private")
    return user

@app.get("/users/{user_id}/profile")
def user_profile(user_id: str, db: Database = Depends(get_db)):
    return public_user(_public_profile_or_error(db, user_id))

@app.get("/users/{user_id}/reviews")
def user_reviews(user_id: str, db: Database = Depends(get_db)):
    user = _public_profile_or_error(db, user_id)
    reviews = db["review"].find({"author.user_id": user_id, **ranking.VISIBLE}).sort([("created_at", -1)]).limit(20)
    users_by_id = {str(user["_id"]): user}
    return [present_review(r, users_by_id) for r in reviews]

@app.get("/users")
def list_users(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    return [public_user(u) for u in db["user"].find()]

@app.get("/users/{user_id}")
def get_user(user_id: str, admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    user = db["user"].find_one({"_id": to_obj_id(user_id)})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return public_user(user)

# Report Routes
@app.post("/reports", status_code=201)
def create_report(payload: CreateReportRequest, current_user=Depends(get_current_user), db: Database = Depends(get_db)):
    get_review_or_404(db, payload.review_id)
    if db["report"].find_one({"review_id": payload.review_id, "reported_by": current_user["id"]}):
        raise HTTPException(status_code=409, detail="You have already reported this review")
    doc = ReportSchema(
        review_id=payload.review_id,
        reported_by=current_user["id"],
        reason=payload.reason,
        description=payload.description,
    ).model_dump()
    try:
        db["report"].insert_one(doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="You have already reported this review")
    return {"message": "Report submitted successfully"}

# Category Routes
@app.get("/categories")
def list_categories(db: Database = Depends(get_db)):
    return [sanitize(c) for c in db["category"].find().sort([("name", 1)])]

@app.get("/categories/trending")
def trending_categories(db: Database = Depends(get_db)):
    cursor = db["category"].find({"trending": True}).sort([("review_count", -1)]).limit(settings.TRENDING_CATEGORIES_LIMIT)
    return [sanitize(c) for c in cursor]

# Analysis Routes
@app.post("/analysis/sentiment", response_model=Sentiment)
def sentiment(payload: SentimentRequest):
    return analyze_sentiment(payload.text)

@app.post("/analysis/trust", response_model=TrustPreviewResponse)
def trust_preview(payload: TrustPreviewRequest):
    draft = payload.model_dump()
    draft["author"] = {"name": draft.pop("author_name")}
    score = compute_trust_score(draft)
    return TrustPreviewResponse(trust_score=score, factors=analyze_trust_factors(draft), level=get_trust_level(score))

# Admin Routes
@app.get("/admin/secret-code")
def get_secret_code(admin=Depends(require_role("admin")), store: AdminSecretStore = Depends(get_secret_store)):
    return {"secret_code": store.value}

@app.put("/admin/secret-code")
def update_secret_code(payload: SecretCodeRequest, admin=Depends(require_role("admin")), store: AdminSecretStore = Depends(get_secret_store)):
    try:
        value = store.update(payload.new_secret_code)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Secret code updated successfully", "secret_code": value}

@app.post("/admin/create-admin", status_code=201)
def create_admin(
    payload: CreateAdminRequest,
    admin=Depends(require_role("admin")),
    store: AdminSecretStore = Depends(get_secret_store),
    db: Database = Depends(get_db),
):
    if not store.verify(payload.secret_code):
        raise HTTPException(status_code=400, detail="Invalid secret code")
    user_doc = _create_user(db, payload, "admin")
    return {"message": "Admin account created successfully", "user": public_user(user_doc)}

@app.get("/admin/stats")
def admin_stats(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    total_users = db["user"].count_documents({})
    total_reviews = db["review"].count_documents({})
    pending_reports = db["report"].count_documents({"status": "pending"})
    last_month = (utcnow() - timedelta(days=30)).replace(tzinfo=None)
    new_users = db["user"].count_documents({"created_at": {"$gte": last_month}})
    monthly_growth = round(new_users / total_users * 100) if total_users else 0
    return {
        "total_users": total_users,
        "total_reviews": total_reviews,
        "pending_reports": pending_reports,
        "monthly_growth": monthly_growth,
    }

@app.get("/admin/reviews")
def admin_list_reviews(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    reviews = list(db["review"].find().sort([("created_at", -1)]).limit(100))
    users_by_id = load_authors(db, reviews)
    return [present_review(r, users_by_id) for r in reviews]

@app.get("/admin/users")
def admin_list_users(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    return [public_user(u) for u in db["user"].find().sort([("created_at", -1)]).limit(100)]

@app.get("/admin/reports")
def admin_list_reports(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    reports = [sanitize(r) for r in db["report"].find({"status": "pending"}).sort([("created_at", -1)])]
    review_ids = [ObjectId(r["review_id"]) for r in reports if ObjectId.is_valid(r["review_id"])]
    projection = {"title": 1, "description": 1, "category": 1}
    reviews = {str(r["_id"]): sanitize(r) for r in db["review"].find({"_id": {"$in": review_ids}}, projection)}
    for r in reports:
        r["review"] = reviews.get(r["review_id"])
    return reports

@app.post("/admin/reports/{report_id}/{action}")
def handle_report(report_id: str, action: str, admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    if action not in ("accept", "reject"):
        raise HTTPException(status_code=400, detail="Invalid action")
    report = db["report"].find_one({"_id": to_obj_id(report_id)})
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    status = "accepted" if action == "accept" else "rejected"
    if action == "accept" and ObjectId.is_valid(report["review_id"]):
        review = db["review"].find_one_and_delete({"_id": ObjectId(report["review_id"])})
        if review:
            refresh_author_aggregate(db, review)
    db["report"].update_one(
        {"_id": report["_id"]},
        {"$set": {"status": status, "reviewed_by": admin["id"], "reviewed_at": utcnow()}},
    )
    logger.info("Report %s %s by admin %s", report_id, status, admin["id"])
    return {"message": f"Report {action}ed successfully"}

@app.delete("/admin/reviews/{review_id}")
def delete_review(review_id: str, admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    review = db["review"].find_one_and_delete({"_id": to_obj_id(review_id)})
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    refresh_author_aggregate(db, review)
    logger.info("Review %s deleted by admin %s", review_id, admin["id"])
    return {"message": "Review deleted successfully"}

@app.patch("/admin/reviews/{review_id}/remove")
def remove_review(review_id: str, payload: RemoveReviewRequest, admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    res = db["review"].update_one(
        {"_id": to_obj_id(review_id)},
        {"$set": {"is_removed_by_admin": True, "admin_removal_reason": payload.reason, "updated_at": utcnow()}},
    )
    if not res.matched_count:
        raise HTTPException(status_code=404, detail="Review not found")
    logger.info("Review %s hidden by admin %s", review_id, admin["id"])
    return {"message": "Review removed successfully"}

@app.post("/admin/maintenance/recompute-aggregates")
def recompute_aggregates(admin=Depends(require_role("admin")), db: Database = Depends(get_db)):
    updated = recompute_all_users(db)
    return {"message": "User aggregates recomputed", "users_updated": updated}

# Bootstrap route for first deployment
@app.post("/init/bootstrap", status_code=201)
def bootstrap_admin(
    payload: CreateAdminRequest,
    store: AdminSecretStore = Depends(get_secret_store),
    db: Database = Depends(get_db),
):
    """Create the first admin account. Requires the admin secret code."""
    if db["user"].count_documents({"role": "admin"}) > 0:
        raise HTTPException(status_code=400, detail="Admin already exists")
    if not store.verify(payload.secret_code):
        raise HTTPException(status_code=400, detail="Invalid secret code")
    user_doc = _create_user(db, payload, "admin")
    token = create_access_token({"sub": str(user_doc["_id"])})
    return TokenResponse(access_token=token, user=public_user(user_doc))

# Utility endpoints
@app.get("/")
def root():
    return {"message": "Review Platform API running"}

@app.get("/test")
def test_database(db: Database = Depends(get_db)):
    try:
        return {"backend": "ok", "database": "ok", "collections": db.list_collection_names()}
    except PyMongoError as e:
        return {"backend": "ok", "database": f"error: {e}"}
