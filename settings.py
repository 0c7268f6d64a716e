"""
Configuration for the review platform API.

All values come from environment variables with development defaults.
"""

import logging
import os
import sys

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "reviews")

# Auth
SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))

# Initial admin passkey; changed at runtime through /admin/secret-code
ADMIN_SECRET_CODE = os.getenv("ADMIN_SECRET_CODE", "truview")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Ranking
TRENDING_LIMIT = 10
WEEKLY_LIMIT = 3
WEEKLY_WINDOW_DAYS = 7
LEADERBOARD_LIMIT = 50
TRENDING_CATEGORIES_LIMIT = 8

# Users with no reviews sit at the midpoint
DEFAULT_USER_TRUST_SCORE = 50

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = LOG_LEVEL) -> None:
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
