"""
MongoDB Connection Utility

MongoDB stores every Career Hub entity:
- Users (account, profile, notification/privacy settings)
- Companies and job postings (read-only here)
- Company reviews
- Job applications tracked by users

Uniqueness rules live in the indexes created by init_mongo_indexes():
one review per (user, company) and one application per (user, job).
"""
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from app.core.config import get_settings
from app.core.logging_config import get_logger

logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we use are listed in COLLECTIONS.
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "companies": "companies",
    "jobs": "jobs",
    "reviews": "reviews",
    "applications": "job_applications",
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["users"]].create_index("email", unique=True)

    # One review per user per company; enforced atomically at insert time
    db[COLLECTIONS["reviews"]].create_index(
        [("user_id", ASCENDING), ("company_id", ASCENDING)],
        unique=True
    )
    # Company review listing, newest first
    db[COLLECTIONS["reviews"]].create_index(
        [("company_id", ASCENDING), ("created_at", DESCENDING)]
    )

    # One application per user per job
    db[COLLECTIONS["applications"]].create_index(
        [("user_id", ASCENDING), ("job_id", ASCENDING)],
        unique=True
    )

    db[COLLECTIONS["jobs"]].create_index("company_id")

    logger.info("MongoDB indexes created successfully")
