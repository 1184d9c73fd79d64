"""
MongoDB Service - CRUD operations for the account and catalogue collections.

Collections handled here:
1. users     - Accounts with profile, notification and privacy settings
2. companies - Companies that can be reviewed (read-only from the API)
3. jobs      - Job postings users apply to (read-only from the API)

Reviews and job applications have their own services
(review_service.py, application_tracker.py) because they carry rules
beyond plain CRUD.
"""

import re
from datetime import datetime
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo.collection import Collection

from app.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPERS: ObjectId handling for JSON serialization and lookups
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def id_filter(value: str) -> dict:
    """
    Build an _id filter that matches either an ObjectId or a plain string id.

    Documents created by this API use ObjectIds, but seeded catalogue data
    may use readable string ids such as "c1".
    """
    if ObjectId.is_valid(value):
        return {"_id": {"$in": [ObjectId(value), value]}}
    return {"_id": value}


# ============================================================
# USERS COLLECTION
# ============================================================

DEFAULT_NOTIFICATIONS = {
    "email_notifications": True,
    "job_alerts": True,
    "application_updates": True,
    "newsletter": False,
    "marketing_emails": False,
}

DEFAULT_PRIVACY = {
    "profile_visibility": "public",
    "show_email": False,
    "show_resume": True,
    "data_sharing": False,
}


class UserService:
    """
    Handles user account documents.
    Settings are embedded in the user document, not stored separately.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def insert(self, email: str, password_hash: str, full_name: str) -> str:
        """Create a user with default settings. Returns the new id as string."""
        now = datetime.utcnow()
        doc = {
            "email": email.lower(),
            "password_hash": password_hash,
            "full_name": full_name,
            "is_active": True,
            "profile": {"skills": None, "interests": None},
            "settings": {
                "notifications": dict(DEFAULT_NOTIFICATIONS),
                "privacy": dict(DEFAULT_PRIVACY),
            },
            "created_at": now,
            "updated_at": now,
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_by_id(self, user_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one(id_filter(user_id)))

    def get_by_email(self, email: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"email": email.lower()}))

    def get_names(self, user_ids: List[str]) -> Dict[str, str]:
        """Map user id -> full name for the given ids (missing users are omitted)."""
        object_ids = [ObjectId(uid) for uid in user_ids if ObjectId.is_valid(uid)]
        cursor = self.collection.find(
            {"_id": {"$in": object_ids + list(user_ids)}},
            {"full_name": 1}
        )
        return {str(doc["_id"]): doc.get("full_name") for doc in cursor}

    def update_fields(self, user_id: str, fields: Dict[str, Any]) -> bool:
        """$set the given (dotted) fields and bump updated_at."""
        fields = {**fields, "updated_at": datetime.utcnow()}
        result = self.collection.update_one(id_filter(user_id), {"$set": fields})
        return result.matched_count > 0

    def delete(self, user_id: str) -> bool:
        result = self.collection.delete_one(id_filter(user_id))
        return result.deleted_count > 0


# ============================================================
# COMPANIES COLLECTION
# ============================================================

class CompanyService:
    """Read access to company documents."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["companies"])

    def get_by_id(self, company_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one(id_filter(company_id)))

    def canonical_id(self, company_id: str) -> Optional[str]:
        """
        Stored _id of the company as a string, or None if it does not exist.

        id_filter() parses hex ids case-insensitively, so references to a
        company must be written in this form to compare equal.
        """
        doc = self.collection.find_one(id_filter(company_id), {"_id": 1})
        return str(doc["_id"]) if doc else None

    def get_names(self, company_ids: List[str]) -> Dict[str, str]:
        """Map company id -> name for the given ids."""
        object_ids = [ObjectId(cid) for cid in company_ids if ObjectId.is_valid(cid)]
        cursor = self.collection.find(
            {"_id": {"$in": object_ids + list(company_ids)}},
            {"name": 1}
        )
        return {str(doc["_id"]): doc.get("name") for doc in cursor}


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """Read access to job postings."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])

    def get_by_id(self, job_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one(id_filter(job_id)))

    def get_many(self, job_ids: List[str]) -> Dict[str, dict]:
        """Fetch several jobs at once, keyed by id string."""
        object_ids = [ObjectId(jid) for jid in job_ids if ObjectId.is_valid(jid)]
        cursor = self.collection.find({"_id": {"$in": object_ids + list(job_ids)}})
        return {doc["_id"]: doc for doc in serialize_docs(list(cursor))}

    def search(self, search: Optional[str], page: int, page_size: int) -> tuple:
        """
        List job postings newest first, optionally filtered by title.

        Returns:
            (jobs, total) where jobs is the requested page
        """
        query = {}
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}

        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort([("created_at", -1), ("_id", -1)])
            .skip((page - 1) * page_size)
            .limit(page_size)
        )
        return serialize_docs(list(cursor)), total
