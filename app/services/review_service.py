"""
Company Review Service

RULES:
1. A review must reference an existing company
2. One review per (user, company) pair
3. Listing is per company, newest first, paginated

UNIQUENESS:
The unique compound index on (user_id, company_id) is the authority.
find_one() before insert only gives the common case a clean error; two
concurrent submissions still race to insert_one(), and the loser gets a
DuplicateKeyError which is reported as the same conflict.
"""

import math
from datetime import datetime
from typing import Optional, Dict, Any
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from app.core.logging_config import get_logger
from app.db.mongodb import get_collection, COLLECTIONS
from app.schemas.schemas import ReviewCreate
from app.services.errors import ConflictError, NotFoundError
from app.services.mongo_service import CompanyService, UserService, serialize_doc

logger = get_logger(__name__)

DUPLICATE_REVIEW_MESSAGE = "You have already reviewed this company"


class ReviewService:
    """
    Handles the reviews collection.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["reviews"])
        self.companies = CompanyService()
        self.users = UserService()

    def submit(self, user_id: str, review: ReviewCreate) -> dict:
        """
        Store a new review for a company.

        Args:
            user_id: Id of the authenticated reviewer
            review: Validated review payload

        Returns:
            Summary dict with id, rating, title, created_at

        Raises:
            NotFoundError: company does not exist
            ConflictError: user already reviewed this company
        """
        company_id = self.companies.canonical_id(review.company_id)
        if company_id is None:
            raise NotFoundError("Company not found")

        if self.get_by_user_and_company(user_id, company_id):
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        now = datetime.utcnow()
        doc = review.model_dump(mode="json")
        doc.update({
            "company_id": company_id,
            "user_id": user_id,
            # Verified-employee status is never self-declared
            "is_verified": False,
            "created_at": now,
            "updated_at": now,
        })

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info("Concurrent duplicate review from user %s for company %s", user_id, company_id)
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        logger.info("Review %s submitted by user %s for company %s", result.inserted_id, user_id, company_id)
        return {
            "id": str(result.inserted_id),
            "rating": review.rating,
            "title": review.title,
            "created_at": now,
        }

    def get_by_user_and_company(self, user_id: str, company_id: str) -> Optional[dict]:
        doc = self.collection.find_one({"user_id": user_id, "company_id": company_id})
        return serialize_doc(doc)

    def list_for_company(self, company_id: str, page: int = 1, limit: int = 10) -> dict:
        """
        Fetch one page of a company's reviews, newest first.

        Returns:
            {"reviews": [...], "pagination": {page, limit, total, pages}}
        """
        company_id = self._resolve_company_id(company_id)
        query = {"company_id": company_id}
        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort([("created_at", -1), ("_id", -1)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        docs = list(cursor)

        names = self.users.get_names(list({doc["user_id"] for doc in docs}))
        reviews = [self._to_response(doc, names) for doc in docs]

        return {
            "reviews": reviews,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }

    def rating_summary(self, company_id: str) -> dict:
        """Average ratings for a company, computed in the database."""
        company_id = self._resolve_company_id(company_id)
        pipeline = [
            {"$match": {"company_id": company_id}},
            {"$group": {
                "_id": "$company_id",
                "review_count": {"$sum": 1},
                "average_rating": {"$avg": "$rating"},
                "average_work_environment": {"$avg": "$work_environment"},
                "average_compensation": {"$avg": "$compensation"},
                "average_career_growth": {"$avg": "$career_growth"},
            }},
        ]
        rows = list(self.collection.aggregate(pipeline))

        summary: Dict[str, Any] = {"company_id": company_id, "review_count": 0}
        if rows:
            row = rows[0]
            summary["review_count"] = row["review_count"]
            for key in ("average_rating", "average_work_environment",
                        "average_compensation", "average_career_growth"):
                summary[key] = round(row[key], 1) if row.get(key) is not None else None
        return summary

    def delete_by_user(self, user_id: str) -> int:
        """Remove every review written by a user (account deletion)."""
        return self.collection.delete_many({"user_id": user_id}).deleted_count

    def _resolve_company_id(self, company_id: str) -> str:
        # Unknown companies simply have no reviews
        return self.companies.canonical_id(company_id) or company_id

    @staticmethod
    def _to_response(doc: dict, names: Dict[str, str]) -> dict:
        return {
            "id": str(doc["_id"]),
            "company_id": doc["company_id"],
            "user_id": doc["user_id"],
            "user_name": names.get(doc["user_id"]) or "Anonymous",
            "rating": doc["rating"],
            "title": doc["title"],
            "content": doc["content"],
            "pros": doc.get("pros", []),
            "cons": doc.get("cons", []),
            "work_environment": doc["work_environment"],
            "compensation": doc["compensation"],
            "career_growth": doc["career_growth"],
            "position": doc.get("position"),
            "work_type": doc.get("work_type"),
            "is_verified": doc.get("is_verified", False),
            "created_at": doc["created_at"],
        }


def get_review_service() -> ReviewService:
    return ReviewService()
