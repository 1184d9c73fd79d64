"""
Job Application Tracker

Tracks a user's applications to job postings and their status over time.

STATUS LIFECYCLE:
    applied -> interviewing -> accepted | rejected
    withdrawn is reachable from every state and is terminal

When STRICT_STATUS_TRANSITIONS is off any status may be set to any other
(manual override). Every mutation refreshes last_updated; concurrent edits
to the same record are last-write-wins.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from app.core.config import get_settings
from app.core.logging_config import get_logger
from app.db.mongodb import get_collection, COLLECTIONS
from app.schemas.schemas import ApplicationStatus, ApplicationSortField
from app.services.errors import ConflictError, NotFoundError
from app.services.mongo_service import CompanyService, JobService, id_filter, serialize_doc

logger = get_logger(__name__)


ALLOWED_TRANSITIONS = {
    ApplicationStatus.applied: {
        ApplicationStatus.interviewing, ApplicationStatus.rejected, ApplicationStatus.withdrawn
    },
    ApplicationStatus.interviewing: {
        ApplicationStatus.accepted, ApplicationStatus.rejected, ApplicationStatus.withdrawn
    },
    ApplicationStatus.accepted: {ApplicationStatus.withdrawn},
    ApplicationStatus.rejected: {ApplicationStatus.withdrawn},
    ApplicationStatus.withdrawn: set(),
}


def can_transition(current: ApplicationStatus, new: ApplicationStatus) -> bool:
    """Setting the same status again is always allowed."""
    return current == new or new in ALLOWED_TRANSITIONS[current]


class ApplicationTracker:
    """
    Handles the job_applications collection for one user at a time.
    Every method takes the owner's user_id; other users' records are
    reported as not found.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])
        self.jobs = JobService()
        self.companies = CompanyService()
        self.strict_transitions = get_settings().strict_status_transitions

    # --------------------------------------------------------
    # Create / read
    # --------------------------------------------------------

    def apply(self, user_id: str, job_id: str, notes: Optional[str] = None) -> dict:
        """
        Record a new application with status 'applied'.

        Raises:
            NotFoundError: job does not exist
            ConflictError: user already applied to this job
        """
        job = self.jobs.get_by_id(job_id)
        if not job:
            raise NotFoundError("Job not found")
        job_id = job["_id"]

        now = datetime.utcnow()
        doc = {
            "user_id": user_id,
            "job_id": job_id,
            "status": ApplicationStatus.applied.value,
            "applied_date": now,
            "last_updated": now,
            "notes": notes,
            "interview_date": None,
            "offer_details": None,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("You have already applied to this job")

        logger.info("User %s applied to job %s", user_id, job_id)
        return self._enrich([serialize_doc(doc)])[0]

    def get(self, user_id: str, application_id: str) -> dict:
        doc = self._find_owned(user_id, application_id)
        return self._enrich([doc])[0]

    def list_for_user(
        self,
        user_id: str,
        status: Optional[ApplicationStatus] = None,
        search: Optional[str] = None,
        sort_by: ApplicationSortField = ApplicationSortField.applied_date,
        descending: bool = True,
    ) -> dict:
        """
        List a user's applications with job/company details.

        Filtering by status and by search term (job title or company name,
        case-insensitive) happens in memory after enrichment, since the
        search spans three collections.

        Returns:
            {"applications": [...], "total": int, "status_counts": {...}}
        """
        docs = [serialize_doc(doc) for doc in self.collection.find({"user_id": user_id})]
        applications = self._enrich(docs)

        status_counts = {s.value: 0 for s in ApplicationStatus}
        for app in applications:
            status_counts[app["status"]] = status_counts.get(app["status"], 0) + 1

        if status:
            applications = [app for app in applications if app["status"] == status.value]

        if search:
            term = search.lower()
            applications = [
                app for app in applications
                if term in (app.get("job_title") or "").lower()
                or term in (app.get("company_name") or "").lower()
            ]

        applications.sort(key=lambda app: app[sort_by.value], reverse=descending)

        return {
            "applications": applications,
            "total": len(applications),
            "status_counts": status_counts,
        }

    # --------------------------------------------------------
    # Mutations (each refreshes last_updated)
    # --------------------------------------------------------

    def change_status(self, user_id: str, application_id: str, new_status: ApplicationStatus) -> dict:
        """
        Move an application to a new status.

        Raises:
            NotFoundError: application missing or not owned by the user
            ConflictError: transition not allowed while strict transitions are on
        """
        current = self._find_owned(user_id, application_id)
        current_status = ApplicationStatus(current["status"])

        if self.strict_transitions and not can_transition(current_status, new_status):
            raise ConflictError(
                f"Cannot change status from '{current_status.value}' to '{new_status.value}'"
            )

        doc = self._update(
            user_id, application_id, {"status": new_status.value},
            expected_status=current_status,
        )
        logger.info(
            "Application %s status %s -> %s",
            application_id, current_status.value, new_status.value
        )
        return doc

    def update_notes(self, user_id: str, application_id: str, notes: Optional[str]) -> dict:
        return self._update(user_id, application_id, {"notes": notes})

    def update_details(self, user_id: str, application_id: str, fields: Dict[str, Any]) -> dict:
        """Set interview date and/or offer details (only the keys given)."""
        return self._update(user_id, application_id, fields)

    def delete_by_user(self, user_id: str) -> int:
        """Remove every application of a user (account deletion)."""
        return self.collection.delete_many({"user_id": user_id}).deleted_count

    # --------------------------------------------------------
    # Internals
    # --------------------------------------------------------

    def _owned_filter(self, user_id: str, application_id: str) -> dict:
        return {**id_filter(application_id), "user_id": user_id}

    def _find_owned(self, user_id: str, application_id: str) -> dict:
        doc = self.collection.find_one(self._owned_filter(user_id, application_id))
        if not doc:
            raise NotFoundError("Application not found")
        return serialize_doc(doc)

    def _update(
        self,
        user_id: str,
        application_id: str,
        fields: Dict[str, Any],
        expected_status: Optional[ApplicationStatus] = None,
    ) -> dict:
        """
        $set fields on an owned application and return it enriched.

        With expected_status the write only matches while the stored status is
        still the one the transition was checked against.
        """
        query = self._owned_filter(user_id, application_id)
        if expected_status is not None:
            query["status"] = expected_status.value

        fields = {**fields, "last_updated": datetime.utcnow()}
        doc = self.collection.find_one_and_update(
            query,
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            if expected_status is not None and self.collection.find_one(
                self._owned_filter(user_id, application_id), {"_id": 1}
            ):
                raise ConflictError("Application status changed, please retry")
            raise NotFoundError("Application not found")
        return self._enrich([serialize_doc(doc)])[0]

    def _enrich(self, docs: List[dict]) -> List[dict]:
        """Attach job title, location and company name to application docs."""
        jobs = self.jobs.get_many(list({doc["job_id"] for doc in docs}))
        company_ids = list({str(job["company_id"]) for job in jobs.values() if job.get("company_id")})
        company_names = self.companies.get_names(company_ids)

        enriched = []
        for doc in docs:
            job = jobs.get(doc["job_id"], {})
            company_id = str(job["company_id"]) if job.get("company_id") else None
            enriched.append({
                "id": doc["_id"],
                "job_id": doc["job_id"],
                "job_title": job.get("title"),
                "company_id": company_id,
                "company_name": company_names.get(company_id),
                "location": job.get("location"),
                "status": doc["status"],
                "applied_date": doc["applied_date"],
                "last_updated": doc["last_updated"],
                "notes": doc.get("notes"),
                "interview_date": doc.get("interview_date"),
                "offer_details": doc.get("offer_details"),
            })
        return enriched


def get_application_tracker() -> ApplicationTracker:
    return ApplicationTracker()
