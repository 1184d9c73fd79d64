"""
Job Routes

GET /jobs - List job postings with title search and pagination
GET /jobs/{job_id} - Get job details
"""

from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from app.services.mongo_service import JobService
from app.schemas.schemas import JobResponse, JobListResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _to_response(doc: dict) -> JobResponse:
    company_id = doc.get("company_id")
    return JobResponse(
        id=doc["_id"], title=doc["title"],
        company_id=str(company_id) if company_id else None,
        description=doc.get("description"), location=doc.get("location"),
        job_type=doc.get("job_type"), remote=doc.get("remote", False),
        salary=doc.get("salary"), created_at=doc.get("created_at")
    )


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50, alias="pageSize"),
    search: Optional[str] = Query(None, description="Search in title")
):
    """List job postings, newest first."""
    docs, total = JobService().search(search, page, page_size)
    return JobListResponse(
        jobs=[_to_response(doc) for doc in docs],
        total=total, page=page, page_size=page_size
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str):
    """Get a single job posting."""
    doc = JobService().get_by_id(job_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Job not found")
    return _to_response(doc)
