"""
Review Routes

POST /reviews - Submit a company review (one per user per company)
GET /reviews?companyId=&page=&limit= - List a company's reviews, newest first
GET /reviews/summary?companyId= - Average ratings for a company
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from app.core.auth import get_current_user
from app.core.config import get_settings
from app.services.errors import ServiceError, raise_http
from app.services.review_service import get_review_service
from app.schemas.schemas import (
    ReviewCreate, ReviewCreateResponse, ReviewListResponse, RatingSummaryResponse
)

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _require_company_id(company_id: Optional[str]) -> str:
    if not company_id or not company_id.strip():
        raise HTTPException(status_code=400, detail="Company ID is required")
    return company_id.strip()


@router.post("", response_model=ReviewCreateResponse, status_code=201)
async def submit_review(review: ReviewCreate, user: dict = Depends(get_current_user)):
    """Submit a review. Each user may review a company only once."""
    try:
        summary = get_review_service().submit(user["user_id"], review)
    except ServiceError as e:
        raise_http(e)

    return ReviewCreateResponse(review=summary)


@router.get("", response_model=ReviewListResponse)
async def list_reviews(
    company_id: Optional[str] = Query(None, alias="companyId"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
):
    """List reviews for a company with pagination."""
    company_id = _require_company_id(company_id)
    limit = min(limit, get_settings().review_page_size_max)
    return get_review_service().list_for_company(company_id, page=page, limit=limit)


@router.get("/summary", response_model=RatingSummaryResponse)
async def review_summary(company_id: Optional[str] = Query(None, alias="companyId")):
    """Review count and average ratings for a company."""
    company_id = _require_company_id(company_id)
    return get_review_service().rating_summary(company_id)
