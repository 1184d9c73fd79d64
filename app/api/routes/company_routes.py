"""
Company Routes

GET /companies/{company_id} - Company details with review summary
"""

from fastapi import APIRouter, HTTPException

from app.services.mongo_service import CompanyService
from app.services.review_service import get_review_service
from app.schemas.schemas import CompanyResponse

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: str):
    """Get a company and its average review ratings."""
    doc = CompanyService().get_by_id(company_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Company not found")

    ratings = get_review_service().rating_summary(doc["_id"])

    return CompanyResponse(
        id=doc["_id"], name=doc["name"], industry=doc.get("industry"),
        location=doc.get("location"), website=doc.get("website"),
        description=doc.get("description"), ratings=ratings
    )
