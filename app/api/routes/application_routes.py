"""
Application Tracking Routes

POST /applications - Apply to a job
GET /applications - List my applications (filter by status, search, sort)
GET /applications/{id} - Get one application
PUT /applications/{id}/status - Change application status
PUT /applications/{id}/notes - Edit notes
PUT /applications/{id} - Edit interview date / offer details
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.core.auth import get_current_user
from app.services.application_tracker import get_application_tracker
from app.services.errors import ServiceError, raise_http
from app.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationNotesUpdate,
    ApplicationDetailsUpdate, ApplicationResponse, ApplicationListResponse,
    ApplicationStatus, ApplicationSortField
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(data: ApplicationCreate, user: dict = Depends(get_current_user)):
    """Record an application to a job posting."""
    try:
        return get_application_tracker().apply(user["user_id"], data.job_id, data.notes)
    except ServiceError as e:
        raise_http(e)


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    status: Optional[ApplicationStatus] = Query(None),
    search: Optional[str] = Query(None, description="Search job title or company name"),
    sort_by: ApplicationSortField = Query(ApplicationSortField.applied_date, alias="sortBy"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    user: dict = Depends(get_current_user)
):
    """List the current user's applications."""
    return get_application_tracker().list_for_user(
        user["user_id"], status=status, search=search,
        sort_by=sort_by, descending=(order == "desc")
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str, user: dict = Depends(get_current_user)):
    try:
        return get_application_tracker().get(user["user_id"], application_id)
    except ServiceError as e:
        raise_http(e)


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    user: dict = Depends(get_current_user)
):
    """Change status. Disallowed transitions return 409."""
    try:
        return get_application_tracker().change_status(user["user_id"], application_id, update.status)
    except ServiceError as e:
        raise_http(e)


@router.put("/{application_id}/notes", response_model=ApplicationResponse)
async def update_notes(
    application_id: str,
    update: ApplicationNotesUpdate,
    user: dict = Depends(get_current_user)
):
    try:
        return get_application_tracker().update_notes(user["user_id"], application_id, update.notes)
    except ServiceError as e:
        raise_http(e)


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_details(
    application_id: str,
    update: ApplicationDetailsUpdate,
    user: dict = Depends(get_current_user)
):
    """Update interview date and/or offer details. Omitted fields are left unchanged."""
    fields = update.model_dump(exclude_unset=True)
    try:
        return get_application_tracker().update_details(user["user_id"], application_id, fields)
    except ServiceError as e:
        raise_http(e)
