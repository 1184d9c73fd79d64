"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON keys are camelCase on the wire; snake_case is also accepted on input.
"""

import re
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List, Dict
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# ENUMS
# ============================================================

class WorkType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"


class ApplicationStatus(str, Enum):
    applied = "applied"
    interviewing = "interviewing"
    rejected = "rejected"
    accepted = "accepted"
    withdrawn = "withdrawn"


class ApplicationSortField(str, Enum):
    applied_date = "applied_date"
    last_updated = "last_updated"


class ProfileVisibility(str, Enum):
    public = "public"
    private = "private"
    connections = "connections"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=2, max_length=100)

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str

class UserResponse(CamelModel):
    user_id: str
    email: str
    full_name: str
    is_active: bool
    created_at: datetime


# ============================================================
# REVIEW SCHEMAS
# ============================================================

Rating = Annotated[int, Field(ge=1, le=5)]
ProConEntry = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class ReviewCreate(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    company_id: str = Field(..., min_length=1)
    rating: Rating
    title: str = Field(..., min_length=5, max_length=200)
    content: str = Field(..., min_length=20, max_length=2000)
    work_environment: Rating
    compensation: Rating
    career_growth: Rating
    pros: List[ProConEntry] = Field(default_factory=list, max_length=10)
    cons: List[ProConEntry] = Field(default_factory=list, max_length=10)
    position: Optional[str] = Field(None, max_length=100)
    work_type: Optional[WorkType] = None
    is_verified: bool = False


class ReviewSummary(CamelModel):
    id: str
    rating: int
    title: str
    created_at: datetime

class ReviewCreateResponse(CamelModel):
    message: str = "Review submitted successfully"
    review: ReviewSummary

class ReviewResponse(CamelModel):
    id: str
    company_id: str
    user_id: str
    user_name: str
    rating: int
    title: str
    content: str
    pros: List[str] = []
    cons: List[str] = []
    work_environment: int
    compensation: int
    career_growth: int
    position: Optional[str] = None
    work_type: Optional[str] = None
    is_verified: bool = False
    created_at: datetime

class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int

class ReviewListResponse(CamelModel):
    reviews: List[ReviewResponse]
    pagination: Pagination

class RatingSummaryResponse(CamelModel):
    company_id: str
    review_count: int
    average_rating: Optional[float] = None
    average_work_environment: Optional[float] = None
    average_compensation: Optional[float] = None
    average_career_growth: Optional[float] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class OfferDetails(CamelModel):
    salary: Optional[float] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=2000)

class ApplicationCreate(CamelModel):
    job_id: str = Field(..., min_length=1)
    notes: Optional[str] = Field(None, max_length=5000)

class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus

class ApplicationNotesUpdate(CamelModel):
    notes: Optional[str] = Field(None, max_length=5000)

class ApplicationDetailsUpdate(CamelModel):
    interview_date: Optional[datetime] = None
    offer_details: Optional[OfferDetails] = None

class ApplicationResponse(CamelModel):
    id: str
    job_id: str
    job_title: Optional[str] = None
    company_id: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    status: ApplicationStatus
    applied_date: datetime
    last_updated: datetime
    notes: Optional[str] = None
    interview_date: Optional[datetime] = None
    offer_details: Optional[OfferDetails] = None

class ApplicationListResponse(CamelModel):
    applications: List[ApplicationResponse]
    total: int
    status_counts: Dict[str, int]


# ============================================================
# JOB / COMPANY SCHEMAS
# ============================================================

class SalaryRange(CamelModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"

class JobResponse(CamelModel):
    id: str
    title: str
    company_id: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    remote: bool = False
    salary: Optional[SalaryRange] = None
    created_at: Optional[datetime] = None

class JobListResponse(CamelModel):
    jobs: List[JobResponse]
    total: int
    page: int
    page_size: int

class CompanyResponse(CamelModel):
    id: str
    name: str
    industry: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    ratings: RatingSummaryResponse


# ============================================================
# ACCOUNT SETTINGS SCHEMAS
# ============================================================

class ProfileUpdate(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    skills: Optional[str] = None
    interests: Optional[str] = None


PASSWORD_RULES = [
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[@$!%*?&]"), "Password must contain at least one special character"),
]


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_new_password: str

    @field_validator("new_password")
    @classmethod
    def check_strength(cls, value: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(message)
        return value

    @model_validator(mode="after")
    def check_match(self):
        if self.new_password != self.confirm_new_password:
            raise ValueError("Passwords do not match")
        return self


class NotificationSettings(CamelModel):
    email_notifications: bool
    job_alerts: bool
    application_updates: bool
    newsletter: bool
    marketing_emails: bool


class PrivacySettings(CamelModel):
    profile_visibility: ProfileVisibility
    show_email: bool
    show_resume: bool
    data_sharing: bool


class AccountDeletion(CamelModel):
    confirmation: str
    reason: Optional[str] = Field(None, max_length=1000)

    @field_validator("confirmation")
    @classmethod
    def check_confirmation(cls, value: str) -> str:
        if value != "DELETE":
            raise ValueError("Please type 'DELETE' to confirm account deletion")
        return value


class ProfileResponse(CamelModel):
    user_id: str
    full_name: str
    email: str
    skills: Optional[str] = None
    interests: Optional[str] = None

class SettingsResponse(CamelModel):
    profile: ProfileResponse
    notifications: NotificationSettings
    privacy: PrivacySettings


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
