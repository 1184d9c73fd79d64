"""
Account Settings Routes

GET /user/settings - Profile, notification and privacy settings
PUT /user/profile - Update name, email, skills, interests
PUT /user/password - Change password
PUT /user/notifications - Update notification preferences
PUT /user/privacy - Update privacy preferences
DELETE /user/delete - Delete account (body: {"confirmation": "DELETE"})
"""

from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.services.account_service import get_account_service
from app.services.errors import ServiceError, raise_http
from app.schemas.schemas import (
    ProfileUpdate, PasswordChange, NotificationSettings, PrivacySettings,
    AccountDeletion, SettingsResponse, MessageResponse
)

router = APIRouter(prefix="/user", tags=["Account Settings"])


@router.get("/settings", response_model=SettingsResponse)
async def get_settings(user: dict = Depends(get_current_user)):
    try:
        return get_account_service().get_settings(user["user_id"])
    except ServiceError as e:
        raise_http(e)


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: ProfileUpdate, user: dict = Depends(get_current_user)):
    try:
        get_account_service().update_profile(user["user_id"], data)
    except ServiceError as e:
        raise_http(e)
    return MessageResponse(message="Your profile has been successfully updated.")


@router.put("/password", response_model=MessageResponse)
async def change_password(data: PasswordChange, user: dict = Depends(get_current_user)):
    try:
        get_account_service().change_password(user["user_id"], data)
    except ServiceError as e:
        raise_http(e)
    return MessageResponse(message="Your password has been successfully changed.")


@router.put("/notifications", response_model=MessageResponse)
async def update_notifications(data: NotificationSettings, user: dict = Depends(get_current_user)):
    get_account_service().update_notifications(user["user_id"], data)
    return MessageResponse(message="Your notification preferences have been saved.")


@router.put("/privacy", response_model=MessageResponse)
async def update_privacy(data: PrivacySettings, user: dict = Depends(get_current_user)):
    get_account_service().update_privacy(user["user_id"], data)
    return MessageResponse(message="Your privacy preferences have been saved.")


@router.delete("/delete", response_model=MessageResponse)
async def delete_account(data: AccountDeletion, user: dict = Depends(get_current_user)):
    """Permanently delete the account with its reviews and applications."""
    try:
        get_account_service().delete_account(user["user_id"], data)
    except ServiceError as e:
        raise_http(e)
    return MessageResponse(message="Your account has been permanently deleted.")
