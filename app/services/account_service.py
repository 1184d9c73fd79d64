"""
Account Settings Service

Profile, password, notification and privacy updates, plus account
deletion. Deletion removes the user document and the user's reviews and
job applications; there is no soft-delete.
"""

from app.core.auth import hash_password, verify_password
from app.core.logging_config import get_logger
from app.schemas.schemas import (
    ProfileUpdate, PasswordChange, NotificationSettings, PrivacySettings, AccountDeletion
)
from app.services.application_tracker import ApplicationTracker
from app.services.errors import ConflictError, InvalidInputError, NotFoundError
from app.services.mongo_service import UserService, DEFAULT_NOTIFICATIONS, DEFAULT_PRIVACY
from app.services.review_service import ReviewService

logger = get_logger(__name__)


class AccountService:

    def __init__(self):
        self.users = UserService()

    def _get_user(self, user_id: str) -> dict:
        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_settings(self, user_id: str) -> dict:
        """Profile plus notification/privacy settings, with defaults filled in."""
        user = self._get_user(user_id)
        profile = user.get("profile") or {}
        settings = user.get("settings") or {}
        return {
            "profile": {
                "user_id": user["_id"],
                "full_name": user.get("full_name"),
                "email": user["email"],
                "skills": profile.get("skills"),
                "interests": profile.get("interests"),
            },
            "notifications": {**DEFAULT_NOTIFICATIONS, **settings.get("notifications", {})},
            "privacy": {**DEFAULT_PRIVACY, **settings.get("privacy", {})},
        }

    def update_profile(self, user_id: str, data: ProfileUpdate) -> None:
        email = data.email.lower()
        owner = self.users.get_by_email(email)
        if owner and owner["_id"] != user_id:
            raise ConflictError("Email is already in use")

        self.users.update_fields(user_id, {
            "full_name": data.full_name,
            "email": email,
            "profile.skills": data.skills,
            "profile.interests": data.interests,
        })

    def change_password(self, user_id: str, data: PasswordChange) -> None:
        user = self._get_user(user_id)
        if not verify_password(data.current_password, user["password_hash"]):
            raise InvalidInputError("Current password is incorrect")

        self.users.update_fields(user_id, {"password_hash": hash_password(data.new_password)})
        logger.info("Password changed for user %s", user_id)

    def update_notifications(self, user_id: str, data: NotificationSettings) -> None:
        self.users.update_fields(user_id, {"settings.notifications": data.model_dump()})

    def update_privacy(self, user_id: str, data: PrivacySettings) -> None:
        self.users.update_fields(user_id, {"settings.privacy": data.model_dump(mode="json")})

    def delete_account(self, user_id: str, data: AccountDeletion) -> None:
        self._get_user(user_id)

        reviews_removed = ReviewService().delete_by_user(user_id)
        applications_removed = ApplicationTracker().delete_by_user(user_id)
        self.users.delete(user_id)

        logger.info(
            "Deleted account %s (%d reviews, %d applications). Reason: %s",
            user_id, reviews_removed, applications_removed, data.reason or "not given"
        )


def get_account_service() -> AccountService:
    return AccountService()
