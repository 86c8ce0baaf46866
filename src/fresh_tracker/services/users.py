"""User profile and notification settings."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fresh_tracker.domain.inventory import UserInventory, UserProfile

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when a user does not exist."""


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def list_users_with_foods(self) -> list[UserInventory]:
        """Return every user together with all foods they own."""

    def update_profile(
        self,
        user_id: UUID,
        username: str | None,
        notify_email: str | None,
        email_notifications_enabled: bool,
    ) -> UserProfile | None:
        """Write profile fields and return the user, or None if missing.

        A `username` of None leaves the stored name unchanged.
        """


@dataclass
class UserService:
    """Application service for a user's reminder settings."""

    repository: UserRepository

    def update_profile(
        self,
        user_id: UUID,
        username: str | None,
        notify_email: str | None,
        email_notifications_enabled: bool,
    ) -> UserProfile:
        """Update the username, notification address and digest opt-in."""
        address = notify_email.strip() if notify_email else None
        if email_notifications_enabled and not address:
            raise ValueError("A notification email is required to enable reminders")
        profile = self.repository.update_profile(
            user_id,
            username=username,
            notify_email=address,
            email_notifications_enabled=email_notifications_enabled,
        )
        if profile is None:
            raise UserNotFoundError(user_id)
        logger.info(
            "Updated notification settings",
            extra={"user_id": str(user_id), "enabled": email_notifications_enabled},
        )
        return profile
