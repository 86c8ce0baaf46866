"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fresh_tracker.adapters.supabase_food_repository import FOOD_COLUMNS, parse_food
from fresh_tracker.domain.inventory import UserInventory, UserProfile
from fresh_tracker.services.users import UserRepository

PROFILE_COLUMNS = "id, username, notify_email, email_notifications_enabled"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user reads and profile updates."""

    client: Client

    def list_users_with_foods(self) -> list[UserInventory]:
        """Return every user with their foods embedded in one request."""
        response = (
            self.client.table("users")
            .select(f"{PROFILE_COLUMNS}, foods({FOOD_COLUMNS})")
            .execute()
        )
        return [
            UserInventory(
                user=_parse_profile(row),
                foods=[parse_food(food) for food in row.get("foods") or []],
            )
            for row in response.data or []
        ]

    def update_profile(
        self,
        user_id: UUID,
        username: str | None,
        notify_email: str | None,
        email_notifications_enabled: bool,
    ) -> UserProfile | None:
        """Write profile fields; a None username keeps the stored one."""
        payload: dict[str, object] = {
            "notify_email": notify_email,
            "email_notifications_enabled": email_notifications_enabled,
        }
        if username is not None:
            payload["username"] = username
        response = (
            self.client.table("users")
            .update(payload)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        username=str(row.get("username", "")),
        notify_email=row.get("notify_email"),
        email_notifications_enabled=bool(row.get("email_notifications_enabled", False)),
    )
