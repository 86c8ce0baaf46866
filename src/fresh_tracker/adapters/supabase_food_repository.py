"""Supabase repository for food items."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fresh_tracker.domain.inventory import FoodDraft, FoodItem
from fresh_tracker.services.foods import FoodRepository

FOOD_COLUMNS = (
    "id, user_id, name, category, quantity, purchase_date, expiration_date, "
    "image, notes, tags"
)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for food persistence."""

    client: Client

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        """Return all foods owned by a user."""
        response = (
            self.client.table("foods")
            .select(FOOD_COLUMNS)
            .eq("user_id", str(user_id))
            .order("expiration_date", desc=False)
            .execute()
        )
        return [parse_food(row) for row in response.data or []]

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodItem | None:
        """Return a food owned by the user, if present."""
        response = (
            self.client.table("foods")
            .select(FOOD_COLUMNS)
            .eq("id", str(food_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def create_food(self, user_id: UUID, draft: FoodDraft) -> FoodItem:
        """Create a food row and return it."""
        response = (
            self.client.table("foods").insert(_serialize(user_id, draft)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food in Supabase")
        return parse_food(response.data[0])

    def create_foods(self, user_id: UUID, drafts: list[FoodDraft]) -> int:
        """Insert several food rows and return how many were stored."""
        if not drafts:
            return 0
        response = (
            self.client.table("foods")
            .insert([_serialize(user_id, draft) for draft in drafts])
            .execute()
        )
        return len(response.data or [])

    def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem:
        """Overwrite a food row and return it."""
        payload = _serialize(None, draft)
        response = (
            self.client.table("foods")
            .update(payload)
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food in Supabase")
        return parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food row."""
        self.client.table("foods").delete().eq("id", str(food_id)).execute()

    def delete_foods(self, user_id: UUID, food_ids: list[UUID]) -> None:
        """Delete several food rows owned by the user."""
        self.client.table("foods").delete().eq("user_id", str(user_id)).in_(
            "id", [str(food_id) for food_id in food_ids]
        ).execute()


def _serialize(user_id: UUID | None, draft: FoodDraft) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": draft.name,
        "category": draft.category,
        "quantity": draft.quantity,
        "purchase_date": draft.purchase_date.isoformat(),
        "expiration_date": draft.expiration_date.isoformat(),
        "image": draft.image,
        "notes": draft.notes,
        "tags": list(draft.tags),
    }
    if user_id is not None:
        payload["user_id"] = str(user_id)
    return payload


def parse_food(row: dict[str, object]) -> FoodItem:
    """Build a food item from a Supabase row."""
    return FoodItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        quantity=int(row.get("quantity") or 1),
        purchase_date=_parse_date(row["purchase_date"]),
        expiration_date=_parse_date(row["expiration_date"]),
        image=row.get("image"),
        notes=row.get("notes"),
        tags=list(row.get("tags") or []),
    )


def _parse_date(value: object) -> date:
    return date.fromisoformat(str(value)[:10])
