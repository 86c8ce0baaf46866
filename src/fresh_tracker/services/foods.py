"""Food inventory service."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from fresh_tracker.domain.inventory import DEFAULT_CATEGORY, FoodDraft, FoodItem
from fresh_tracker.domain.records import ManualContext
from fresh_tracker.services.records import RecordGenerationService, local_now

logger = logging.getLogger(__name__)


class FoodNotFoundError(LookupError):
    """Raised when a food does not exist or belongs to another user."""


class FoodRepository(Protocol):
    """Persistence interface for food items."""

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        """Return all foods owned by a user."""

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodItem | None:
        """Return a food owned by the user, if present."""

    def create_food(self, user_id: UUID, draft: FoodDraft) -> FoodItem:
        """Create a food and return it."""

    def create_foods(self, user_id: UUID, drafts: list[FoodDraft]) -> int:
        """Create several foods and return how many were stored."""

    def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem:
        """Overwrite a food's fields and return it."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food."""

    def delete_foods(self, user_id: UUID, food_ids: list[UUID]) -> None:
        """Delete several foods owned by a user."""


@dataclass
class FoodService:
    """Food CRUD with automatic return-record hooks."""

    repository: FoodRepository
    record_generation: RecordGenerationService

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        return self.repository.list_foods(user_id)

    def add_food(
        self, user_id: UUID, draft: FoodDraft, now: datetime | None = None
    ) -> FoodItem:
        """Create a food and generate a record immediately if it is due."""
        food = self.repository.create_food(user_id, draft)
        try:
            self.record_generation.generate_if_due(
                food, user_id, ManualContext(), now=now
            )
        except Exception:
            logger.exception(
                "Failed to auto-generate record",
                extra={"user_id": str(user_id), "food_id": str(food.id)},
            )
        return food

    def update_food(
        self,
        user_id: UUID,
        food_id: UUID,
        draft: FoodDraft,
        now: datetime | None = None,
    ) -> FoodItem:
        """Update a food, then sync or generate its automatic record."""
        if self.repository.get_food(user_id, food_id) is None:
            raise FoodNotFoundError(food_id)
        food = self.repository.update_food(food_id, draft)
        try:
            self.record_generation.sync_or_generate(food, user_id, now=now)
        except Exception:
            logger.exception(
                "Failed to sync/generate records on update",
                extra={"user_id": str(user_id), "food_id": str(food_id)},
            )
        return food

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food; its records are kept."""
        if self.repository.get_food(user_id, food_id) is None:
            raise FoodNotFoundError(food_id)
        self.repository.delete_food(food_id)

    def batch_delete(self, user_id: UUID, food_ids: list[UUID]) -> None:
        if food_ids:
            self.repository.delete_foods(user_id, food_ids)

    def batch_import(
        self,
        user_id: UUID,
        rows: list[dict[str, object]],
        today: date | None = None,
    ) -> int:
        """Import decoded spreadsheet rows, skipping those without name or expiry."""
        import_day = today or local_now().date()
        drafts = []
        for row in rows:
            draft = _draft_from_row(row, import_day)
            if draft is None:
                logger.info("Skipping invalid import row", extra={"row": row})
                continue
            drafts.append(draft)
        if not drafts:
            raise ValueError("No valid foods found")
        return self.repository.create_foods(user_id, drafts)


def _draft_from_row(row: dict[str, object], today: date) -> FoodDraft | None:
    name = str(row.get("name") or "").strip()
    expiration = _parse_date(row.get("expiration_date"))
    if not name or expiration is None:
        return None
    purchase = _parse_date(row.get("purchase_date")) or today
    try:
        quantity = int(row.get("quantity") or 1)
    except (TypeError, ValueError):
        quantity = 1
    return FoodDraft(
        name=name,
        category=str(row.get("category") or DEFAULT_CATEGORY),
        quantity=quantity if quantity > 0 else 1,
        purchase_date=purchase,
        expiration_date=expiration,
        notes=str(row.get("notes") or ""),
        tags=_parse_tags(row.get("tags")),
    )


def _parse_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def _parse_tags(value: object) -> list[str]:
    if isinstance(value, list):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return []
