"""Return record generation and management."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from fresh_tracker.domain.inventory import FoodItem, RecordSnapshot, ReturnRecord
from fresh_tracker.domain.records import (
    GenerationContext,
    ManualContext,
    RecordDecision,
    RecordOutcome,
    is_return_due,
)

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """Raised when a record does not exist or belongs to another user."""


class RecordRepository(Protocol):
    """Persistence interface for return records."""

    def find_recent_records(
        self,
        user_id: UUID,
        food_name: str,
        since: datetime,
        return_date: date | None = None,
    ) -> list[ReturnRecord]:
        """Return records for a food name created at or after `since`."""

    def create_record(
        self, user_id: UUID, snapshot: RecordSnapshot, created_at: datetime
    ) -> ReturnRecord:
        """Create a record from a snapshot and return it."""

    def update_auto_records(
        self, user_id: UUID, food_id: UUID, snapshot: RecordSnapshot
    ) -> int:
        """Overwrite auto-generated records for a food and return the count."""

    def list_records(self, user_id: UUID) -> list[ReturnRecord]:
        """Return a user's records, newest first."""

    def get_record(self, record_id: UUID) -> ReturnRecord | None:
        """Return a record by id, if present."""

    def delete_record(self, record_id: UUID) -> None:
        """Delete a record."""

    def delete_records(self, user_id: UUID, record_ids: list[UUID]) -> None:
        """Delete several records owned by a user."""


def local_now() -> datetime:
    """Current instant in the server's local timezone."""
    return datetime.now().astimezone()


@dataclass
class RecordGenerationService:
    """Decides whether a food warrants an automatic return record."""

    repository: RecordRepository

    def generate_if_due(
        self,
        food: FoodItem,
        user_id: UUID,
        context: GenerationContext,
        now: datetime | None = None,
    ) -> RecordDecision:
        """Create a record when the food is close to expiry and not a duplicate."""
        current = now or local_now()
        if not is_return_due(food.expiration_date, current.date()):
            return RecordDecision(RecordOutcome.NOT_DUE)

        lookup = context.lookup(food, user_id, current)
        existing = self.repository.find_recent_records(
            user_id=lookup.user_id,
            food_name=lookup.food_name,
            since=lookup.since,
            return_date=lookup.return_date,
        )
        if existing:
            logger.info(
                "Skipped duplicate record generation for %s (context: %s)",
                food.name,
                context.name,
                extra={"user_id": str(user_id), "food_id": str(food.id)},
            )
            return RecordDecision(RecordOutcome.DUPLICATE)

        record = self.repository.create_record(
            user_id, RecordSnapshot.from_food(food), created_at=current
        )
        logger.info("Record generated for %s (user %s)", food.name, user_id)
        return RecordDecision(RecordOutcome.GENERATED, record=record)

    def sync_or_generate(
        self, food: FoodItem, user_id: UUID, now: datetime | None = None
    ) -> RecordDecision:
        """Refresh existing auto records for an edited food, else run the policy."""
        synced = self.repository.update_auto_records(
            user_id, food.id, RecordSnapshot.from_food(food)
        )
        if synced:
            logger.info("Synced %d existing records for food %s", synced, food.name)
            return RecordDecision(RecordOutcome.SYNCED, synced=synced)
        return self.generate_if_due(food, user_id, ManualContext(), now=now)


@dataclass
class RecordService:
    """Application service for listing and deleting records."""

    repository: RecordRepository

    def list_records(self, user_id: UUID) -> list[ReturnRecord]:
        return self.repository.list_records(user_id)

    def delete_record(self, user_id: UUID, record_id: UUID) -> None:
        """Delete a record after checking ownership."""
        record = self.repository.get_record(record_id)
        if record is None or record.user_id != user_id:
            raise RecordNotFoundError(record_id)
        self.repository.delete_record(record_id)

    def batch_delete(self, user_id: UUID, record_ids: list[UUID]) -> None:
        if record_ids:
            self.repository.delete_records(user_id, record_ids)
