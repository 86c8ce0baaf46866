"""Duplicate-check contexts and outcomes for automatic return records."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum
from uuid import UUID

from fresh_tracker.domain.inventory import FoodItem, ReturnRecord

RETURN_THRESHOLD = timedelta(days=2)


@dataclass(frozen=True)
class RecordLookup:
    """Filter used to find records that suppress a new one."""

    user_id: UUID
    food_name: str
    since: datetime
    return_date: date | None = None


@dataclass(frozen=True)
class SweepContext:
    """Daily sweep: any record for the same food name in the last five days."""

    lookback: timedelta = timedelta(days=5)
    name: str = "sweep"

    def lookup(self, food: FoodItem, user_id: UUID, now: datetime) -> RecordLookup:
        return RecordLookup(
            user_id=user_id,
            food_name=food.name,
            since=now - self.lookback,
        )


@dataclass(frozen=True)
class ManualContext:
    """Food add/update: same name and return date within the last twelve hours."""

    lookback: timedelta = timedelta(hours=12)
    name: str = "manual"

    def lookup(self, food: FoodItem, user_id: UUID, now: datetime) -> RecordLookup:
        return RecordLookup(
            user_id=user_id,
            food_name=food.name,
            since=now - self.lookback,
            return_date=food.expiration_date,
        )


GenerationContext = SweepContext | ManualContext


class RecordOutcome(StrEnum):
    """Result of evaluating a food for an automatic record."""

    GENERATED = "generated"
    DUPLICATE = "duplicate"
    NOT_DUE = "not_due"
    SYNCED = "synced"


@dataclass(frozen=True)
class RecordDecision:
    """Outcome plus the created record or the number of synced records."""

    outcome: RecordOutcome
    record: ReturnRecord | None = None
    synced: int = 0


def is_return_due(expiration_date: date, today: date) -> bool:
    """Return True when the food expires within the return threshold."""
    return expiration_date <= today + RETURN_THRESHOLD
