"""Domain models for food inventory and return records."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

AUTO_RECORD_REASON = "auto: nearing expiration"
DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class FoodItem:
    """A food item owned by exactly one user."""

    id: UUID
    user_id: UUID
    name: str
    category: str
    quantity: int
    purchase_date: date
    expiration_date: date
    image: str | None = None
    notes: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FoodDraft:
    """User-supplied food fields for create and update."""

    name: str
    category: str
    quantity: int
    purchase_date: date
    expiration_date: date
    image: str | None = None
    notes: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecordSnapshot:
    """Food fields copied onto a return record."""

    food_id: UUID | None
    food_name: str
    quantity: int
    return_date: date
    image: str | None
    reason: str = AUTO_RECORD_REASON

    @classmethod
    def from_food(cls, food: FoodItem) -> "RecordSnapshot":
        """Snapshot the current state of a food item."""
        return cls(
            food_id=food.id,
            food_name=food.name,
            quantity=food.quantity,
            return_date=food.expiration_date,
            image=food.image,
        )


@dataclass(frozen=True)
class ReturnRecord:
    """A return/consume record with a snapshot of the originating food."""

    id: UUID
    user_id: UUID
    food_id: UUID | None
    food_name: str
    quantity: int
    reason: str
    return_date: date
    image: str | None
    timestamp: datetime

    @property
    def is_auto_generated(self) -> bool:
        return self.reason == AUTO_RECORD_REASON


@dataclass(frozen=True)
class UserProfile:
    """User fields relevant to expiration reminders."""

    id: UUID
    username: str
    notify_email: str | None
    email_notifications_enabled: bool

    @property
    def wants_digest(self) -> bool:
        """Return True when the user opted in and has an address configured."""
        return self.email_notifications_enabled and bool(self.notify_email)


@dataclass(frozen=True)
class UserInventory:
    """A user together with every food they own."""

    user: UserProfile
    foods: list[FoodItem]
