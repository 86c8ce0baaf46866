"""Pydantic models for API request bodies."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from fresh_tracker.domain.inventory import FoodDraft

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class FoodPayload(BaseModel):
    """Food fields submitted on create and update."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    purchase_date: date
    expiration_date: date
    image: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

    def to_draft(self) -> FoodDraft:
        return FoodDraft(
            name=self.name,
            category=self.category,
            quantity=self.quantity,
            purchase_date=self.purchase_date,
            expiration_date=self.expiration_date,
            image=self.image,
            notes=self.notes,
            tags=self.tags,
        )


class BatchDeletePayload(BaseModel):
    """Identifiers to delete in one request."""

    ids: list[UUID]


class EmailTestPayload(BaseModel):
    """Address to send a binding test email to."""

    email: str = Field(min_length=3, pattern=EMAIL_PATTERN)


class ProfilePayload(BaseModel):
    """Username and reminder settings; an omitted username is left unchanged."""

    username: str | None = Field(default=None, min_length=1)
    notify_email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    email_notifications_enabled: bool = False
