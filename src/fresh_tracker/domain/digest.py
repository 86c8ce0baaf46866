"""Expiration digest models."""

from dataclasses import dataclass
from datetime import date, timedelta

from fresh_tracker.domain.inventory import FoodItem, UserProfile

EMAIL_THRESHOLD = timedelta(days=3)


def is_digest_due(expiration_date: date, today: date) -> bool:
    """Return True when the food expires within the email threshold."""
    return expiration_date <= today + EMAIL_THRESHOLD


def days_left(expiration_date: date, today: date) -> int:
    """Whole days until expiration; negative once the date has passed."""
    return (expiration_date - today).days


def status_label(days: int) -> str:
    """Human-readable freshness status for a day count."""
    if days < 0:
        return "expired"
    return f"{days} days remaining"


@dataclass(frozen=True)
class DigestLine:
    """One expiring food item in a digest."""

    name: str
    category: str
    expiration_date: date
    days_left: int

    @property
    def expired(self) -> bool:
        return self.days_left < 0

    @property
    def status(self) -> str:
        return status_label(self.days_left)


@dataclass(frozen=True)
class Digest:
    """Aggregated expiring items for a single recipient."""

    recipient: str
    username: str
    lines: list[DigestLine]


def build_digest(user: UserProfile, foods: list[FoodItem], today: date) -> Digest:
    """Build a digest for the user's notification address."""
    if not user.notify_email:
        raise ValueError(f"User {user.id} has no notification email")
    lines = [
        DigestLine(
            name=food.name,
            category=food.category,
            expiration_date=food.expiration_date,
            days_left=days_left(food.expiration_date, today),
        )
        for food in foods
    ]
    return Digest(recipient=user.notify_email, username=user.username, lines=lines)
