"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from fresh_tracker.adapters.smtp_email_client import EmailClient
from fresh_tracker.config import Settings
from fresh_tracker.containers import AppContainer
from fresh_tracker.domain.inventory import (
    AUTO_RECORD_REASON,
    FoodDraft,
    FoodItem,
    RecordSnapshot,
    ReturnRecord,
    UserInventory,
    UserProfile,
)
from fresh_tracker.services.foods import FoodRepository, FoodService
from fresh_tracker.services.notifications import NotificationService
from fresh_tracker.services.records import (
    RecordGenerationService,
    RecordRepository,
    RecordService,
)
from fresh_tracker.services.scheduler import SweepScheduler
from fresh_tracker.services.sweep import ExpirationSweep
from fresh_tracker.services.users import UserRepository, UserService

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
TODAY = NOW.date()


def make_food(  # noqa: PLR0913
    user_id: UUID,
    expires_in_days: int,
    name: str = "Milk",
    category: str = "Dairy",
    quantity: int = 1,
    today: date = TODAY,
) -> FoodItem:
    """Build a food expiring a number of days from `today`."""
    return FoodItem(
        id=uuid4(),
        user_id=user_id,
        name=name,
        category=category,
        quantity=quantity,
        purchase_date=today - timedelta(days=3),
        expiration_date=today + timedelta(days=expires_in_days),
    )


def make_draft(expires_in_days: int, name: str = "Milk", today: date = TODAY):
    return FoodDraft(
        name=name,
        category="Dairy",
        quantity=2,
        purchase_date=today - timedelta(days=1),
        expiration_date=today + timedelta(days=expires_in_days),
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)

    def add(self, food: FoodItem) -> FoodItem:
        self.foods[food.id] = food
        return food

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        return [food for food in self.foods.values() if food.user_id == user_id]

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodItem | None:
        food = self.foods.get(food_id)
        if food is None or food.user_id != user_id:
            return None
        return food

    def create_food(self, user_id: UUID, draft: FoodDraft) -> FoodItem:
        return self.add(_food_from_draft(uuid4(), user_id, draft))

    def create_foods(self, user_id: UUID, drafts: list[FoodDraft]) -> int:
        for draft in drafts:
            self.create_food(user_id, draft)
        return len(drafts)

    def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem:
        current = self.foods[food_id]
        return self.add(_food_from_draft(food_id, current.user_id, draft))

    def delete_food(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)

    def delete_foods(self, user_id: UUID, food_ids: list[UUID]) -> None:
        for food_id in food_ids:
            food = self.foods.get(food_id)
            if food and food.user_id == user_id:
                del self.foods[food_id]


def _food_from_draft(food_id: UUID, user_id: UUID, draft: FoodDraft) -> FoodItem:
    return FoodItem(
        id=food_id,
        user_id=user_id,
        name=draft.name,
        category=draft.category,
        quantity=draft.quantity,
        purchase_date=draft.purchase_date,
        expiration_date=draft.expiration_date,
        image=draft.image,
        notes=draft.notes,
        tags=list(draft.tags),
    )


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository for tests."""

    records: dict[UUID, ReturnRecord] = field(default_factory=dict)

    def add(self, record: ReturnRecord) -> ReturnRecord:
        self.records[record.id] = record
        return record

    def for_user(self, user_id: UUID) -> list[ReturnRecord]:
        return [r for r in self.records.values() if r.user_id == user_id]

    def find_recent_records(
        self,
        user_id: UUID,
        food_name: str,
        since: datetime,
        return_date: date | None = None,
    ) -> list[ReturnRecord]:
        return [
            record
            for record in self.records.values()
            if record.user_id == user_id
            and record.food_name == food_name
            and record.timestamp >= since
            and (return_date is None or record.return_date == return_date)
        ]

    def create_record(
        self, user_id: UUID, snapshot: RecordSnapshot, created_at: datetime
    ) -> ReturnRecord:
        return self.add(
            ReturnRecord(
                id=uuid4(),
                user_id=user_id,
                food_id=snapshot.food_id,
                food_name=snapshot.food_name,
                quantity=snapshot.quantity,
                reason=snapshot.reason,
                return_date=snapshot.return_date,
                image=snapshot.image,
                timestamp=created_at,
            )
        )

    def update_auto_records(
        self, user_id: UUID, food_id: UUID, snapshot: RecordSnapshot
    ) -> int:
        updated = 0
        for record in list(self.records.values()):
            if (
                record.user_id == user_id
                and record.food_id == food_id
                and record.reason == AUTO_RECORD_REASON
            ):
                self.add(
                    ReturnRecord(
                        id=record.id,
                        user_id=record.user_id,
                        food_id=record.food_id,
                        food_name=snapshot.food_name,
                        quantity=snapshot.quantity,
                        reason=record.reason,
                        return_date=snapshot.return_date,
                        image=snapshot.image,
                        timestamp=record.timestamp,
                    )
                )
                updated += 1
        return updated

    def list_records(self, user_id: UUID) -> list[ReturnRecord]:
        return sorted(
            self.for_user(user_id), key=lambda record: record.timestamp, reverse=True
        )

    def get_record(self, record_id: UUID) -> ReturnRecord | None:
        return self.records.get(record_id)

    def delete_record(self, record_id: UUID) -> None:
        self.records.pop(record_id, None)

    def delete_records(self, user_id: UUID, record_ids: list[UUID]) -> None:
        for record_id in record_ids:
            record = self.records.get(record_id)
            if record and record.user_id == user_id:
                del self.records[record_id]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository reading foods from a food repository."""

    food_repository: InMemoryFoodRepository
    users: list[UserProfile] = field(default_factory=list)

    def add_user(
        self,
        username: str = "alice",
        notify_email: str | None = "alice@example.com",
        enabled: bool = True,
    ) -> UserProfile:
        user = UserProfile(
            id=uuid4(),
            username=username,
            notify_email=notify_email,
            email_notifications_enabled=enabled,
        )
        self.users.append(user)
        return user

    def list_users_with_foods(self) -> list[UserInventory]:
        return [
            UserInventory(user=user, foods=self.food_repository.list_foods(user.id))
            for user in self.users
        ]

    def update_profile(
        self,
        user_id: UUID,
        username: str | None,
        notify_email: str | None,
        email_notifications_enabled: bool,
    ) -> UserProfile | None:
        for index, user in enumerate(self.users):
            if user.id == user_id:
                updated = replace(
                    user,
                    username=username if username is not None else user.username,
                    notify_email=notify_email,
                    email_notifications_enabled=email_notifications_enabled,
                )
                self.users[index] = updated
                return updated
        return None


@dataclass
class FakeEmailClient(EmailClient):
    """Fake email client that records messages."""

    sent: list[tuple[str, str, str]] = field(default_factory=list)
    failing_recipients: set[str] = field(default_factory=set)

    async def send_email(self, to: str, subject: str, html: str) -> None:
        if to in self.failing_recipients:
            raise ConnectionError(f"SMTP refused {to}")
        self.sent.append((to, subject, html))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        smtp_username="bot@example.com",
        smtp_password="secret",
        scheduler_enabled=False,
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def user_repository(
    food_repository: InMemoryFoodRepository,
) -> InMemoryUserRepository:
    return InMemoryUserRepository(food_repository=food_repository)


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def record_generation(
    record_repository: InMemoryRecordRepository,
) -> RecordGenerationService:
    return RecordGenerationService(record_repository)


@pytest.fixture
def sweep(
    user_repository: InMemoryUserRepository,
    record_generation: RecordGenerationService,
    email_client: FakeEmailClient,
) -> ExpirationSweep:
    return ExpirationSweep(
        user_repository=user_repository,
        record_generation=record_generation,
        notification_service=NotificationService(email_client),
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    record_repository: InMemoryRecordRepository,
    record_generation: RecordGenerationService,
    user_repository: InMemoryUserRepository,
    email_client: FakeEmailClient,
    sweep: ExpirationSweep,
) -> AppContainer:
    scheduler = SweepScheduler(sweep=sweep, run_at=settings.sweep_time)

    async def close_resources() -> None:
        await scheduler.stop()

    return AppContainer(
        settings=settings,
        food_service=FoodService(food_repository, record_generation),
        record_service=RecordService(record_repository),
        user_service=UserService(user_repository),
        record_generation=record_generation,
        notification_service=sweep.notification_service,
        sweep=sweep,
        scheduler=scheduler,
        close_resources=close_resources,
    )
