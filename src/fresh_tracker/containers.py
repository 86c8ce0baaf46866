"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fresh_tracker.adapters.smtp_email_client import SmtpEmailClient
from fresh_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from fresh_tracker.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from fresh_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fresh_tracker.config import Settings
from fresh_tracker.services.foods import FoodService
from fresh_tracker.services.notifications import NotificationService
from fresh_tracker.services.records import RecordGenerationService, RecordService
from fresh_tracker.services.scheduler import SweepScheduler
from fresh_tracker.services.sweep import ExpirationSweep
from fresh_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    record_service: RecordService
    user_service: UserService
    record_generation: RecordGenerationService
    notification_service: NotificationService
    sweep: ExpirationSweep
    scheduler: SweepScheduler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    record_repository = SupabaseRecordRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)

    record_generation = RecordGenerationService(record_repository)
    email_client = SmtpEmailClient.create(
        host=resolved_settings.smtp_host,
        port=resolved_settings.smtp_port,
        username=resolved_settings.smtp_username,
        password=resolved_settings.smtp_password,
        sender=resolved_settings.resolved_sender,
        use_ssl=resolved_settings.smtp_use_ssl,
    )
    notification_service = NotificationService(
        email_client=email_client,
        digest_subject=resolved_settings.email_subject,
    )
    sweep = ExpirationSweep(
        user_repository=user_repository,
        record_generation=record_generation,
        notification_service=notification_service,
    )
    scheduler = SweepScheduler(
        sweep=sweep,
        run_at=resolved_settings.sweep_time,
        poll_seconds=resolved_settings.scheduler_poll_seconds,
    )

    async def close_resources() -> None:
        await scheduler.stop()

    return AppContainer(
        settings=resolved_settings,
        food_service=FoodService(food_repository, record_generation),
        record_service=RecordService(record_repository),
        user_service=UserService(user_repository),
        record_generation=record_generation,
        notification_service=notification_service,
        sweep=sweep,
        scheduler=scheduler,
        close_resources=close_resources,
    )
