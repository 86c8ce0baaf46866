"""Daily expiration sweep over every user's inventory."""

import asyncio
import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta

from fresh_tracker.domain.digest import build_digest, is_digest_due
from fresh_tracker.domain.inventory import FoodItem, UserInventory
from fresh_tracker.domain.records import RecordOutcome, SweepContext
from fresh_tracker.services.notifications import NotificationService
from fresh_tracker.services.records import RecordGenerationService, local_now
from fresh_tracker.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Counters collected during one sweep run."""

    started_at: datetime
    finished_at: datetime | None = None
    completed: bool = False
    users_processed: int = 0
    users_failed: int = 0
    records_generated: int = 0
    duplicates_skipped: int = 0
    record_errors: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    failed_user_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["finished_at"] = (
            self.finished_at.isoformat() if self.finished_at else None
        )
        return data


@dataclass
class ExpirationSweep:
    """Generates automatic records and sends digests for all users."""

    user_repository: UserRepository
    record_generation: RecordGenerationService
    notification_service: NotificationService
    context: SweepContext = field(default_factory=SweepContext)

    async def run(self, now: datetime | None = None) -> SweepReport:
        """Run one sweep; errors are logged and never raised.

        Store calls run in worker threads so the event loop keeps serving
        requests; users and their foods are still processed one at a time.
        """
        current = now or local_now()
        started = time.monotonic()
        report = SweepReport(started_at=current)
        logger.info("Sweep running: checking expiring foods and generating records")
        try:
            inventories = await asyncio.to_thread(
                self.user_repository.list_users_with_foods
            )
            for inventory in inventories:
                try:
                    await self._process_user(inventory, current, report)
                except Exception:
                    report.users_failed += 1
                    report.failed_user_ids.append(str(inventory.user.id))
                    logger.exception(
                        "Sweep failed for user",
                        extra={"user_id": str(inventory.user.id)},
                    )
                else:
                    report.users_processed += 1
        except Exception:
            logger.exception("Error in expiration sweep")
        else:
            report.completed = True
        report.finished_at = current + timedelta(seconds=time.monotonic() - started)
        logger.info("Sweep finished", extra={"report": report.to_dict()})
        return report

    async def _process_user(
        self, inventory: UserInventory, now: datetime, report: SweepReport
    ) -> None:
        user = inventory.user
        today = now.date()
        expiring: list[FoodItem] = []
        for food in inventory.foods:
            await self._generate_record(food, inventory, now, report)
            if user.wants_digest and is_digest_due(food.expiration_date, today):
                expiring.append(food)

        if not expiring:
            return
        digest = build_digest(user, expiring, today)
        if await self.notification_service.send_digest(digest):
            report.emails_sent += 1
        else:
            report.emails_failed += 1

    async def _generate_record(
        self,
        food: FoodItem,
        inventory: UserInventory,
        now: datetime,
        report: SweepReport,
    ) -> None:
        try:
            decision = await asyncio.to_thread(
                self.record_generation.generate_if_due,
                food,
                inventory.user.id,
                self.context,
                now=now,
            )
        except Exception:
            report.record_errors += 1
            logger.exception(
                "Failed to generate record",
                extra={"user_id": str(inventory.user.id), "food_id": str(food.id)},
            )
            return
        if decision.outcome is RecordOutcome.GENERATED:
            report.records_generated += 1
        elif decision.outcome is RecordOutcome.DUPLICATE:
            report.duplicates_skipped += 1
