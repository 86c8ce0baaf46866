"""Supabase repository for return records."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fresh_tracker.domain.inventory import (
    AUTO_RECORD_REASON,
    RecordSnapshot,
    ReturnRecord,
)
from fresh_tracker.services.records import RecordRepository

RECORD_COLUMNS = (
    "id, user_id, food_id, food_name, quantity, reason, return_date, image, timestamp"
)


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation for record persistence."""

    client: Client

    def find_recent_records(
        self,
        user_id: UUID,
        food_name: str,
        since: datetime,
        return_date: date | None = None,
    ) -> list[ReturnRecord]:
        """Return records for a food name created at or after `since`."""
        query = (
            self.client.table("records")
            .select(RECORD_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("food_name", food_name)
            .gte("timestamp", since.isoformat())
        )
        if return_date is not None:
            query = query.eq("return_date", return_date.isoformat())
        response = query.execute()
        return [_parse_record(row) for row in response.data or []]

    def create_record(
        self, user_id: UUID, snapshot: RecordSnapshot, created_at: datetime
    ) -> ReturnRecord:
        """Create a record row and return it."""
        response = (
            self.client.table("records")
            .insert(
                {
                    "user_id": str(user_id),
                    "food_id": str(snapshot.food_id) if snapshot.food_id else None,
                    "food_name": snapshot.food_name,
                    "quantity": snapshot.quantity,
                    "reason": snapshot.reason,
                    "return_date": snapshot.return_date.isoformat(),
                    "image": snapshot.image,
                    "timestamp": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create record in Supabase")
        return _parse_record(response.data[0])

    def update_auto_records(
        self, user_id: UUID, food_id: UUID, snapshot: RecordSnapshot
    ) -> int:
        """Overwrite snapshot fields on auto-generated records for a food."""
        response = (
            self.client.table("records")
            .update(
                {
                    "food_name": snapshot.food_name,
                    "image": snapshot.image,
                    "quantity": snapshot.quantity,
                    "return_date": snapshot.return_date.isoformat(),
                }
            )
            .eq("food_id", str(food_id))
            .eq("reason", AUTO_RECORD_REASON)
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])

    def list_records(self, user_id: UUID) -> list[ReturnRecord]:
        """Return a user's records, newest first."""
        response = (
            self.client.table("records")
            .select(RECORD_COLUMNS)
            .eq("user_id", str(user_id))
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]

    def get_record(self, record_id: UUID) -> ReturnRecord | None:
        """Return a record by id."""
        response = (
            self.client.table("records")
            .select(RECORD_COLUMNS)
            .eq("id", str(record_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def delete_record(self, record_id: UUID) -> None:
        """Delete a record row."""
        self.client.table("records").delete().eq("id", str(record_id)).execute()

    def delete_records(self, user_id: UUID, record_ids: list[UUID]) -> None:
        """Delete several record rows owned by the user."""
        self.client.table("records").delete().eq("user_id", str(user_id)).in_(
            "id", [str(record_id) for record_id in record_ids]
        ).execute()


def _parse_record(row: dict[str, object]) -> ReturnRecord:
    return ReturnRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_id=UUID(str(row["food_id"])) if row.get("food_id") else None,
        food_name=str(row.get("food_name", "")),
        quantity=int(row.get("quantity") or 0),
        reason=str(row.get("reason", "")),
        return_date=date.fromisoformat(str(row["return_date"])[:10]),
        image=row.get("image"),
        timestamp=datetime.fromisoformat(str(row["timestamp"])),
    )
