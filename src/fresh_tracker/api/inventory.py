"""Food, record and profile endpoints scoped to a user."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from fresh_tracker.api.admin import require_admin
from fresh_tracker.api.models import (
    BatchDeletePayload,
    EmailTestPayload,
    FoodPayload,
    ProfilePayload,
)
from fresh_tracker.services.foods import FoodNotFoundError
from fresh_tracker.services.records import RecordNotFoundError
from fresh_tracker.services.users import UserNotFoundError

if TYPE_CHECKING:
    from fresh_tracker.containers import AppContainer
    from fresh_tracker.domain.inventory import FoodItem, ReturnRecord, UserProfile

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["inventory"],
    dependencies=[Depends(require_admin)],
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/foods")
async def list_foods(user_id: UUID, request: Request) -> dict[str, object]:
    """Return all foods owned by the user."""
    foods = _container(request).food_service.list_foods(user_id)
    return {"foods": [_serialize_food(food) for food in foods]}


@router.post("/foods")
async def add_food(
    user_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Create a food; a return record is generated if it is close to expiry."""
    food = _container(request).food_service.add_food(user_id, payload.to_draft())
    return _serialize_food(food)


@router.put("/foods/{food_id}")
async def update_food(
    user_id: UUID, food_id: UUID, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Update a food and keep its automatic record in sync."""
    try:
        food = _container(request).food_service.update_food(
            user_id, food_id, payload.to_draft()
        )
    except FoodNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
        ) from exc
    return _serialize_food(food)


@router.delete("/foods/{food_id}")
async def delete_food(
    user_id: UUID, food_id: UUID, request: Request
) -> dict[str, str]:
    try:
        _container(request).food_service.delete_food(user_id, food_id)
    except FoodNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
        ) from exc
    return {"message": "Deleted"}


@router.post("/foods/batch-delete")
async def batch_delete_foods(
    user_id: UUID, payload: BatchDeletePayload, request: Request
) -> dict[str, str]:
    _container(request).food_service.batch_delete(user_id, payload.ids)
    return {"message": "Batch deleted successfully"}


@router.post("/foods/batch-import")
async def batch_import_foods(
    user_id: UUID,
    request: Request,
    rows: list[dict[str, object]] = Body(...),  # noqa: B008
) -> dict[str, object]:
    """Import decoded spreadsheet rows."""
    try:
        count = _container(request).food_service.batch_import(user_id, rows)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"message": f"Successfully imported {count} items", "count": count}


@router.get("/records")
async def list_records(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's records, newest first."""
    records = _container(request).record_service.list_records(user_id)
    return {"records": [_serialize_record(record) for record in records]}


@router.delete("/records/{record_id}")
async def delete_record(
    user_id: UUID, record_id: UUID, request: Request
) -> dict[str, str]:
    try:
        _container(request).record_service.delete_record(user_id, record_id)
    except RecordNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Record not found"
        ) from exc
    return {"message": "Record deleted"}


@router.post("/records/batch-delete")
async def batch_delete_records(
    user_id: UUID, payload: BatchDeletePayload, request: Request
) -> dict[str, str]:
    _container(request).record_service.batch_delete(user_id, payload.ids)
    return {"message": "Batch deleted successfully"}


@router.post("/email-test")
async def send_test_email(
    user_id: UUID, payload: EmailTestPayload, request: Request
) -> dict[str, str]:
    """Send a binding test email to verify a notification address."""
    sent = await _container(request).notification_service.send_test_email(
        payload.email
    )
    if not sent:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to send email"
        )
    return {"message": "Email sent"}


@router.put("/profile")
async def update_profile(
    user_id: UUID, payload: ProfilePayload, request: Request
) -> dict[str, object]:
    """Save the notification address and whether digests are sent."""
    try:
        profile = _container(request).user_service.update_profile(
            user_id,
            username=payload.username,
            notify_email=payload.notify_email,
            email_notifications_enabled=payload.email_notifications_enabled,
        )
    except UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _serialize_profile(profile)


def _serialize_food(food: FoodItem) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "category": food.category,
        "quantity": food.quantity,
        "purchase_date": food.purchase_date.isoformat(),
        "expiration_date": food.expiration_date.isoformat(),
        "image": food.image,
        "notes": food.notes,
        "tags": food.tags,
    }


def _serialize_record(record: ReturnRecord) -> dict[str, object]:
    return {
        "id": str(record.id),
        "food_id": str(record.food_id) if record.food_id else None,
        "food_name": record.food_name,
        "quantity": record.quantity,
        "reason": record.reason,
        "return_date": record.return_date.isoformat(),
        "image": record.image,
        "timestamp": record.timestamp.isoformat(),
    }


def _serialize_profile(profile: UserProfile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "username": profile.username,
        "notify_email": profile.notify_email,
        "email_notifications_enabled": profile.email_notifications_enabled,
    }
