"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from fresh_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/sweep", dependencies=[Depends(require_admin)])
async def run_sweep(request: Request) -> dict[str, object]:
    """Run the expiration sweep immediately and return its report."""
    container: AppContainer = request.app.state.container
    report = await container.scheduler.run_now()
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Sweep already running"
        )
    return {"report": report.to_dict()}


@router.get("/scheduler", dependencies=[Depends(require_admin)])
async def scheduler_status(request: Request) -> dict[str, object]:
    """Return scheduler state and the most recent sweep report."""
    scheduler = request.app.state.container.scheduler
    next_run = scheduler.next_run
    last_report = scheduler.last_report
    return {
        "started": scheduler.started,
        "running": scheduler.is_running,
        "run_at": scheduler.run_at,
        "next_run": next_run.isoformat() if next_run else None,
        "last_report": last_report.to_dict() if last_report else None,
    }
