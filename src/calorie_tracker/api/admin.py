"""Admin API endpoints with simple token auth."""

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from calorie_tracker.api.deps import get_container
from calorie_tracker.containers import AppContainer

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


@router.post("/history/purge", dependencies=[Depends(require_admin)])
async def purge_history(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete every user's snapshots older than the retention horizon."""
    purged = container.history_service.purge_expired()
    return {"purged": purged}
