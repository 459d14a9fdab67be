"""Shared FastAPI dependencies."""

from uuid import UUID

from fastapi import Header, HTTPException, Request, status

from calorie_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the dependency container stored on the app."""
    return request.app.state.container


async def current_user_id(x_user_id: str | None = Header(default=None)) -> UUID:
    """Return the caller's user id from the X-User-Id header."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user id"
        ) from exc
