"""Consumption, goals, history and stats endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from calorie_tracker.api.deps import current_user_id, get_container
from calorie_tracker.api.models import ConsumptionIn, NutrientsIn
from calorie_tracker.api.serializers import (
    serialize_daily_totals,
    serialize_goals,
    serialize_log_entry,
    serialize_period,
    serialize_report,
    serialize_snapshot,
)
from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["tracking"])


@router.post("/consumption", status_code=status.HTTP_201_CREATED)
async def log_consumption(
    payload: ConsumptionIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a meal, an ad hoc combination or manual values on a date."""
    entry = container.consumption_service.log_consumption(
        user_id, payload.to_source(), payload.consumed_on, notes=payload.notes
    )
    return serialize_log_entry(entry)


@router.get("/consumption")
async def list_consumption(
    start: date,
    end: date,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entries = container.consumption_service.list_log_entries(user_id, start, end)
    return {"entries": [serialize_log_entry(entry) for entry in entries]}


@router.delete("/consumption/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_consumption(
    entry_id: UUID,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> Response:
    container.consumption_service.delete_log_entry(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/goals")
async def get_goals(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_goals(container.goals_service.get_goals(user_id))


@router.put("/goals")
async def set_goals(
    payload: NutrientsIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace the user's daily goals; stored snapshots keep theirs."""
    goals = container.goals_service.set_goals(user_id, payload.values())
    return serialize_goals(goals)


@router.post("/history/reconcile")
async def reconcile_history(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Materialize snapshots for every recent consumption date."""
    report = container.history_service.reconcile_history(user_id)
    return serialize_report(report)


@router.get("/history")
async def list_history(
    reconcile: bool = True,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Reconcile unless told not to, then return snapshots newest first."""
    history_service = container.history_service
    body: dict[str, object] = {}
    if reconcile:
        body["reconcile"] = serialize_report(
            history_service.reconcile_history(user_id)
        )
    today = history_service.today()
    body["snapshots"] = [
        serialize_snapshot(
            snapshot, editable=history_service.is_editable(snapshot.log_date, today)
        )
        for snapshot in history_service.list_history_snapshots(user_id)
    ]
    return body


@router.patch("/history/{log_date}")
async def correct_history(
    log_date: date,
    payload: NutrientsIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Overwrite a recent snapshot's consumed totals."""
    snapshot = container.history_service.update_snapshot_consumed_totals(
        user_id, log_date, payload.values()
    )
    return serialize_snapshot(snapshot, editable=True)


@router.get("/stats/today")
async def stats_today(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_daily_totals(container.stats_service.get_today(user_id))


@router.get("/stats/week")
async def stats_week(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_period(container.stats_service.get_week(user_id))


@router.get("/stats/days/{day}")
async def stats_day(
    day: date,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_daily_totals(container.stats_service.get_day(user_id, day))
