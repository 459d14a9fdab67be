"""Daily history snapshot service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.consumption import LogEntry
from calorie_tracker.domain.errors import ForbiddenError, NotFoundError
from calorie_tracker.domain.history import DailyHistorySnapshot, ReconcileReport
from calorie_tracker.domain.nutrition import NutrientTotals, parse_nutrients
from calorie_tracker.services.consumption import ConsumptionRepository
from calorie_tracker.services.goals import GoalsService

_logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for daily history snapshots."""

    def upsert_snapshot(
        self,
        user_id: UUID,
        log_date: date,
        goals: NutrientTotals,
        consumed: NutrientTotals,
    ) -> DailyHistorySnapshot:
        """Insert a snapshot or refresh its consumed totals in one write.

        An insert stores the goals. An update only replaces consumed totals
        and the update timestamp, and skips snapshots whose correction has
        not been cleared by a change to that day's entries.
        """

    def get_snapshot(
        self, user_id: UUID, log_date: date
    ) -> DailyHistorySnapshot | None:
        """Return the snapshot for a user and date, if present."""

    def list_snapshots(self, user_id: UUID) -> list[DailyHistorySnapshot]:
        """Return the user's snapshots, newest first."""

    def update_consumed_totals(
        self,
        user_id: UUID,
        log_date: date,
        consumed: NutrientTotals,
        updated_at: datetime,
    ) -> DailyHistorySnapshot | None:
        """Overwrite consumed totals with a manual correction."""

    def clear_correction(self, user_id: UUID, log_date: date) -> None:
        """Unmark a corrected snapshot so reconciliation refreshes it again."""

    def delete_snapshots_before(
        self, cutoff: date, user_id: UUID | None = None
    ) -> int:
        """Delete snapshots dated before cutoff and return how many went."""


@dataclass
class HistoryService:
    """Materializes, corrects and expires daily history snapshots."""

    repository: HistoryRepository
    consumption_repository: ConsumptionRepository
    goals_service: GoalsService
    timezone_name: str = "UTC"
    retention_days: int = 90
    editable_days: int = 7

    def today(self) -> date:
        """Return the current date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    def reconcile_history(
        self, user_id: UUID, today: date | None = None
    ) -> ReconcileReport:
        """Materialize or refresh every consumption date, then purge.

        Goals are read once per pass and are only stored on snapshots that
        did not exist yet. A failure on one date is logged and reported while
        the remaining dates proceed.
        """
        current = today or self.today()
        horizon = current - timedelta(days=self.retention_days)
        report = ReconcileReport()
        dates = sorted(
            self.consumption_repository.list_consumption_dates(user_id, horizon)
        )
        goals = self.goals_service.get_goals(user_id).values
        for log_date in dates:
            try:
                entries = self.consumption_repository.list_entries(
                    user_id, log_date, log_date
                )
                self.repository.upsert_snapshot(
                    user_id=user_id,
                    log_date=log_date,
                    goals=goals,
                    consumed=sum_entries(entries, log_date),
                )
            except Exception as exc:
                _logger.exception(
                    "Failed to reconcile %s for user %s", log_date.isoformat(), user_id
                )
                report.failures[log_date] = str(exc) or type(exc).__name__
                continue
            report.reconciled.append(log_date)
        report.purged = self.purge_expired(user_id=user_id, today=current)
        _logger.info(
            "Reconciled history for user %s: dates=%s failures=%s purged=%s",
            user_id,
            len(report.reconciled),
            len(report.failures),
            report.purged,
        )
        return report

    def list_history_snapshots(self, user_id: UUID) -> list[DailyHistorySnapshot]:
        """Return the user's snapshots, newest first."""
        snapshots = self.repository.list_snapshots(user_id)
        return sorted(snapshots, key=lambda snapshot: snapshot.log_date, reverse=True)

    def is_editable(self, log_date: date, today: date | None = None) -> bool:
        """Return True while a snapshot is within the editable window."""
        current = today or self.today()
        return (current - log_date).days <= self.editable_days

    def update_snapshot_consumed_totals(
        self,
        user_id: UUID,
        log_date: date,
        values: Mapping[str, object],
        today: date | None = None,
    ) -> DailyHistorySnapshot:
        """Apply a manual correction to a snapshot inside the editable window."""
        if not self.is_editable(log_date, today):
            raise ForbiddenError(
                f"History for {log_date.isoformat()} is no longer editable"
            )
        parsed = parse_nutrients(values)
        consumed = NutrientTotals(
            calories=parsed.calories,
            protein=parsed.protein,
            carbs=parsed.carbs,
            fat=parsed.fat,
            sugar=parsed.sugar or 0.0,
            fiber=parsed.fiber or 0.0,
        )
        snapshot = self.repository.update_consumed_totals(
            user_id, log_date, consumed, updated_at=datetime.now(tz=UTC)
        )
        if snapshot is None:
            raise NotFoundError(f"No history for {log_date.isoformat()}")
        return snapshot

    def purge_expired(
        self, user_id: UUID | None = None, today: date | None = None
    ) -> int:
        """Delete snapshots older than the retention horizon."""
        current = today or self.today()
        cutoff = current - timedelta(days=self.retention_days)
        deleted = self.repository.delete_snapshots_before(cutoff, user_id=user_id)
        if deleted:
            _logger.info(
                "Purged %s history snapshot(s) before %s", deleted, cutoff.isoformat()
            )
        return deleted


def sum_entries(entries: list[LogEntry], log_date: date) -> NutrientTotals:
    """Sum the entries consumed on a date; unknown sugar/fiber count as zero."""
    total = NutrientTotals.zero()
    for entry in entries:
        if entry.consumed_on != log_date:
            continue
        total = total.plus(entry.nutrients)
    return total
