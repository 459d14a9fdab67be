"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from calorie_tracker.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from calorie_tracker.adapters.supabase_goals_repository import SupabaseGoalsRepository
from calorie_tracker.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.catalog import CatalogService
from calorie_tracker.services.consumption import ConsumptionService
from calorie_tracker.services.goals import GoalsService
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.stats import StatsService
from calorie_tracker.services.units import UnitConverter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    consumption_service: ConsumptionService
    goals_service: GoalsService
    history_service: HistoryService
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    consumption_repository = SupabaseConsumptionRepository(supabase_client)
    goals_repository = SupabaseGoalsRepository(supabase_client)
    history_repository = SupabaseHistoryRepository(supabase_client)
    catalog_service = CatalogService(
        repository=catalog_repository,
        converter=UnitConverter(strict=resolved_settings.strict_unit_conversion),
    )
    consumption_service = ConsumptionService(
        catalog_service=catalog_service,
        repository=consumption_repository,
        corrections=history_repository,
    )
    goals_service = GoalsService(goals_repository)
    history_service = HistoryService(
        repository=history_repository,
        consumption_repository=consumption_repository,
        goals_service=goals_service,
        timezone_name=resolved_settings.timezone,
        retention_days=resolved_settings.history_retention_days,
        editable_days=resolved_settings.history_editable_days,
    )
    stats_service = StatsService(
        repository=consumption_repository,
        goals_service=goals_service,
        timezone_name=resolved_settings.timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        consumption_service=consumption_service,
        goals_service=goals_service,
        history_service=history_service,
        stats_service=stats_service,
    )
