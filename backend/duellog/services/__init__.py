"""
Services Package

Business logic layer for the API.
"""
from duellog.services.schema_service import SchemaBootstrapper, BootstrapReport, ensure_schema
from duellog.services.entity_resolver import EntityResolver
from duellog.services.query_builder import QueryFilterBuilder, PlaceholderStyle, build_match_query
from duellog.services.match_service import MatchService
from duellog.services.deck_template_service import DeckTemplateService
from duellog.services.deck_service import DeckService
from duellog.services.season_service import SeasonService
from duellog.services.maintenance_service import MaintenanceService, RenameResult
from duellog.services.stats_service import StatsService
from duellog.services.import_service import ImportService, ImportResult

__all__ = [
    "SchemaBootstrapper",
    "BootstrapReport",
    "ensure_schema",
    "EntityResolver",
    "QueryFilterBuilder",
    "PlaceholderStyle",
    "build_match_query",
    "MatchService",
    "DeckTemplateService",
    "DeckService",
    "SeasonService",
    "MaintenanceService",
    "RenameResult",
    "StatsService",
    "ImportService",
    "ImportResult",
]
