"""Data models for people and relationships."""

from history_graph_analyzer.models.people import Person, derive_id, era_for_year, group_for_era
from history_graph_analyzer.models.relationships import (
    Classification,
    Connection,
    RelationshipType,
    SearchResult,
)

__all__ = [
    "Person",
    "derive_id",
    "era_for_year",
    "group_for_era",
    "Classification",
    "Connection",
    "RelationshipType",
    "SearchResult",
]
