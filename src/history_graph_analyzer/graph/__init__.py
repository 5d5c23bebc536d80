"""Graph stores for scraped people and their connections."""

from history_graph_analyzer.graph.connection import check_neo4j_connection, get_driver, init_schema
from history_graph_analyzer.graph.store import GraphStore, InMemoryGraphStore, graph_from_data, graph_summary
from history_graph_analyzer.graph.writer import Neo4jGraphWriter

__all__ = [
    "check_neo4j_connection",
    "get_driver",
    "init_schema",
    "GraphStore",
    "InMemoryGraphStore",
    "graph_from_data",
    "graph_summary",
    "Neo4jGraphWriter",
]
