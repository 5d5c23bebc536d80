"""In-memory graph store implementing the upsert-by-identifier contract."""

import json
import threading
from pathlib import Path
from typing import Protocol

import networkx as nx

from ..models.people import Person
from ..models.relationships import Connection


class GraphStore(Protocol):
    """Where scraped people and discovered connections are handed off."""

    def upsert_person(self, person: Person) -> bool: ...

    def upsert_connection(self, connection: Connection) -> bool: ...


class InMemoryGraphStore:
    """Lock-guarded collection of people and connections.

    People are keyed by id; connections by (source, target) only, so a
    second relationship type between the same pair replaces the stored one
    when it is strictly stronger and is dropped otherwise.
    """

    def __init__(self):
        self._people: dict[str, Person] = {}
        self._connections: dict[tuple[str, str], Connection] = {}
        self._lock = threading.Lock()

    def upsert_person(self, person: Person) -> bool:
        """Store a person; returns True if the id was new."""
        with self._lock:
            if person.id in self._people:
                return False
            self._people[person.id] = person
            return True

    def upsert_connection(self, connection: Connection) -> bool:
        """Store a connection; returns True if the pair was new."""
        with self._lock:
            existing = self._connections.get(connection.key)
            if existing is None:
                self._connections[connection.key] = connection
                return True
            if connection.strength > existing.strength:
                self._connections[connection.key] = connection
            return False

    def get_person(self, person_id: str) -> Person | None:
        with self._lock:
            return self._people.get(person_id)

    def people(self) -> list[Person]:
        with self._lock:
            return list(self._people.values())

    def connections(self) -> list[Connection]:
        with self._lock:
            return list(self._connections.values())

    def to_graph_data(self) -> dict:
        """Nodes and links in the export JSON shape."""
        return {
            "nodes": [person.to_node() for person in self.people()],
            "links": [conn.to_link() for conn in self.connections()],
        }

    def export_json(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_graph_data(), f, indent=2, ensure_ascii=False)

    def to_networkx(self) -> nx.DiGraph:
        return graph_from_data(self.to_graph_data())


def graph_from_data(data: dict) -> nx.DiGraph:
    """Build a directed graph from exported nodes and links."""
    G = nx.DiGraph()
    for node in data.get("nodes", []):
        G.add_node(node["id"], **{k: v for k, v in node.items() if k != "id"})
    for link in data.get("links", []):
        G.add_edge(
            link["source"],
            link["target"],
            type=link.get("type"),
            strength=link.get("strength", 0),
        )
    return G


def graph_summary(G: nx.DiGraph, top: int = 10) -> dict:
    """Node/edge counts, component count and the best-connected people."""
    undirected = G.to_undirected()
    degrees = sorted(G.degree(), key=lambda item: (-item[1], item[0]))
    return {
        "nodes": G.number_of_nodes(),
        "edges": G.number_of_edges(),
        "components": nx.number_connected_components(undirected) if len(G) else 0,
        "density": nx.density(G) if len(G) > 1 else 0.0,
        "top_connected": degrees[:top],
    }
