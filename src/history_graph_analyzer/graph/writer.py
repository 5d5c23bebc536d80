"""Write people and connections to Neo4j."""

from neo4j import Driver

from ..models.people import Person
from ..models.relationships import Connection
from .connection import get_driver, init_schema

PERSON_QUERY = """
OPTIONAL MATCH (existing:Person {id: $id})
WITH count(existing) = 0 AS is_new
MERGE (p:Person {id: $id})
ON CREATE SET p += $props
RETURN is_new
"""

# Keyed by the (source, target) pair only; a stronger connection overwrites.
CONNECTION_QUERY = """
MATCH (s:Person {id: $source})
MATCH (t:Person {id: $target})
OPTIONAL MATCH (s)-[existing:CONNECTED_TO]->(t)
WITH s, t, count(existing) = 0 AS is_new
MERGE (s)-[r:CONNECTED_TO]->(t)
ON CREATE SET r.type = $type, r.strength = $strength, r.description = $description
ON MATCH SET r.type = CASE WHEN $strength > r.strength THEN $type ELSE r.type END,
             r.description = CASE WHEN $strength > r.strength THEN $description ELSE r.description END,
             r.strength = CASE WHEN $strength > r.strength THEN $strength ELSE r.strength END
RETURN is_new
"""


class Neo4jGraphWriter:
    """Graph store backed by Neo4j, with the same upsert contract as the in-memory store."""

    def __init__(self, driver: Driver | None = None):
        """Initialize the graph writer.

        Args:
            driver: Optional Neo4j driver (created from settings if not provided)
        """
        self._driver = driver
        self._initialized = False

    @property
    def driver(self) -> Driver:
        if self._driver is None:
            self._driver = get_driver()
        return self._driver

    def initialize(self) -> None:
        if not self._initialized:
            init_schema(self.driver)
            self._initialized = True

    def upsert_person(self, person: Person) -> bool:
        """Store a person; returns True if the id was new."""
        props = person.model_dump(exclude={"id"}, exclude_none=True)
        with self.driver.session() as session:
            record = session.run(PERSON_QUERY, id=person.id, props=props).single()
        return bool(record and record["is_new"])

    def upsert_connection(self, connection: Connection) -> bool:
        """Store a connection; both endpoints must already exist."""
        with self.driver.session() as session:
            record = session.run(
                CONNECTION_QUERY,
                source=connection.source,
                target=connection.target,
                type=connection.type.value,
                strength=connection.strength,
                description=connection.description,
            ).single()
        return bool(record and record["is_new"])

    def close(self) -> None:
        if self._driver is not None:
            self._driver.close()
