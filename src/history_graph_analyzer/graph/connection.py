"""Neo4j connection management."""

import logging

from neo4j import Driver, GraphDatabase
from neo4j.exceptions import AuthError, ClientError, ServiceUnavailable

from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def get_driver(settings: Settings | None = None) -> Driver:
    """Get a Neo4j driver instance."""
    settings = settings or get_settings()
    return GraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_user, settings.neo4j_password),
    )


def check_neo4j_connection(settings: Settings | None = None) -> bool:
    """Check if Neo4j is reachable and credentials are valid."""
    try:
        driver = get_driver(settings)
    except ValueError:
        return False

    try:
        with driver.session() as session:
            session.run("RETURN 1")
        return True
    except (ServiceUnavailable, AuthError):
        return False
    finally:
        driver.close()


def init_schema(driver: Driver) -> None:
    """Initialize graph schema (constraints and indexes)."""
    statements = [
        "CREATE CONSTRAINT person_id IF NOT EXISTS FOR (p:Person) REQUIRE p.id IS UNIQUE",
        "CREATE INDEX person_name IF NOT EXISTS FOR (p:Person) ON (p.name)",
        "CREATE INDEX person_era IF NOT EXISTS FOR (p:Person) ON (p.era)",
    ]

    with driver.session() as session:
        for statement in statements:
            try:
                session.run(statement)
            except ClientError as exc:
                logger.warning("Schema statement failed: %s", exc)
