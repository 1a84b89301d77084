"""
Fixtures for integration tests against a real Neo4j.

Usage:
    TEST_NEO4J_URI=bolt://localhost:7688 TEST_NEO4J_PASSWORD=test_password pytest -m integration

Tests are skipped when the database cannot be reached. Every test starts
from an empty database with constraints in place.
"""
import os

import pytest
import pytest_asyncio
from neo4j.exceptions import DriverError, Neo4jError

from gamegraph.config.settings import Settings
from gamegraph.engine import GameGraph


@pytest.fixture
def neo4j_settings():
    """Test Neo4j configuration from environment or defaults."""
    return Settings(
        _env_file=None,
        neo4j_uri=os.getenv("TEST_NEO4J_URI", "bolt://localhost:7688"),
        neo4j_user=os.getenv("TEST_NEO4J_USER", "neo4j"),
        neo4j_password=os.getenv("TEST_NEO4J_PASSWORD", "test_password"),
        neo4j_database=os.getenv("TEST_NEO4J_DATABASE", "neo4j"),
    )


@pytest_asyncio.fixture
async def graph(neo4j_settings):
    """Connected GameGraph over a freshly cleared database."""
    graph = GameGraph.from_settings(neo4j_settings)
    try:
        await graph.connect()
    except (DriverError, Neo4jError, OSError) as e:
        await graph.close()
        pytest.skip(f"Neo4j not available at {neo4j_settings.neo4j_uri}: {e}")

    try:
        await graph.neo4j._execute_write("MATCH (n) DETACH DELETE n")
        await graph.prepare()
        yield graph
    finally:
        await graph.close()
