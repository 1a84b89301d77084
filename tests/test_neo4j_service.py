"""
Test: Neo4jService session handling and schema setup
"""
import pytest
from neo4j.exceptions import ClientError, DatabaseError, ServiceUnavailable

from gamegraph.errors import StoreUnavailable
from gamegraph.models.graph import NodeLabel
from gamegraph.services.neo4j_service import Neo4jService


class TestSessions:

    @pytest.mark.asyncio
    async def test_session_released_when_statement_fails(self, neo4j_service, fake_driver):
        fake_driver.errors.append(ServiceUnavailable("connection refused"))

        with pytest.raises(StoreUnavailable):
            await neo4j_service._execute_write("RETURN 1")

        assert fake_driver.sessions_opened == 1
        assert fake_driver.sessions_closed == 1

    @pytest.mark.asyncio
    async def test_read_returns_all_rows(self, neo4j_service, fake_driver):
        fake_driver.respond({'n': 1}, {'n': 2})
        assert await neo4j_service._execute_read("UNWIND [1, 2] AS n RETURN n") == [
            {'n': 1}, {'n': 2}
        ]

    @pytest.mark.asyncio
    async def test_write_without_match_returns_none(self, neo4j_service, fake_driver):
        assert await neo4j_service._execute_write("MATCH (n:Nothing) RETURN n") is None

    @pytest.mark.asyncio
    async def test_not_connected(self):
        service = Neo4jService(uri="bolt://nowhere:7687", user="neo4j", password="x")
        with pytest.raises(RuntimeError):
            await service._execute_read("RETURN 1")

    @pytest.mark.asyncio
    async def test_injected_driver_is_not_closed(self, neo4j_service, fake_driver):
        async with neo4j_service as service:
            assert service.driver is fake_driver
        assert neo4j_service.driver is fake_driver


class TestConstraints:

    @pytest.mark.asyncio
    async def test_one_unique_constraint_per_label(self, neo4j_service, fake_driver):
        await neo4j_service.initialize_constraints()

        queries = fake_driver.queries
        for label in NodeLabel:
            assert any(
                f"FOR (n:{label.value}) REQUIRE n.id IS UNIQUE" in q for q in queries
            ), label
        assert any("FOR (t:Tag) ON (t.name)" in q for q in queries)

    @pytest.mark.asyncio
    async def test_schema_errors_are_logged_and_skipped(self, neo4j_service, fake_driver):
        fake_driver.errors.append(ClientError("equivalent constraint already exists"))

        await neo4j_service.initialize_constraints()

        assert len(fake_driver.calls) == len(NodeLabel) + 1

    @pytest.mark.asyncio
    async def test_store_unavailable_propagates(self, neo4j_service, fake_driver):
        fake_driver.errors.append(ServiceUnavailable("down"))
        with pytest.raises(ServiceUnavailable):
            await neo4j_service.initialize_constraints()

    @pytest.mark.asyncio
    async def test_failed_constraint_creation_propagates(self, neo4j_service, fake_driver):
        fake_driver.errors.append(DatabaseError("Unable to create constraint: duplicate ids"))

        with pytest.raises(DatabaseError):
            await neo4j_service.initialize_constraints()

        assert len(fake_driver.calls) == 1
