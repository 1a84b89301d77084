"""
Pytest configuration and fixtures.

Unit tests run against a recording fake of the async Neo4j driver: every
statement is captured with its parameters and answered from a queue of
canned records. Integration tests (tests/integration) use a real Neo4j.
"""
from typing import Any, Dict, List, Optional

import pytest

from gamegraph.models.user import UserProfile
from gamegraph.services.neo4j_service import Neo4jService

# Configure pytest-asyncio
pytest_plugins = ('pytest_asyncio',)


class FakeResult:
    def __init__(self, records: List[Dict[str, Any]]):
        self._records = records

    async def single(self):
        return self._records[0] if self._records else None

    async def data(self):
        return [dict(record) for record in self._records]


class FakeSession:
    def __init__(self, driver: 'FakeDriver', database: Optional[str]):
        self.driver = driver
        self.database = database

    async def __aenter__(self):
        self.driver.sessions_opened += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.driver.sessions_closed += 1

    async def run(self, query: str, parameters: Dict = None):
        self.driver.calls.append((query, dict(parameters or {})))
        if self.driver.errors:
            error = self.driver.errors.pop(0)
            if error is not None:
                raise error
        records = self.driver.responses.pop(0) if self.driver.responses else []
        return FakeResult(records)


class FakeDriver:
    """Records statements; answers them in order from queued responses"""

    def __init__(self):
        self.calls: List[tuple] = []
        self.responses: List[List[Dict[str, Any]]] = []
        self.errors: List[Optional[Exception]] = []
        self.sessions_opened = 0
        self.sessions_closed = 0
        self.databases: List[Optional[str]] = []

    def session(self, database: Optional[str] = None, **kwargs):
        self.databases.append(database)
        return FakeSession(self, database)

    def respond(self, *records: Dict[str, Any]):
        """Queue the records returned by the next statement (none = no match)"""
        self.responses.append(list(records))

    @property
    def queries(self) -> List[str]:
        return [query for query, _ in self.calls]

    @property
    def params(self) -> List[Dict[str, Any]]:
        return [params for _, params in self.calls]


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def neo4j_service(fake_driver):
    return Neo4jService(
        uri="bolt://fake:7687",
        user="neo4j",
        password="test",
        database="neo4j",
        driver=fake_driver,
    )


@pytest.fixture
def profile():
    return UserProfile(
        id=42,
        is_bot=False,
        first_name="Ada",
        last_name="Lovelace",
        username="ada",
        language_code="en",
    )
