"""
Neo4j Graph Service - connection and statement execution

Neo4j is the SINGLE SOURCE OF TRUTH for users, items and interactions.

Node Types:
- User: {id, isBot, firstName, lastName, username, languageCode}
- Game / Movie: {id, name}
- Tag / Genre / Actor: {id, name}
- Comment: {id, text, at}

Relationships:
- (User)-[:RATED {rank, at}]->(Item)
- (User)-[:LIKED {rank, at}]->(Tag|Genre|Actor|Item)
- (Tag)-[:TAGGED]->(Item)
- (User)-[:ADDED {at}]->(Item), (User)-[:REQUESTED {at}]->(Item)
- (User)-[:WROTE]->(Comment)-[:ABOUT]->(Item|Comment)

Every statement runs in its own session (auto-commit). There is no
transaction spanning two calls.
"""
import logging
from typing import Dict, List, Optional, Any

from neo4j import AsyncGraphDatabase, AsyncDriver
from neo4j.exceptions import ClientError, DatabaseError

from gamegraph.models.graph import NodeLabel

logger = logging.getLogger(__name__)


class Neo4jService:
    """Service for Neo4j graph operations"""

    def __init__(
        self,
        uri: str = None,
        user: str = None,
        password: str = None,
        database: str = None,
        driver: Optional[AsyncDriver] = None
    ):
        """
        Initialize Neo4j connection settings.

        Pass `driver` to reuse a driver owned elsewhere; connect()/close()
        then leave it alone.
        """
        if uri is None or user is None or password is None:
            from gamegraph.config.settings import get_settings
            settings = get_settings()
            uri = uri or settings.neo4j_uri
            user = user or settings.neo4j_user
            password = password if password is not None else settings.neo4j_password
            database = database or settings.neo4j_database

        self.uri = uri
        self.user = user
        self.password = password
        self.database = database

        self.driver: Optional[AsyncDriver] = driver
        self._owns_driver = driver is None

    async def connect(self):
        """Establish connection to Neo4j"""
        if not self.driver:
            self.driver = AsyncGraphDatabase.driver(
                self.uri,
                auth=(self.user, self.password)
            )
            self._owns_driver = True
            # Verify connectivity
            await self.driver.verify_connectivity()
            logger.info(f"✅ Connected to Neo4j at {self.uri}")

    async def close(self):
        """Close Neo4j connection"""
        if self.driver and self._owns_driver:
            await self.driver.close()
            self.driver = None
            logger.info("🔌 Closed Neo4j connection")

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _session(self):
        if self.driver is None:
            raise RuntimeError("Neo4jService is not connected; call connect() first")
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    async def _execute_write(self, query: str, parameters: Dict = None):
        """Execute write query, return the first record or None when no row matched"""
        async with self._session() as session:
            result = await session.run(query, parameters or {})
            return await result.single()

    async def _execute_read(self, query: str, parameters: Dict = None) -> List[Dict[str, Any]]:
        """Execute read query"""
        async with self._session() as session:
            result = await session.run(query, parameters or {})
            return await result.data()

    # ===== Schema =====

    async def initialize_constraints(self):
        """Create uniqueness constraints and indexes for the interaction graph."""
        constraints = [
            f"CREATE CONSTRAINT {label.value.lower()}_id IF NOT EXISTS "
            f"FOR (n:{label.value}) REQUIRE n.id IS UNIQUE"
            for label in NodeLabel
        ]
        constraints.append(
            "CREATE INDEX tag_name IF NOT EXISTS FOR (t:Tag) ON (t.name)"
        )

        for constraint_query in constraints:
            try:
                await self._execute_write(constraint_query)
                logger.info(f"✅ {constraint_query.split()[1]} {constraint_query.split()[2]} created")
            except ClientError as e:
                logger.warning(f"⚠️  Constraint/index rejected, keeping the existing schema: {e}")
            except DatabaseError as e:
                # e.g. duplicate ids already stored under the label
                logger.error(f"❌ Constraint/index creation failed: {e}")
                raise
