"""
Database Configuration
======================

Connection configuration for the graph store (Neo4j) and the catalog
store (PostgreSQL). Values come from Settings, so env vars and .env files
are handled in one place.
"""
from typing import Optional
from dataclasses import dataclass

from .settings import Settings, get_settings


@dataclass
class Neo4jConfig:
    """Neo4j connection configuration."""
    uri: str
    user: str
    password: str
    database: str = "neo4j"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'Neo4jConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        if not settings.neo4j_uri:
            raise ValueError("NEO4J_URI environment variable is required")

        return cls(
            uri=settings.neo4j_uri,
            user=settings.neo4j_user,
            password=settings.neo4j_password,
            database=settings.neo4j_database,
        )


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration for the catalog."""
    dsn: str
    min_size: int = 1
    max_size: int = 5

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, min_size: int = 1, max_size: int = 5
    ) -> 'PostgresConfig':
        """Create config from application settings."""
        settings = settings or get_settings()
        return cls(dsn=settings.database_url, min_size=min_size, max_size=max_size)

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'dsn': self.dsn,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


def get_neo4j_config() -> Neo4jConfig:
    """Get Neo4j configuration from settings."""
    return Neo4jConfig.from_settings()


def get_postgres_config(min_size: int = 1, max_size: int = 5) -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings(min_size=min_size, max_size=max_size)


async def create_neo4j_service(config: Optional[Neo4jConfig] = None):
    """Create and connect Neo4j service."""
    from gamegraph.services.neo4j_service import Neo4jService
    config = config or get_neo4j_config()
    service = Neo4jService(
        uri=config.uri,
        user=config.user,
        password=config.password,
        database=config.database,
    )
    await service.connect()
    return service


async def create_postgres_pool(config: Optional[PostgresConfig] = None):
    """Create PostgreSQL connection pool for the catalog."""
    import asyncpg
    config = config or get_postgres_config()
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())
