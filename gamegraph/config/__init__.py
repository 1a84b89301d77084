"""
Configuration module for settings and store connections.
"""
from .settings import Settings, get_settings
from .database import (
    Neo4jConfig,
    PostgresConfig,
    get_neo4j_config,
    get_postgres_config,
    create_neo4j_service,
    create_postgres_pool,
)

__all__ = [
    'Settings',
    'get_settings',
    'Neo4jConfig',
    'PostgresConfig',
    'get_neo4j_config',
    'get_postgres_config',
    'create_neo4j_service',
    'create_postgres_pool',
]
