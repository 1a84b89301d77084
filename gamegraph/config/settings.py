from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Optional

from gamegraph.models.graph import ItemKind
from gamegraph.models.user import DEFAULT_LANGUAGE_CODE


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file (for secrets like passwords)
    - System environment

    Variable names match docker-compose conventions:
    - NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD, NEO4J_DATABASE (graph store)
    - POSTGRES_HOST, POSTGRES_PORT, etc. (catalog store)
    """

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Neo4j (graph store)
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "gamegraph_neo4j_pass"
    neo4j_database: str = "neo4j"

    # PostgreSQL (catalog store)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "gamegraph_user"
    postgres_password: str = "gamegraph_pass"
    postgres_db: str = "gamegraph"
    database_url: Optional[str] = Field(default=None, validate_default=True)

    # Engine behaviour
    item_kind: ItemKind = ItemKind.GAME
    recommendation_limit: int = 10
    recommend_exclude_rated: bool = True
    default_language_code: str = DEFAULT_LANGUAGE_CODE

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('recommendation_limit')
    @classmethod
    def check_limit(cls, v):
        if v < 1:
            raise ValueError("recommendation_limit must be at least 1")
        return v

    @field_validator('database_url', mode='before')
    @classmethod
    def construct_database_url(cls, v, info):
        """Construct database URL from components if not explicitly set"""
        if v:
            return v

        data = info.data
        host = data.get('postgres_host', 'localhost')
        port = data.get('postgres_port', 5432)
        user = data.get('postgres_user', 'gamegraph_user')
        password = data.get('postgres_password', 'gamegraph_pass')
        db = data.get('postgres_db', 'gamegraph')

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
