"""
GameGraph - one object wiring the repositories and services around a
single Neo4jService.

Usage:
    async with GameGraph.from_settings() as graph:
        await graph.recorder.record_rating(profile, "292030", 5)
        recommendations = await graph.recommend(profile.id)
"""
import logging
from typing import List, Optional

from gamegraph.config.settings import Settings, get_settings
from gamegraph.models.interaction import Rating
from gamegraph.models.item import Tag
from gamegraph.models.recommendation import Recommendation
from gamegraph.models.user import UserProfile
from gamegraph.repositories.interaction_repository import InteractionRepository
from gamegraph.repositories.item_repository import ItemRepository
from gamegraph.repositories.user_repository import UserRepository
from gamegraph.services.catalog_sync import CatalogSync
from gamegraph.services.interaction_recorder import InteractionRecorder
from gamegraph.services.neo4j_service import Neo4jService
from gamegraph.services.recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)


class GameGraph:
    """Engine facade used by front-ends"""

    def __init__(self, neo4j_service: Neo4jService, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.settings = settings
        self.neo4j = neo4j_service

        self.users = UserRepository(neo4j_service)
        self.items = ItemRepository(neo4j_service, settings.item_kind)
        self.interactions = InteractionRepository(neo4j_service, settings.item_kind)

        self.recorder = InteractionRecorder(self.interactions, self.items)
        self.recommender = RecommendationEngine(
            neo4j_service,
            item_kind=settings.item_kind,
            limit=settings.recommendation_limit,
            exclude_rated=settings.recommend_exclude_rated,
        )
        self.catalog_sync = CatalogSync(self.items)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> 'GameGraph':
        settings = settings or get_settings()
        service = Neo4jService(
            uri=settings.neo4j_uri,
            user=settings.neo4j_user,
            password=settings.neo4j_password,
            database=settings.neo4j_database,
        )
        return cls(service, settings)

    async def connect(self):
        await self.neo4j.connect()
        logger.info(f"🎮 GameGraph ready ({self.settings.item_kind.label.value} items)")

    async def close(self):
        await self.neo4j.close()

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def prepare(self):
        """Create uniqueness constraints (safe to run repeatedly)"""
        logger.info("🗂️  Preparing graph schema")
        await self.neo4j.initialize_constraints()

    # ===== Front-end operations =====

    def profile_for(self, user_id, **fields) -> UserProfile:
        """Profile for a user known only by id, in the configured default language"""
        fields.setdefault('language_code', self.settings.default_language_code)
        return UserProfile(id=user_id, **fields)

    def profile_from_chat(self, data) -> UserProfile:
        """Profile from a chat platform user payload, using the configured default language"""
        return UserProfile.from_chat_user(data, self.settings.default_language_code)

    async def upsert_user(self, profile: UserProfile) -> None:
        await self.users.upsert(profile)

    async def get_rating(self, user_id, item_id) -> Optional[Rating]:
        return await self.recorder.get_rating(user_id, item_id)

    async def find_tag_by_name(self, name: str) -> Optional[Tag]:
        return await self.items.find_tag_by_name(name)

    async def recommend(self, user_id) -> List[Recommendation]:
        return await self.recommender.recommend(user_id)
