"""
User Repository - Neo4j storage for chat users

Storage: Neo4j (:User nodes keyed by integer id)

The MERGE fragment is shared with the interaction statements so that a
user and the edge it creates are written by one statement.
"""
import logging
from typing import Any, Dict, Optional

from gamegraph.models.graph import NodeLabel
from gamegraph.models.user import UserProfile
from gamegraph.services.neo4j_service import Neo4jService
from gamegraph.utils.conversions import to_int
from gamegraph.utils.rows import require

logger = logging.getLogger(__name__)

# Every field is overwritten on every write: the node mirrors the latest snapshot
USER_MERGE = f"""
MERGE (u:{NodeLabel.USER.value} {{id: $user_id}})
SET u.isBot = $is_bot,
    u.firstName = $first_name,
    u.lastName = $last_name,
    u.username = $username,
    u.languageCode = $language_code
"""


def user_params(profile: UserProfile) -> Dict[str, Any]:
    """Query parameters for USER_MERGE, with the id normalized"""
    return {
        'user_id': to_int(profile.id, 'user_id'),
        'is_bot': bool(profile.is_bot),
        'first_name': profile.first_name,
        'last_name': profile.last_name,
        'username': profile.username,
        'language_code': profile.language_code,
    }


class UserRepository:
    """
    Repository for User nodes

    Users are created lazily on first interaction and never deleted.
    """

    def __init__(self, neo4j_service: Neo4jService):
        self.neo4j = neo4j_service

    async def upsert(self, profile: UserProfile) -> None:
        """
        Create the user or overwrite all of its fields.

        Args:
            profile: Latest known profile snapshot
        """
        params = user_params(profile)
        await self.neo4j._execute_write(USER_MERGE + "RETURN u.id AS id", params)
        logger.debug(f"👤 Upserted User {params['user_id']}")

    async def get_by_id(self, user_id) -> Optional[UserProfile]:
        """
        Retrieve a user by id.

        Returns:
            UserProfile or None
        """
        rows = await self.neo4j._execute_read(f"""
            MATCH (u:{NodeLabel.USER.value} {{id: $user_id}})
            RETURN u.id AS id,
                   u.isBot AS is_bot,
                   u.firstName AS first_name,
                   u.lastName AS last_name,
                   u.username AS username,
                   u.languageCode AS language_code
        """, {'user_id': to_int(user_id, 'user_id')})

        if not rows:
            return None

        row = rows[0]
        return UserProfile(
            id=require(row, 'id', int),
            is_bot=require(row, 'is_bot', bool),
            first_name=require(row, 'first_name', str),
            last_name=require(row, 'last_name', str),
            username=require(row, 'username', str),
            language_code=require(row, 'language_code', str),
        )
