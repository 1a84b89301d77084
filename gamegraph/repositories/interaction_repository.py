"""
Interaction Repository - Neo4j storage for user -> node edges

Storage: Neo4j (RATED, LIKED, ADDED, REQUESTED, WROTE, ABOUT)

Each write is ONE statement:
1. MATCH the target node (must already exist)
2. MERGE the acting user, overwriting every profile field
3. MERGE the edge and overwrite all of its tracked attributes

If the target is missing the MATCH yields no row, nothing is written and
the method returns Outcome.NOT_FOUND.

Callers pass already-validated values (see InteractionRecorder).
"""
import logging
from typing import Any, Dict, Optional, Tuple

from neo4j.time import DateTime

from gamegraph.models.graph import (
    CommentParent, EdgeKind, ItemKind, LikeTarget, NodeLabel, Outcome
)
from gamegraph.models.interaction import Rating
from gamegraph.models.user import UserProfile
from gamegraph.repositories.user_repository import USER_MERGE, user_params
from gamegraph.services.neo4j_service import Neo4jService
from gamegraph.utils.conversions import to_int, to_item_key, to_tag_key
from gamegraph.utils.datetime_utils import neo4j_datetime_to_python
from gamegraph.utils.rows import optional, require

logger = logging.getLogger(__name__)


class InteractionRepository:
    """
    Repository for interaction edges
    """

    def __init__(self, neo4j_service: Neo4jService, item_kind: ItemKind = ItemKind.GAME):
        self.neo4j = neo4j_service
        self.item_kind = item_kind
        self.item_label = item_kind.label.value

    def _like_target(self, target: LikeTarget, target_id) -> Tuple[str, Any]:
        """Label and normalized key for a like target"""
        if target is LikeTarget.TAG:
            return NodeLabel.TAG.value, to_tag_key(target_id)
        if target is LikeTarget.GENRE:
            return NodeLabel.GENRE.value, to_int(target_id, 'genre_id')
        if target is LikeTarget.ACTOR:
            return NodeLabel.ACTOR.value, to_int(target_id, 'actor_id')
        return self.item_label, to_item_key(target_id)

    async def _upsert_user_edge(
        self,
        profile: UserProfile,
        edge: EdgeKind,
        target_label: str,
        target_id,
        attributes: Dict[str, Any]
    ) -> Outcome:
        """
        MATCH target, MERGE user, MERGE (user)-[edge]->(target), SET attributes.

        attributes maps edge property names to values; None removes the property.
        """
        set_clause = ",\n                ".join(
            f"r.{name} = ${name}" for name in attributes
        )
        query = f"""
            MATCH (target:{target_label} {{id: $target_id}})
            {USER_MERGE}
            WITH u, target
            MERGE (u)-[r:{edge.value}]->(target)
            {"SET " + set_clause if attributes else ""}
            RETURN u.id AS user_id
        """
        params = user_params(profile)
        params['target_id'] = target_id
        params.update(attributes)

        record = await self.neo4j._execute_write(query, params)
        if record is None:
            logger.warning(
                f"⚠️  {edge.value} not recorded: {target_label} {target_id!r} not found "
                f"(user {params['user_id']})"
            )
            return Outcome.NOT_FOUND

        logger.debug(f"🔗 {params['user_id']} -[{edge.value}]-> {target_label} {target_id!r}")
        return Outcome.APPLIED

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def upsert_rated(self, profile: UserProfile, item_id, rank: int, at: DateTime) -> Outcome:
        """Create or overwrite the user's single RATED edge to an item."""
        return await self._upsert_user_edge(
            profile, EdgeKind.RATED, self.item_label, to_item_key(item_id),
            {'rank': rank, 'at': at},
        )

    async def upsert_liked(
        self,
        profile: UserProfile,
        target: LikeTarget,
        target_id,
        rank: Optional[int] = None,
        at: Optional[DateTime] = None
    ) -> Outcome:
        """
        Create or overwrite a LIKED edge.

        rank and at are always both written; a like without them clears
        any previous values.
        """
        label, key = self._like_target(target, target_id)
        return await self._upsert_user_edge(
            profile, EdgeKind.LIKED, label, key, {'rank': rank, 'at': at},
        )

    async def upsert_added(self, profile: UserProfile, item_id, at: DateTime) -> Outcome:
        return await self._upsert_user_edge(
            profile, EdgeKind.ADDED, self.item_label, to_item_key(item_id), {'at': at},
        )

    async def upsert_requested(self, profile: UserProfile, item_id, at: DateTime) -> Outcome:
        return await self._upsert_user_edge(
            profile, EdgeKind.REQUESTED, self.item_label, to_item_key(item_id), {'at': at},
        )

    async def upsert_comment(
        self,
        profile: UserProfile,
        parent: CommentParent,
        parent_id,
        comment_id: int,
        text: str,
        at: DateTime
    ) -> Outcome:
        """
        Create a comment or edit its text/timestamp.

        WROTE and ABOUT are only created together with a comment that has no
        ABOUT edge yet, so the author and the parent are fixed at creation.
        A later write with the same id and a different parent only edits
        the text.

        Returns:
            Outcome.APPLIED or Outcome.NOT_FOUND (parent missing)
        """
        if parent is CommentParent.ITEM:
            parent_label, parent_key = self.item_label, to_item_key(parent_id)
        else:
            parent_label, parent_key = NodeLabel.COMMENT.value, to_int(parent_id, 'parent_id')

        query = f"""
            MATCH (parent:{parent_label} {{id: $parent_id}})
            {USER_MERGE}
            WITH u, parent
            MERGE (c:{NodeLabel.COMMENT.value} {{id: $comment_id}})
            SET c.text = $text,
                c.at = $at
            WITH u, parent, c
            OPTIONAL MATCH (c)-[:{EdgeKind.ABOUT.value}]->(current)
            WITH u, parent, c, current
            FOREACH (_ IN CASE WHEN current IS NULL THEN [1] ELSE [] END |
                MERGE (u)-[:{EdgeKind.WROTE.value}]->(c)
                MERGE (c)-[:{EdgeKind.ABOUT.value}]->(parent)
            )
            RETURN c.id AS comment_id,
                   current IS NULL OR current = parent AS attached
        """
        params = user_params(profile)
        params.update({
            'parent_id': parent_key,
            'comment_id': comment_id,
            'text': text,
            'at': at,
        })

        record = await self.neo4j._execute_write(query, params)
        if record is None:
            logger.warning(
                f"⚠️  Comment {comment_id} not recorded: {parent_label} {parent_key!r} not found"
            )
            return Outcome.NOT_FOUND

        if not record['attached']:
            logger.info(f"📝 Comment {comment_id} edited; it stays attached to its original parent")
        else:
            logger.debug(f"📝 Comment {comment_id} about {parent_label} {parent_key!r}")
        return Outcome.APPLIED

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_rated(self, user_id, item_id) -> Optional[Rating]:
        """
        Get the user's rating of an item.

        Returns:
            Rating or None if the user never rated it
        """
        rows = await self.neo4j._execute_read(f"""
            MATCH (:{NodeLabel.USER.value} {{id: $user_id}})-[r:{EdgeKind.RATED.value}]->(:{self.item_label} {{id: $item_id}})
            RETURN r.rank AS rank, r.at AS at
        """, {
            'user_id': to_int(user_id, 'user_id'),
            'item_id': to_item_key(item_id),
        })

        if not rows:
            return None

        row = rows[0]
        return Rating(
            rank=require(row, 'rank', int),
            at=neo4j_datetime_to_python(optional(row, 'at', object)),
        )
