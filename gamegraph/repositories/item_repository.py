"""
Item Repository - Neo4j storage for catalog nodes

Storage: Neo4j (:Game|:Movie, :Tag, :Genre, :Actor and (:Tag)-[:TAGGED]->(item))

These nodes are written by catalog sync and read by the recorder and the
recommendation engine. Names are set on creation only.

Tag lookup:
- Tag names are stored lower-cased, lookups lower-case the input
- suggest_tags() fuzzy-matches a misspelled name against existing tags
"""
import logging
from typing import List, Optional

from rapidfuzz import fuzz, process

from gamegraph.models.graph import EdgeKind, ItemKind, NodeLabel, Outcome
from gamegraph.models.item import Actor, Genre, Item, Tag
from gamegraph.services.neo4j_service import Neo4jService
from gamegraph.utils.conversions import to_int, to_item_key, to_tag_key
from gamegraph.utils.rows import require

logger = logging.getLogger(__name__)

TAG_KEY_TYPES = (int, str)


def normalize_tag_name(name: str) -> str:
    return " ".join(name.split()).lower()


class ItemRepository:
    """
    Repository for items and the tags, genres and actors around them
    """

    def __init__(self, neo4j_service: Neo4jService, item_kind: ItemKind = ItemKind.GAME):
        self.neo4j = neo4j_service
        self.item_kind = item_kind
        self.item_label = item_kind.label.value

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def upsert_item(self, item_id, name: str) -> None:
        """
        Create an item if absent. An existing item keeps its name.

        Args:
            item_id: Catalog id of the item
            name: Display name used on creation
        """
        key = to_item_key(item_id)
        await self.neo4j._execute_write(f"""
            MERGE (i:{self.item_label} {{id: $item_id}})
            ON CREATE SET i.name = $name
            RETURN i.id AS id
        """, {'item_id': key, 'name': name})
        logger.debug(f"🎮 Upserted {self.item_label} {key}")

    async def upsert_tag_on_item(self, item_id, tag: Tag) -> Outcome:
        """
        Create the tag if absent and link it to an existing item.

        The item must already exist; otherwise nothing is written.

        Returns:
            Outcome.APPLIED or Outcome.NOT_FOUND (item missing)
        """
        key = to_item_key(item_id)
        record = await self.neo4j._execute_write(f"""
            MATCH (i:{self.item_label} {{id: $item_id}})
            MERGE (t:{NodeLabel.TAG.value} {{id: $tag_id}})
            ON CREATE SET t.name = $tag_name
            MERGE (t)-[:{EdgeKind.TAGGED.value}]->(i)
            RETURN t.id AS tag_id
        """, {
            'item_id': key,
            'tag_id': to_tag_key(tag.id),
            'tag_name': normalize_tag_name(tag.name),
        })

        if record is None:
            logger.warning(f"⚠️  Cannot tag {self.item_label} {key}: item not found")
            return Outcome.NOT_FOUND
        return Outcome.APPLIED

    async def upsert_genre(self, genre: Genre) -> None:
        """Create a genre node if absent."""
        await self.neo4j._execute_write(f"""
            MERGE (g:{NodeLabel.GENRE.value} {{id: $genre_id}})
            ON CREATE SET g.name = $name
            RETURN g.id AS id
        """, {'genre_id': to_int(genre.id, 'genre_id'), 'name': genre.name})

    async def upsert_actor(self, actor: Actor) -> None:
        """Create an actor node if absent."""
        await self.neo4j._execute_write(f"""
            MERGE (a:{NodeLabel.ACTOR.value} {{id: $actor_id}})
            ON CREATE SET a.name = $name
            RETURN a.id AS id
        """, {'actor_id': to_int(actor.id, 'actor_id'), 'name': actor.name})

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_item(self, item_id) -> Optional[Item]:
        """
        Retrieve an item by id.

        Returns:
            Item or None
        """
        rows = await self.neo4j._execute_read(f"""
            MATCH (i:{self.item_label} {{id: $item_id}})
            RETURN i.id AS id, i.name AS name
        """, {'item_id': to_item_key(item_id)})

        if not rows:
            return None
        return Item(id=require(rows[0], 'id', str), name=require(rows[0], 'name', str))

    async def find_tag_by_name(self, name: str) -> Optional[Tag]:
        """
        Retrieve a tag by (case-insensitive) name.

        Returns:
            Tag or None
        """
        normalized = normalize_tag_name(name or "")
        if not normalized:
            return None

        rows = await self.neo4j._execute_read(f"""
            MATCH (t:{NodeLabel.TAG.value} {{name: $name}})
            RETURN t.id AS id, t.name AS name
            LIMIT 1
        """, {'name': normalized})

        if not rows:
            return None
        return Tag(id=require(rows[0], 'id', TAG_KEY_TYPES), name=require(rows[0], 'name', str))

    async def suggest_tags(self, name: str, limit: int = 3, min_score: float = 70.0) -> List[Tag]:
        """
        Find existing tags whose names are close to `name`.

        Used to answer "did you mean ...?" when find_tag_by_name() misses.

        Args:
            name: Tag name as typed by the user
            limit: Maximum number of suggestions
            min_score: rapidfuzz WRatio threshold (0-100)

        Returns:
            Tags, best match first
        """
        normalized = normalize_tag_name(name or "")
        if not normalized:
            return []

        rows = await self.neo4j._execute_read(f"""
            MATCH (t:{NodeLabel.TAG.value})
            RETURN t.id AS id, t.name AS name
        """)
        tags = [
            Tag(id=require(row, 'id', TAG_KEY_TYPES), name=require(row, 'name', str))
            for row in rows
        ]
        if not tags:
            return []

        matches = process.extract(
            normalized,
            [tag.name for tag in tags],
            scorer=fuzz.WRatio,
            limit=limit,
            score_cutoff=min_score,
        )
        # extract() yields (choice, score, index)
        return [tags[index] for _, _, index in matches]
