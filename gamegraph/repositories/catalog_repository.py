"""
Catalog Repository - item documents outside the graph

The catalog (search text, descriptions, release dates) is not stored in
Neo4j. The graph only holds item ids, names and tags, copied over by
CatalogSync.

Sources:
- PostgresCatalog: catalog.games table (asyncpg)
- JsonCatalog: a JSON export of catalog documents, for seeding and tests

Both satisfy the CatalogSource protocol.
"""
import json
import logging
import random
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

import asyncpg

from gamegraph.models.catalog import CatalogItem

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Read interface the engine consumes from the catalog store"""

    async def search_items(self, query: str, limit: int = 20) -> List[CatalogItem]:
        ...

    async def random_items(self, count: int) -> List[CatalogItem]:
        ...

    async def all_items(self) -> List[CatalogItem]:
        ...


def parse_tags(raw: Union[str, List[str], None]) -> List[str]:
    """Tags arrive as a list or as one comma-separated string"""
    if not raw:
        return []
    if isinstance(raw, str):
        raw = raw.split(',')
    tags = []
    for tag in raw:
        cleaned = " ".join(str(tag).split())
        if cleaned and cleaned not in tags:
            tags.append(cleaned)
    return tags


def parse_release_date(raw: Any) -> Optional[date]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    for fmt in ("%Y-%m-%d", "%b %d, %Y", "%d %b, %Y"):
        try:
            return datetime.strptime(str(raw).strip(), fmt).date()
        except ValueError:
            continue
    logger.debug(f"Unparsed release date: {raw!r}")
    return None


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally (backslash is the default escape)"""
    return text.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def item_from_document(doc: Mapping[str, Any]) -> CatalogItem:
    """
    Map a catalog document to a CatalogItem.

    Accepts both our column names and the Steam dataset export names
    (_id, desc_snippet, popular_tags).
    """
    item_id = doc.get('id', doc.get('_id'))
    if item_id is None:
        raise ValueError(f"Catalog document without id: {dict(doc)!r}")
    return CatalogItem(
        id=str(item_id),
        name=doc.get('name') or str(item_id),
        description=doc.get('description', doc.get('desc_snippet')),
        tags=parse_tags(doc.get('tags', doc.get('popular_tags'))),
        release_date=parse_release_date(doc.get('release_date')),
    )


class PostgresCatalog:
    """
    Catalog backed by PostgreSQL

    Table: catalog.games (id TEXT PK, name TEXT, description TEXT,
                          tags TEXT[], release_date DATE)
    """

    COLUMNS = "id, name, description, tags, release_date"

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    @staticmethod
    def _row_to_item(row) -> CatalogItem:
        return CatalogItem(
            id=str(row['id']),
            name=row['name'],
            description=row['description'],
            tags=list(row['tags'] or []),
            release_date=row['release_date'],
        )

    async def search_items(self, query: str, limit: int = 20) -> List[CatalogItem]:
        """
        Free-text search over names and descriptions.

        Args:
            query: Text typed by the user
            limit: Maximum number of items

        Returns:
            Matching items, name matches first
        """
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {self.COLUMNS}
                FROM catalog.games
                WHERE name ILIKE '%' || $1 || '%'
                   OR description ILIKE '%' || $1 || '%'
                ORDER BY (name ILIKE '%' || $1 || '%') DESC, name ASC
                LIMIT $2
            """, escape_like(query), limit)

        return [self._row_to_item(row) for row in rows]

    async def random_items(self, count: int) -> List[CatalogItem]:
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {self.COLUMNS}
                FROM catalog.games
                ORDER BY random()
                LIMIT $1
            """, count)

        return [self._row_to_item(row) for row in rows]

    async def all_items(self) -> List[CatalogItem]:
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {self.COLUMNS}
                FROM catalog.games
                ORDER BY id
            """)

        return [self._row_to_item(row) for row in rows]


class JsonCatalog:
    """Catalog loaded from a JSON array of documents"""

    def __init__(self, items: List[CatalogItem]):
        self.items = items

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'JsonCatalog':
        with open(path, 'r', encoding='utf-8') as f:
            documents: List[Dict[str, Any]] = json.load(f)
        items = [item_from_document(doc) for doc in documents]
        logger.info(f"📚 Loaded {len(items)} catalog items from {path}")
        return cls(items)

    async def search_items(self, query: str, limit: int = 20) -> List[CatalogItem]:
        needle = query.lower().strip()
        name_hits = [i for i in self.items if needle in i.name.lower()]
        desc_hits = [
            i for i in self.items
            if i not in name_hits and needle in (i.description or "").lower()
        ]
        return (name_hits + desc_hits)[:limit]

    async def random_items(self, count: int) -> List[CatalogItem]:
        return random.sample(self.items, min(count, len(self.items)))

    async def all_items(self) -> List[CatalogItem]:
        return list(self.items)
