"""
Catalog Sync - copy catalog items and their tags into the graph

Interaction writes only MATCH existing items and tags, so the catalog has
to be synced before users can rate anything. Sync is idempotent: items keep
their first name, tags and TAGGED edges are merged.

Tag ids are derived from tag names (lower-cased, whitespace collapsed), so
the same tag on two items maps to one node.
"""
import logging
from dataclasses import dataclass
from typing import Iterable

from gamegraph.models.catalog import CatalogItem
from gamegraph.models.item import Tag
from gamegraph.repositories.catalog_repository import CatalogSource
from gamegraph.repositories.item_repository import ItemRepository, normalize_tag_name

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    items: int = 0
    tags: int = 0
    skipped_tags: int = 0


def tag_from_name(name: str) -> Tag:
    key = normalize_tag_name(name)
    return Tag(id=key, name=key)


class CatalogSync:
    """Pushes catalog items into the graph through the ItemRepository"""

    def __init__(self, items: ItemRepository):
        self.items = items

    async def sync(self, catalog_items: Iterable[CatalogItem]) -> SyncReport:
        """
        Upsert every item and one TAGGED edge per tag.

        Returns:
            SyncReport with written item/tag counts
        """
        report = SyncReport()
        for item in catalog_items:
            await self.items.upsert_item(item.id, item.name)
            report.items += 1

            for tag_name in item.tags:
                if not normalize_tag_name(tag_name):
                    report.skipped_tags += 1
                    continue
                outcome = await self.items.upsert_tag_on_item(item.id, tag_from_name(tag_name))
                if outcome.applied:
                    report.tags += 1
                else:
                    report.skipped_tags += 1

            if report.items % 500 == 0:
                logger.info(f"📦 Synced {report.items} items so far")

        logger.info(
            f"✅ Catalog sync done: {report.items} items, {report.tags} tag links, "
            f"{report.skipped_tags} skipped"
        )
        return report

    async def sync_source(self, source: CatalogSource) -> SyncReport:
        """Sync every item of a catalog source"""
        return await self.sync(await source.all_items())
