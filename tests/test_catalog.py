"""
Test: catalog sources and catalog sync
"""
import json
from datetime import date

import pytest

from gamegraph.models.catalog import CatalogItem
from gamegraph.repositories.catalog_repository import (
    JsonCatalog,
    PostgresCatalog,
    escape_like,
    item_from_document,
    parse_release_date,
    parse_tags,
)
from gamegraph.repositories.item_repository import ItemRepository
from gamegraph.services.catalog_sync import CatalogSync, tag_from_name

STEAM_DOCS = [
    {
        '_id': "292030",
        'name': "The Witcher 3: Wild Hunt",
        'desc_snippet': "An open world RPG",
        'popular_tags': "Open World,RPG,Story Rich",
        'release_date': "May 18, 2015",
    },
    {
        '_id': "570",
        'name': "Dota 2",
        'desc_snippet': "A MOBA with an open world of heroes",
        'popular_tags': "MOBA,Strategy",
        'release_date': "Jul 9, 2013",
    },
]


class FakeConnection:
    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    async def fetch(self, query, *args):
        self.calls.append((query, args))
        return self.rows


class FakeAcquire:
    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakePool:
    def __init__(self, rows):
        self.conn = FakeConnection(rows)

    def acquire(self):
        return FakeAcquire(self.conn)


class TestDocuments:

    def test_parse_tags(self):
        assert parse_tags("Open World, RPG ,,RPG") == ["Open World", "RPG"]
        assert parse_tags(["Action", "  Indie  "]) == ["Action", "Indie"]
        assert parse_tags(None) == []

    def test_parse_release_date(self):
        assert parse_release_date("May 18, 2015") == date(2015, 5, 18)
        assert parse_release_date("2015-05-18") == date(2015, 5, 18)
        assert parse_release_date("someday") is None
        assert parse_release_date(None) is None

    def test_steam_document(self):
        item = item_from_document(STEAM_DOCS[0])
        assert item == CatalogItem(
            id="292030",
            name="The Witcher 3: Wild Hunt",
            description="An open world RPG",
            tags=["Open World", "RPG", "Story Rich"],
            release_date=date(2015, 5, 18),
        )

    def test_document_without_id(self):
        with pytest.raises(ValueError):
            item_from_document({'name': "nameless"})


class TestJsonCatalog:

    @pytest.fixture
    def catalog(self, tmp_path):
        path = tmp_path / "games.json"
        path.write_text(json.dumps(STEAM_DOCS), encoding='utf-8')
        return JsonCatalog.from_file(path)

    @pytest.mark.asyncio
    async def test_search_by_name_and_description(self, catalog):
        results = await catalog.search_items("open world")
        # both match on description only, catalog order is kept
        assert [i.id for i in results] == ["292030", "570"]

        by_name = await catalog.search_items("dota")
        assert [i.id for i in by_name] == ["570"]

    @pytest.mark.asyncio
    async def test_random_and_all(self, catalog):
        assert len(await catalog.random_items(5)) == 2
        assert len(await catalog.random_items(1)) == 1
        assert [i.id for i in await catalog.all_items()] == ["292030", "570"]


class TestPostgresCatalog:

    @pytest.mark.asyncio
    async def test_search_maps_rows(self):
        pool = FakePool([{
            'id': "570", 'name': "Dota 2", 'description': "MOBA",
            'tags': ["MOBA", "Strategy"], 'release_date': date(2013, 7, 9),
        }])
        items = await PostgresCatalog(pool).search_items("dota", limit=5)

        assert items == [CatalogItem("570", "Dota 2", "MOBA", ["MOBA", "Strategy"], date(2013, 7, 9))]
        query, args = pool.conn.calls[0]
        assert "FROM catalog.games" in query
        assert args == ("dota", 5)

    @pytest.mark.asyncio
    async def test_search_matches_wildcards_literally(self):
        pool = FakePool([])
        await PostgresCatalog(pool).search_items("100% orange_juice", limit=5)

        _, args = pool.conn.calls[0]
        assert args == ("100\\% orange\\_juice", 5)

    def test_escape_like(self):
        assert escape_like("a\\b") == "a\\\\b"
        assert escape_like("plain") == "plain"

    @pytest.mark.asyncio
    async def test_null_tags(self):
        pool = FakePool([{
            'id': 1, 'name': "Old game", 'description': None, 'tags': None, 'release_date': None,
        }])
        items = await PostgresCatalog(pool).random_items(1)
        assert items[0].id == "1"
        assert items[0].tags == []


class TestCatalogSync:

    def test_tag_ids_come_from_names(self):
        tag = tag_from_name("  Open   World ")
        assert tag.id == "open world"
        assert tag.name == "open world"

    @pytest.mark.asyncio
    async def test_sync_writes_items_then_tags(self, neo4j_service, fake_driver):
        items = [item_from_document(doc) for doc in STEAM_DOCS]
        # item, 3 tags, item, 2 tags (the last link finds no item)
        for _ in range(6):
            fake_driver.respond({'id': "x"})
        fake_driver.respond()

        report = await CatalogSync(ItemRepository(neo4j_service)).sync(items)

        assert report.items == 2
        assert report.tags == 3 + 1
        assert report.skipped_tags == 1
        assert len(fake_driver.calls) == 7
        assert "MERGE (i:Game" in fake_driver.queries[0]
        assert fake_driver.params[1]['tag_id'] == "open world"
        assert fake_driver.params[1]['item_id'] == "292030"

    @pytest.mark.asyncio
    async def test_sync_source(self, neo4j_service, fake_driver):
        catalog = JsonCatalog([CatalogItem(id="1", name="Solo", tags=[])])
        report = await CatalogSync(ItemRepository(neo4j_service)).sync_source(catalog)
        assert (report.items, report.tags, report.skipped_tags) == (1, 0, 0)
