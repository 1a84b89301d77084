"""
gamegraph command line

Usage:
    gamegraph prepare
    gamegraph sync-catalog [--json games.json]
    gamegraph search "portal"
    gamegraph rate 42 292030 5
    gamegraph like-tag 42 strategy
    gamegraph recommend 42
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from gamegraph.config.database import create_postgres_pool
from gamegraph.config.settings import get_settings
from gamegraph.engine import GameGraph
from gamegraph.errors import ValidationError
from gamegraph.repositories.catalog_repository import JsonCatalog, PostgresCatalog

log = logging.getLogger('gamegraph')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gamegraph", description="Graph-backed game recommendations")
    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('prepare', help="Create uniqueness constraints")

    sync = sub.add_parser('sync-catalog', help="Copy catalog items and tags into the graph")
    sync.add_argument('--json', dest='json_path', help="Read the catalog from a JSON export instead of PostgreSQL")

    search = sub.add_parser('search', help="Search the catalog")
    search.add_argument('query')
    search.add_argument('--json', dest='json_path', help="Search a JSON export instead of PostgreSQL")
    search.add_argument('--limit', type=int, default=10)

    rate = sub.add_parser('rate', help="Record a rating")
    rate.add_argument('user_id')
    rate.add_argument('item_id')
    rate.add_argument('rank')

    like = sub.add_parser('like-tag', help="Like a tag by name")
    like.add_argument('user_id')
    like.add_argument('tag_name')

    recommend = sub.add_parser('recommend', help="Print recommendations for a user")
    recommend.add_argument('user_id')

    return parser


async def _open_catalog(json_path: Optional[str]):
    """Returns (catalog, pool); pool is None for JSON catalogs"""
    if json_path:
        return JsonCatalog.from_file(json_path), None
    pool = await create_postgres_pool()
    return PostgresCatalog(pool), pool


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()

    if args.command == 'search':
        catalog, pool = await _open_catalog(args.json_path)
        try:
            for item in await catalog.search_items(args.query, limit=args.limit):
                print(f"{item.id}\t{item.name}\t{', '.join(item.tags)}")
        finally:
            if pool is not None:
                await pool.close()
        return 0

    async with GameGraph.from_settings(settings) as graph:
        if args.command == 'prepare':
            await graph.prepare()

        elif args.command == 'sync-catalog':
            catalog, pool = await _open_catalog(args.json_path)
            try:
                report = await graph.catalog_sync.sync_source(catalog)
            finally:
                if pool is not None:
                    await pool.close()
            print(f"items={report.items} tags={report.tags} skipped={report.skipped_tags}")

        elif args.command == 'rate':
            profile = graph.profile_for(args.user_id)
            outcome = await graph.recorder.record_rating(profile, args.item_id, args.rank)
            print(outcome.value)
            return 0 if outcome.applied else 2

        elif args.command == 'like-tag':
            profile = graph.profile_for(args.user_id)
            tag = await graph.recorder.like_tag_by_name(profile, args.tag_name)
            if tag is None:
                suggestions = await graph.items.suggest_tags(args.tag_name)
                hint = f" (did you mean: {', '.join(t.name for t in suggestions)}?)" if suggestions else ""
                print(f'The tag "{args.tag_name}" does not exist{hint}')
                return 2
            print(f'You liked the tag "{tag.name}"')

        elif args.command == 'recommend':
            recommendations = await graph.recommend(args.user_id)
            if not recommendations:
                print("Not enough ratings to recommend anything yet")
            for rec in recommendations:
                print(f"{rec.item_name} ({rec.score})\t[{rec.strategy.value}, rank {rec.rank}]")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
    )

    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except ValidationError as e:
        log.error(f"Invalid input: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
