"""
Recommendation Engine - tag traversal over the rating graph

Two strategies, tried in order:

1. TAG_AFFINITY
   (u)-[r:RATED]->(g)<-[:TAGGED]-(t)-[:TAGGED]->(g2)  where (u)-[:LIKED]->(t)
   Needs both a rating and an explicit like on the connecting tag.

2. RATING_COOCCURRENCE
   Same path without the LIKED requirement. Only used when strategy 1
   returns nothing, so users without tag likes still get suggestions.

Scoring per candidate g2:
- score = number of distinct qualifying paths
- rank  = highest r.rank among the contributing ratings

Ordering: rank DESC, score DESC, item id ASC. Results are capped at `limit`.

A candidate is never the rated item it was reached from. Items the user
has already rated are excluded unless exclude_rated=False.
"""
import logging
from typing import Dict, List, Optional

from gamegraph.errors import ValidationError
from gamegraph.models.graph import EdgeKind, ItemKind, NodeLabel
from gamegraph.models.recommendation import Recommendation, Strategy
from gamegraph.services.neo4j_service import Neo4jService
from gamegraph.utils.conversions import to_int
from gamegraph.utils.rows import require

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

STRATEGY_ORDER = (Strategy.TAG_AFFINITY, Strategy.RATING_COOCCURRENCE)


def build_recommendation_query(
    strategy: Strategy,
    item_kind: ItemKind = ItemKind.GAME,
    exclude_rated: bool = True
) -> str:
    """Cypher for one strategy. Parameters: $user_id, $limit."""
    item = item_kind.label.value
    rated = EdgeKind.RATED.value
    tagged = EdgeKind.TAGGED.value

    conditions = ["g2 <> g"]
    if strategy is Strategy.TAG_AFFINITY:
        conditions.append(f"EXISTS {{ (u)-[:{EdgeKind.LIKED.value}]->(t) }}")
    if exclude_rated:
        conditions.append(f"NOT EXISTS {{ (u)-[:{rated}]->(g2) }}")

    where = "\n              AND ".join(conditions)
    return f"""
            MATCH (u:{NodeLabel.USER.value} {{id: $user_id}})-[r:{rated}]->(g:{item})<-[:{tagged}]-(t:{NodeLabel.TAG.value})-[:{tagged}]->(g2:{item})
            WHERE {where}
            WITH g2, max(r.rank) AS rank, count(*) AS score
            RETURN g2.id AS item_id,
                   coalesce(g2.name, g2.id) AS item_name,
                   score,
                   rank
            ORDER BY rank DESC, score DESC, item_id ASC
            LIMIT $limit
        """


def map_recommendation_row(row: Dict, strategy: Strategy) -> Recommendation:
    """Typed mapping of one result row; raises ValidationError on a malformed row"""
    return Recommendation(
        item_id=require(row, 'item_id', str),
        item_name=require(row, 'item_name', str),
        score=require(row, 'score', int),
        rank=require(row, 'rank', int),
        strategy=strategy,
    )


class RecommendationEngine:
    """
    Produces up to `limit` recommended items for a user.
    """

    def __init__(
        self,
        neo4j_service: Neo4jService,
        item_kind: ItemKind = ItemKind.GAME,
        limit: int = DEFAULT_LIMIT,
        exclude_rated: bool = True
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.neo4j = neo4j_service
        self.item_kind = item_kind
        self.limit = limit
        self.exclude_rated = exclude_rated
        self._queries = {
            strategy: build_recommendation_query(strategy, item_kind, exclude_rated)
            for strategy in STRATEGY_ORDER
        }

    async def recommend_with_strategy(
        self, user_id, strategy: Strategy, limit: Optional[int] = None
    ) -> List[Recommendation]:
        """
        Run a single strategy.

        Returns:
            Ordered recommendations, possibly empty
        """
        params = {
            'user_id': to_int(user_id, 'user_id'),
            'limit': to_int(limit if limit is not None else self.limit, 'limit'),
        }
        if params['limit'] < 1:
            raise ValidationError("limit must be at least 1", 'limit')
        rows = await self.neo4j._execute_read(self._queries[strategy], params)
        return [map_recommendation_row(row, strategy) for row in rows]

    async def recommend(self, user_id, limit: Optional[int] = None) -> List[Recommendation]:
        """
        Recommend items for a user, falling back from tag affinity to
        rating co-occurrence.

        Returns:
            Ordered recommendations. An empty list means the user has not
            rated enough to get any; it is not an error.
        """
        user_key = to_int(user_id, 'user_id')

        for strategy in STRATEGY_ORDER:
            recommendations = await self.recommend_with_strategy(user_key, strategy, limit)
            if recommendations:
                logger.info(
                    f"🎯 {len(recommendations)} recommendations for user {user_key} "
                    f"via {strategy.value}"
                )
                return recommendations
            logger.debug(f"No {strategy.value} candidates for user {user_key}")

        logger.info(f"🤷 No recommendations available for user {user_key}")
        return []
