"""
gamegraph - graph-backed game and movie recommendations on Neo4j

Users rate and like items, tags, genres and actors; recommendations come
from traversing shared tags between rated items and the rest of the
catalog.
"""
from gamegraph.engine import GameGraph
from gamegraph.errors import GameGraphError, ValidationError, StoreUnavailable
from gamegraph.models import (
    CatalogItem,
    CommentParent,
    ItemKind,
    LikeTarget,
    Outcome,
    Rating,
    Recommendation,
    Strategy,
    Tag,
    UserProfile,
)

__version__ = "0.1.0"

__all__ = [
    'GameGraph',
    'GameGraphError',
    'ValidationError',
    'StoreUnavailable',
    'CatalogItem',
    'CommentParent',
    'ItemKind',
    'LikeTarget',
    'Outcome',
    'Rating',
    'Recommendation',
    'Strategy',
    'Tag',
    'UserProfile',
]
