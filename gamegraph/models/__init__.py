"""
Domain Models - Storage-agnostic data structures

These models represent the core domain entities independent of storage layer.
Repositories map Neo4j rows into them; services and callers only see these.

Architecture:
- Domain models are pure Python objects (dataclasses)
- Graph vocabulary (labels, edge kinds) is a closed set of str enums
- Business logic operates on these models, not driver records
"""

from .graph import NodeLabel, EdgeKind, ItemKind, LikeTarget, CommentParent, Outcome
from .user import UserProfile
from .item import Item, Tag, Genre, Actor
from .interaction import Rating, Comment, RATED_VALUES
from .recommendation import Recommendation, Strategy
from .catalog import CatalogItem

__all__ = [
    # Graph vocabulary
    'NodeLabel',
    'EdgeKind',
    'ItemKind',
    'LikeTarget',
    'CommentParent',
    'Outcome',

    # Nodes
    'UserProfile',
    'Item',
    'Tag',
    'Genre',
    'Actor',
    'Comment',

    # Interactions
    'Rating',
    'RATED_VALUES',

    # Recommendations
    'Recommendation',
    'Strategy',

    # Catalog
    'CatalogItem',
]
