"""
Interaction models - values carried on user -> node edges
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Closed rating scale (one to five stars)
RATED_VALUES = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class Rating:
    """RATED edge payload"""
    rank: int
    at: Optional[datetime] = None


@dataclass(frozen=True)
class Comment:
    """
    Comment node

    Storage: Neo4j (:Comment {id, text, at}) with (:User)-[:WROTE]->(c)
    and (c)-[:ABOUT]->(:Item|:Comment). The ABOUT target never changes
    after creation; later writes with the same id only edit text and at.
    """
    id: int
    text: str
    at: Optional[datetime] = None
