"""
Recommendation result model
"""
from dataclasses import dataclass
from enum import Enum


class Strategy(str, Enum):
    """Traversal that produced a recommendation"""
    TAG_AFFINITY = "tag_affinity"                # rated item + liked connecting tag
    RATING_COOCCURRENCE = "rating_cooccurrence"  # rated item only


@dataclass(frozen=True)
class Recommendation:
    """
    One recommended item

    score: number of distinct graph paths from the user to the item
    rank: highest rating among the rated items those paths start from
    """
    item_id: str
    item_name: str
    score: int
    rank: int
    strategy: Strategy
