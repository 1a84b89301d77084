"""
Graph vocabulary - node labels and edge kinds

Cypher cannot bind labels or relationship types as parameters, so query
text is assembled from these enum values only.
"""
from enum import Enum


class NodeLabel(str, Enum):
    USER = "User"
    GAME = "Game"
    MOVIE = "Movie"
    TAG = "Tag"
    GENRE = "Genre"
    ACTOR = "Actor"
    COMMENT = "Comment"


class EdgeKind(str, Enum):
    RATED = "RATED"          # User -> Item {rank, at}
    LIKED = "LIKED"          # User -> Tag|Genre|Actor|Item {rank?, at?}
    TAGGED = "TAGGED"        # Tag -> Item
    ADDED = "ADDED"          # User -> Item {at}
    REQUESTED = "REQUESTED"  # User -> Item {at}
    WROTE = "WROTE"          # User -> Comment
    ABOUT = "ABOUT"          # Comment -> Item|Comment


class ItemKind(str, Enum):
    """Which label catalog items are stored under"""
    GAME = "game"
    MOVIE = "movie"

    @property
    def label(self) -> NodeLabel:
        return NodeLabel.GAME if self is ItemKind.GAME else NodeLabel.MOVIE


class LikeTarget(str, Enum):
    """Node kinds a user can like"""
    TAG = "tag"
    GENRE = "genre"
    ACTOR = "actor"
    ITEM = "item"


class CommentParent(str, Enum):
    """What a comment is about"""
    ITEM = "item"
    COMMENT = "comment"


class Outcome(str, Enum):
    """
    Result of a conditional write.

    NOT_FOUND means the referenced counterpart node does not exist, so the
    statement matched zero rows and nothing was written.
    """
    APPLIED = "applied"
    NOT_FOUND = "not_found"

    @property
    def applied(self) -> bool:
        return self is Outcome.APPLIED
