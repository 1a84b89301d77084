"""
Catalog-side graph nodes: items and the tags, genres and actors attached to them
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Item:
    """A game or movie node. Created by catalog sync; name is set once."""
    id: str
    name: str


@dataclass(frozen=True)
class Tag:
    """
    Tag node

    Ids are ints for numeric catalogs and strings for slug-based ones.
    Names are stored lower-cased.
    """
    id: Union[int, str]
    name: str


@dataclass(frozen=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True)
class Actor:
    id: int
    name: str
