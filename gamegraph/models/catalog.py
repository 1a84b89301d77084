"""
Catalog records consumed from the document store
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class CatalogItem:
    """
    One catalog entry as returned by search or listing.

    tags holds tag names in catalog order; catalog sync derives tag nodes
    from them.
    """
    id: str
    name: str
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    release_date: Optional[date] = None
