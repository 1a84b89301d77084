"""
Repository Pattern - Storage abstraction layer

Repositories hide storage details (Neo4j, PostgreSQL) from business logic.
Consumers work with domain models, not driver records.

Storage Split:
- UserRepository: Neo4j (:User)
- ItemRepository: Neo4j (items, tags, genres, actors, TAGGED)
- InteractionRepository: Neo4j (RATED, LIKED, ADDED, REQUESTED, WROTE, ABOUT)
- PostgresCatalog / JsonCatalog: catalog documents (not in the graph)
"""
from .user_repository import UserRepository
from .item_repository import ItemRepository
from .interaction_repository import InteractionRepository
from .catalog_repository import CatalogSource, PostgresCatalog, JsonCatalog

__all__ = [
    'UserRepository',
    'ItemRepository',
    'InteractionRepository',
    'CatalogSource',
    'PostgresCatalog',
    'JsonCatalog',
]
