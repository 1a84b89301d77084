"""
Error taxonomy for the graph engine

- ValidationError: bad input, rejected before any store call
- StoreUnavailable: Neo4j connectivity failure, propagated unchanged
- Missing counterpart nodes are NOT errors: writes report Outcome.NOT_FOUND
- An empty recommendation list is a normal result
"""
from neo4j.exceptions import ServiceUnavailable as StoreUnavailable


class GameGraphError(Exception):
    """Base class for engine errors"""


class ValidationError(GameGraphError, ValueError):
    """Input (or a store row) failed validation"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


__all__ = ['GameGraphError', 'ValidationError', 'StoreUnavailable']
