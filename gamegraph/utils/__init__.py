"""
Utility functions
"""
from .conversions import to_int, to_date, to_item_key, to_tag_key, utc_now
from .datetime_utils import neo4j_datetime_to_python
from .id_generator import generate_comment_id

__all__ = [
    'to_int',
    'to_date',
    'to_item_key',
    'to_tag_key',
    'utc_now',
    'neo4j_datetime_to_python',
    'generate_comment_id',
]
