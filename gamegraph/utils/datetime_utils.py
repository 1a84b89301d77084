"""
Datetime utility functions for handling Neo4j DateTime objects
"""
from datetime import datetime, timezone
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def neo4j_datetime_to_python(neo4j_dt) -> Optional[datetime]:
    """
    Convert Neo4j DateTime to an aware Python datetime (UTC)

    Handles multiple cases:
    - None -> None
    - Neo4j DateTime with to_native() -> Python datetime
    - Already Python datetime -> returned as UTC
    - String ISO format -> parse to datetime
    - Other -> None with warning

    Args:
        neo4j_dt: Neo4j DateTime, Python datetime, string, or None

    Returns:
        Python datetime or None
    """
    if neo4j_dt is None:
        return None

    if isinstance(neo4j_dt, datetime):
        return _as_utc(neo4j_dt)

    if hasattr(neo4j_dt, 'to_native'):
        return _as_utc(neo4j_dt.to_native())

    if isinstance(neo4j_dt, str):
        try:
            return _as_utc(datetime.fromisoformat(neo4j_dt.replace('Z', '+00:00')))
        except ValueError as e:
            logger.warning(f"Failed to parse datetime string '{neo4j_dt}': {e}")
            return None

    logger.warning(f"Cannot convert {type(neo4j_dt)} to Python datetime: {neo4j_dt}")
    return None


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
