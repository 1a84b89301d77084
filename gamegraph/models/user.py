"""
User domain model
"""
from dataclasses import dataclass
from typing import Any, Mapping

UNKNOWN = "unknown"
DEFAULT_LANGUAGE_CODE = "fr"


@dataclass
class UserProfile:
    """
    Snapshot of a chat user's profile

    Storage: Neo4j (:User {id, isBot, firstName, lastName, username, languageCode})

    Every upsert writes all fields, so the stored node always equals the
    latest snapshot. Missing names default to "unknown".
    """
    id: int
    is_bot: bool = False
    first_name: str = UNKNOWN
    last_name: str = UNKNOWN
    username: str = UNKNOWN
    language_code: str = DEFAULT_LANGUAGE_CODE

    @classmethod
    def from_chat_user(cls, data: Mapping[str, Any], default_language: str = DEFAULT_LANGUAGE_CODE) -> 'UserProfile':
        """
        Build a profile from a chat platform user payload.

        Keys follow the Telegram user object (first_name, language_code, ...).
        Null or absent fields fall back to the defaults.
        """
        return cls(
            id=data['id'],
            is_bot=bool(data.get('is_bot') or False),
            first_name=data.get('first_name') or UNKNOWN,
            last_name=data.get('last_name') or UNKNOWN,
            username=data.get('username') or UNKNOWN,
            language_code=data.get('language_code') or default_language,
        )
