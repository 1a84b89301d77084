"""
Interaction Recorder - validated entry points for user actions

Validates input, normalizes ids and timestamps, then delegates to the
InteractionRepository. Invalid input raises ValidationError before any
statement is sent to Neo4j. A missing target node is reported as
Outcome.NOT_FOUND.
"""
import logging
from typing import Optional, Tuple

from gamegraph.errors import ValidationError
from gamegraph.models.graph import CommentParent, LikeTarget, Outcome
from gamegraph.models.interaction import RATED_VALUES, Rating
from gamegraph.models.item import Tag
from gamegraph.models.user import UserProfile
from gamegraph.repositories.interaction_repository import InteractionRepository
from gamegraph.repositories.item_repository import ItemRepository
from gamegraph.utils.conversions import to_date, to_int, to_item_key, utc_now
from gamegraph.utils.id_generator import generate_comment_id

logger = logging.getLogger(__name__)


def validate_rank(rank) -> int:
    """Rank must be one of RATED_VALUES. Out-of-range values are rejected, never clamped."""
    value = to_int(rank, 'rank')
    if value not in RATED_VALUES:
        raise ValidationError(
            f"rank must be between {RATED_VALUES[0]} and {RATED_VALUES[-1]}, got {value}",
            'rank'
        )
    return value


def _coerce(enum_cls, value, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field} must be one of {[m.value for m in enum_cls]}, got {value!r}", field)


def _validate_profile(profile: UserProfile) -> UserProfile:
    if not isinstance(profile, UserProfile):
        raise ValidationError("profile must be a UserProfile", 'profile')
    to_int(profile.id, 'user_id')
    return profile


class InteractionRecorder:
    """
    Records ratings, likes, additions, requests and comments.

    Each call writes the user and the edge in one statement, so no edge
    ever points at a user that was not written with the latest profile.
    """

    def __init__(self, interactions: InteractionRepository, items: ItemRepository):
        self.interactions = interactions
        self.items = items

    async def record_rating(self, profile: UserProfile, item_id, rank, at=None) -> Outcome:
        """
        Rate an item. Re-rating overwrites rank and at in place.

        Raises:
            ValidationError: rank outside RATED_VALUES or malformed ids
        """
        _validate_profile(profile)
        rank = validate_rank(rank)
        item_key = to_item_key(item_id)
        timestamp = to_date(at if at is not None else utc_now())

        outcome = await self.interactions.upsert_rated(profile, item_key, rank, timestamp)
        if outcome.applied:
            logger.info(f"⭐ User {profile.id} rated {item_key}: {rank}")
        return outcome

    async def record_like(
        self,
        profile: UserProfile,
        target: LikeTarget,
        target_id,
        rank=None,
        at=None
    ) -> Outcome:
        """
        Like a tag, genre, actor or item.

        Without rank this is a plain existence edge (at is kept only when
        given). With rank, at defaults to now.
        """
        _validate_profile(profile)
        target = _coerce(LikeTarget, target, 'target')
        if target_id is None:
            raise ValidationError("target_id is required", 'target_id')

        if rank is not None:
            rank = validate_rank(rank)
            at = at if at is not None else utc_now()
        timestamp = to_date(at) if at is not None else None

        outcome = await self.interactions.upsert_liked(profile, target, target_id, rank, timestamp)
        if outcome.applied:
            logger.info(f"👍 User {profile.id} liked {target.value} {target_id!r}")
        return outcome

    async def like_tag_by_name(self, profile: UserProfile, name: str) -> Optional[Tag]:
        """
        Resolve a tag by name and like it.

        Returns:
            The liked Tag, or None when no tag has that name
        """
        _validate_profile(profile)
        tag = await self.items.find_tag_by_name(name)
        if tag is None:
            logger.info(f"🏷️  Tag '{name}' does not exist")
            return None

        outcome = await self.record_like(profile, LikeTarget.TAG, tag.id)
        return tag if outcome.applied else None

    async def record_add(self, profile: UserProfile, item_id, at=None) -> Outcome:
        """Add an item to the user's list."""
        _validate_profile(profile)
        item_key = to_item_key(item_id)
        timestamp = to_date(at if at is not None else utc_now())
        return await self.interactions.upsert_added(profile, item_key, timestamp)

    async def record_request(self, profile: UserProfile, item_id, at=None) -> Outcome:
        """Request an item."""
        _validate_profile(profile)
        item_key = to_item_key(item_id)
        timestamp = to_date(at if at is not None else utc_now())
        return await self.interactions.upsert_requested(profile, item_key, timestamp)

    async def record_comment(
        self,
        profile: UserProfile,
        parent: CommentParent,
        parent_id,
        text: str,
        at=None,
        comment_id=None
    ) -> Tuple[int, Outcome]:
        """
        Comment on an item or reply to a comment.

        Passing an existing comment_id edits that comment.

        Returns:
            (comment_id, outcome)
        """
        _validate_profile(profile)
        parent = _coerce(CommentParent, parent, 'parent')
        if parent_id is None:
            raise ValidationError("parent_id is required", 'parent_id')
        if text is not None and not isinstance(text, str):
            raise ValidationError("comment text must be a string", 'text')
        if not text or not text.strip():
            raise ValidationError("comment text must not be empty", 'text')

        comment_id = to_int(comment_id, 'comment_id') if comment_id is not None else generate_comment_id()
        timestamp = to_date(at if at is not None else utc_now())

        outcome = await self.interactions.upsert_comment(
            profile, parent, parent_id, comment_id, text, timestamp
        )
        if outcome.applied:
            logger.info(f"💬 User {profile.id} commented {comment_id} on {parent.value} {parent_id!r}")
        return comment_id, outcome

    async def get_rating(self, user_id, item_id) -> Optional[Rating]:
        """Current rating of an item by a user, or None."""
        return await self.interactions.get_rated(user_id, item_id)
