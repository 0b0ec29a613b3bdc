"""Engagement Service - likes and comments on a post, read-validate-write.

Invariants:
    - Each operation: read post (404 if missing) -> pure rule from core/engagement.py -> save
    - A rejected rule raises before the post is touched, so nothing is saved
    - save() is version-checked: a concurrent writer turns the second save into
      ConcurrencyError, never a double like
    - No retries; persistence failures surface immediately

Design Decisions:
    - Whole-list assignment (post.likes = new_list): JSON columns only flush on assignment
"""

import logging
from uuid import UUID

from devconnect.core import engagement
from devconnect.core.domain_types import Identity
from devconnect.core.errors import ResourceNotFoundError
from devconnect.core.repository_protocols import (
    PostLike, PostRepository, UserRepository,
)

logger = logging.getLogger(__name__)


class EngagementService:
    """Like/unlike and comment add/remove on posts."""

    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    async def _load(self, post_id: UUID) -> PostLike:
        post = await self.posts.get(post_id)
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def like(self, post_id: UUID, identity: Identity) -> list[dict]:
        post = await self._load(post_id)
        post.likes = engagement.add_like(list(post.likes), identity)
        await self.posts.save(post)
        logger.info(
            "Post liked", extra={"user_id": identity.user_id, "post_id": str(post_id)},
        )
        return post.likes

    async def unlike(self, post_id: UUID, identity: Identity) -> list[dict]:
        post = await self._load(post_id)
        post.likes = engagement.remove_like(list(post.likes), identity)
        await self.posts.save(post)
        logger.info(
            "Post unliked", extra={"user_id": identity.user_id, "post_id": str(post_id)},
        )
        return post.likes

    async def add_comment(
        self, post_id: UUID, identity: Identity, text: str,
    ) -> list[dict]:
        """Prepend a comment signed with the caller's name/avatar; returns all comments."""
        post = await self._load(post_id)
        author = await self.users.get(UUID(identity.user_id))
        if author is None:
            raise ResourceNotFoundError("User", identity.user_id)
        comment, post.comments = engagement.add_comment(
            list(post.comments), identity, text, author.name, author.avatar,
        )
        await self.posts.save(post)
        logger.info(
            f"Comment {comment['id']} added",
            extra={"user_id": identity.user_id, "post_id": str(post_id)},
        )
        return post.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: str, identity: Identity,
    ) -> list[dict]:
        post = await self._load(post_id)
        post.comments = engagement.remove_comment(
            list(post.comments), comment_id, identity,
        )
        await self.posts.save(post)
        logger.info(
            f"Comment {comment_id} removed",
            extra={"user_id": identity.user_id, "post_id": str(post_id)},
        )
        return post.comments
