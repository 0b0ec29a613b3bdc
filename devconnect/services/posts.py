"""Post Service - create, read and owner-only delete of posts.

Invariants:
    - Missing post -> ResourceNotFoundError before any ownership check
    - Only the author may delete a post (ForbiddenError otherwise)
    - Posts listed newest first
"""

import logging
from uuid import UUID

from devconnect.core.domain_types import Identity
from devconnect.core.errors import ResourceNotFoundError
from devconnect.core.ownership import ensure_owner
from devconnect.core.repository_protocols import (
    PostLike, PostRepository, UserRepository,
)

logger = logging.getLogger(__name__)


class PostService:
    """Post CRUD around the post repository."""

    def __init__(self, posts: PostRepository, users: UserRepository):
        self.posts = posts
        self.users = users

    async def get_or_404(self, post_id: UUID) -> PostLike:
        post = await self.posts.get(post_id)
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def create(self, identity: Identity, text: str) -> PostLike:
        """Publish a post with the author's current name and avatar."""
        author = await self.users.get(UUID(identity.user_id))
        if author is None:
            raise ResourceNotFoundError("User", identity.user_id)
        post = await self.posts.add(author.id, text, author.name, author.avatar)
        logger.info(
            "Post created",
            extra={"user_id": identity.user_id, "post_id": str(post.id)},
        )
        return post

    async def list_all(self) -> list[PostLike]:
        return await self.posts.list_newest_first()

    async def delete(self, post_id: UUID, identity: Identity) -> None:
        post = await self.get_or_404(post_id)
        ensure_owner(post.author_id, identity, "Post", post_id)
        await self.posts.delete(post)
        logger.info(
            "Post removed",
            extra={"user_id": identity.user_id, "post_id": str(post_id)},
        )
