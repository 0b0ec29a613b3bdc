"""Post Routes - posts, likes and comments.

Invariants:
    - Every route here is private (CurrentIdentity)
    - Routes never contain business logic; they delegate to PostService/EngagementService
    - Like/unlike return the full like-set; comment add/remove return the full comment list
"""

from uuid import UUID

from fastapi import APIRouter

from devconnect.api.dependencies import CurrentIdentity, Engagement, Posts
from devconnect.schemas.post import (
    CommentCreate, CommentResponse, LikeEntry, PostCreate, PostResponse,
)

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", response_model=PostResponse)
async def create_post(body: PostCreate, identity: CurrentIdentity, posts: Posts):
    post = await posts.create(identity, body.text)
    return PostResponse.model_validate(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(identity: CurrentIdentity, posts: Posts):
    """All posts, newest first."""
    return [PostResponse.model_validate(p) for p in await posts.list_all()]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: UUID, identity: CurrentIdentity, posts: Posts):
    return PostResponse.model_validate(await posts.get_or_404(post_id))


@router.delete("/{post_id}")
async def delete_post(post_id: UUID, identity: CurrentIdentity, posts: Posts):
    """Delete a post. Author only."""
    await posts.delete(post_id, identity)
    return {"msg": "Post removed"}


@router.put("/like/{post_id}", response_model=list[LikeEntry])
async def like_post(post_id: UUID, identity: CurrentIdentity, engagement: Engagement):
    return await engagement.like(post_id, identity)


@router.put("/unlike/{post_id}", response_model=list[LikeEntry])
async def unlike_post(post_id: UUID, identity: CurrentIdentity, engagement: Engagement):
    return await engagement.unlike(post_id, identity)


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
async def comment_on_post(
    post_id: UUID,
    body: CommentCreate,
    identity: CurrentIdentity,
    engagement: Engagement,
):
    return await engagement.add_comment(post_id, identity, body.text)


@router.delete(
    "/comment/{post_id}/{comment_id}", response_model=list[CommentResponse],
)
async def delete_comment(
    post_id: UUID,
    comment_id: str,
    identity: CurrentIdentity,
    engagement: Engagement,
):
    """Delete a comment. Comment author only."""
    return await engagement.remove_comment(post_id, comment_id, identity)
