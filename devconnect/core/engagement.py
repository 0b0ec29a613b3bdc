"""Engagement Rules - like-set and comment-list transforms on a post.

Invariants:
    - Every function is PURE: returns a NEW list, never mutates its input
    - A user id appears at most once in a like-set
    - New likes and comments are prepended (most recent first)
    - Removal matches by id/user equality, never by a recomputed position
    - Rejections are raised before anything is built, so a failed call leaves no trace

Design Decisions:
    - Shell (services/engagement.py) owns read and save; this module only decides
      (ADR: functional core, imperative shell)
    - Entries are plain dicts because they live in JSON columns as-is
"""

import uuid
from datetime import datetime, timezone

from devconnect.core.domain_types import Identity
from devconnect.core.errors import (
    AlreadyLikedError,
    NotLikedError,
    ResourceNotFoundError,
    ValidationError,
)
from devconnect.core.ownership import ensure_owner


# ─── Likes ───────────────────────────────────────────────────────

def has_liked(likes: list[dict], user_id: str) -> bool:
    return any(str(like.get("user")) == user_id for like in likes)


def add_like(likes: list[dict], identity: Identity) -> list[dict]:
    """Prepend the caller to the like-set. AlreadyLikedError if present."""
    if has_liked(likes, identity.user_id):
        raise AlreadyLikedError()
    return [{"user": identity.user_id}, *likes]


def remove_like(likes: list[dict], identity: Identity) -> list[dict]:
    """Drop the caller from the like-set. NotLikedError if absent."""
    if not has_liked(likes, identity.user_id):
        raise NotLikedError()
    return [like for like in likes if str(like.get("user")) != identity.user_id]


# ─── Comments ────────────────────────────────────────────────────

def find_comment(comments: list[dict], comment_id: str) -> dict | None:
    return next((c for c in comments if c.get("id") == comment_id), None)


def add_comment(
    comments: list[dict],
    identity: Identity,
    text: str,
    name: str | None = None,
    avatar: str | None = None,
    *,
    comment_id: str | None = None,
    now: datetime | None = None,
) -> tuple[dict, list[dict]]:
    """Build a comment and prepend it. Returns (comment, new_list)."""
    text = (text or "").strip()
    if not text:
        raise ValidationError("Text is required", "text")
    comment = {
        "id": comment_id or uuid.uuid4().hex,
        "user": identity.user_id,
        "text": text,
        "name": name,
        "avatar": avatar,
        "date": (now or datetime.now(timezone.utc)).isoformat(),
    }
    return comment, [comment, *comments]


def remove_comment(
    comments: list[dict], comment_id: str, identity: Identity,
) -> list[dict]:
    """Remove exactly the comment with comment_id, if the caller wrote it."""
    comment = find_comment(comments, comment_id)
    if comment is None:
        raise ResourceNotFoundError("Comment", comment_id)
    ensure_owner(comment.get("user"), identity, "Comment", comment_id)
    return [c for c in comments if c.get("id") != comment_id]
