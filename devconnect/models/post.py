"""Post ORM - a published post with its embedded like-set and comment-list.

Invariants:
    - author_id owns the post for deletion purposes
    - likes is a JSON list of {"user": <user id>}; a user id appears at most once
    - comments is a JSON list of comment dicts, most recent first
    - version is bumped on every UPDATE; a stale UPDATE raises StaleDataError

Design Decisions:
    - JSON columns for likes/comments: the post is one document, read and written whole
    - version_id_col for optimistic locking: read-validate-write is atomic per post
      without holding row locks across the request
    - name/avatar denormalized from the author at creation time
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from devconnect.db.base import Base


class Post(Base):
    """Post document."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    likes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
