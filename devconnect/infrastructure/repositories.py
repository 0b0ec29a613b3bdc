"""SQL Repositories - AsyncSession-backed implementations of core/repository_protocols.py.

Invariants:
    - Every write goes through commit_or_raise: StorageError or ConcurrencyError, never a raw driver error
    - A unique-constraint hit on insert is the losing side of a check-then-insert race:
      duplicate email -> DuplicateUserError, second profile for a user -> ConcurrencyError
    - Reads never commit
    - save() relies on the mapper's version_id_col, so the UPDATE only lands if the
      row still carries the version that was read

Design Decisions:
    - One small class per aggregate, constructed per request around the request's session
    - No relationship loading: callers do explicit read-after-read (profile, then user)
"""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.core.errors import ConcurrencyError, DuplicateUserError, StorageError
from devconnect.infrastructure.database import commit_or_raise
from devconnect.models.post import Post
from devconnect.models.profile import Profile
from devconnect.models.user import User

logger = logging.getLogger(__name__)


async def _scalar(db: AsyncSession, query, operation: str):
    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        logger.error(f"DB read failed: {e}", extra={"operation": operation})
        raise StorageError(operation)
    return result.scalar_one_or_none()


async def _scalars(db: AsyncSession, query, operation: str) -> list:
    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        logger.error(f"DB read failed: {e}", extra={"operation": operation})
        raise StorageError(operation)
    return list(result.scalars().all())


def _profile_already_created() -> ConcurrencyError:
    return ConcurrencyError(
        "Profile was created by another request, reload and try again",
    )


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UUID) -> User | None:
        return await _scalar(
            self.db, select(User).where(User.id == user_id), "user.get",
        )

    async def get_by_email(self, email: str) -> User | None:
        return await _scalar(
            self.db,
            select(User).where(User.email == email.lower()),
            "user.get_by_email",
        )

    async def add(
        self, name: str, email: str, password_hash: str, avatar: str | None,
    ) -> User:
        user = User(
            name=name, email=email.lower(),
            password_hash=password_hash, avatar=avatar,
        )
        self.db.add(user)
        await commit_or_raise(self.db, "user.add", on_integrity=DuplicateUserError)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await commit_or_raise(self.db, "user.delete")


class SqlPostRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, post_id: UUID) -> Post | None:
        return await _scalar(
            self.db, select(Post).where(Post.id == post_id), "post.get",
        )

    async def list_newest_first(self) -> list[Post]:
        return await _scalars(
            self.db,
            select(Post).order_by(Post.created_at.desc()),
            "post.list",
        )

    async def add(
        self, author_id: UUID, text: str, name: str | None, avatar: str | None,
    ) -> Post:
        post = Post(
            author_id=author_id, text=text, name=name, avatar=avatar,
            likes=[], comments=[],
        )
        self.db.add(post)
        await commit_or_raise(self.db, "post.add")
        return post

    async def save(self, post: Post) -> None:
        await commit_or_raise(self.db, "post.save")

    async def delete(self, post: Post) -> None:
        await self.db.delete(post)
        await commit_or_raise(self.db, "post.delete")

    async def delete_by_author(self, author_id: UUID) -> int:
        """Bulk delete; commits together with whatever else is pending."""
        try:
            result = await self.db.execute(
                delete(Post).where(Post.author_id == author_id),
            )
        except SQLAlchemyError as e:
            logger.error(f"DB bulk delete failed: {e}", extra={"operation": "post.delete_by_author"})
            raise StorageError("post.delete_by_author")
        return result.rowcount or 0


class SqlProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        return await _scalar(
            self.db,
            select(Profile).where(Profile.user_id == user_id),
            "profile.get_by_user",
        )

    async def list_all(self) -> list[Profile]:
        return await _scalars(
            self.db,
            select(Profile).order_by(Profile.created_at.desc()),
            "profile.list",
        )

    async def add(self, user_id: UUID, fields: dict) -> Profile:
        profile = Profile(
            user_id=user_id, experience=[], education=[], **fields,
        )
        self.db.add(profile)
        await commit_or_raise(
            self.db, "profile.add",
            on_integrity=_profile_already_created,
        )
        return profile

    async def save(self, profile: Profile) -> None:
        await commit_or_raise(self.db, "profile.save")

    async def delete(self, profile: Profile) -> None:
        """Mark for deletion; commits together with whatever else is pending."""
        await self.db.delete(profile)
