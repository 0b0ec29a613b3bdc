"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Every repository call either succeeds or raises StorageError/ConcurrencyError
    - save() on a versioned document is a conditional update: it fails with
      ConcurrencyError if another writer saved the same document first

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - *Like protocols describe the documents the services touch, so services
      stay decoupled from the ORM models while keeping real type information
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for a registered user."""
    id: UUID
    name: str
    email: str
    password_hash: str
    avatar: str | None
    created_at: datetime


class PostLike(Protocol):
    """Structural contract for a post document."""
    id: UUID
    author_id: UUID
    text: str
    name: str | None
    avatar: str | None
    likes: list
    comments: list
    created_at: datetime


class ProfileLike(Protocol):
    """Structural contract for a profile document."""
    id: UUID
    user_id: UUID
    skills: list
    social: dict
    experience: list
    education: list


class UserRepository(Protocol):
    """Contract for user persistence - implemented by shell."""
    async def get(self, user_id: UUID) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(self, name: str, email: str, password_hash: str, avatar: str | None) -> UserLike: ...
    async def delete(self, user: UserLike) -> None: ...


class PostRepository(Protocol):
    """Contract for post persistence - implemented by shell."""
    async def get(self, post_id: UUID) -> PostLike | None: ...
    async def list_newest_first(self) -> list[PostLike]: ...
    async def add(self, author_id: UUID, text: str, name: str | None, avatar: str | None) -> PostLike: ...
    async def save(self, post: PostLike) -> None: ...
    async def delete(self, post: PostLike) -> None: ...
    async def delete_by_author(self, author_id: UUID) -> int: ...


class ProfileRepository(Protocol):
    """Contract for profile persistence - implemented by shell."""
    async def get_by_user(self, user_id: UUID) -> ProfileLike | None: ...
    async def list_all(self) -> list[ProfileLike]: ...
    async def add(self, user_id: UUID, fields: dict) -> ProfileLike: ...
    async def save(self, profile: ProfileLike) -> None: ...
    async def delete(self, profile: ProfileLike) -> None: ...  # pending until the next commit
