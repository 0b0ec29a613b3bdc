"""Profile Service - upsert, read and delete of user profiles.

Invariants:
    - A user has at most one profile; upsert updates it in place when it exists
    - Reads attach the owning user by an explicit second read (no ORM join)
    - Account deletion removes the user's posts, profile and user record in one commit;
      if that commit fails nothing is removed

Design Decisions:
    - Profile and user returned as a pair; the route shapes the response
"""

import logging
from uuid import UUID

from devconnect.core.domain_types import Identity
from devconnect.core.errors import ResourceNotFoundError
from devconnect.core.repository_protocols import (
    PostRepository, ProfileLike, ProfileRepository, UserLike, UserRepository,
)

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(
        self,
        profiles: ProfileRepository,
        users: UserRepository,
        posts: PostRepository,
    ):
        self.profiles = profiles
        self.users = users
        self.posts = posts

    async def get_for_user(
        self, user_id: UUID,
    ) -> tuple[ProfileLike, UserLike | None]:
        """Fetch profile, then its owner."""
        profile = await self.profiles.get_by_user(user_id)
        if profile is None:
            raise ResourceNotFoundError("Profile", str(user_id))
        user = await self.users.get(profile.user_id)
        return profile, user

    async def list_all(self) -> list[tuple[ProfileLike, UserLike | None]]:
        result = []
        for profile in await self.profiles.list_all():
            result.append((profile, await self.users.get(profile.user_id)))
        return result

    async def upsert(
        self, identity: Identity, fields: dict,
    ) -> tuple[ProfileLike, UserLike | None]:
        """Create the caller's profile, or overwrite the given fields of it."""
        user_id = UUID(identity.user_id)
        profile = await self.profiles.get_by_user(user_id)
        if profile is None:
            profile = await self.profiles.add(user_id, fields)
            logger.info("Profile created", extra={"user_id": identity.user_id})
        else:
            for column, value in fields.items():
                setattr(profile, column, value)
            await self.profiles.save(profile)
            logger.info("Profile updated", extra={"user_id": identity.user_id})
        return profile, await self.users.get(user_id)

    async def delete_account(self, identity: Identity) -> None:
        """Remove the caller's posts, profile and user in a single commit."""
        user_id = UUID(identity.user_id)
        profile = await self.profiles.get_by_user(user_id)
        user = await self.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", identity.user_id)
        removed = await self.posts.delete_by_author(user_id)
        if profile is not None:
            await self.profiles.delete(profile)
        await self.users.delete(user)
        logger.info(
            f"Account removed with {removed} post(s)",
            extra={"user_id": identity.user_id},
        )
