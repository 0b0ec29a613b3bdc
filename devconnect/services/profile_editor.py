"""Profile List Editor - add/remove entries on a profile's experience and education lists.

Invariants:
    - Missing profile -> ResourceNotFoundError
    - Caller must own the profile (ForbiddenError) before the entry lookup
    - Removal by id equality only (core/profile_lists.py)
    - Version-checked save, same as posts
"""

import logging
from uuid import UUID

from devconnect.core import profile_lists
from devconnect.core.domain_types import Identity, ProfileSection
from devconnect.core.errors import ResourceNotFoundError
from devconnect.core.ownership import ensure_owner
from devconnect.core.repository_protocols import ProfileLike, ProfileRepository

logger = logging.getLogger(__name__)


class ProfileListEditor:

    def __init__(self, profiles: ProfileRepository):
        self.profiles = profiles

    async def _load_owned(self, owner_id: UUID, identity: Identity) -> ProfileLike:
        profile = await self.profiles.get_by_user(owner_id)
        if profile is None:
            raise ResourceNotFoundError("Profile", str(owner_id))
        ensure_owner(profile.user_id, identity, "Profile", profile.id)
        return profile

    async def add_entry(
        self,
        owner_id: UUID,
        identity: Identity,
        section: ProfileSection,
        entry: dict,
    ) -> ProfileLike:
        profile = await self._load_owned(owner_id, identity)
        stored, entries = profile_lists.prepend_entry(
            list(getattr(profile, section.value)), entry,
        )
        setattr(profile, section.value, entries)
        await self.profiles.save(profile)
        logger.info(
            f"{section.value} entry {stored['id']} added",
            extra={"user_id": identity.user_id, "profile_id": str(profile.id)},
        )
        return profile

    async def remove_entry(
        self,
        owner_id: UUID,
        identity: Identity,
        section: ProfileSection,
        entry_id: str,
    ) -> ProfileLike:
        profile = await self._load_owned(owner_id, identity)
        entries = profile_lists.remove_entry(
            list(getattr(profile, section.value)), entry_id, section,
        )
        setattr(profile, section.value, entries)
        await self.profiles.save(profile)
        logger.info(
            f"{section.value} entry {entry_id} removed",
            extra={"user_id": identity.user_id, "profile_id": str(profile.id)},
        )
        return profile
