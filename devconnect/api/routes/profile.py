"""Profile Routes - profile upsert/read/delete and experience/education sub-lists.

Invariants:
    - /me, POST, DELETE and the sub-list routes are private; listing and by-user reads are public
    - Sub-list routes always target the caller's own profile; ownership is still
      checked by ProfileListEditor
    - Responses embed {id, name, avatar} of the owning user, read separately
"""

from uuid import UUID

from fastapi import APIRouter

from devconnect.api.dependencies import CurrentIdentity, ProfileEditor, Profiles
from devconnect.core.domain_types import ProfileSection
from devconnect.core.repository_protocols import ProfileLike, UserLike
from devconnect.schemas.profile import (
    EducationCreate, ExperienceCreate, ProfileResponse, ProfileUpsert, ProfileUser,
)

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _to_response(profile: ProfileLike, user: UserLike | None) -> ProfileResponse:
    response = ProfileResponse.model_validate(profile)
    if user is not None:
        response.user = ProfileUser(id=user.id, name=user.name, avatar=user.avatar)
    return response


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(identity: CurrentIdentity, profiles: Profiles):
    profile, user = await profiles.get_for_user(UUID(identity.user_id))
    return _to_response(profile, user)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    body: ProfileUpsert, identity: CurrentIdentity, profiles: Profiles,
):
    """Create or update the caller's profile."""
    profile, user = await profiles.upsert(identity, body.profile_fields())
    return _to_response(profile, user)


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(profiles: Profiles):
    return [_to_response(p, u) for p, u in await profiles.list_all()]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(user_id: UUID, profiles: Profiles):
    profile, user = await profiles.get_for_user(user_id)
    return _to_response(profile, user)


@router.delete("")
async def delete_account(identity: CurrentIdentity, profiles: Profiles):
    """Delete the caller's posts, profile and user."""
    await profiles.delete_account(identity)
    return {"msg": "User removed"}


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    body: ExperienceCreate,
    identity: CurrentIdentity,
    editor: ProfileEditor,
    profiles: Profiles,
):
    owner_id = UUID(identity.user_id)
    await editor.add_entry(owner_id, identity, ProfileSection.EXPERIENCE, body.to_entry())
    return _to_response(*await profiles.get_for_user(owner_id))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    exp_id: str,
    identity: CurrentIdentity,
    editor: ProfileEditor,
    profiles: Profiles,
):
    owner_id = UUID(identity.user_id)
    await editor.remove_entry(owner_id, identity, ProfileSection.EXPERIENCE, exp_id)
    return _to_response(*await profiles.get_for_user(owner_id))


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    body: EducationCreate,
    identity: CurrentIdentity,
    editor: ProfileEditor,
    profiles: Profiles,
):
    owner_id = UUID(identity.user_id)
    await editor.add_entry(owner_id, identity, ProfileSection.EDUCATION, body.to_entry())
    return _to_response(*await profiles.get_for_user(owner_id))


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    edu_id: str,
    identity: CurrentIdentity,
    editor: ProfileEditor,
    profiles: Profiles,
):
    owner_id = UUID(identity.user_id)
    await editor.remove_entry(owner_id, identity, ProfileSection.EDUCATION, edu_id)
    return _to_response(*await profiles.get_for_user(owner_id))
