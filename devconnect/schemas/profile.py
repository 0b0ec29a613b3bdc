"""Profile Schemas - profile upsert, list entries and profile responses.

Invariants:
    - ProfileUpsert.status and ProfileUpsert.skills are required and non-empty
    - skills accepts "a, b, c" or a list; always stored as a list of trimmed strings
    - Entry date fields use the wire names "from"/"to"
    - An entry marked current has no "to" date
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, field_validator, model_validator,
)


SOCIAL_FIELDS: tuple[str, ...] = (
    "youtube", "twitter", "facebook", "linkedin", "instagram",
)


class ProfileUpsert(BaseModel):
    """Create-or-update body for the caller's profile."""
    status: str = Field(min_length=1, max_length=100)
    skills: list[str]
    company: str | None = Field(None, max_length=200)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=200)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status")
    @classmethod
    def strip_status(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Status is required")
        return v

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            v = [s.strip() for s in v if isinstance(s, str) and s.strip()]
            if not v:
                raise ValueError("Skills is required")
        return v

    def profile_fields(self) -> dict:
        """Column values to set; unset optional fields are left out."""
        fields = {"status": self.status, "skills": self.skills}
        for name, column in (
            ("company", "company"), ("website", "website"),
            ("location", "location"), ("bio", "bio"),
            ("githubusername", "github_username"),
        ):
            value = getattr(self, name)
            if value:
                fields[column] = value
        fields["social"] = {
            key: getattr(self, key) for key in SOCIAL_FIELDS if getattr(self, key)
        }
        return fields


class _DatedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def check_range(self):
        if self.current:
            self.to_date = None
        elif self.to_date and self.to_date < self.from_date:
            raise ValueError("'to' must not be before 'from'")
        return self

    def to_entry(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ExperienceCreate(_DatedEntry):
    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str | None = None


class EducationCreate(_DatedEntry):
    school: str = Field(min_length=1, max_length=200)
    degree: str = Field(min_length=1, max_length=200)
    fieldofstudy: str = Field(min_length=1, max_length=200)


class ProfileUser(BaseModel):
    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user: ProfileUser | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    bio: str | None = None
    githubusername: str | None = Field(None, validation_alias="github_username")
    skills: list[str]
    social: dict[str, str]
    experience: list[dict]
    education: list[dict]
    date: datetime = Field(validation_alias="created_at")
