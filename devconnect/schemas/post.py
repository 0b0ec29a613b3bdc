"""Post Schemas - post and comment payloads.

Invariants:
    - PostCreate.text and CommentCreate.text are stripped and non-empty
    - likes and comments are returned in stored order (most recent first)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _TextBody(BaseModel):
    text: str = Field(min_length=1, max_length=5_000)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Text is required")
        return v


class PostCreate(_TextBody):
    pass


class CommentCreate(_TextBody):
    pass


class LikeEntry(BaseModel):
    user: str


class CommentResponse(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user: UUID = Field(validation_alias="author_id")
    text: str
    name: str | None = None
    avatar: str | None = None
    likes: list[LikeEntry]
    comments: list[CommentResponse]
    date: datetime = Field(validation_alias="created_at")
