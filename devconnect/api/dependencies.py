"""Request Dependencies - auth gate wiring and per-request service construction.

Invariants:
    - get_token_codec() builds the codec once per process from settings; it is never mutated
    - get_current_identity rejects with 401 only via UnauthenticatedError subclasses
    - The Identity it returns carries the canonical hyphenated lower-case UUID, so
      string comparisons downstream see one spelling per user
    - Services are built per request around the request's AsyncSession

Design Decisions:
    - Annotated aliases (CurrentIdentity, ...) so routes declare needs in their signature
"""

import logging
from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.config import get_settings
from devconnect.core.auth_gate import authenticate
from devconnect.core.domain_types import Identity, UserId
from devconnect.core.errors import TokenInvalidError, UnauthenticatedError
from devconnect.core.token_codec import TokenCodec
from devconnect.infrastructure.database import get_db
from devconnect.infrastructure.repositories import (
    SqlPostRepository, SqlProfileRepository, SqlUserRepository,
)
from devconnect.services.accounts import AccountService
from devconnect.services.engagement import EngagementService
from devconnect.services.posts import PostService
from devconnect.services.profile_editor import ProfileListEditor
from devconnect.services.profiles import ProfileService

logger = logging.getLogger(__name__)


@lru_cache
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return TokenCodec(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


async def get_current_identity(request: Request) -> Identity:
    """Authenticate the request from its token header."""
    settings = get_settings()
    try:
        identity = authenticate(
            request.headers, get_token_codec(), settings.token_header,
        )
        user_id = UUID(identity.user_id)
    except UnauthenticatedError as e:
        logger.warning(
            f"Authentication rejected: {e.message}",
            extra={"error_code": e.code, "path": request.url.path},
        )
        raise
    except ValueError:
        logger.warning(
            "Authentication rejected: malformed user id",
            extra={"error_code": "TOKEN_INVALID", "path": request.url.path},
        )
        raise TokenInvalidError("Token carries no user")
    return Identity(user_id=UserId(str(user_id)))


DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def get_account_service(db: DbSession) -> AccountService:
    return AccountService(
        SqlUserRepository(db), get_token_codec(), get_settings().token_ttl_seconds,
    )


def get_post_service(db: DbSession) -> PostService:
    return PostService(SqlPostRepository(db), SqlUserRepository(db))


def get_engagement_service(db: DbSession) -> EngagementService:
    return EngagementService(SqlPostRepository(db), SqlUserRepository(db))


def get_profile_service(db: DbSession) -> ProfileService:
    return ProfileService(
        SqlProfileRepository(db), SqlUserRepository(db), SqlPostRepository(db),
    )


def get_profile_editor(db: DbSession) -> ProfileListEditor:
    return ProfileListEditor(SqlProfileRepository(db))


Accounts = Annotated[AccountService, Depends(get_account_service)]
Posts = Annotated[PostService, Depends(get_post_service)]
Engagement = Annotated[EngagementService, Depends(get_engagement_service)]
Profiles = Annotated[ProfileService, Depends(get_profile_service)]
ProfileEditor = Annotated[ProfileListEditor, Depends(get_profile_editor)]
