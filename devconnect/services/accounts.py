"""Account Service - registration, login and current-user lookup.

Invariants:
    - Emails are unique; a second registration raises DuplicateUserError
    - Unknown email and wrong password raise the same InvalidCredentialsError
    - Successful register/login returns a freshly issued token, nothing is stored

Design Decisions:
    - Avatar is the email's gravatar URL (identicon fallback), computed once at registration
"""

import hashlib
import logging
from uuid import UUID

from devconnect.core.domain_types import Identity
from devconnect.core.errors import (
    DuplicateUserError, InvalidCredentialsError, ResourceNotFoundError,
)
from devconnect.core.repository_protocols import UserLike, UserRepository
from devconnect.core.token_codec import TokenCodec
from devconnect.infrastructure.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


def gravatar_url(email: str, size: int = 200) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?s={size}&r=pg&d=mm"


class AccountService:

    def __init__(self, users: UserRepository, codec: TokenCodec, token_ttl_seconds: int):
        self.users = users
        self.codec = codec
        self.token_ttl_seconds = token_ttl_seconds

    async def register(self, name: str, email: str, password: str) -> str:
        if await self.users.get_by_email(email) is not None:
            raise DuplicateUserError()
        user = await self.users.add(
            name, email, hash_password(password), gravatar_url(email),
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self.codec.issue(str(user.id), self.token_ttl_seconds)

    async def login(self, email: str, password: str) -> str:
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login rejected")
            raise InvalidCredentialsError()
        return self.codec.issue(str(user.id), self.token_ttl_seconds)

    async def current_user(self, identity: Identity) -> UserLike:
        user = await self.users.get(UUID(identity.user_id))
        if user is None:
            raise ResourceNotFoundError("User", identity.user_id)
        return user
