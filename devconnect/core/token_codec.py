"""Token Codec - signs and verifies the identity token carried by every private request.

Invariants:
    - verify() returns an Identity or raises an UnauthenticatedError subclass, nothing else
    - Expired tokens raise TokenExpiredError; every other defect raises TokenInvalidError
    - A token issued with ttl <= 0 is already expired when verified
    - The codec is immutable; the secret is fixed when it is built at startup

Design Decisions:
    - PyJWT HS256 with a process-wide secret: stateless, no revocation list
    - Claims shaped {"user": {"id": ...}, "iat", "exp"}; the user id is carried verbatim
      and canonicalized by the request layer, not here
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt

from devconnect.core.domain_types import Identity, UserId
from devconnect.core.errors import TokenExpiredError, TokenInvalidError

REQUIRED_CLAIMS: tuple[str, ...] = ("exp", "iat")


@dataclass(frozen=True)
class TokenCodec:
    """Encode/decode signed identity tokens."""

    secret: str = field(repr=False)
    algorithm: str = "HS256"

    def __post_init__(self):
        if not self.secret:
            raise ValueError("token secret must not be empty")

    def issue(self, user_id: str, ttl_seconds: int) -> str:
        """Sign a token for user_id that expires ttl_seconds from now."""
        if not user_id:
            raise ValueError("user_id must not be empty")
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + timedelta(seconds=ttl_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Decode token and return the identity it carries."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError:
            raise TokenInvalidError()

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id.strip():
            raise TokenInvalidError("Token carries no user")
        return Identity(user_id=UserId(user_id))
