"""Password Hashing - bcrypt via passlib.

Invariants:
    - Plain passwords are never stored or logged
    - verify_password never raises on a malformed stored hash; it returns False
"""

import logging
from functools import lru_cache

from passlib.context import CryptContext

from devconnect.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_password_context() -> CryptContext:
    rounds = get_settings().password_hash_rounds
    return CryptContext(
        schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
    )


def hash_password(password: str) -> str:
    return get_password_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return get_password_context().verify(plain_password, hashed_password)
    except ValueError as e:
        logger.warning(f"Unverifiable password hash: {e}")
        return False
