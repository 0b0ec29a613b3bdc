"""User Registration - public sign-up endpoint.

Invariants:
    - Returns a token on success; the password never leaves the request
"""

from fastapi import APIRouter, status

from devconnect.api.dependencies import Accounts
from devconnect.schemas.auth import RegisterRequest, TokenResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "", response_model=TokenResponse, status_code=status.HTTP_201_CREATED,
)
async def register_user(body: RegisterRequest, accounts: Accounts):
    """Register a user and return a signed token."""
    token = await accounts.register(body.name, body.email, body.password)
    return TokenResponse(token=token)
