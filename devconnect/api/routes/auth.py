"""Auth Routes - login and current-user lookup.

Invariants:
    - POST /api/auth is public; GET /api/auth requires a valid token
    - Login failures are indistinguishable (same 400 for unknown email and bad password)
"""

from fastapi import APIRouter

from devconnect.api.dependencies import Accounts, CurrentIdentity
from devconnect.schemas.auth import LoginRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
async def get_authenticated_user(identity: CurrentIdentity, accounts: Accounts):
    """Return the caller's user record."""
    return await accounts.current_user(identity)


@router.post("", response_model=TokenResponse)
async def login(body: LoginRequest, accounts: Accounts):
    """Authenticate with email/password and return a signed token."""
    token = await accounts.login(body.email, body.password)
    return TokenResponse(token=token)
