"""Auth Gate - turns a request's header map into an Identity or a rejection.

Invariants:
    - Absent or blank token header -> TokenMissingError
    - Present token -> TokenCodec.verify; its failure propagates unchanged
    - Header lookup is case-insensitive (plain dicts and Starlette Headers alike)
    - Stateless: no session store, no retries
"""

from collections.abc import Mapping

from devconnect.core.domain_types import Identity
from devconnect.core.errors import TokenMissingError
from devconnect.core.token_codec import TokenCodec

DEFAULT_TOKEN_HEADER = "x-auth-token"


def extract_token(headers: Mapping[str, str], header_name: str = DEFAULT_TOKEN_HEADER) -> str | None:
    """Return the stripped token value, or None when absent/blank."""
    wanted = header_name.lower()
    for name, value in headers.items():
        if name.lower() == wanted:
            value = (value or "").strip()
            return value or None
    return None


def authenticate(
    headers: Mapping[str, str],
    codec: TokenCodec,
    header_name: str = DEFAULT_TOKEN_HEADER,
) -> Identity:
    """Authenticate one request. Rejects only when the token is absent or fails verify."""
    token = extract_token(headers, header_name)
    if token is None:
        raise TokenMissingError()
    return codec.verify(token)
