"""Ownership Policy - who may mutate or delete a resource.

Invariants:
    - may_mutate is PURE and never raises
    - Owner ids are compared as strings (UUID columns and JSON entries mix types)
"""

from devconnect.core.domain_types import Identity
from devconnect.core.errors import ForbiddenError


def may_mutate(resource_owner_id: object, identity: Identity) -> bool:
    """True when the caller is the owner of the resource."""
    if resource_owner_id is None:
        return False
    return str(resource_owner_id) == identity.user_id


def ensure_owner(
    resource_owner_id: object,
    identity: Identity,
    resource_type: str,
    resource_id: object,
) -> None:
    """Raise ForbiddenError unless may_mutate allows the caller."""
    if not may_mutate(resource_owner_id, identity):
        raise ForbiddenError(resource_type, str(resource_id))
