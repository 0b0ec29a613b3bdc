"""ORM Models - SQLAlchemy declarative models for all persisted documents.

Invariants:
    - All models inherit from Base (db/base.py)
    - Posts and profiles are versioned documents; users are not

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from devconnect.models.user import User  # noqa: F401
from devconnect.models.post import Post  # noqa: F401
from devconnect.models.profile import Profile  # noqa: F401
