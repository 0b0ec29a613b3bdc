"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - Identity comes from a verified token (TokenCodec.verify), never from request bodies
    - UserId is a plain string at the core boundary
    - All valid profile list sections encoded as an Enum, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Identity frozen: lives for one request and is never mutated
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller attached to a request."""
    user_id: UserId


# ─── Enums ───────────────────────────────────────────────────────

class ProfileSection(str, Enum):
    """Ordered sub-lists embedded in a profile."""
    EXPERIENCE = "experience"
    EDUCATION = "education"
