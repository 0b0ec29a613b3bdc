"""Profile List Rules - prepend/remove on a profile's experience and education lists.

Invariants:
    - PURE: returns a NEW list, never mutates the input
    - New entries get a fresh id and go to the front
    - remove_entry drops exactly the entry whose id equals entry_id; entries with
      identical field values but other ids are untouched
    - Unknown entry_id -> ResourceNotFoundError, list unchanged
"""

import uuid

from devconnect.core.domain_types import ProfileSection
from devconnect.core.errors import ResourceNotFoundError

SECTION_LABELS: dict[ProfileSection, str] = {
    ProfileSection.EXPERIENCE: "Experience",
    ProfileSection.EDUCATION: "Education",
}


def prepend_entry(
    entries: list[dict], entry: dict, *, entry_id: str | None = None,
) -> tuple[dict, list[dict]]:
    """Return (stored_entry, new_list) with the entry at the front."""
    stored = {**entry, "id": entry_id or uuid.uuid4().hex}
    return stored, [stored, *entries]


def remove_entry(
    entries: list[dict],
    entry_id: str,
    section: ProfileSection = ProfileSection.EXPERIENCE,
) -> list[dict]:
    """Remove the entry with entry_id."""
    if not any(e.get("id") == entry_id for e in entries):
        raise ResourceNotFoundError(SECTION_LABELS[section], entry_id)
    return [e for e in entries if e.get("id") != entry_id]
