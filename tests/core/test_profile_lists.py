"""Profile List Rules - tests for prepend/remove on experience and education lists.

Tests cover:
    - prepend gives a fresh id and puts the entry first
    - removal by id leaves every other entry, even exact duplicates by value
    - unknown id is NotFound with the section's label, list unchanged
"""

import pytest

from devconnect.core.domain_types import ProfileSection
from devconnect.core.errors import ResourceNotFoundError
from devconnect.core.profile_lists import prepend_entry, remove_entry


def test_prepend_assigns_id_and_goes_first():
    existing = [{"id": "e1", "title": "Dev"}]
    stored, entries = prepend_entry(existing, {"title": "Lead"})
    assert entries[0] is stored
    assert stored["id"] and stored["id"] != "e1"
    assert entries[1:] == existing


def test_prepend_does_not_mutate_inputs():
    entry = {"title": "Lead"}
    existing = []
    prepend_entry(existing, entry, entry_id="e9")
    assert existing == []
    assert "id" not in entry


def test_prepend_overrides_client_supplied_id():
    stored, _ = prepend_entry([], {"id": "forged", "title": "Lead"}, entry_id="e1")
    assert stored["id"] == "e1"


def test_remove_first_of_two():
    entries = [{"id": "e1"}, {"id": "e2"}]
    assert remove_entry(entries, "e1") == [{"id": "e2"}]


def test_remove_targets_id_among_identical_values():
    same = {"title": "Dev", "company": "Acme", "from": "2020-01-01"}
    entries = [
        {**same, "id": "a"},
        {**same, "id": "b"},
        {**same, "id": "c"},
    ]
    assert remove_entry(entries, "b") == [{**same, "id": "a"}, {**same, "id": "c"}]


def test_remove_last_entry():
    entries = [{"id": "e1"}, {"id": "e2"}, {"id": "e3"}]
    assert remove_entry(entries, "e3") == [{"id": "e1"}, {"id": "e2"}]


def test_remove_unknown_is_not_found_and_unchanged():
    entries = [{"id": "e1"}]
    with pytest.raises(ResourceNotFoundError) as exc:
        remove_entry(entries, "missing", ProfileSection.EDUCATION)
    assert exc.value.context.resource_type == "Education"
    assert entries == [{"id": "e1"}]


def test_remove_from_empty_list_is_not_found():
    with pytest.raises(ResourceNotFoundError):
        remove_entry([], "e1")
