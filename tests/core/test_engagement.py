"""Engagement Rules - tests for pure like-set and comment-list transforms.

Tests cover:
    - like prepends, second like is AlreadyLiked and the set grows by exactly 1
    - unlike of a never-liked post is NotLiked and leaves the set unchanged
    - like then unlike restores the original set
    - comment add prepends with a fresh id; blank text rejected
    - comment removal: unknown id NotFound, other author Forbidden, exact removal otherwise
    - inputs are never mutated
"""

from datetime import datetime, timezone

import pytest

from devconnect.core.domain_types import Identity
from devconnect.core.engagement import (
    add_comment, add_like, find_comment, has_liked, remove_comment, remove_like,
)
from devconnect.core.errors import (
    AlreadyLikedError, ForbiddenError, NotLikedError,
    ResourceNotFoundError, ValidationError,
)

ALICE = Identity(user_id="alice")
BOB = Identity(user_id="bob")


# ─── likes ───────────────────────────────────────────────────────

def test_like_prepends_most_recent_first():
    likes = add_like([], ALICE)
    likes = add_like(likes, BOB)
    assert likes == [{"user": "bob"}, {"user": "alice"}]


def test_second_like_is_rejected_and_set_grows_by_one():
    original = [{"user": "carol"}]
    once = add_like(original, ALICE)
    with pytest.raises(AlreadyLikedError) as exc:
        add_like(once, ALICE)
    assert exc.value.http_status == 400
    assert len(once) == len(original) + 1


def test_unlike_never_liked_is_rejected():
    likes = [{"user": "carol"}]
    with pytest.raises(NotLikedError):
        remove_like(likes, ALICE)
    assert likes == [{"user": "carol"}]


def test_like_then_unlike_restores_original():
    original = [{"user": "carol"}, {"user": "dave"}]
    assert remove_like(add_like(original, ALICE), ALICE) == original


def test_unlike_removes_only_the_caller():
    likes = [{"user": "bob"}, {"user": "alice"}, {"user": "carol"}]
    assert remove_like(likes, ALICE) == [{"user": "bob"}, {"user": "carol"}]


def test_like_scenario_from_empty_post():
    likes = add_like([], ALICE)
    assert likes == [{"user": "alice"}]
    with pytest.raises(AlreadyLikedError):
        add_like(likes, ALICE)
    assert likes == [{"user": "alice"}]
    assert remove_like(likes, ALICE) == []


def test_like_transforms_do_not_mutate_input():
    likes = [{"user": "carol"}]
    add_like(likes, ALICE)
    remove_like(likes, Identity(user_id="carol"))
    assert likes == [{"user": "carol"}]


def test_has_liked_compares_as_string():
    assert has_liked([{"user": "alice"}], "alice")
    assert not has_liked([], "alice")


# ─── comments ────────────────────────────────────────────────────

def test_add_comment_prepends_with_fresh_id():
    first, comments = add_comment([], ALICE, "first", "Alice", "a.png")
    second, comments = add_comment(comments, BOB, "second", "Bob", None)
    assert comments == [second, first]
    assert first["id"] != second["id"]
    assert first["user"] == "alice"
    assert first["name"] == "Alice"


def test_add_comment_uses_given_id_and_clock():
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    comment, _ = add_comment([], ALICE, "  hi  ", comment_id="c1", now=now)
    assert comment["id"] == "c1"
    assert comment["text"] == "hi"
    assert comment["date"] == now.isoformat()


@pytest.mark.parametrize("text", ["", "   ", None])
def test_add_comment_rejects_blank_text(text):
    with pytest.raises(ValidationError):
        add_comment([], ALICE, text)


def _comments():
    return [
        {"id": "c2", "user": "bob", "text": "same"},
        {"id": "c1", "user": "alice", "text": "same"},
    ]


def test_remove_unknown_comment_is_not_found():
    comments = _comments()
    with pytest.raises(ResourceNotFoundError) as exc:
        remove_comment(comments, "nope", ALICE)
    assert exc.value.http_status == 404
    assert comments == _comments()


def test_remove_other_users_comment_is_forbidden():
    comments = _comments()
    with pytest.raises(ForbiddenError):
        remove_comment(comments, "c2", ALICE)
    assert comments == _comments()


def test_remove_own_comment_removes_exactly_that_one():
    result = remove_comment(_comments(), "c1", ALICE)
    assert result == [{"id": "c2", "user": "bob", "text": "same"}]


def test_find_comment():
    assert find_comment(_comments(), "c2")["user"] == "bob"
    assert find_comment(_comments(), "c3") is None
