"""Posts API - post CRUD, likes and comments over HTTP.

Tests cover:
    - create/list/get posts; unknown post is 404
    - only the author may delete a post
    - like/unlike scenario: like, duplicate like rejected, unlike back to empty
    - one user with differently spelled ids in the token is still one user
    - comments: add prepends, unknown id 404, other author 403, own comment removed
"""

from uuid import UUID, uuid4

from devconnect.api.dependencies import get_token_codec


async def _create_post(client, user, text="Hello world") -> dict:
    res = await client.post("/api/posts", json={"text": text}, headers=user["headers"])
    assert res.status_code == 200, res.text
    return res.json()


# ─── posts ───────────────────────────────────────────────────────

async def test_create_post_uses_author_name(client, alice):
    post = await _create_post(client, alice)
    assert post["user"] == alice["id"]
    assert post["name"] == "Alice"
    assert post["likes"] == []
    assert post["comments"] == []


async def test_create_post_rejects_blank_text(client, alice):
    res = await client.post("/api/posts", json={"text": "   "}, headers=alice["headers"])
    assert res.status_code == 400


async def test_list_posts_newest_first(client, alice, bob):
    first = await _create_post(client, alice, "first")
    second = await _create_post(client, bob, "second")
    res = await client.get("/api/posts", headers=alice["headers"])
    ids = [p["id"] for p in res.json()]
    assert ids == [second["id"], first["id"]]


async def test_get_post_and_404(client, alice):
    post = await _create_post(client, alice)
    res = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert res.json()["text"] == "Hello world"

    res = await client.get(f"/api/posts/{uuid4()}", headers=alice["headers"])
    assert res.status_code == 404


async def test_delete_post_by_other_user_is_forbidden(client, alice, bob):
    post = await _create_post(client, alice)
    res = await client.delete(f"/api/posts/{post['id']}", headers=bob["headers"])
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"

    still = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert still.status_code == 200


async def test_delete_post_by_author(client, alice):
    post = await _create_post(client, alice)
    res = await client.delete(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == {"msg": "Post removed"}

    gone = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert gone.status_code == 404


async def test_delete_missing_post_is_404(client, alice):
    res = await client.delete(f"/api/posts/{uuid4()}", headers=alice["headers"])
    assert res.status_code == 404


# ─── likes ───────────────────────────────────────────────────────

async def test_like_unlike_scenario(client, alice, bob):
    post = await _create_post(client, bob)
    url = f"/api/posts/like/{post['id']}"

    res = await client.put(url, headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == [{"user": alice["id"]}]

    res = await client.put(url, headers=alice["headers"])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ALREADY_LIKED"

    current = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert current.json()["likes"] == [{"user": alice["id"]}]

    res = await client.put(f"/api/posts/unlike/{post['id']}", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == []


async def test_likes_are_most_recent_first(client, alice, bob):
    post = await _create_post(client, alice)
    await client.put(f"/api/posts/like/{post['id']}", headers=alice["headers"])
    res = await client.put(f"/api/posts/like/{post['id']}", headers=bob["headers"])
    assert res.json() == [{"user": bob["id"]}, {"user": alice["id"]}]


async def test_unlike_without_like_is_rejected(client, alice, bob):
    post = await _create_post(client, bob)
    await client.put(f"/api/posts/like/{post['id']}", headers=bob["headers"])

    res = await client.put(f"/api/posts/unlike/{post['id']}", headers=alice["headers"])
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "NOT_LIKED"

    current = await client.get(f"/api/posts/{post['id']}", headers=bob["headers"])
    assert current.json()["likes"] == [{"user": bob["id"]}]


async def test_like_missing_post_is_404(client, alice):
    res = await client.put(f"/api/posts/like/{uuid4()}", headers=alice["headers"])
    assert res.status_code == 404


# ─── comments ────────────────────────────────────────────────────

async def test_comments_prepend_and_return_full_list(client, alice, bob):
    post = await _create_post(client, alice)
    url = f"/api/posts/comment/{post['id']}"

    await client.post(url, json={"text": "first"}, headers=alice["headers"])
    res = await client.post(url, json={"text": "second"}, headers=bob["headers"])
    assert res.status_code == 200
    comments = res.json()
    assert [c["text"] for c in comments] == ["second", "first"]
    assert comments[0]["user"] == bob["id"]
    assert comments[0]["name"] == "Bob"


async def test_comment_blank_text_rejected(client, alice):
    post = await _create_post(client, alice)
    res = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": ""}, headers=alice["headers"],
    )
    assert res.status_code == 400


async def test_remove_unknown_comment_is_404(client, alice):
    post = await _create_post(client, alice)
    await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "hi"}, headers=alice["headers"],
    )
    res = await client.delete(
        f"/api/posts/comment/{post['id']}/does-not-exist", headers=alice["headers"],
    )
    assert res.status_code == 404

    current = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert len(current.json()["comments"]) == 1


async def test_remove_other_users_comment_is_forbidden(client, alice, bob):
    post = await _create_post(client, alice)
    res = await client.post(
        f"/api/posts/comment/{post['id']}", json={"text": "bob says"}, headers=bob["headers"],
    )
    comment_id = res.json()[0]["id"]

    res = await client.delete(
        f"/api/posts/comment/{post['id']}/{comment_id}", headers=alice["headers"],
    )
    assert res.status_code == 403

    current = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert [c["id"] for c in current.json()["comments"]] == [comment_id]


async def test_remove_own_comment(client, alice, bob):
    post = await _create_post(client, alice)
    url = f"/api/posts/comment/{post['id']}"
    await client.post(url, json={"text": "keep"}, headers=alice["headers"])
    res = await client.post(url, json={"text": "drop"}, headers=bob["headers"])
    drop_id = res.json()[0]["id"]

    res = await client.delete(f"{url}/{drop_id}", headers=bob["headers"])
    assert res.status_code == 200
    assert [c["text"] for c in res.json()] == ["keep"]


# ─── identity spelling ───────────────────────────────────────────

def _headers_for(user_id: str) -> dict:
    return {"x-auth-token": get_token_codec().issue(user_id, 60)}


async def test_like_with_differently_spelled_id_is_already_liked(client, alice, bob):
    post = await _create_post(client, bob)
    url = f"/api/posts/like/{post['id']}"
    await client.put(url, headers=alice["headers"])

    for spelling in (alice["id"].upper(), UUID(alice["id"]).hex):
        res = await client.put(url, headers=_headers_for(spelling))
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "ALREADY_LIKED"

    current = await client.get(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert current.json()["likes"] == [{"user": alice["id"]}]


async def test_author_with_upper_case_id_may_delete_post(client, alice):
    post = await _create_post(client, alice)
    res = await client.delete(
        f"/api/posts/{post['id']}", headers=_headers_for(alice["id"].upper()),
    )
    assert res.status_code == 200
