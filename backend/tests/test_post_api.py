"""
Postboard Backend: Post API Integration Tests
==============================================

What:  Full request → service → SQLite → response round trips.
Why:   The route tests mock the store; these check the real wiring,
       including the commit of each write.
"""

import pytest
from sqlalchemy.exc import OperationalError


async def _add(client, slug, **fields):
    payload = {"slug": slug, "title": slug.title(), **fields}
    response = await client.post("/api/posts", json=payload)
    assert response.status_code == 200, response.text
    return response


@pytest.mark.asyncio
async def test_post_lifecycle(sqlite_client):
    await _add(sqlite_client, "abc", body="v1", category="news", tags=["intro"])

    response = await sqlite_client.get("/api/posts/abc")
    assert response.status_code == 200
    post = response.json()
    assert post["slug"] == "abc"
    assert post["tags"] == ["intro"]

    # Send the stored post back as the update body with a few fields changed
    post.update(title="Edited", body="v2", tags=["intro", "update"])
    response = await sqlite_client.put("/api/posts", json=post)
    assert response.status_code == 200
    assert response.json() == {"message": "Post updated successfully"}

    response = await sqlite_client.get("/api/posts/abc")
    edited = response.json()
    assert edited["id"] == post["id"]
    assert edited["body"] == "v2"
    assert edited["tags"] == ["intro", "update"]

    response = await sqlite_client.get("/api/posts/tag/update")
    assert [p["slug"] for p in response.json()["posts"]] == ["abc"]

    response = await sqlite_client.request("DELETE", "/api/posts", json={"id": post["id"]})
    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully"}

    response = await sqlite_client.get("/api/posts/abc")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_listings(sqlite_client):
    await _add(sqlite_client, "a", category="news", tags=["x"])
    await _add(sqlite_client, "b", category="notes", tags=["x", "y"])
    await _add(sqlite_client, "c", category="news")

    response = await sqlite_client.get("/api/posts")
    assert response.status_code == 200
    assert [p["slug"] for p in response.json()["posts"]] == ["c", "b", "a"]

    response = await sqlite_client.get("/api/posts/category/news")
    assert [p["slug"] for p in response.json()["posts"]] == ["c", "a"]

    response = await sqlite_client.get("/api/posts/tag/x")
    assert [p["slug"] for p in response.json()["posts"]] == ["b", "a"]

    response = await sqlite_client.get("/api/posts/category/empty")
    assert response.json() == {"posts": []}


@pytest.mark.asyncio
async def test_duplicate_slug_is_bad_request(sqlite_client):
    await _add(sqlite_client, "same")

    response = await sqlite_client.post("/api/posts", json={"slug": "same", "title": "Again"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Failed to add post:")

    # The first post survived the failed insert
    response = await sqlite_client.get("/api/posts")
    assert len(response.json()["posts"]) == 1


@pytest.mark.asyncio
async def test_delete_missing_post_is_bad_request(sqlite_client):
    response = await sqlite_client.post(
        "/api/posts/delete", json={"id": 7, "slug": "ghost", "title": "Ghost"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_update_cannot_move_post_to_another_id(sqlite_client):
    """The body id picks the row to replace; no request can change an id."""
    await _add(sqlite_client, "first")
    await _add(sqlite_client, "second")
    posts = {p["slug"]: p for p in (await sqlite_client.get("/api/posts")).json()["posts"]}

    target = posts["first"]
    response = await sqlite_client.put(
        "/api/posts", json={**target, "title": "First, edited"}
    )
    assert response.status_code == 200

    after = {p["slug"]: p for p in (await sqlite_client.get("/api/posts")).json()["posts"]}
    assert after["first"]["id"] == target["id"]
    assert after["first"]["title"] == "First, edited"
    assert after["second"] == posts["second"]


@pytest.mark.asyncio
async def test_descriptive_fields_round_trip_unchanged(sqlite_client):
    tags = [" Rust ", "Rust", ""]
    response = await sqlite_client.post(
        "/api/posts", json={"slug": "s", "title": "", "tags": tags}
    )
    assert response.status_code == 200

    post = (await sqlite_client.get("/api/posts/s")).json()
    assert post["title"] == ""
    assert post["tags"] == tags

    response = await sqlite_client.get("/api/posts/tag/Rust")
    assert [p["slug"] for p in response.json()["posts"]] == ["s"]


@pytest.mark.asyncio
async def test_failed_commit_is_reported(test_client, mock_db_session):
    mock_db_session.commit.side_effect = OperationalError(
        "COMMIT", {}, Exception("disk I/O error")
    )

    response = await test_client.post("/api/posts", json={"slug": "s", "title": "T"})

    assert response.status_code == 400
    assert response.json() == {"error": "Failed to add post: disk I/O error"}
