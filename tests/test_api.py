"""HTTP tests through the FastAPI app."""

import pytest
from httpx import ASGITransport, AsyncClient

from tests.helpers import auth_headers

PREFIX = "/api/v1"

ALICE = auth_headers("alice")
BOB = auth_headers("bob")


def story_payload(title="Dawn", **kwargs):
    payload = {
        "title": title,
        "content": "Once upon a time",
        "image_urls": ["/uploads/stories/a.png"],
        "characters": [{"name": "Hero", "role": "lead"}],
    }
    payload.update(kwargs)
    return payload


async def create_story(client, headers=ALICE, **kwargs):
    response = await client.post(f"{PREFIX}/stories", json=story_payload(**kwargs), headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_root_and_health(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

    response = await client.get("/health")
    assert response.status_code == 200
    assert "database" in response.json()["services"]


async def test_create_requires_token(client):
    response = await client.post(f"{PREFIX}/stories", json=story_payload())
    assert response.status_code == 401


async def test_invalid_token_rejected(client):
    response = await client.post(
        f"{PREFIX}/stories",
        json=story_payload(),
        headers={"Authorization": "Bearer garbage"},
    )
    assert response.status_code == 401


async def test_story_lifecycle(client):
    story = await create_story(client)
    assert story["author_username"] == "alice"
    assert story["is_published"] is False
    assert story["characters"][0]["name"] == "Hero"

    # drafts stay out of the feed and are hidden from others
    response = await client.get(f"{PREFIX}/stories")
    assert response.json()["data"] == []
    response = await client.get(f"{PREFIX}/stories/{story['id']}", headers=BOB)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "STORY_NOT_FOUND"

    response = await client.get(f"{PREFIX}/stories/my-stories", headers=ALICE)
    assert [s["id"] for s in response.json()["data"]] == [story["id"]]

    response = await client.post(f"{PREFIX}/stories/{story['id']}/toggle-publish", headers=ALICE)
    assert response.json()["data"]["is_published"] is True

    response = await client.get(f"{PREFIX}/stories")
    assert [s["id"] for s in response.json()["data"]] == [story["id"]]

    response = await client.put(
        f"{PREFIX}/stories/{story['id']}",
        json=story_payload("Dusk", characters=[{"name": "Villain"}], image_urls=[]),
        headers=ALICE,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Dusk"
    assert [c["name"] for c in data["characters"]] == ["Villain"]
    assert data["image_urls"] == []

    response = await client.delete(f"{PREFIX}/stories/{story['id']}", headers=ALICE)
    assert response.status_code == 200
    response = await client.get(f"{PREFIX}/stories/{story['id']}", headers=ALICE)
    assert response.status_code == 404


@pytest.mark.parametrize("method, suffix", [
    ("put", ""),
    ("delete", ""),
    ("post", "/toggle-publish"),
])
async def test_non_owner_forbidden(client, method, suffix):
    story = await create_story(client)
    kwargs = {"headers": BOB}
    if method == "put":
        kwargs["json"] = story_payload("Hijack")

    response = await getattr(client, method)(f"{PREFIX}/stories/{story['id']}{suffix}", **kwargs)
    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "PERMISSION_DENIED"


async def test_validation_and_conflict_status_codes(client):
    response = await client.post(f"{PREFIX}/stories", json=story_payload("  "), headers=ALICE)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TITLE_REQUIRED"

    await create_story(client, title="Dawn")
    response = await client.post(f"{PREFIX}/stories", json=story_payload("Dawn"), headers=ALICE)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TITLE_CONFLICT"

    # the failed request rolled back; only the first story exists
    response = await client.get(f"{PREFIX}/stories/my-stories", headers=ALICE)
    assert len(response.json()["data"]) == 1


async def test_error_envelope_shape(client):
    response = await client.get(f"{PREFIX}/stories/story_missing")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "code": 404,
        "message": "Story not found",
        "error": {"code": "STORY_NOT_FOUND", "message": "Story not found"},
    }


async def test_unhandled_error_becomes_500(session_factory, monkeypatch):
    from storyhub.app import app
    from storyhub.db import base as db_base
    from storyhub.services.story_service import StoryService

    async def boom(*args, **kwargs):
        raise RuntimeError("feed exploded")

    monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)
    monkeypatch.setattr(StoryService, "list_public_stories", boom)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get(f"{PREFIX}/stories")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["code"] == 500
    assert body["error"] == {"code": "INTERNAL_ERROR", "message": "feed exploded"}


async def test_likes_favorites_and_comments(client):
    story = await create_story(client, is_published=True)
    story_url = f"{PREFIX}/stories/{story['id']}"

    response = await client.post(f"{story_url}/like", headers=BOB)
    assert response.json()["data"]["like_count"] == 1
    response = await client.post(f"{story_url}/like", headers=BOB)
    assert response.json()["data"]["like_count"] == 1
    response = await client.delete(f"{story_url}/like", headers=BOB)
    assert response.json()["data"]["like_count"] == 0
    response = await client.post(f"{story_url}/like", headers={})
    assert response.status_code == 401

    response = await client.post(f"{story_url}/favorite", headers=BOB)
    assert response.json()["data"]["is_favorited_by_current_user"] is True
    response = await client.get(f"{PREFIX}/stories/favorites", headers=BOB)
    assert [s["id"] for s in response.json()["data"]] == [story["id"]]
    response = await client.delete(f"{story_url}/favorite", headers=BOB)
    assert response.json()["data"]["is_favorited_by_current_user"] is False

    response = await client.post(f"{story_url}/comments", json={"content": "Lovely"}, headers=BOB)
    assert response.status_code == 200
    comment = response.json()["data"]

    response = await client.post(f"{story_url}/comments", json={"content": " "}, headers=BOB)
    assert response.status_code == 400

    response = await client.get(f"{story_url}/comments")
    assert [c["id"] for c in response.json()["data"]] == [comment["id"]]

    response = await client.delete(f"{PREFIX}/stories/comments/{comment['id']}", headers=ALICE)
    assert response.status_code == 403
    response = await client.delete(f"{PREFIX}/stories/comments/{comment['id']}", headers=BOB)
    assert response.status_code == 200
    response = await client.delete(f"{PREFIX}/stories/comments/{comment['id']}", headers=BOB)
    assert response.status_code == 404


async def test_character_endpoints(client):
    story = await create_story(client)

    response = await client.get(f"{PREFIX}/characters", headers=ALICE)
    characters = response.json()["data"]
    assert [c["name"] for c in characters] == ["Hero"]

    response = await client.put(
        f"{PREFIX}/characters/{characters[0]['id']}", json={"name": "Hero II"}, headers=BOB
    )
    assert response.status_code == 403

    response = await client.put(
        f"{PREFIX}/characters/{characters[0]['id']}", json={"name": "Hero II"}, headers=ALICE
    )
    assert response.json()["data"]["name"] == "Hero II"

    response = await client.post(f"{PREFIX}/characters", json={"name": "Loose"}, headers=ALICE)
    assert response.json()["data"]["story_id"] is None

    response = await client.post(f"{PREFIX}/characters", json={"role": "npc"}, headers=ALICE)
    assert response.status_code == 400

    response = await client.delete(f"{PREFIX}/characters/{characters[0]['id']}", headers=ALICE)
    assert response.status_code == 200
    response = await client.get(f"{PREFIX}/stories/{story['id']}", headers=ALICE)
    assert response.json()["data"]["characters"] == []


async def test_scene_endpoints(client, media_storage):
    story = await create_story(client, is_published=True)

    response = await client.post(
        f"{PREFIX}/scenes",
        json={"story_id": story["id"], "title": "Opening", "order": 1, "characters": ["Hero"]},
        headers=ALICE,
    )
    assert response.status_code == 200
    scene = response.json()["data"]

    response = await client.post(
        f"{PREFIX}/scenes/{scene['id']}/media",
        data={"media_type": "image"},
        files=[("files", ("a.png", b"png-bytes", "image/png"))],
        headers=ALICE,
    )
    assert response.status_code == 200
    assert len(response.json()["data"]["image_urls"]) == 1

    response = await client.post(
        f"{PREFIX}/scenes/{scene['id']}/media",
        data={"media_type": "VIDEO"},
        files=[("files", ("a.png", b"png-bytes", "image/png"))],
        headers=ALICE,
    )
    assert response.status_code == 400

    response = await client.get(f"{PREFIX}/scenes/story/{story['id']}")
    scenes = response.json()["data"]
    assert [s["title"] for s in scenes] == ["Opening"]
    assert scenes[0]["characters"] == ["Hero"]

    response = await client.put(
        f"{PREFIX}/scenes/{scene['id']}", json={"title": "Prologue", "order": 0}, headers=BOB
    )
    assert response.status_code == 403

    response = await client.delete(f"{PREFIX}/scenes/{scene['id']}", headers=ALICE)
    assert response.status_code == 200
    response = await client.get(f"{PREFIX}/scenes/story/{story['id']}")
    assert response.json()["data"] == []


async def test_upload_story_images(client, media_storage):
    response = await client.post(
        f"{PREFIX}/stories/upload-images",
        files=[
            ("files", ("cover.jpg", b"jpg-bytes", "image/jpeg")),
            ("files", ("back.webp", b"webp-bytes", "image/webp")),
        ],
        headers=ALICE,
    )
    assert response.status_code == 200
    urls = response.json()["data"]
    assert len(urls) == 2
    assert all(url.startswith("/uploads/stories/") for url in urls)

    response = await client.post(
        f"{PREFIX}/stories/upload-images",
        files=[("files", ("script.sh", b"echo", "text/plain"))],
        headers=ALICE,
    )
    assert response.status_code == 400
