"""Tests for scenes and scene media."""

import os

import pytest

from storyhub.exceptions import NotFoundError, UnauthorizedError, ValidationError
from storyhub.models import SceneRequest
from storyhub.services import scene_service, story_service
from storyhub.services.replace_service import ReplaceService

from tests.helpers import make_story_request


@pytest.fixture
async def story(session):
    return await story_service.create_story(session, make_story_request(is_published=True), "alice")


async def test_create_and_list_in_order(session, story):
    second = await scene_service.create_scene(
        session, SceneRequest(story_id=story.id, title="Second", order=2, characters=["Hero"]), "alice"
    )
    first = await scene_service.create_scene(
        session, SceneRequest(story_id=story.id, title="First", order=1), "alice"
    )

    scenes = await scene_service.list_scenes(session, story.id)
    assert [s.id for s in scenes] == [first.id, second.id]
    assert scenes[1].characters == ["Hero"]
    assert scenes[1].order == 2


async def test_scene_requires_title(session, story):
    with pytest.raises(ValidationError):
        await scene_service.create_scene(session, SceneRequest(story_id=story.id, title=" "), "alice")


async def test_scene_requires_story(session):
    with pytest.raises(ValidationError):
        await scene_service.create_scene(session, SceneRequest(title="Orphan"), "alice")
    with pytest.raises(NotFoundError):
        await scene_service.create_scene(session, SceneRequest(story_id="story_missing", title="Orphan"), "alice")


async def test_scene_mutations_require_story_owner(session, story):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")

    with pytest.raises(UnauthorizedError):
        await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Mine"), "bob")
    with pytest.raises(UnauthorizedError):
        await scene_service.update_scene(session, scene.id, SceneRequest(title="Mine"), "bob")
    with pytest.raises(UnauthorizedError):
        await scene_service.delete_scene(session, scene.id, "bob")
    with pytest.raises(UnauthorizedError):
        await scene_service.add_media(session, scene.id, [("a.png", b"data")], "IMAGE", "bob")


async def test_update_scene(session, story):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")

    view = await scene_service.update_scene(
        session, scene.id, SceneRequest(title="Prologue", description="dark", order=5, characters=["A", "B"]), "alice"
    )
    assert view.title == "Prologue"
    assert view.description == "dark"
    assert view.order == 5
    assert view.characters == ["A", "B"]
    assert view.story_id == story.id


async def test_delete_scene(session, story, media_storage):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")
    await scene_service.add_media(session, scene.id, [("a.png", b"img")], "IMAGE", "alice")

    await scene_service.delete_scene(session, scene.id, "alice")
    assert await scene_service.list_scenes(session, story.id) == []

    with pytest.raises(NotFoundError):
        await scene_service.delete_scene(session, scene.id, "alice")


async def test_media_is_appended_and_grouped(session, story, media_storage):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")

    await scene_service.add_media(session, scene.id, [("a.png", b"img")], "image", "alice")
    await scene_service.add_media(session, scene.id, [("theme.mp3", b"snd")], "AUDIO", "alice")
    view = await scene_service.add_media(
        session, scene.id, [("b.jpg", b"img"), ("c.gif", b"img")], "Image", "alice"
    )

    assert len(view.image_urls) == 3
    assert all(url.startswith("/uploads/scenes/image/") for url in view.image_urls)
    assert view.image_urls[0].endswith("_a.png")
    assert len(view.audio_urls) == 1
    assert view.video_urls == []

    listed = await scene_service.list_scenes(session, story.id)
    assert listed[0].image_urls == view.image_urls


async def test_invalid_media_type(session, story, media_storage):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")
    with pytest.raises(ValidationError) as exc_info:
        await scene_service.add_media(session, scene.id, [("a.png", b"img")], "TEXT", "alice")
    assert exc_info.value.code == "INVALID_MEDIA_TYPE"


async def test_media_files_written_under_upload_dir(session, story, media_storage):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")
    view = await scene_service.add_media(session, scene.id, [("a.png", b"img")], "IMAGE", "alice")

    stored_name = view.image_urls[0].rsplit("/", 1)[1]
    assert os.path.isfile(os.path.join(media_storage.upload_dir, "scenes", "image", stored_name))


async def test_failed_media_insert_discards_files(session, story, media_storage, monkeypatch):
    scene = await scene_service.create_scene(session, SceneRequest(story_id=story.id, title="Opening"), "alice")

    async def broken_append(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(ReplaceService, "append_media", staticmethod(broken_append))
    with pytest.raises(RuntimeError):
        await scene_service.add_media(
            session, scene.id, [("a.png", b"img"), ("b.jpg", b"img")], "IMAGE", "alice"
        )

    image_dir = os.path.join(media_storage.upload_dir, "scenes", "image")
    assert os.listdir(image_dir) == []


async def test_list_scenes_of_hidden_draft(session):
    draft = await story_service.create_story(session, make_story_request("Draft"), "alice")
    await scene_service.create_scene(session, SceneRequest(story_id=draft.id, title="Opening"), "alice")

    with pytest.raises(NotFoundError):
        await scene_service.list_scenes(session, draft.id, "bob")
    assert len(await scene_service.list_scenes(session, draft.id, "alice")) == 1
