"""Test helpers shared across test modules."""

from storyhub.models import CharacterRequest, StoryRequest
from storyhub.utils.auth import create_access_token


def auth_headers(username: str) -> dict:
    token = create_access_token({"sub": username})
    return {"Authorization": f"Bearer {token}"}


def make_story_request(title: str = "Dawn", **kwargs) -> StoryRequest:
    data = {
        "title": title,
        "content": "Once upon a time",
        "description": "A short story",
        "writers": "alice",
        "timeline_json": '{"events": []}',
        "image_urls": ["/uploads/stories/a.png"],
        "characters": [CharacterRequest(name="Hero", role="lead")],
    }
    data.update(kwargs)
    return StoryRequest(**data)
