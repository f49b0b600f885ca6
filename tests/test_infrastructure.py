"""Tests for configuration, logging and database session helpers."""

import pytest
from loguru import logger

from storyhub.config import Settings, settings
from storyhub.db import base as db_base
from storyhub.db import get_session
from storyhub.db.dao import StoryDAO
from storyhub.utils.auth import create_access_token, decode_access_token
from storyhub.utils.id_generator import generate_story_id
from storyhub.utils.logger_config import interaction_logger, reset_logging, setup_logging


class TestSettings:
    def test_defaults_from_config_yaml(self):
        assert settings.API_V1_PREFIX == "/api/v1"
        assert settings.COMMENT_MAX_LENGTH == 500
        assert settings.JWT_ALGORITHM == "HS256"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("COMMENT_MAX_LENGTH", "42")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
        monkeypatch.setenv("DEBUG", "yes")

        assert settings.COMMENT_MAX_LENGTH == 42
        assert settings.CORS_ORIGINS == ["http://a.example", "http://b.example"]
        assert settings.DEBUG is True

    def test_custom_config_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "app: {name: Custom, version: '9', api_prefix: /api, debug: false}\n"
            "database: {enabled: false, url: '', pool_size: 1, max_overflow: 0}\n",
            encoding="utf-8",
        )
        monkeypatch.delenv("APP_NAME", raising=False)
        monkeypatch.delenv("DATABASE_ENABLED", raising=False)

        custom = Settings(str(config_file))
        assert custom.APP_NAME == "Custom"
        assert custom.DATABASE_ENABLED is False
        assert custom.DATABASE_URL is None


class TestAuth:
    def test_token_roundtrip(self):
        token = create_access_token({"sub": "alice"})
        assert decode_access_token(token)["sub"] == "alice"

    def test_invalid_token(self):
        assert decode_access_token("not-a-token") is None


def test_database_url_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/storyhub")
    assert db_base.get_database_url() == "postgresql+asyncpg://u:p@db:5432/storyhub"


class TestLogging:
    def test_interaction_sink_only_receives_interaction_records(self, tmp_path):
        try:
            sink_ids = setup_logging(log_dir=str(tmp_path), level="INFO")
            assert len(sink_ids) == 2

            logger.info("application event")
            interaction_logger.info("bob liked story_1")

            # sinks are line-buffered; read before removal archives them
            app_log = (tmp_path / "storyhub.log").read_text(encoding="utf-8")
            interaction_log = (tmp_path / "interaction.log").read_text(encoding="utf-8")
        finally:
            reset_logging()

        assert "application event" in app_log
        assert "bob liked story_1" in app_log
        assert "bob liked story_1" in interaction_log
        assert "application event" not in interaction_log


class TestGetSession:
    async def test_commits_on_success(self, session_factory, monkeypatch):
        monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)

        async with get_session() as session:
            story = await StoryDAO.create(session, "alice", "Committed")

        async with session_factory() as check:
            assert await StoryDAO.get_by_id(check, story.id) is not None

    async def test_rolls_back_on_error(self, session_factory, monkeypatch):
        monkeypatch.setattr(db_base, "AsyncSessionLocal", session_factory)
        story_id = None

        with pytest.raises(RuntimeError):
            async with get_session() as session:
                story = await StoryDAO.create(session, "alice", "Rolled back")
                story_id = story.id
                raise RuntimeError("boom")

        async with session_factory() as check:
            assert await StoryDAO.get_by_id(check, story_id) is None

    async def test_requires_initialized_database(self, monkeypatch):
        monkeypatch.setattr(db_base, "AsyncSessionLocal", None)
        with pytest.raises(RuntimeError):
            async with get_session():
                pass


def test_story_ids_are_prefixed_ulids():
    story_id = generate_story_id()
    assert story_id.startswith("story_")
    assert len(story_id) == len("story_") + 26
