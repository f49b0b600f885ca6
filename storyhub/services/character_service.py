"""
角色服务

独立角色的创建，以及角色的更新、删除与查询
"""

from typing import List
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.dao import CharacterDAO, StoryDAO
from storyhub.db.models.character import Character
from storyhub.exceptions import NotFoundError
from storyhub.models import CharacterRequest, CharacterView
from storyhub.services.access_policy import ensure_can_mutate
from storyhub.services.replace_service import validate_character_specs


class CharacterService:
    """角色服务"""

    @staticmethod
    async def _load_mutable(session: AsyncSession, character_id: str, username: str) -> Character:
        """
        获取可被当前用户修改的角色

        属于某个故事的角色只有故事作者可以修改；不属于任何故事的角色不做所有权校验
        """
        character = await CharacterDAO.get_by_id(session, character_id)
        if not character:
            raise NotFoundError("Character not found", code="CHARACTER_NOT_FOUND")

        if character.story_id:
            story = await StoryDAO.get_by_id(session, character.story_id)
            owner = story.author_username if story else None
            ensure_can_mutate(username, owner, "Only the story author can modify this character")

        return character

    @staticmethod
    async def create_character(
        session: AsyncSession,
        request: CharacterRequest,
        username: str
    ) -> CharacterView:
        """
        创建独立角色（不属于任何故事）

        Raises:
            ValidationError: 角色名为空
        """
        validate_character_specs([request])

        character = await CharacterDAO.create(
            session,
            name=request.name.strip(),
            description=request.description,
            role=request.role,
            actor_name=request.actor_name,
            image_url=request.image_url,
        )

        logger.info(f"🎭 Character created: {character.id} by {username}")
        return CharacterView.model_validate(character)

    async def update_character(
        self,
        session: AsyncSession,
        character_id: str,
        request: CharacterRequest,
        username: str
    ) -> CharacterView:
        """更新角色的全部字段"""
        character = await self._load_mutable(session, character_id, username)
        validate_character_specs([request])

        character.name = request.name.strip()
        character.description = request.description
        character.role = request.role
        character.actor_name = request.actor_name
        character.image_url = request.image_url
        await session.flush()

        logger.info(f"✏️ Character updated: {character.id} by {username}")
        return CharacterView.model_validate(character)

    async def delete_character(self, session: AsyncSession, character_id: str, username: str):
        """删除角色"""
        character = await self._load_mutable(session, character_id, username)
        await CharacterDAO.delete(session, character)
        logger.info(f"🗑️ Character deleted: {character_id} by {username}")

    @staticmethod
    async def list_my_characters(session: AsyncSession, username: str) -> List[CharacterView]:
        """获取用户所有故事下的角色"""
        characters = await CharacterDAO.get_author_characters(session, username)
        return [CharacterView.model_validate(c) for c in characters]


# 全局角色服务实例
character_service = CharacterService()
