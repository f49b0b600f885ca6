"""
角色数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.models.character import Character
from storyhub.db.models.story import Story
from storyhub.utils.id_generator import generate_character_id


class CharacterDAO:
    """角色 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        name: str,
        description: Optional[str] = None,
        role: Optional[str] = None,
        actor_name: Optional[str] = None,
        image_url: Optional[str] = None,
        story_id: Optional[str] = None,
        position: int = 0
    ) -> Character:
        """
        创建角色

        Args:
            session: 数据库会话
            name: 角色名
            description: 角色描述
            role: 角色定位
            actor_name: 演员名
            image_url: 角色图片
            story_id: 所属故事ID（独立角色为 None）
            position: 在故事中的顺序

        Returns:
            Character: 新创建的角色对象
        """
        character = Character(
            id=generate_character_id(),
            story_id=story_id,
            name=name,
            description=description,
            role=role,
            actor_name=actor_name,
            image_url=image_url,
            position=position,
        )

        session.add(character)
        await session.flush()

        return character

    @staticmethod
    async def get_by_id(session: AsyncSession, character_id: str) -> Optional[Character]:
        """根据ID获取角色"""
        result = await session.execute(
            select(Character).where(Character.id == character_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_story_characters(session: AsyncSession, story_id: str) -> List[Character]:
        """获取故事的角色列表（按提交顺序）"""
        result = await session.execute(
            select(Character)
            .where(Character.story_id == story_id)
            .order_by(Character.position.asc(), Character.created_at.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_characters_for_stories(session: AsyncSession, story_ids: List[str]) -> Dict[str, List[Character]]:
        """批量获取多个故事的角色，按故事ID分组（组内按提交顺序）"""
        grouped: Dict[str, List[Character]] = {story_id: [] for story_id in story_ids}
        if not story_ids:
            return grouped

        result = await session.execute(
            select(Character)
            .where(Character.story_id.in_(story_ids))
            .order_by(Character.position.asc(), Character.created_at.asc())
        )
        for character in result.scalars().all():
            grouped[character.story_id].append(character)
        return grouped

    @staticmethod
    async def get_author_characters(session: AsyncSession, author_username: str) -> List[Character]:
        """获取作者所有故事下的角色"""
        result = await session.execute(
            select(Character)
            .join(Story, Character.story_id == Story.id)
            .where(Story.author_username == author_username)
            .order_by(Story.created_at.asc(), Character.position.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def delete(session: AsyncSession, character: Character):
        """删除角色"""
        await session.delete(character)
        await session.flush()

    @staticmethod
    async def delete_by_story(session: AsyncSession, story_id: str) -> int:
        """删除故事下的全部角色"""
        result = await session.execute(
            delete(Character).where(Character.story_id == story_id)
        )
        return result.rowcount
