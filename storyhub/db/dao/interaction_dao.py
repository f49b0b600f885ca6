"""
用户互动数据访问对象（点赞、收藏）
"""

from typing import List, Set
from sqlalchemy import select, delete, func, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.models.interaction import StoryLike, StoryFavorite
from storyhub.db.models.story import Story


class InteractionDAO:
    """互动 DAO（点赞、收藏）"""

    @staticmethod
    async def _insert_unique(session: AsyncSession, row) -> bool:
        """
        在保存点内插入一条唯一记录

        并发请求导致唯一约束冲突时仅回滚保存点，外层事务不受影响

        Returns:
            是否实际插入
        """
        try:
            async with session.begin_nested():
                session.add(row)
                await session.flush()
        except IntegrityError:
            return False
        return True

    # ==================== 点赞 ====================

    @staticmethod
    async def is_liked(session: AsyncSession, username: str, story_id: str) -> bool:
        """检查用户是否已点赞故事"""
        result = await session.execute(
            select(StoryLike.id).where(
                and_(
                    StoryLike.story_id == story_id,
                    StoryLike.username == username
                )
            )
        )
        return result.first() is not None

    @staticmethod
    async def get_liked_story_ids(session: AsyncSession, username: str, story_ids: List[str]) -> Set[str]:
        """在给定故事中筛选出用户已点赞的故事ID"""
        if not story_ids:
            return set()
        result = await session.execute(
            select(StoryLike.story_id).where(
                and_(
                    StoryLike.username == username,
                    StoryLike.story_id.in_(story_ids)
                )
            )
        )
        return set(result.scalars().all())

    @staticmethod
    async def add_like(session: AsyncSession, username: str, story_id: str) -> bool:
        """
        新增点赞

        Returns:
            是否实际插入（已存在时为 False）
        """
        return await InteractionDAO._insert_unique(
            session, StoryLike(story_id=story_id, username=username)
        )

    @staticmethod
    async def remove_like(session: AsyncSession, username: str, story_id: str) -> bool:
        """
        取消点赞

        Returns:
            是否实际删除
        """
        result = await session.execute(
            delete(StoryLike).where(
                and_(
                    StoryLike.story_id == story_id,
                    StoryLike.username == username
                )
            )
        )
        return result.rowcount > 0

    @staticmethod
    async def count_likes(session: AsyncSession, story_id: str) -> int:
        """统计故事的点赞记录数"""
        result = await session.execute(
            select(func.count(StoryLike.id)).where(StoryLike.story_id == story_id)
        )
        return result.scalar() or 0

    # ==================== 收藏 ====================

    @staticmethod
    async def is_favorited(session: AsyncSession, username: str, story_id: str) -> bool:
        """检查用户是否已收藏故事"""
        result = await session.execute(
            select(StoryFavorite.id).where(
                and_(
                    StoryFavorite.story_id == story_id,
                    StoryFavorite.username == username
                )
            )
        )
        return result.first() is not None

    @staticmethod
    async def get_favorited_story_ids(session: AsyncSession, username: str, story_ids: List[str]) -> Set[str]:
        """在给定故事中筛选出用户已收藏的故事ID"""
        if not story_ids:
            return set()
        result = await session.execute(
            select(StoryFavorite.story_id).where(
                and_(
                    StoryFavorite.username == username,
                    StoryFavorite.story_id.in_(story_ids)
                )
            )
        )
        return set(result.scalars().all())

    @staticmethod
    async def add_favorite(session: AsyncSession, username: str, story_id: str) -> bool:
        """新增收藏，返回是否实际插入"""
        return await InteractionDAO._insert_unique(
            session, StoryFavorite(story_id=story_id, username=username)
        )

    @staticmethod
    async def remove_favorite(session: AsyncSession, username: str, story_id: str) -> bool:
        """取消收藏，返回是否实际删除"""
        result = await session.execute(
            delete(StoryFavorite).where(
                and_(
                    StoryFavorite.story_id == story_id,
                    StoryFavorite.username == username
                )
            )
        )
        return result.rowcount > 0

    @staticmethod
    async def get_user_favorites(session: AsyncSession, username: str) -> List[Story]:
        """
        获取用户收藏的故事列表

        Args:
            session: 数据库会话
            username: 用户名

        Returns:
            故事列表（按收藏先后排序）
        """
        result = await session.execute(
            select(Story)
            .join(StoryFavorite, StoryFavorite.story_id == Story.id)
            .where(StoryFavorite.username == username)
            .order_by(StoryFavorite.created_at.asc(), StoryFavorite.id.asc())
        )
        return list(result.scalars().all())

    # ==================== 级联删除 ====================

    @staticmethod
    async def delete_by_story(session: AsyncSession, story_id: str):
        """删除故事的全部点赞与收藏"""
        await session.execute(delete(StoryLike).where(StoryLike.story_id == story_id))
        await session.execute(delete(StoryFavorite).where(StoryFavorite.story_id == story_id))
