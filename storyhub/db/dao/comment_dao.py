"""
评论数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.models.comment import StoryComment
from storyhub.utils.id_generator import generate_comment_id


class CommentDAO:
    """评论 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        story_id: str,
        username: str,
        content: str
    ) -> StoryComment:
        """
        创建评论

        Args:
            session: 数据库会话
            story_id: 故事ID
            username: 评论用户
            content: 评论内容

        Returns:
            StoryComment: 新创建的评论对象
        """
        comment = StoryComment(
            id=generate_comment_id(),
            story_id=story_id,
            username=username,
            content=content,
        )

        session.add(comment)
        await session.flush()

        return comment

    @staticmethod
    async def get_by_id(session: AsyncSession, comment_id: str) -> Optional[StoryComment]:
        """根据ID获取评论"""
        result = await session.execute(
            select(StoryComment).where(StoryComment.id == comment_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_story_comments(session: AsyncSession, story_id: str) -> List[StoryComment]:
        """获取故事的评论列表（最新在前）"""
        result = await session.execute(
            select(StoryComment)
            .where(StoryComment.story_id == story_id)
            .order_by(StoryComment.created_at.desc(), StoryComment.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def count_by_story(session: AsyncSession, story_id: str) -> int:
        """实时统计故事评论数"""
        result = await session.execute(
            select(func.count(StoryComment.id)).where(StoryComment.story_id == story_id)
        )
        return result.scalar() or 0

    @staticmethod
    async def count_by_stories(session: AsyncSession, story_ids: List[str]) -> Dict[str, int]:
        """批量统计多个故事的评论数"""
        counts: Dict[str, int] = {story_id: 0 for story_id in story_ids}
        if not story_ids:
            return counts

        result = await session.execute(
            select(StoryComment.story_id, func.count(StoryComment.id))
            .where(StoryComment.story_id.in_(story_ids))
            .group_by(StoryComment.story_id)
        )
        for story_id, count in result.all():
            counts[story_id] = count
        return counts

    @staticmethod
    async def delete(session: AsyncSession, comment: StoryComment):
        """删除评论"""
        await session.delete(comment)
        await session.flush()

    @staticmethod
    async def delete_by_story(session: AsyncSession, story_id: str) -> int:
        """删除故事下的全部评论"""
        result = await session.execute(
            delete(StoryComment).where(StoryComment.story_id == story_id)
        )
        return result.rowcount
