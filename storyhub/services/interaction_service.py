"""
互动服务

处理点赞、收藏等互动业务逻辑
"""

from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.dao import InteractionDAO, StoryDAO
from storyhub.models import StoryView
from storyhub.services.story_service import story_service
from storyhub.utils.logger_config import interaction_logger


class InteractionService:
    """互动服务"""

    @staticmethod
    async def like_story(session: AsyncSession, story_id: str, username: str) -> StoryView:
        """
        点赞故事

        已点赞时不做任何修改；并发重复点赞触发唯一约束时同样视为成功

        Args:
            session: 数据库会话
            story_id: 故事ID
            username: 用户名

        Returns:
            StoryView: 点赞后的故事

        Raises:
            NotFoundError: 故事不存在或对用户不可见
        """
        story = await story_service.load_visible_story(session, story_id, username)

        if not await InteractionDAO.is_liked(session, username, story.id):
            if await InteractionDAO.add_like(session, username, story.id):
                await StoryDAO.increment_like_count(session, story.id)
                await session.refresh(story)
                interaction_logger.info(f"👍 {username} liked {story.id} (like_count={story.like_count})")

        return await story_service.to_view(session, story, username)

    @staticmethod
    async def unlike_story(session: AsyncSession, story_id: str, username: str) -> StoryView:
        """
        取消点赞

        只有实际删除了点赞记录时才减少点赞数（最低为 0）
        """
        story = await story_service.load_visible_story(session, story_id, username)

        if await InteractionDAO.remove_like(session, username, story.id):
            await StoryDAO.decrement_like_count(session, story.id)
            await session.refresh(story)
            interaction_logger.info(f"👎 {username} unliked {story.id} (like_count={story.like_count})")

        return await story_service.to_view(session, story, username)

    @staticmethod
    async def favorite_story(session: AsyncSession, story_id: str, username: str) -> StoryView:
        """收藏故事（幂等）"""
        story = await story_service.load_visible_story(session, story_id, username)

        if not await InteractionDAO.is_favorited(session, username, story.id):
            if await InteractionDAO.add_favorite(session, username, story.id):
                interaction_logger.info(f"⭐ {username} favorited {story.id}")

        return await story_service.to_view(session, story, username)

    @staticmethod
    async def unfavorite_story(session: AsyncSession, story_id: str, username: str) -> StoryView:
        """取消收藏（未收藏时为空操作）"""
        story = await story_service.load_visible_story(session, story_id, username)

        if await InteractionDAO.remove_favorite(session, username, story.id):
            interaction_logger.info(f"☆ {username} unfavorited {story.id}")

        return await story_service.to_view(session, story, username)


# 全局互动服务实例
interaction_service = InteractionService()
