"""
评论服务

处理评论相关业务逻辑
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.config.settings import settings
from storyhub.db.dao import CommentDAO
from storyhub.exceptions import ValidationError, NotFoundError
from storyhub.models import CommentView
from storyhub.services.access_policy import ensure_can_mutate
from storyhub.services.story_service import story_service
from storyhub.utils.logger_config import interaction_logger


class CommentService:
    """评论服务"""

    @staticmethod
    async def add_comment(
        session: AsyncSession,
        story_id: str,
        username: str,
        content: Optional[str]
    ) -> CommentView:
        """
        发表评论

        Args:
            session: 数据库会话
            story_id: 故事ID
            username: 评论用户
            content: 评论内容

        Returns:
            CommentView

        Raises:
            NotFoundError: 故事不存在或不可见
            ValidationError: 内容为空或超长
        """
        story = await story_service.load_visible_story(session, story_id, username)

        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required", code="COMMENT_REQUIRED")
        if len(content) > settings.COMMENT_MAX_LENGTH:
            raise ValidationError(
                f"Comment must be at most {settings.COMMENT_MAX_LENGTH} characters",
                code="COMMENT_TOO_LONG"
            )

        comment = await CommentDAO.create(session, story.id, username, content)

        interaction_logger.info(f"💬 {username} commented on {story.id}: {comment.id}")
        return CommentView.model_validate(comment)

    @staticmethod
    async def list_comments(
        session: AsyncSession,
        story_id: str,
        viewer_username: Optional[str] = None
    ) -> List[CommentView]:
        """获取故事评论（最新在前）"""
        story = await story_service.load_visible_story(session, story_id, viewer_username)
        comments = await CommentDAO.get_story_comments(session, story.id)
        return [CommentView.model_validate(comment) for comment in comments]

    @staticmethod
    async def delete_comment(session: AsyncSession, comment_id: str, username: str):
        """
        删除评论

        只有评论作者本人可以删除，故事作者也不例外

        Raises:
            NotFoundError: 评论不存在
            UnauthorizedError: 不是评论作者
        """
        comment = await CommentDAO.get_by_id(session, comment_id)
        if not comment:
            raise NotFoundError("Comment not found", code="COMMENT_NOT_FOUND")

        ensure_can_mutate(username, comment.username, "Only the comment author can delete this comment")

        await CommentDAO.delete(session, comment)
        interaction_logger.info(f"🗑️ {username} deleted comment {comment_id}")


# 全局评论服务实例
comment_service = CommentService()
