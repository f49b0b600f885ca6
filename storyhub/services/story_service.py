"""
故事服务

故事聚合（故事、角色、图片、场景）的创建、更新、发布与删除
"""

from typing import List, Optional, Sequence
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.dao import StoryDAO, CharacterDAO, SceneDAO, CommentDAO, InteractionDAO
from storyhub.db.models.story import Story
from storyhub.exceptions import ValidationError, ConflictError, NotFoundError
from storyhub.models import StoryRequest, StoryView, CharacterView
from storyhub.services.access_policy import ensure_can_mutate, is_visible
from storyhub.services.replace_service import replace_service, validate_character_specs


def _normalize_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required", code="TITLE_REQUIRED")
    return title


def _title_conflict() -> ConflictError:
    return ConflictError("A story with this title already exists", code="TITLE_CONFLICT")


class StoryService:
    """故事服务"""

    @staticmethod
    async def load_story(session: AsyncSession, story_id: str) -> Story:
        """获取故事，不存在时抛出 NotFoundError"""
        story = await StoryDAO.get_by_id(session, story_id)
        if not story:
            raise NotFoundError("Story not found", code="STORY_NOT_FOUND")
        return story

    @staticmethod
    async def load_visible_story(
        session: AsyncSession,
        story_id: str,
        viewer_username: Optional[str] = None
    ) -> Story:
        """
        获取对查看者可见的故事

        未发布的故事对非作者表现为不存在
        """
        story = await StoryDAO.get_by_id(session, story_id)
        if not story or not is_visible(story, viewer_username):
            raise NotFoundError("Story not found", code="STORY_NOT_FOUND")
        return story

    @staticmethod
    async def to_views(
        session: AsyncSession,
        stories: Sequence[Story],
        viewer_username: Optional[str] = None
    ) -> List[StoryView]:
        """
        批量构建故事响应

        角色、图片、评论数、点赞/收藏状态按整个列表批量实时查询，查询次数与故事数量无关

        Args:
            session: 数据库会话
            stories: 故事列表
            viewer_username: 当前查看者（可选）

        Returns:
            与输入顺序一致的 StoryView 列表
        """
        story_ids = [story.id for story in stories]
        if not story_ids:
            return []

        characters = await CharacterDAO.get_characters_for_stories(session, story_ids)
        image_urls = await StoryDAO.get_image_urls_for_stories(session, story_ids)
        comment_counts = await CommentDAO.count_by_stories(session, story_ids)

        liked_ids = set()
        favorited_ids = set()
        if viewer_username:
            liked_ids = await InteractionDAO.get_liked_story_ids(session, viewer_username, story_ids)
            favorited_ids = await InteractionDAO.get_favorited_story_ids(session, viewer_username, story_ids)

        return [
            StoryView(
                id=story.id,
                title=story.title,
                content=story.content,
                description=story.description,
                writers=story.writers,
                timeline_json=story.timeline_json,
                image_urls=image_urls[story.id],
                author_username=story.author_username,
                created_at=story.created_at,
                characters=[CharacterView.model_validate(c) for c in characters[story.id]],
                is_published=story.is_published,
                like_count=story.like_count,
                is_liked_by_current_user=story.id in liked_ids,
                is_favorited_by_current_user=story.id in favorited_ids,
                comment_count=comment_counts[story.id],
            )
            for story in stories
        ]

    async def to_view(
        self,
        session: AsyncSession,
        story: Story,
        viewer_username: Optional[str] = None
    ) -> StoryView:
        """构建单个故事响应"""
        views = await self.to_views(session, [story], viewer_username)
        return views[0]

    async def create_story(
        self,
        session: AsyncSession,
        request: StoryRequest,
        author_username: str
    ) -> StoryView:
        """
        创建故事

        Args:
            session: 数据库会话
            request: 故事内容（含角色、图片）
            author_username: 作者

        Returns:
            StoryView

        Raises:
            ValidationError: 标题为空或角色名为空
            ConflictError: 该作者已有同名故事
        """
        title = _normalize_title(request.title)
        specs = validate_character_specs(request.characters)

        if await StoryDAO.find_by_title(session, author_username, title):
            raise _title_conflict()

        story = await StoryDAO.create(
            session,
            author_username=author_username,
            title=title,
            content=request.content,
            description=request.description,
            writers=request.writers,
            timeline_json=request.timeline_json,
            is_published=bool(request.is_published),
        )
        if story is None:
            raise _title_conflict()

        await replace_service.replace_characters(session, story.id, specs)
        await replace_service.replace_images(session, story.id, request.image_urls)

        logger.info(f"📖 Story created: {story.id} '{title}' by {author_username}")
        return await self.to_view(session, story, author_username)

    async def update_story(
        self,
        session: AsyncSession,
        story_id: str,
        request: StoryRequest,
        actor_username: str
    ) -> StoryView:
        """
        更新故事

        角色与图片整体替换；点赞数保持不变，发布状态仅在请求显式提供时修改

        Raises:
            NotFoundError: 故事不存在
            UnauthorizedError: 操作者不是作者
            ValidationError: 标题为空或角色名为空
            ConflictError: 与该作者的其他故事重名
        """
        story = await self.load_story(session, story_id)
        ensure_can_mutate(actor_username, story.author_username, "Only the author can update this story")

        title = _normalize_title(request.title)
        specs = validate_character_specs(request.characters)

        if await StoryDAO.find_by_title(session, story.author_username, title, exclude_id=story.id):
            raise _title_conflict()

        fields = {
            "title": title,
            "content": request.content,
            "description": request.description,
            "writers": request.writers,
            "timeline_json": request.timeline_json,
        }
        if request.is_published is not None:
            fields["is_published"] = request.is_published

        if not await StoryDAO.update_fields(session, story, **fields):
            raise _title_conflict()

        await replace_service.replace_characters(session, story.id, specs)
        await replace_service.replace_images(session, story.id, request.image_urls)

        logger.info(f"✏️ Story updated: {story.id} by {actor_username}")
        return await self.to_view(session, story, actor_username)

    async def delete_story(self, session: AsyncSession, story_id: str, actor_username: str):
        """
        删除故事

        依次删除角色、图片、场景及媒体、评论、点赞与收藏，最后删除故事本身
        """
        story = await self.load_story(session, story_id)
        ensure_can_mutate(actor_username, story.author_username, "Only the author can delete this story")

        await CharacterDAO.delete_by_story(session, story.id)
        await StoryDAO.delete_images(session, story.id)
        await SceneDAO.delete_by_story(session, story.id)
        await CommentDAO.delete_by_story(session, story.id)
        await InteractionDAO.delete_by_story(session, story.id)
        await StoryDAO.delete(session, story)

        logger.info(f"🗑️ Story deleted: {story_id} by {actor_username}")

    async def toggle_publish(self, session: AsyncSession, story_id: str, actor_username: str) -> bool:
        """
        切换发布状态

        Returns:
            切换后的发布状态
        """
        story = await self.load_story(session, story_id)
        ensure_can_mutate(actor_username, story.author_username, "Only the author can publish this story")

        story.is_published = not story.is_published
        await session.flush()

        logger.info(f"📢 Story {story.id} is_published={story.is_published}")
        return story.is_published

    async def get_story(
        self,
        session: AsyncSession,
        story_id: str,
        viewer_username: Optional[str] = None
    ) -> StoryView:
        """获取故事详情（不可见时抛出 NotFoundError）"""
        story = await self.load_visible_story(session, story_id, viewer_username)
        return await self.to_view(session, story, viewer_username)

    async def list_public_stories(
        self,
        session: AsyncSession,
        viewer_username: Optional[str] = None
    ) -> List[StoryView]:
        """公开故事列表：只包含已发布的故事，作者本人也看不到自己的草稿"""
        stories = await StoryDAO.get_published_stories(session)
        return await self.to_views(session, stories, viewer_username)

    async def list_my_stories(self, session: AsyncSession, author_username: str) -> List[StoryView]:
        """作者自己的全部故事（含未发布）"""
        stories = await StoryDAO.get_user_stories(session, author_username)
        return await self.to_views(session, stories, author_username)

    async def list_favorite_stories(self, session: AsyncSession, username: str) -> List[StoryView]:
        """用户收藏的故事（按收藏顺序，过滤不可见的故事）"""
        stories = await InteractionDAO.get_user_favorites(session, username)
        visible = [story for story in stories if is_visible(story, username)]
        return await self.to_views(session, visible, username)


# 全局故事服务实例
story_service = StoryService()
