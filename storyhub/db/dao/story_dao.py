"""
故事数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, update, delete, case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.models.story import Story
from storyhub.db.models.story_image import StoryImage
from storyhub.utils.id_generator import generate_story_id


class StoryDAO:
    """故事 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        author_username: str,
        title: str,
        content: Optional[str] = None,
        description: Optional[str] = None,
        writers: Optional[str] = None,
        timeline_json: Optional[str] = None,
        is_published: bool = False
    ) -> Optional[Story]:
        """
        创建故事

        插入在保存点内执行，(作者, 标题) 唯一约束冲突时回滚保存点并返回 None

        Args:
            session: 数据库会话
            author_username: 作者用户名
            title: 标题
            content: 正文
            description: 简介
            writers: 编剧署名
            timeline_json: 时间线数据
            is_published: 是否发布

        Returns:
            Story: 新创建的故事对象；标题冲突时为 None
        """
        story = Story(
            id=generate_story_id(),
            author_username=author_username,
            title=title,
            content=content,
            description=description,
            writers=writers,
            timeline_json=timeline_json,
            is_published=is_published,
            like_count=0,
        )

        try:
            async with session.begin_nested():
                session.add(story)
                await session.flush()
        except IntegrityError:
            return None

        return story

    @staticmethod
    async def get_by_id(session: AsyncSession, story_id: str) -> Optional[Story]:
        """根据ID获取故事"""
        result = await session.execute(
            select(Story).where(Story.id == story_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def find_by_title(
        session: AsyncSession,
        author_username: str,
        title: str,
        exclude_id: Optional[str] = None
    ) -> Optional[Story]:
        """
        按 (作者, 标题) 查找故事

        Args:
            session: 数据库会话
            author_username: 作者用户名
            title: 标题
            exclude_id: 排除的故事ID（更新时排除自身）

        Returns:
            匹配的故事，不存在返回 None
        """
        query = select(Story).where(
            Story.author_username == author_username,
            Story.title == title
        )
        if exclude_id:
            query = query.where(Story.id != exclude_id)

        result = await session.execute(query)
        return result.scalars().first()

    @staticmethod
    async def update_fields(session: AsyncSession, story: Story, **fields) -> bool:
        """
        更新故事字段

        修改在保存点内写入，(作者, 标题) 唯一约束冲突时回滚保存点

        Args:
            session: 数据库会话
            story: 故事对象
            **fields: 要更新的字段

        Returns:
            是否成功（标题冲突时返回 False）
        """
        try:
            async with session.begin_nested():
                for key, value in fields.items():
                    setattr(story, key, value)
                await session.flush()
        except IntegrityError:
            return False
        return True

    @staticmethod
    async def get_published_stories(session: AsyncSession) -> List[Story]:
        """获取已发布的故事列表（按创建顺序）"""
        result = await session.execute(
            select(Story)
            .where(Story.is_published.is_(True))
            .order_by(Story.created_at.asc(), Story.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_user_stories(session: AsyncSession, author_username: str) -> List[Story]:
        """获取作者的全部故事（含未发布）"""
        result = await session.execute(
            select(Story)
            .where(Story.author_username == author_username)
            .order_by(Story.created_at.asc(), Story.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def increment_like_count(session: AsyncSession, story_id: str):
        """点赞数 +1（单条 UPDATE 语句，避免读改写竞争）"""
        await session.execute(
            update(Story)
            .where(Story.id == story_id)
            .values(like_count=Story.like_count + 1)
            .execution_options(synchronize_session="fetch")
        )

    @staticmethod
    async def decrement_like_count(session: AsyncSession, story_id: str):
        """点赞数 -1，最低为 0"""
        await session.execute(
            update(Story)
            .where(Story.id == story_id)
            .values(like_count=case((Story.like_count > 0, Story.like_count - 1), else_=0))
            .execution_options(synchronize_session="fetch")
        )

    @staticmethod
    async def delete(session: AsyncSession, story: Story):
        """删除故事行（子表需由调用方先行删除）"""
        await session.delete(story)
        await session.flush()

    # ==================== 故事图片 ====================

    @staticmethod
    async def add_images(session: AsyncSession, story_id: str, urls: List[str]) -> List[StoryImage]:
        """按提交顺序插入故事图片"""
        images = [
            StoryImage(story_id=story_id, url=url, position=position)
            for position, url in enumerate(urls)
        ]
        session.add_all(images)
        await session.flush()
        return images

    @staticmethod
    async def get_image_urls(session: AsyncSession, story_id: str) -> List[str]:
        """获取故事图片URL列表"""
        result = await session.execute(
            select(StoryImage.url)
            .where(StoryImage.story_id == story_id)
            .order_by(StoryImage.position.asc(), StoryImage.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_image_urls_for_stories(session: AsyncSession, story_ids: List[str]) -> Dict[str, List[str]]:
        """批量获取多个故事的图片URL，按故事ID分组"""
        grouped: Dict[str, List[str]] = {story_id: [] for story_id in story_ids}
        if not story_ids:
            return grouped

        result = await session.execute(
            select(StoryImage.story_id, StoryImage.url)
            .where(StoryImage.story_id.in_(story_ids))
            .order_by(StoryImage.position.asc(), StoryImage.id.asc())
        )
        for story_id, url in result.all():
            grouped[story_id].append(url)
        return grouped

    @staticmethod
    async def delete_images(session: AsyncSession, story_id: str) -> int:
        """删除故事的全部图片"""
        result = await session.execute(
            delete(StoryImage).where(StoryImage.story_id == story_id)
        )
        return result.rowcount
