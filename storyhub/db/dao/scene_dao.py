"""
场景数据访问对象
"""

from typing import Optional, List, Dict
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.models.scene import Scene, SceneMedia


class SceneDAO:
    """场景 DAO（含场景媒体）"""

    @staticmethod
    async def create(
        session: AsyncSession,
        story_id: str,
        title: str,
        description: Optional[str] = None,
        scene_order: int = 0,
        character_names: Optional[List[str]] = None
    ) -> Scene:
        """创建场景"""
        scene = Scene(
            story_id=story_id,
            title=title,
            description=description,
            scene_order=scene_order,
            character_names=list(character_names or []),
        )

        session.add(scene)
        await session.flush()

        return scene

    @staticmethod
    async def get_by_id(session: AsyncSession, scene_id: int) -> Optional[Scene]:
        """根据ID获取场景"""
        result = await session.execute(
            select(Scene).where(Scene.id == scene_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_story_scenes(session: AsyncSession, story_id: str) -> List[Scene]:
        """获取故事的场景列表（按场景顺序）"""
        result = await session.execute(
            select(Scene)
            .where(Scene.story_id == story_id)
            .order_by(Scene.scene_order.asc(), Scene.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def delete(session: AsyncSession, scene: Scene):
        """删除场景及其媒体"""
        await session.execute(
            delete(SceneMedia).where(SceneMedia.scene_id == scene.id)
        )
        await session.delete(scene)
        await session.flush()

    @staticmethod
    async def delete_by_story(session: AsyncSession, story_id: str) -> int:
        """删除故事下的全部场景及媒体"""
        scene_ids = select(Scene.id).where(Scene.story_id == story_id)
        await session.execute(
            delete(SceneMedia).where(SceneMedia.scene_id.in_(scene_ids))
        )
        result = await session.execute(
            delete(Scene).where(Scene.story_id == story_id)
        )
        return result.rowcount

    # ==================== 场景媒体 ====================

    @staticmethod
    async def add_media(
        session: AsyncSession,
        scene_id: int,
        urls: List[str],
        media_type: str
    ) -> List[SceneMedia]:
        """追加场景媒体"""
        media = [SceneMedia(scene_id=scene_id, url=url, media_type=media_type) for url in urls]
        session.add_all(media)
        await session.flush()
        return media

    @staticmethod
    async def get_scene_media(session: AsyncSession, scene_id: int) -> List[SceneMedia]:
        """获取场景媒体（按上传顺序）"""
        result = await session.execute(
            select(SceneMedia)
            .where(SceneMedia.scene_id == scene_id)
            .order_by(SceneMedia.id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_media_for_scenes(session: AsyncSession, scene_ids: List[int]) -> Dict[int, List[SceneMedia]]:
        """批量获取多个场景的媒体，按场景ID分组"""
        grouped: Dict[int, List[SceneMedia]] = {scene_id: [] for scene_id in scene_ids}
        if not scene_ids:
            return grouped

        result = await session.execute(
            select(SceneMedia)
            .where(SceneMedia.scene_id.in_(scene_ids))
            .order_by(SceneMedia.id.asc())
        )
        for media in result.scalars().all():
            grouped[media.scene_id].append(media)
        return grouped
