"""
场景服务

场景的创建、更新、查询、删除，以及场景媒体上传
"""

from typing import List, Optional, Sequence, Tuple
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.dao import SceneDAO, StoryDAO
from storyhub.db.models.scene import Scene, SceneMedia
from storyhub.exceptions import ValidationError, NotFoundError
from storyhub.models import SceneRequest, SceneView
from storyhub.services.access_policy import ensure_can_mutate
from storyhub.services.media_storage_service import media_storage_service, parse_media_type
from storyhub.services.replace_service import replace_service
from storyhub.services.story_service import story_service


def _normalize_scene_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Scene title is required", code="SCENE_TITLE_REQUIRED")
    return title


class SceneService:
    """场景服务"""

    @staticmethod
    def to_view(scene: Scene, media: Sequence[SceneMedia]) -> SceneView:
        """构建场景响应（媒体按类型分组）"""
        return SceneView(
            id=scene.id,
            story_id=scene.story_id,
            title=scene.title,
            description=scene.description,
            order=scene.scene_order,
            characters=list(scene.character_names or []),
            **replace_service.group_media(media),
        )

    @staticmethod
    async def _load_mutable(session: AsyncSession, scene_id: int, username: str) -> Scene:
        """获取场景并校验当前用户是所属故事的作者"""
        scene = await SceneDAO.get_by_id(session, scene_id)
        if not scene:
            raise NotFoundError("Scene not found", code="SCENE_NOT_FOUND")

        story = await StoryDAO.get_by_id(session, scene.story_id)
        owner = story.author_username if story else None
        ensure_can_mutate(username, owner, "Only the story author can modify this scene")
        return scene

    async def create_scene(self, session: AsyncSession, request: SceneRequest, username: str) -> SceneView:
        """
        创建场景

        Raises:
            ValidationError: 缺少故事ID或标题
            NotFoundError: 故事不存在
            UnauthorizedError: 不是故事作者
        """
        if not request.story_id:
            raise ValidationError("Story id is required", code="STORY_ID_REQUIRED")
        title = _normalize_scene_title(request.title)

        story = await story_service.load_story(session, request.story_id)
        ensure_can_mutate(username, story.author_username, "Only the story author can add scenes")

        scene = await SceneDAO.create(
            session,
            story_id=story.id,
            title=title,
            description=request.description,
            scene_order=request.order,
            character_names=request.characters,
        )

        logger.info(f"🎬 Scene created: {scene.id} in {story.id} by {username}")
        return self.to_view(scene, [])

    async def update_scene(
        self,
        session: AsyncSession,
        scene_id: int,
        request: SceneRequest,
        username: str
    ) -> SceneView:
        """更新场景（所属故事不可修改，媒体保持不变）"""
        scene = await self._load_mutable(session, scene_id, username)
        title = _normalize_scene_title(request.title)

        scene.title = title
        scene.description = request.description
        scene.scene_order = request.order
        scene.character_names = list(request.characters)
        await session.flush()

        media = await SceneDAO.get_scene_media(session, scene.id)
        logger.info(f"✏️ Scene updated: {scene.id} by {username}")
        return self.to_view(scene, media)

    async def list_scenes(
        self,
        session: AsyncSession,
        story_id: str,
        viewer_username: Optional[str] = None
    ) -> List[SceneView]:
        """获取故事的场景列表（按场景顺序）"""
        story = await story_service.load_visible_story(session, story_id, viewer_username)
        scenes = await SceneDAO.get_story_scenes(session, story.id)
        media = await SceneDAO.get_media_for_scenes(session, [scene.id for scene in scenes])
        return [self.to_view(scene, media[scene.id]) for scene in scenes]

    async def delete_scene(self, session: AsyncSession, scene_id: int, username: str):
        """删除场景及其媒体"""
        scene = await self._load_mutable(session, scene_id, username)
        await SceneDAO.delete(session, scene)
        logger.info(f"🗑️ Scene deleted: {scene_id} by {username}")

    async def add_media(
        self,
        session: AsyncSession,
        scene_id: int,
        files: Sequence[Tuple[str, bytes]],
        media_type: Optional[str],
        username: str
    ) -> SceneView:
        """
        上传场景媒体（追加，不替换已有媒体）

        Args:
            session: 数据库会话
            scene_id: 场景ID
            files: (文件名, 内容) 列表
            media_type: 媒体类型（IMAGE/VIDEO/AUDIO，不区分大小写）
            username: 操作用户

        Returns:
            SceneView: 包含全部媒体的场景
        """
        media_type = parse_media_type(media_type)
        scene = await self._load_mutable(session, scene_id, username)

        urls = media_storage_service.store_scene_media(files, media_type)
        try:
            await replace_service.append_media(session, scene.id, urls, media_type)
        except Exception:
            media_storage_service.discard(urls)
            raise

        media = await SceneDAO.get_scene_media(session, scene.id)
        logger.info(f"📎 {len(urls)} {media_type.value} file(s) added to scene {scene.id} by {username}")
        return self.to_view(scene, media)


# 全局场景服务实例
scene_service = SceneService()
