"""
角色/图片/媒体替换引擎

故事更新时嵌套集合整体替换：先删除旧行，再按提交顺序插入新行
场景媒体只追加不替换
"""

from typing import Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db.dao import CharacterDAO, SceneDAO, StoryDAO
from storyhub.db.models.character import Character
from storyhub.db.models.scene import SceneMedia
from storyhub.exceptions import ValidationError
from storyhub.models.character import CharacterRequest
from storyhub.models.scene import MediaType


def validate_character_specs(specs: Optional[Sequence[CharacterRequest]]) -> List[CharacterRequest]:
    """
    校验角色列表（名称必填）

    Raises:
        ValidationError: 存在空名称的角色
    """
    specs = list(specs or [])
    for spec in specs:
        if not spec.name or not spec.name.strip():
            raise ValidationError("Character name is required", code="CHARACTER_NAME_REQUIRED")
    return specs


class ReplaceService:
    """嵌套集合替换服务"""

    @staticmethod
    async def replace_characters(
        session: AsyncSession,
        story_id: str,
        specs: Optional[Sequence[CharacterRequest]]
    ) -> List[Character]:
        """
        整体替换故事的角色

        Args:
            session: 数据库会话
            story_id: 故事ID
            specs: 新的角色列表（None 视为空列表）

        Returns:
            新插入的角色（按提交顺序）
        """
        specs = validate_character_specs(specs)

        await CharacterDAO.delete_by_story(session, story_id)

        characters = []
        for position, spec in enumerate(specs):
            characters.append(await CharacterDAO.create(
                session,
                name=spec.name.strip(),
                description=spec.description,
                role=spec.role,
                actor_name=spec.actor_name,
                image_url=spec.image_url,
                story_id=story_id,
                position=position,
            ))
        return characters

    @staticmethod
    async def replace_images(
        session: AsyncSession,
        story_id: str,
        urls: Optional[Sequence[str]]
    ) -> List[str]:
        """整体替换故事图片，返回新的URL列表"""
        urls = list(urls or [])
        await StoryDAO.delete_images(session, story_id)
        if urls:
            await StoryDAO.add_images(session, story_id, urls)
        return urls

    @staticmethod
    async def append_media(
        session: AsyncSession,
        scene_id: int,
        urls: Sequence[str],
        media_type: MediaType
    ) -> List[SceneMedia]:
        """追加场景媒体（已有媒体保持不变）"""
        if not urls:
            return []
        return await SceneDAO.add_media(session, scene_id, list(urls), media_type.value)

    @staticmethod
    def group_media(media: Sequence[SceneMedia]) -> Dict[str, List[str]]:
        """按类型归类场景媒体"""
        grouped = {"image_urls": [], "video_urls": [], "audio_urls": []}
        for item in media:
            if item.media_type == MediaType.IMAGE.value:
                grouped["image_urls"].append(item.url)
            elif item.media_type == MediaType.VIDEO.value:
                grouped["video_urls"].append(item.url)
            elif item.media_type == MediaType.AUDIO.value:
                grouped["audio_urls"].append(item.url)
        return grouped


# 全局替换服务实例
replace_service = ReplaceService()
