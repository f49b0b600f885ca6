"""
业务服务层
"""

from .access_policy import can_mutate, ensure_can_mutate, is_visible
from .replace_service import replace_service, ReplaceService
from .story_service import story_service, StoryService
from .interaction_service import interaction_service, InteractionService
from .comment_service import comment_service, CommentService
from .character_service import character_service, CharacterService
from .media_storage_service import media_storage_service, MediaStorageService
from .scene_service import scene_service, SceneService

__all__ = [
    # 访问控制
    "can_mutate",
    "ensure_can_mutate",
    "is_visible",
    # 基础服务类
    "ReplaceService",
    "StoryService",
    "CharacterService",
    "SceneService",
    "MediaStorageService",
    # 社交服务
    "InteractionService",
    "CommentService",
    # 全局服务实例
    "replace_service",
    "story_service",
    "interaction_service",
    "comment_service",
    "character_service",
    "media_storage_service",
    "scene_service",
]
