"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from storyhub.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .story import Story
from .character import Character
from .story_image import StoryImage
from .scene import Scene, SceneMedia
from .interaction import StoryLike, StoryFavorite
from .comment import StoryComment

__all__ = [
    # Base
    "Base",

    # Models
    "Story",
    "Character",
    "StoryImage",
    "Scene",
    "SceneMedia",
    "StoryLike",
    "StoryFavorite",
    "StoryComment",
]
