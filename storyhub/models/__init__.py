"""
数据模型模块

导出所有 Pydantic 数据模型，用于 API 请求/响应验证
"""

# 通用响应
from .response import ApiResponse, ErrorResponse

# 角色模块
from .character import CharacterRequest, CharacterView

# 故事模块
from .story import StoryRequest, StoryView

# 评论模块
from .comment import CommentCreate, CommentView

# 场景模块
from .scene import MediaType, SceneRequest, SceneView

__all__ = [
    # Response
    "ApiResponse",
    "ErrorResponse",

    # Character
    "CharacterRequest",
    "CharacterView",

    # Story
    "StoryRequest",
    "StoryView",

    # Comment
    "CommentCreate",
    "CommentView",

    # Scene
    "MediaType",
    "SceneRequest",
    "SceneView",
]
