"""
API v1 路由汇总
"""

from fastapi import APIRouter

from .story import router as story_router
from .interaction import router as interaction_router
from .comment import router as comment_router
from .character import router as character_router
from .scene import router as scene_router

# 创建 v1 API 路由
api_router = APIRouter()

# 注册子路由（按前缀分组）
api_router.include_router(story_router, prefix="/stories", tags=["Story"])

# 社交功能路由
api_router.include_router(interaction_router, prefix="/stories", tags=["Interaction"])
api_router.include_router(comment_router, prefix="/stories", tags=["Comment"])

# 故事内容路由
api_router.include_router(character_router, prefix="/characters", tags=["Character"])
api_router.include_router(scene_router, prefix="/scenes", tags=["Scene"])
