"""
场景相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, Field
from enum import Enum


class MediaType(str, Enum):
    """场景媒体类型"""
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"


class SceneRequest(BaseModel):
    """创建/更新场景请求"""
    story_id: Optional[str] = Field(None, description="所属故事ID（仅创建时使用）")
    title: Optional[str] = Field(None, description="场景标题")
    description: Optional[str] = Field(None, description="场景描述")
    order: int = Field(0, description="场景顺序")
    characters: List[str] = Field(default_factory=list, description="出场角色名列表")


class SceneView(BaseModel):
    """场景响应"""
    id: int = Field(..., description="场景ID")
    story_id: str = Field(..., description="所属故事ID")
    title: str = Field(..., description="场景标题")
    description: Optional[str] = Field(None, description="场景描述")
    order: int = Field(0, description="场景顺序")
    characters: List[str] = Field(default_factory=list, description="出场角色名列表")
    image_urls: List[str] = Field(default_factory=list, description="图片URL")
    video_urls: List[str] = Field(default_factory=list, description="视频URL")
    audio_urls: List[str] = Field(default_factory=list, description="音频URL")
