"""
故事相关数据模型
"""

from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime

from .character import CharacterRequest, CharacterView


class StoryRequest(BaseModel):
    """创建/更新故事请求（嵌套集合为完整提交，更新时整体替换）"""
    title: Optional[str] = Field(None, description="故事标题")
    content: Optional[str] = Field(None, description="正文")
    description: Optional[str] = Field(None, description="简介")
    writers: Optional[str] = Field(None, description="编剧署名")
    timeline_json: Optional[str] = Field(None, description="时间线数据（原样存储）")
    image_urls: Optional[List[str]] = Field(None, description="故事图片URL列表")
    characters: Optional[List[CharacterRequest]] = Field(None, description="角色列表")
    is_published: Optional[bool] = Field(None, description="是否发布（更新时不传则保持不变）")


class StoryView(BaseModel):
    """故事响应"""
    id: str = Field(..., description="故事ID")
    title: str = Field(..., description="故事标题")
    content: Optional[str] = Field(None, description="正文")
    description: Optional[str] = Field(None, description="简介")
    writers: Optional[str] = Field(None, description="编剧署名")
    timeline_json: Optional[str] = Field(None, description="时间线数据")
    image_urls: List[str] = Field(default_factory=list, description="故事图片URL列表")
    author_username: str = Field(..., description="作者用户名")
    created_at: datetime = Field(..., description="创建时间")
    characters: List[CharacterView] = Field(default_factory=list, description="角色列表")
    is_published: bool = Field(False, description="是否已发布")
    like_count: int = Field(0, description="点赞数")
    is_liked_by_current_user: bool = Field(False, description="当前用户是否已点赞")
    is_favorited_by_current_user: bool = Field(False, description="当前用户是否已收藏")
    comment_count: int = Field(0, description="评论数（实时统计）")
