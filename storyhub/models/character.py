"""
角色相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, Field


class CharacterRequest(BaseModel):
    """创建/更新角色请求（也用于故事内嵌角色）"""
    name: Optional[str] = Field(None, description="角色名称")
    description: Optional[str] = Field(None, description="角色描述")
    role: Optional[str] = Field(None, description="角色定位")
    actor_name: Optional[str] = Field(None, description="演员名")
    image_url: Optional[str] = Field(None, description="角色图片URL")


class CharacterView(BaseModel):
    """角色响应"""
    id: str = Field(..., description="角色ID")
    name: str = Field(..., description="角色名称")
    description: Optional[str] = Field(None, description="角色描述")
    role: Optional[str] = Field(None, description="角色定位")
    actor_name: Optional[str] = Field(None, description="演员名")
    image_url: Optional[str] = Field(None, description="角色图片URL")
    story_id: Optional[str] = Field(None, description="所属故事ID（独立角色为NULL）")

    class Config:
        from_attributes = True
