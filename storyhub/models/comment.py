"""
评论相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime


class CommentCreate(BaseModel):
    """创建评论请求"""
    content: Optional[str] = Field(None, description="评论内容")


class CommentView(BaseModel):
    """评论响应"""
    id: str = Field(..., description="评论ID")
    story_id: str = Field(..., description="故事ID")
    username: str = Field(..., description="评论用户")
    content: str = Field(..., description="评论内容")
    created_at: datetime = Field(..., description="创建时间")

    class Config:
        from_attributes = True
