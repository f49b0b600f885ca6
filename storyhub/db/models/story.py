"""
故事表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, Boolean, TIMESTAMP, Index, UniqueConstraint
from datetime import datetime

from storyhub.db.base import Base


class Story(Base):
    """故事表"""
    __tablename__ = "stories"

    # 主键
    id = Column(String(64), primary_key=True, comment="故事ID")

    # 作者
    author_username = Column(String(64), nullable=False, comment="作者用户名")

    # 基本信息
    title = Column(String(256), nullable=False, comment="故事标题（同一作者下唯一）")
    content = Column(Text, nullable=True, comment="正文")
    description = Column(Text, nullable=True, comment="简介")
    writers = Column(String(512), nullable=True, comment="编剧署名")
    timeline_json = Column(Text, nullable=True, comment="时间线（前端自定义 JSON，原样存储）")

    # 状态
    is_published = Column(Boolean, nullable=False, default=False, comment="是否已发布")

    # 统计（仅由互动服务维护）
    like_count = Column(Integer, nullable=False, default=0, comment="点赞数")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    # 约束和索引
    __table_args__ = (
        UniqueConstraint('author_username', 'title', name='uk_story_author_title'),
        Index('idx_stories_author', 'author_username', 'created_at'),
        Index('idx_stories_published', 'is_published', 'created_at'),
    )
