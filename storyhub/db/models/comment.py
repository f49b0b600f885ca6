"""
评论表 ORM 模型
"""

from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from storyhub.db.base import Base


class StoryComment(Base):
    """评论表"""
    __tablename__ = "story_comments"

    # 主键
    id = Column(String(64), primary_key=True, comment="评论ID")

    # 外键
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=False, comment="故事ID")
    username = Column(String(64), nullable=False, comment="评论用户")

    # 评论内容
    content = Column(Text, nullable=False, comment="评论内容")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")

    # 索引
    __table_args__ = (
        Index('idx_comments_story', 'story_id', 'created_at'),
        Index('idx_comments_user', 'username', 'created_at'),
    )
