"""
互动表 ORM 模型（点赞、收藏）
"""

from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, Index, UniqueConstraint
from datetime import datetime

from storyhub.db.base import Base


class StoryLike(Base):
    """点赞表（每个用户对每个故事至多一条）"""
    __tablename__ = "story_likes"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=False, comment="故事ID")
    username = Column(String(64), nullable=False, comment="点赞用户")
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="点赞时间")

    __table_args__ = (
        UniqueConstraint('story_id', 'username', name='uk_like_story_user'),
        Index('idx_likes_user', 'username'),
    )


class StoryFavorite(Base):
    """收藏表（每个用户对每个故事至多一条）"""
    __tablename__ = "story_favorites"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=False, comment="故事ID")
    username = Column(String(64), nullable=False, comment="收藏用户")
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="收藏时间")

    __table_args__ = (
        UniqueConstraint('story_id', 'username', name='uk_favorite_story_user'),
        Index('idx_favorites_user', 'username', 'created_at'),
    )
