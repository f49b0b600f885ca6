"""
故事图片表 ORM 模型
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Index

from storyhub.db.base import Base


class StoryImage(Base):
    """故事图片表"""
    __tablename__ = "story_images"

    # 主键
    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")

    # 外键
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=False, comment="所属故事")

    url = Column(String(512), nullable=False, comment="图片URL")
    position = Column(Integer, nullable=False, default=0, comment="在故事中的顺序")

    __table_args__ = (
        Index('idx_story_images_story', 'story_id', 'position'),
    )
