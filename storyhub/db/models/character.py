"""
角色表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from storyhub.db.base import Base


class Character(Base):
    """角色表"""
    __tablename__ = "characters"

    # 主键
    id = Column(String(64), primary_key=True, comment="角色ID")

    # 外键（独立角色为NULL）
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=True, comment="所属故事")

    # 基本信息
    name = Column(String(128), nullable=False, comment="角色名")
    description = Column(Text, nullable=True, comment="角色描述")
    role = Column(String(64), nullable=True, comment="角色定位")
    actor_name = Column(String(128), nullable=True, comment="演员名")
    image_url = Column(String(512), nullable=True, comment="角色图片URL")

    # 故事内排序
    position = Column(Integer, nullable=False, default=0, comment="在故事中的顺序")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")

    __table_args__ = (
        Index('idx_characters_story', 'story_id', 'position'),
    )
