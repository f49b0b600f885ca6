"""
场景表 ORM 模型
"""

from sqlalchemy import Column, String, Text, Integer, JSON, TIMESTAMP, ForeignKey, Index
from datetime import datetime

from storyhub.db.base import Base


class Scene(Base):
    """场景表"""
    __tablename__ = "scenes"

    # 主键
    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")

    # 外键
    story_id = Column(String(64), ForeignKey("stories.id"), nullable=False, comment="所属故事")

    # 基本信息
    title = Column(String(256), nullable=False, comment="场景标题")
    description = Column(Text, nullable=True, comment="场景描述")
    scene_order = Column(Integer, nullable=False, default=0, comment="场景顺序")

    # 出场角色（按名称松耦合，不引用角色表）
    character_names = Column(JSON, nullable=False, default=list, comment="出场角色名列表")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
    updated_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow, comment="更新时间")

    __table_args__ = (
        Index('idx_scenes_story', 'story_id', 'scene_order'),
    )


class SceneMedia(Base):
    """场景媒体表"""
    __tablename__ = "scene_media"

    # 主键
    id = Column(Integer, primary_key=True, autoincrement=True, comment="自增ID")

    # 外键
    scene_id = Column(Integer, ForeignKey("scenes.id"), nullable=False, comment="所属场景")

    url = Column(String(512), nullable=False, comment="媒体URL")
    media_type = Column(String(16), nullable=False, comment="媒体类型（IMAGE/VIDEO/AUDIO）")

    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="上传时间")

    __table_args__ = (
        Index('idx_scene_media_scene', 'scene_id'),
    )
