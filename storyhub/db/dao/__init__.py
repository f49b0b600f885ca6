"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .story_dao import StoryDAO
from .character_dao import CharacterDAO
from .scene_dao import SceneDAO
from .comment_dao import CommentDAO
from .interaction_dao import InteractionDAO

__all__ = [
    "StoryDAO",
    "CharacterDAO",
    "SceneDAO",
    "CommentDAO",
    "InteractionDAO",
]
