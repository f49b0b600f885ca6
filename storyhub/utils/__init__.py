"""
工具模块
"""

from .auth import create_access_token, decode_access_token
from .id_generator import generate_ulid, generate_story_id, generate_character_id, generate_comment_id
from .logger_config import setup_logging, interaction_logger

__all__ = [
    # 认证工具
    "create_access_token",
    "decode_access_token",

    # ID 生成器
    "generate_ulid",
    "generate_story_id",
    "generate_character_id",
    "generate_comment_id",

    # 日志
    "setup_logging",
    "interaction_logger",
]
