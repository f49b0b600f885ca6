"""
数据库模块

包含 SQLAlchemy ORM 模型、数据库连接管理等
"""

from .base import Base, get_db, init_db, close_db
from .session import get_session

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "get_session",
]
