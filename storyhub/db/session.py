"""
数据库会话管理

提供非 FastAPI 上下文（脚本、运维任务）下的数据库会话
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.db import base


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话的上下文管理器

    使用示例：
    ```python
    async with get_session() as session:
        story = await StoryDAO.get_by_id(session, story_id)
    ```

    Yields:
        AsyncSession: 数据库会话
    """
    if not base.AsyncSessionLocal:
        raise RuntimeError("Database not initialized")

    async with base.AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
