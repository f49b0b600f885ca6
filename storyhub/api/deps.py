"""
API 依赖注入 - 认证、数据库连接等
"""

from typing import Optional, AsyncIterator
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.config import settings
from storyhub.db.base import get_db
from storyhub.utils.auth import decode_access_token

# JWT 认证（缺少令牌时由依赖自行返回 401）
security = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话（依赖注入用）

    Yields:
        AsyncSession: 数据库会话
    """
    if not settings.DATABASE_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not enabled"
        )

    async for session in get_db():
        yield session


def _username_from_token(token: str) -> Optional[str]:
    payload = decode_access_token(token)
    if not payload:
        return None
    username = payload.get("sub")
    return username or None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    从 JWT Token 中解析当前用户

    Returns:
        用户名（token 的 sub 字段）
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    username = _username_from_token(credentials.credentials)
    if username is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return username


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    可选的用户认证（未登录或令牌无效时返回 None）
    """
    if not credentials:
        return None
    return _username_from_token(credentials.credentials)
