"""
评论模块路由
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.models import ApiResponse, CommentCreate
from storyhub.api.deps import get_current_user, get_current_user_optional, get_db_session
from storyhub.services.comment_service import comment_service

router = APIRouter()


@router.post("/{story_id}/comments", response_model=ApiResponse)
async def create_comment(
    story_id: str,
    data: CommentCreate,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    发表评论

    - 需要登录
    - 内容不能为空
    """
    comment = await comment_service.add_comment(session, story_id, current_user, data.content)
    return ApiResponse(data=comment, message="Comment created")


@router.get("/{story_id}/comments", response_model=ApiResponse)
async def get_story_comments(
    story_id: str,
    current_user: Optional[str] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """获取故事评论（最新在前）"""
    comments = await comment_service.list_comments(session, story_id, current_user)
    return ApiResponse(data=comments)


@router.delete("/comments/{comment_id}", response_model=ApiResponse)
async def delete_comment(
    comment_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    删除评论

    - 只有评论作者可以删除
    """
    await comment_service.delete_comment(session, comment_id, current_user)
    return ApiResponse(message="Comment deleted")
