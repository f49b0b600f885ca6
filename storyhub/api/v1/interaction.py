"""
互动模块路由（点赞、收藏）
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.models import ApiResponse
from storyhub.api.deps import get_current_user, get_db_session
from storyhub.services.interaction_service import interaction_service

router = APIRouter()


@router.post("/{story_id}/like", response_model=ApiResponse)
async def like_story(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    点赞故事

    - 需要登录
    - 重复点赞不会改变点赞数
    """
    story = await interaction_service.like_story(session, story_id, current_user)
    return ApiResponse(data=story)


@router.delete("/{story_id}/like", response_model=ApiResponse)
async def unlike_story(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    取消点赞

    - 需要登录
    - 未点赞时为空操作
    """
    story = await interaction_service.unlike_story(session, story_id, current_user)
    return ApiResponse(data=story)


@router.post("/{story_id}/favorite", response_model=ApiResponse)
async def favorite_story(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """收藏故事"""
    story = await interaction_service.favorite_story(session, story_id, current_user)
    return ApiResponse(data=story)


@router.delete("/{story_id}/favorite", response_model=ApiResponse)
async def unfavorite_story(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """取消收藏"""
    story = await interaction_service.unfavorite_story(session, story_id, current_user)
    return ApiResponse(data=story)
