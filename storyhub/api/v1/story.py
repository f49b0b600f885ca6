"""
故事模块路由
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.models import ApiResponse, StoryRequest
from storyhub.api.deps import get_current_user, get_current_user_optional, get_db_session
from storyhub.services.story_service import story_service
from storyhub.services.media_storage_service import media_storage_service

router = APIRouter()


@router.post("", response_model=ApiResponse)
async def create_story(
    data: StoryRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    创建故事

    - 需要登录
    - 标题必填，且同一作者下不能重名
    - 角色与图片随故事一并保存
    """
    story = await story_service.create_story(session, data, current_user)
    return ApiResponse(data=story, message="Story created")


@router.get("", response_model=ApiResponse)
async def list_public_stories(
    current_user: Optional[str] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """公开故事列表（只包含已发布的故事）"""
    stories = await story_service.list_public_stories(session, current_user)
    return ApiResponse(data=stories)


@router.get("/my-stories", response_model=ApiResponse)
async def list_my_stories(
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """我的故事（含未发布）"""
    stories = await story_service.list_my_stories(session, current_user)
    return ApiResponse(data=stories)


@router.get("/favorites", response_model=ApiResponse)
async def list_favorite_stories(
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """我收藏的故事"""
    stories = await story_service.list_favorite_stories(session, current_user)
    return ApiResponse(data=stories)


@router.post("/upload-images", response_model=ApiResponse)
async def upload_story_images(
    files: List[UploadFile] = File(...),
    current_user: str = Depends(get_current_user)
):
    """
    上传故事图片

    - 需要登录
    - 返回保存后的图片URL，随后在创建/更新故事时提交
    """
    payload = []
    for upload in files:
        try:
            payload.append((upload.filename, await upload.read()))
        finally:
            await upload.close()

    urls = media_storage_service.store_story_images(payload)
    return ApiResponse(data=urls, message=f"{len(urls)} image(s) uploaded")


@router.get("/{story_id}", response_model=ApiResponse)
async def get_story(
    story_id: str,
    current_user: Optional[str] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """
    获取故事详情

    - 未发布的故事只有作者可见
    """
    story = await story_service.get_story(session, story_id, current_user)
    return ApiResponse(data=story)


@router.put("/{story_id}", response_model=ApiResponse)
async def update_story(
    story_id: str,
    data: StoryRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    更新故事

    - 只有作者可以更新
    - 角色与图片整体替换
    """
    story = await story_service.update_story(session, story_id, data, current_user)
    return ApiResponse(data=story, message="Story updated")


@router.delete("/{story_id}", response_model=ApiResponse)
async def delete_story(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """删除故事（连同角色、图片、场景、评论、点赞与收藏）"""
    await story_service.delete_story(session, story_id, current_user)
    return ApiResponse(message="Story deleted")


@router.post("/{story_id}/toggle-publish", response_model=ApiResponse)
async def toggle_publish(
    story_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """切换发布状态"""
    is_published = await story_service.toggle_publish(session, story_id, current_user)
    return ApiResponse(
        data={"is_published": is_published},
        message="Story published" if is_published else "Story unpublished"
    )
