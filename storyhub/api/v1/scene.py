"""
场景模块路由
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.models import ApiResponse, SceneRequest
from storyhub.api.deps import get_current_user, get_current_user_optional, get_db_session
from storyhub.services.scene_service import scene_service

router = APIRouter()


@router.post("", response_model=ApiResponse)
async def create_scene(
    data: SceneRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    创建场景

    - 只有故事作者可以添加场景
    """
    scene = await scene_service.create_scene(session, data, current_user)
    return ApiResponse(data=scene, message="Scene created")


@router.get("/story/{story_id}", response_model=ApiResponse)
async def list_scenes(
    story_id: str,
    current_user: Optional[str] = Depends(get_current_user_optional),
    session: AsyncSession = Depends(get_db_session)
):
    """获取故事的场景列表（按顺序）"""
    scenes = await scene_service.list_scenes(session, story_id, current_user)
    return ApiResponse(data=scenes)


@router.put("/{scene_id}", response_model=ApiResponse)
async def update_scene(
    scene_id: int,
    data: SceneRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """更新场景"""
    scene = await scene_service.update_scene(session, scene_id, data, current_user)
    return ApiResponse(data=scene, message="Scene updated")


@router.delete("/{scene_id}", response_model=ApiResponse)
async def delete_scene(
    scene_id: int,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """删除场景及其媒体"""
    await scene_service.delete_scene(session, scene_id, current_user)
    return ApiResponse(message="Scene deleted")


@router.post("/{scene_id}/media", response_model=ApiResponse)
async def upload_scene_media(
    scene_id: int,
    files: List[UploadFile] = File(...),
    media_type: str = Form(...),
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """
    上传场景媒体

    - media_type: IMAGE / VIDEO / AUDIO（不区分大小写）
    - 追加到已有媒体之后
    """
    payload = []
    for upload in files:
        try:
            payload.append((upload.filename, await upload.read()))
        finally:
            await upload.close()

    scene = await scene_service.add_media(session, scene_id, payload, media_type, current_user)
    return ApiResponse(data=scene, message="Media uploaded")
