"""
角色模块路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storyhub.models import ApiResponse, CharacterRequest
from storyhub.api.deps import get_current_user, get_db_session
from storyhub.services.character_service import character_service

router = APIRouter()


@router.post("", response_model=ApiResponse)
async def create_character(
    data: CharacterRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """创建独立角色"""
    character = await character_service.create_character(session, data, current_user)
    return ApiResponse(data=character, message="Character created")


@router.get("", response_model=ApiResponse)
async def list_my_characters(
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """我的故事中的全部角色"""
    characters = await character_service.list_my_characters(session, current_user)
    return ApiResponse(data=characters)


@router.put("/{character_id}", response_model=ApiResponse)
async def update_character(
    character_id: str,
    data: CharacterRequest,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """更新角色"""
    character = await character_service.update_character(session, character_id, data, current_user)
    return ApiResponse(data=character, message="Character updated")


@router.delete("/{character_id}", response_model=ApiResponse)
async def delete_character(
    character_id: str,
    current_user: str = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """删除角色"""
    await character_service.delete_character(session, character_id, current_user)
    return ApiResponse(message="Character deleted")
