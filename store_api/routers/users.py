"""Роутер пользователей: CRUD поверх UserService, пароль в ответы не попадает."""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from store_api.dependencies import get_user_service
from store_api.errors import http_exception_for
from store_api.schemas.users import UserCreate, UserRead, UserUpdate
from store_api.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation error"}, 409: {"description": "Email already in use"}},
)
async def create_user(body: UserCreate, service: UserService = Depends(get_user_service)):
    """Создание пользователя"""
    try:
        user = await service.create_user(body)
    except Exception as e:
        raise http_exception_for(e)
    return user.to_public()


@router.get("", response_model=List[UserRead])
async def get_all_users(service: UserService = Depends(get_user_service)):
    """Список всех пользователей"""
    try:
        users = await service.get_all_users()
    except Exception as e:
        raise http_exception_for(e)
    return [user.to_public() for user in users]


@router.get("/{user_id}", response_model=UserRead, responses={404: {"description": "User not found"}})
async def get_user_by_id(user_id: str, service: UserService = Depends(get_user_service)):
    """Пользователь по ID"""
    try:
        user = await service.get_user_by_id(user_id)
    except Exception as e:
        raise http_exception_for(e)
    return user.to_public()


@router.put(
    "/{user_id}",
    response_model=UserRead,
    responses={
        400: {"description": "Validation error"},
        404: {"description": "User not found"},
        409: {"description": "Email already in use"},
    },
)
async def update_user(user_id: str, body: UserUpdate, service: UserService = Depends(get_user_service)):
    """
    Частичное обновление пользователя

    Args:
        user_id: ID пользователя (ObjectId)
        body: только изменяемые поля

    Returns:
        Обновлённый пользователь без пароля
    """
    try:
        user = await service.update_user(user_id, body)
    except Exception as e:
        raise http_exception_for(e)
    return user.to_public()


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Удаление пользователя"""
    try:
        await service.delete_user(user_id)
    except Exception as e:
        raise http_exception_for(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
