"""
Схемы пользователя.

UserCreate / UserUpdate: входные DTO. User: запись из хранилища (с хешем
пароля). UserRead: то, что уходит наружу через REST и MCP.
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from store_api.schemas.common import CamelModel, InputModel


class UserCreate(InputModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Минимум 6 символов")
    name: str = Field(..., min_length=1)
    picture_url: Optional[str] = None


class UserUpdate(InputModel):
    """Все поля необязательны, но при наличии проверяются так же, как при создании."""

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = Field(None, min_length=1)
    picture_url: Optional[str] = None


class UserRead(CamelModel):
    id: str
    email: str
    name: str
    picture_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class User(UserRead):
    password: str

    def to_public(self) -> UserRead:
        """Копия без пароля."""
        return UserRead.model_validate(self.model_dump(exclude={"password"}))
