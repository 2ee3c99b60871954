"""
Сервис пользователей: уникальность email, хеширование пароля, проверки
существования перед записью.

Используется и REST-роутерами, и MCP-сервером, логика не дублируется.
"""
from __future__ import annotations

import logging
from typing import List

from pymongo.errors import DuplicateKeyError

from store_api.errors import ConflictError, InternalError, NotFoundError
from store_api.repositories.users import UserRepository
from store_api.schemas.users import User, UserCreate, UserUpdate
from store_api.security import hash_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create_user(self, data: UserCreate) -> User:
        existing = await self.repository.find_by_email(data.email)
        if existing:
            raise ConflictError("User with this email already exists")

        document = data.to_document()
        document["password"] = await hash_password(data.password)
        try:
            user = await self.repository.create(document)
        except DuplicateKeyError as e:
            # Параллельное создание с тем же email прошло проверку выше
            raise ConflictError("User with this email already exists") from e
        logger.info("Created user %s", user.id)
        return user

    async def get_all_users(self) -> List[User]:
        return await self.repository.find_all()

    async def get_user_by_id(self, id: str) -> User:
        user = await self.repository.find_by_id(id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, id: str, data: UserUpdate) -> User:
        """
        Частичное обновление.

        Уникальность email перепроверяется только если email действительно
        меняется; новый пароль хешируется заново.
        """
        user = await self.get_user_by_id(id)

        document = data.to_document()
        if "email" in document and document["email"] != user.email:
            if await self.repository.find_by_email(document["email"]):
                raise ConflictError("Email already in use")
        if "password" in document:
            document["password"] = await hash_password(document["password"])

        try:
            updated = await self.repository.update(id, document)
        except DuplicateKeyError as e:
            raise ConflictError("Email already in use") from e
        if not updated:
            raise InternalError("Failed to update user")
        logger.info("Updated user %s, fields=%s", id, sorted(document))
        return updated

    async def delete_user(self, id: str) -> None:
        await self.get_user_by_id(id)
        deleted = await self.repository.delete(id)
        if not deleted:
            raise InternalError("Failed to delete user")
        logger.info("Deleted user %s", id)
