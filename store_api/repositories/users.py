"""Репозиторий пользователей."""
from typing import Optional

from store_api.config import USERS_COLLECTION
from store_api.repositories.base import MongoRepository
from store_api.schemas.users import User


class UserRepository(MongoRepository[User]):
    collection_name = USERS_COLLECTION
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})
