"""
Базовый репозиторий над одной коллекцией MongoDB.

Идентификатор наружу передаётся строкой; если строка не разбирается в ObjectId,
запись считается отсутствующей (None), а не ошибкой.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_object_id(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _utcnow() -> datetime:
    """BSON хранит даты с точностью до миллисекунд; отсекаем лишнее заранее."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class MongoRepository(Generic[ModelT]):
    collection_name: str
    model: Type[ModelT]

    def __init__(self, database: AsyncDatabase):
        self._collection = database[self.collection_name]

    def _to_model(self, document: Dict[str, Any]) -> ModelT:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return self.model.model_validate(data)

    async def create(self, data: Dict[str, Any]) -> ModelT:
        now = _utcnow()
        document = {**data, "createdAt": now, "updatedAt": now}
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.debug("Inserted %s into %s", result.inserted_id, self.collection_name)
        return self._to_model(document)

    async def find_all(self) -> List[ModelT]:
        return [self._to_model(document) async for document in self._collection.find()]

    async def find_one(self, query: Dict[str, Any]) -> Optional[ModelT]:
        document = await self._collection.find_one(query)
        if document is None:
            return None
        return self._to_model(document)

    async def find_by_id(self, id: str) -> Optional[ModelT]:
        object_id = parse_object_id(id)
        if object_id is None:
            return None
        return await self.find_one({"_id": object_id})

    async def update(self, id: str, data: Dict[str, Any]) -> Optional[ModelT]:
        """$set только переданных полей; возвращает запись после записи или None."""
        object_id = parse_object_id(id)
        if object_id is None:
            return None
        document = await self._collection.find_one_and_update(
            {"_id": object_id},
            {"$set": {**data, "updatedAt": _utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            return None
        return self._to_model(document)

    async def delete(self, id: str) -> bool:
        object_id = parse_object_id(id)
        if object_id is None:
            return False
        result = await self._collection.delete_one({"_id": object_id})
        return result.deleted_count == 1
