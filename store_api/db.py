"""
Подключение к MongoDB.

Один AsyncMongoClient на процесс: открывается при старте (HTTP или MCP),
переиспользуется всеми репозиториями и закрывается при остановке.
"""
import logging
from datetime import timezone
from typing import Optional

from bson.codec_options import CodecOptions
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from store_api.config import DEFAULT_DB_NAME, MONGODB_DB, MONGODB_URI, USERS_COLLECTION

logger = logging.getLogger(__name__)

# Даты читаются как aware UTC, иначе BSON отдаёт naive datetime
CODEC_OPTIONS = CodecOptions(tz_aware=True, tzinfo=timezone.utc)

_client: Optional[AsyncMongoClient] = None
_database: Optional[AsyncDatabase] = None


async def connect(uri: str = MONGODB_URI, db_name: Optional[str] = MONGODB_DB) -> AsyncDatabase:
    """Открывает соединение (если ещё не открыто) и проверяет его ping-ом."""
    global _client, _database
    if _database is not None:
        return _database

    client = AsyncMongoClient(uri, tz_aware=True, tzinfo=timezone.utc)
    try:
        await client.admin.command("ping")
    except Exception:
        await client.close()
        logger.error("Error during database initialization", exc_info=True)
        raise

    _client = client
    if db_name:
        _database = client.get_database(db_name, codec_options=CODEC_OPTIONS)
    else:
        _database = client.get_default_database(default=DEFAULT_DB_NAME, codec_options=CODEC_OPTIONS)
    logger.info("Database connection established: %s", _database.name)
    return _database


async def ensure_indexes(database: AsyncDatabase) -> None:
    """Уникальный индекс на users.email: хранилище само отсекает дубликаты."""
    await database[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True)
    logger.info("Ensured unique index on %s.email", USERS_COLLECTION)


def get_database() -> AsyncDatabase:
    if _database is None:
        raise RuntimeError("Database is not initialized, call connect() first")
    return _database


async def close() -> None:
    """Закрывает клиент; повторный вызов ничего не делает."""
    global _client, _database
    if _client is None:
        return
    await _client.close()
    _client = None
    _database = None
    logger.info("Database connection closed")
