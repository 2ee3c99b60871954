"""
Ошибки сервисного слоя.

Сервисы и валидация поднимают эти исключения, а переводом в HTTP-статус
или MCP-ответ с флагом isError занимается только слой диспетчеризации.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Базовая ошибка бизнес-логики."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Входные данные нарушают правила DTO."""

    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors

    def __str__(self) -> str:
        details = "; ".join(f"{e['field']}: {e['message']}" for e in self.errors)
        return f"{self.message}: {details}" if details else self.message


class NotFoundError(ServiceError):
    """Записи с таким идентификатором нет."""

    status_code = 404


class ConflictError(ServiceError):
    """Нарушена уникальность (email пользователя)."""

    status_code = 409


class InternalError(ServiceError):
    """Хранилище не подтвердило операцию."""

    status_code = 500


def status_code_for(error: Exception) -> int:
    """HTTP-статус для исключения; всё неизвестное даёт 500."""
    if isinstance(error, ServiceError):
        return error.status_code
    return 500


def format_validation_errors(raw_errors: List[Dict[str, Any]], skip_loc: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Приводит ошибки pydantic/FastAPI к виду [{"field": ..., "message": ...}].

    Args:
        raw_errors: результат exc.errors()
        skip_loc: первый элемент loc, который нужно отбросить (например, "body")
    """
    result = []
    for error in raw_errors:
        loc = list(error.get("loc", ()))
        if skip_loc and loc and loc[0] == skip_loc:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        result.append({"field": field, "message": error.get("msg", "Invalid value")})
    return result


def http_exception_for(error: Exception) -> HTTPException:
    """Единая точка перевода ошибки в HTTP-ответ для роутеров."""
    if isinstance(error, ServiceError):
        return HTTPException(status_code=status_code_for(error), detail=str(error))
    logger.error(f"Unexpected error: {str(error)}", exc_info=error)
    return HTTPException(status_code=500, detail=str(error) or "Internal server error")
