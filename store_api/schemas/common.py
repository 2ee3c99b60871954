"""Общие основы для pydantic-схем: camelCase в JSON и в документах MongoDB."""
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from store_api.errors import ValidationError, format_validation_errors

InputT = TypeVar("InputT", bound="InputModel")


class CamelModel(BaseModel):
    """Поля в Python в snake_case, в JSON и в хранилище в camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InputModel(CamelModel):
    """
    DTO для входящих данных.

    Строгий режим: типы не приводятся ("10" не число), лишние поля запрещены.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    def to_document(self) -> Dict[str, Any]:
        """Только переданные поля, с ключами хранилища. None не записывается."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


def parse_input(model: Type[InputT], data: Any) -> InputT:
    """Валидирует сырые данные по DTO, ошибки pydantic превращает в ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e
