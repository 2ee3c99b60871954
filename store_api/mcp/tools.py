"""
Каталог MCP-инструментов и диспетчер вызовов.

Схемы аргументов строятся из тех же pydantic DTO, что и REST-тела, и
аргументы проходят ту же валидацию. Диспетчер никогда не бросает
исключение наружу: любая ошибка превращается в текстовый ответ с isError.
"""
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import CallToolResult, TextContent, Tool
from pydantic import BaseModel

from store_api.errors import ValidationError
from store_api.schemas.common import InputModel, parse_input
from store_api.schemas.products import ProductCreate, ProductUpdate
from store_api.schemas.users import UserCreate, UserUpdate
from store_api.services.products import ProductService
from store_api.services.users import UserService

logger = logging.getLogger(__name__)


def _input_schema(model: Optional[Type[InputModel]] = None, id_of: Optional[str] = None) -> Dict[str, Any]:
    """JSON Schema аргументов: поля DTO плюс, при необходимости, обязательный id."""
    properties: Dict[str, Any] = {}
    required: List[str] = []
    defs: Dict[str, Any] = {}
    if id_of:
        properties["id"] = {"type": "string", "description": f"{id_of} ID (MongoDB ObjectId)"}
        required.append("id")
    if model is not None:
        model_schema = model.model_json_schema(by_alias=True)
        properties.update(model_schema.get("properties", {}))
        required.extend(model_schema.get("required", []))
        defs = model_schema.get("$defs", {})

    schema: Dict[str, Any] = {"type": "object", "properties": properties, "required": required}
    if defs:
        schema["$defs"] = defs
    return schema


TOOLS: List[Tool] = [
    Tool(
        name="create_user",
        description="Create a new user with email, password, name, and optional picture URL",
        inputSchema=_input_schema(UserCreate),
    ),
    Tool(
        name="get_all_users",
        description="Retrieve all users from the database",
        inputSchema=_input_schema(),
    ),
    Tool(
        name="get_user_by_id",
        description="Get a specific user by their ID",
        inputSchema=_input_schema(id_of="User"),
    ),
    Tool(
        name="update_user",
        description="Update an existing user by ID. Only the supplied fields are changed",
        inputSchema=_input_schema(UserUpdate, id_of="User"),
    ),
    Tool(
        name="delete_user",
        description="Delete a user by their ID",
        inputSchema=_input_schema(id_of="User"),
    ),
    Tool(
        name="create_product",
        description="Create a new product with name, description, price, quantity, measure type, and attributes",
        inputSchema=_input_schema(ProductCreate),
    ),
    Tool(
        name="get_all_products",
        description="Retrieve all products from the database",
        inputSchema=_input_schema(),
    ),
    Tool(
        name="get_product_by_id",
        description="Get a specific product by its ID",
        inputSchema=_input_schema(id_of="Product"),
    ),
    Tool(
        name="update_product",
        description="Update an existing product by ID. Only the supplied fields are changed",
        inputSchema=_input_schema(ProductUpdate, id_of="Product"),
    ),
    Tool(
        name="delete_product",
        description="Delete a product by its ID",
        inputSchema=_input_schema(id_of="Product"),
    ),
]


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def text_result(result: Any) -> CallToolResult:
    text = json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False)
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(error: Exception) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=f"Error: {error}")], isError=True)


def _pop_id(arguments: Dict[str, Any]) -> str:
    id = arguments.pop("id", None)
    if not isinstance(id, str) or not id:
        raise ValidationError([{"field": "id", "message": "Field required"}])
    return id


class ToolDispatcher:
    """Сопоставляет имя инструмента с вызовом сервиса."""

    def __init__(self, users: UserService, products: ProductService):
        self.users = users
        self.products = products
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[Any]]] = {
            "create_user": self._create_user,
            "get_all_users": self._get_all_users,
            "get_user_by_id": self._get_user_by_id,
            "update_user": self._update_user,
            "delete_user": self._delete_user,
            "create_product": self._create_product,
            "get_all_products": self._get_all_products,
            "get_product_by_id": self._get_product_by_id,
            "update_product": self._update_product,
            "delete_product": self._delete_product,
        }

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        handler = self._handlers.get(name)
        try:
            if handler is None:
                raise ValueError(f"Unknown tool: {name}")
            result = await handler(dict(arguments or {}))
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            return error_result(e)
        logger.info("Tool %s succeeded", name)
        return text_result(result)

    # Пользователи: пароль наружу не отдаём, как и в REST

    async def _create_user(self, arguments: Dict[str, Any]) -> Any:
        user = await self.users.create_user(parse_input(UserCreate, arguments))
        return user.to_public()

    async def _get_all_users(self, arguments: Dict[str, Any]) -> Any:
        return [user.to_public() for user in await self.users.get_all_users()]

    async def _get_user_by_id(self, arguments: Dict[str, Any]) -> Any:
        user = await self.users.get_user_by_id(_pop_id(arguments))
        return user.to_public()

    async def _update_user(self, arguments: Dict[str, Any]) -> Any:
        id = _pop_id(arguments)
        user = await self.users.update_user(id, parse_input(UserUpdate, arguments))
        return user.to_public()

    async def _delete_user(self, arguments: Dict[str, Any]) -> Any:
        id = _pop_id(arguments)
        await self.users.delete_user(id)
        return {"deleted": True, "id": id}

    # Товары

    async def _create_product(self, arguments: Dict[str, Any]) -> Any:
        return await self.products.create_product(parse_input(ProductCreate, arguments))

    async def _get_all_products(self, arguments: Dict[str, Any]) -> Any:
        return await self.products.get_all_products()

    async def _get_product_by_id(self, arguments: Dict[str, Any]) -> Any:
        return await self.products.get_product_by_id(_pop_id(arguments))

    async def _update_product(self, arguments: Dict[str, Any]) -> Any:
        id = _pop_id(arguments)
        return await self.products.update_product(id, parse_input(ProductUpdate, arguments))

    async def _delete_product(self, arguments: Dict[str, Any]) -> Any:
        id = _pop_id(arguments)
        await self.products.delete_product(id)
        return {"deleted": True, "id": id}
