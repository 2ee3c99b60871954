"""FastAPI-зависимости: сервисы поверх общего подключения к БД."""
from store_api.db import get_database
from store_api.repositories.products import ProductRepository
from store_api.repositories.users import UserRepository
from store_api.services.products import ProductService
from store_api.services.users import UserService


def get_user_service() -> UserService:
    return UserService(UserRepository(get_database()))


def get_product_service() -> ProductService:
    return ProductService(ProductRepository(get_database()))
