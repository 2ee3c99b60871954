"""Репозиторий товаров."""
from store_api.config import PRODUCTS_COLLECTION
from store_api.repositories.base import MongoRepository
from store_api.schemas.products import Product


class ProductRepository(MongoRepository[Product]):
    collection_name = PRODUCTS_COLLECTION
    model = Product
