"""Сервис товаров: те же операции, что у пользователей, без ограничений уникальности."""
from __future__ import annotations

import logging
from typing import List

from store_api.errors import InternalError, NotFoundError
from store_api.repositories.products import ProductRepository
from store_api.schemas.products import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def create_product(self, data: ProductCreate) -> Product:
        product = await self.repository.create(data.to_document())
        logger.info("Created product %s", product.id)
        return product

    async def get_all_products(self) -> List[Product]:
        return await self.repository.find_all()

    async def get_product_by_id(self, id: str) -> Product:
        product = await self.repository.find_by_id(id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    async def update_product(self, id: str, data: ProductUpdate) -> Product:
        await self.get_product_by_id(id)
        document = data.to_document()
        updated = await self.repository.update(id, document)
        if not updated:
            raise InternalError("Failed to update product")
        logger.info("Updated product %s, fields=%s", id, sorted(document))
        return updated

    async def delete_product(self, id: str) -> None:
        await self.get_product_by_id(id)
        deleted = await self.repository.delete(id)
        if not deleted:
            raise InternalError("Failed to delete product")
        logger.info("Deleted product %s", id)
