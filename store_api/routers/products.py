"""Роутер товаров"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from store_api.dependencies import get_product_service
from store_api.errors import http_exception_for
from store_api.schemas.products import Product, ProductCreate, ProductUpdate
from store_api.services.products import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation error"}},
)
async def create_product(body: ProductCreate, service: ProductService = Depends(get_product_service)):
    """Создание товара"""
    try:
        return await service.create_product(body)
    except Exception as e:
        raise http_exception_for(e)


@router.get("", response_model=List[Product])
async def get_all_products(service: ProductService = Depends(get_product_service)):
    try:
        return await service.get_all_products()
    except Exception as e:
        raise http_exception_for(e)


@router.get("/{product_id}", response_model=Product, responses={404: {"description": "Product not found"}})
async def get_product_by_id(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        return await service.get_product_by_id(product_id)
    except Exception as e:
        raise http_exception_for(e)


@router.put(
    "/{product_id}",
    response_model=Product,
    responses={400: {"description": "Validation error"}, 404: {"description": "Product not found"}},
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    """Частичное обновление: поля, которых нет в теле, остаются как были"""
    try:
        return await service.update_product(product_id, body)
    except Exception as e:
        raise http_exception_for(e)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Product not found"}},
)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        await service.delete_product(product_id)
    except Exception as e:
        raise http_exception_for(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
