"""Схемы товара: входные DTO и запись из хранилища."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from store_api.schemas.common import CamelModel, InputModel


class ProductCreate(InputModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    picture_url: Optional[str] = None
    unit_price: float = Field(..., ge=0)
    quantity: float = Field(..., ge=0)
    measure_type: str = Field(..., min_length=1, description="Единица измерения: kg, l, pcs ...")
    attributes: Dict[str, Any] = Field(..., description="Произвольные пары ключ-значение")


class ProductUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    picture_url: Optional[str] = None
    unit_price: Optional[float] = Field(None, ge=0)
    quantity: Optional[float] = Field(None, ge=0)
    measure_type: Optional[str] = Field(None, min_length=1)
    attributes: Optional[Dict[str, Any]] = None


class Product(CamelModel):
    id: str
    name: str
    description: str
    picture_url: Optional[str] = None
    unit_price: float
    quantity: float
    measure_type: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
