"""
Urun REST API Router'i.

Endpoint'ler:
    GET    /                    -> Urun listesi (sayfalama + arama)
    POST   /                    -> Yeni urun (recete ile)
    GET    /{product_id}        -> Urun detay
    PATCH  /{product_id}/weight -> Adet agirligi duzeltme
    DELETE /{product_id}        -> Urun sil
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from uretimtakip.database import get_db
from uretimtakip.schemas.product import ProductCreate, ProductResponse, ProductWeightUpdate
from uretimtakip.services import product as product_service

router = APIRouter()


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    size: int


@router.get("", response_model=ProductListResponse)
def list_products(
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit sayisi"),
    search: str | None = Query(default=None, description="Urun kodu veya adina gore arama"),
):
    products, total = product_service.get_products(db, search=search, page=page, size=size)
    return ProductListResponse(items=products, total=total, page=page, size=size)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    db: Annotated[Session, Depends(get_db)],
):
    return product_service.create_product(db, data)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return product_service.get_product(db, product_id)


@router.patch("/{product_id}/weight", response_model=ProductResponse)
def update_weight(
    product_id: uuid.UUID,
    data: ProductWeightUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    return product_service.update_product_weight(db, product_id, data.unit_weight_grams)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    product_service.delete_product(db, product_id)
