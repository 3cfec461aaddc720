"""
Stok REST API Router'i.

Endpoint'ler:
    GET  /                         -> Tum urunlerin stok durumu
    GET  /low                      -> Dusuk stoklu urunler
    GET  /movements                -> Stok hareketleri
    POST /movements                -> Elle stok hareketi (in / out / adjustment)
    GET  /{product_id}             -> Urun stok durumu (mevcut + rezerve)
    POST /{product_id}/operations  -> ADD / REMOVE / RESERVE / UNRESERVE
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from uretimtakip.database import get_db
from uretimtakip.errors import InsufficientStockError
from uretimtakip.schemas.stock import (
    StockMovementCreate, StockMovementResponse, StockOperationRequest,
    StockOperationResult, StockStatus,
)
from uretimtakip.services import reservation as reservation_service
from uretimtakip.services import stock as stock_service

router = APIRouter()


@router.get("", response_model=list[StockStatus])
def stock_overview(db: Annotated[Session, Depends(get_db)]):
    return reservation_service.get_stock_overview(db)


@router.get("/low")
def low_stock(
    db: Annotated[Session, Depends(get_db)],
    threshold: int | None = Query(default=None, ge=0),
):
    records = stock_service.get_low_stock_products(db, threshold=threshold)
    return [
        {"product_id": str(r.product_id), "quantity": r.quantity}
        for r in records
    ]


@router.get("/movements", response_model=list[StockMovementResponse])
def list_movements(
    db: Annotated[Session, Depends(get_db)],
    product_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    return stock_service.get_stock_movements(db, product_id=product_id, skip=skip, limit=limit)


@router.post("/movements", response_model=StockMovementResponse, status_code=status.HTTP_201_CREATED)
def create_movement(
    data: StockMovementCreate,
    db: Annotated[Session, Depends(get_db)],
):
    return stock_service.add_stock_movement(
        db, data.product_id, data.movement_type, data.quantity, notes=data.notes,
    )


@router.get("/{product_id}", response_model=StockStatus)
def product_stock(
    product_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    """Okuma hatasinda bile 500 donmez; sifirlanmis durum doner."""
    return reservation_service.get_stock_status(db, product_id)


@router.post("/{product_id}/operations", response_model=StockOperationResult)
def stock_operation(
    product_id: uuid.UUID,
    body: StockOperationRequest,
    db: Annotated[Session, Depends(get_db)],
):
    result = stock_service.apply_stock_operation(db, product_id, body.operation, body.quantity)
    if not result.success:
        available = result.stock.available_stock if result.stock else 0
        raise InsufficientStockError(available=available, requested=body.quantity)
    return result
