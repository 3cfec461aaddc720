"""
Siparis REST API Router'i.

Endpoint'ler:
    GET    /                                   -> Siparis listesi (sayfalama)
    POST   /                                   -> Yeni siparis
    GET    /{order_code}                       -> Siparis detay
    DELETE /{order_id}                         -> Siparis sil (hazir kalemler stoga iade)
    PUT    /{order_code}/items/{line_id}/status -> Kalem durum gecisi
    PUT    /{order_code}/status                -> Tum kalemlerin durum gecisi

Bu router main.py'de su sekilde eklenir:
    app.include_router(orders_api.router, prefix="/api/v1/orders", tags=["Siparisler"])
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from uretimtakip.database import get_db
from uretimtakip.models.order import OrderItem
from uretimtakip.schemas.order import (
    OrderCreate, OrderResponse, StatusTransitionRequest, TransitionResult,
)
from uretimtakip.services import order as order_service
from uretimtakip.services import order_status as order_status_service
from uretimtakip.services import product as product_service

router = APIRouter()


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    page: int
    size: int


def _production_quantity(db: Session, body: StatusTransitionRequest, product_id: uuid.UUID | None) -> int:
    """batch_count verildiyse tabla sayisini adede cevir."""
    if body.batch_count and product_id is not None:
        product = product_service.get_product(db, product_id)
        return order_status_service.units_for_batches(product, body.batch_count)
    return body.production_quantity


@router.get("", response_model=OrderListResponse)
def list_orders(
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit sayisi"),
    customer_id: uuid.UUID | None = Query(default=None),
    order_status: str | None = Query(default=None, alias="status"),
):
    orders, total = order_service.list_orders(
        db, customer_id=customer_id, order_status=order_status, page=page, size=size,
    )
    return OrderListResponse(items=orders, total=total, page=page, size=size)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Yeni siparis olusturur. Tum kalemler "onay_bekliyor" durumunda baslar.
    order_type="stock_production" ise STK- kodlu musterisiz siparis olusur.
    """
    return order_service.create_order(db, data)


@router.get("/{order_code}", response_model=OrderResponse)
def get_order(
    order_code: str,
    db: Annotated[Session, Depends(get_db)],
):
    return order_service.get_order_by_code(db, order_code)


@router.delete("/{order_code}")
def delete_order(
    order_code: str,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Siparisi siler.
    Uretimde / uretilmis / hazirlaniyor kalemi olan siparis icin 409 doner.
    """
    order = order_service.get_order_by_code(db, order_code)
    return order_service.delete_order(db, order.id)


@router.put("/{order_code}/items/{line_id}/status", response_model=TransitionResult)
def update_item_status(
    order_code: str,
    line_id: uuid.UUID,
    body: StatusTransitionRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Tek bir siparis kaleminin durumunu degistirir.

    - "Üretimde" gecisinde recetedeki filament bobinlerden dusulur
    - "Hazırlanıyor" / "Hazırlandı" gecisinde stok guncellenir
    - skip_production=true: filament dusulmez, siparis stoktan karsilanir
    """
    product_id = (
        db.query(OrderItem.product_id).filter(OrderItem.id == line_id).scalar()
        if body.batch_count else None
    )
    return order_status_service.transition_order_line(
        db,
        order_code=order_code,
        line_id=line_id,
        target_status=body.status,
        production_quantity=_production_quantity(db, body, product_id),
        skip_production=body.skip_production,
        selected_spools=body.selected_spools,
    )


@router.put("/{order_code}/status", response_model=TransitionResult)
def update_order_status(
    order_code: str,
    body: StatusTransitionRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Siparisin tum kalemlerini ayni duruma tasir (tek transaction)."""
    return order_status_service.transition_order(
        db,
        order_code=order_code,
        target_status=body.status,
        production_quantity=body.production_quantity,
        skip_production=body.skip_production,
        selected_spools=body.selected_spools,
    )
