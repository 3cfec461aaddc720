"""
Rezerve stok hesaplayici.

Rezerve miktar hicbir tabloda saklanmaz. Her okumada aktif siparis
kalemlerinin toplami ile mevcut stok karsilastirilarak hesaplanir:

    reserved = max(0, sum(aktif kalem miktari) - mevcut stok)

Okuma hatalari disari firlatilmaz; stok gosterimi her zaman bir sonuc dondurur.
"""

import uuid
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from uretimtakip.models.order import OrderItem
from uretimtakip.models.product import Product
from uretimtakip.schemas.stock import StockStatus
from uretimtakip.services import inventory as inventory_service
from uretimtakip.status import ACTIVE_STATUSES

logger = logging.getLogger(__name__)

STOCK_COLORS = {
    "IN_STOCK": "green",
    "OUT_OF_STOCK": "red",
    "RESERVED": "blue",
}


def active_line_quantity(db: Session, product_id: uuid.UUID) -> int:
    """Urun icin henuz hazirlanmamis (aktif) kalemlerin toplam miktari."""
    total = (
        db.query(func.coalesce(func.sum(OrderItem.quantity), 0))
        .filter(
            OrderItem.product_id == product_id,
            OrderItem.status.in_(sorted(ACTIVE_STATUSES)),
        )
        .scalar()
    )
    return int(total or 0)


def reserved_stock(db: Session, product_id: uuid.UUID) -> int:
    available = inventory_service.get_quantity(db, product_id)
    return max(0, active_line_quantity(db, product_id) - available)


def _display(available: int, reserved: int) -> tuple[str, str]:
    if available > 0:
        return f"Stokta: {available} adet", STOCK_COLORS["IN_STOCK"]
    if reserved > 0:
        return f"Rezerve: {reserved} adet", STOCK_COLORS["RESERVED"]
    return "Stokta Yok", STOCK_COLORS["OUT_OF_STOCK"]


def get_stock_status(db: Session, product_id: uuid.UUID) -> StockStatus:
    """
    Siparislere ayrilmamis stok + rezerve stok ve gosterim bilgisi.

    Aktif kalemler once defterdeki stoktan karsilanir:
        available = max(0, defter - aktif)
        reserved  = max(0, aktif - defter)
    Ikisi ayni anda sifirdan buyuk olamaz.
    Sorgu hatasinda sifirlanmis bir durum dondurur (hata loglanir).
    """
    try:
        ledger = inventory_service.get_quantity(db, product_id)
        active = active_line_quantity(db, product_id)
    except Exception:
        logger.exception("Stok durumu alinamadi: urun=%s", product_id)
        return StockStatus(product_id=product_id)

    available = max(0, ledger - active)
    reserved = max(0, active - ledger)
    display, color = _display(available, reserved)
    return StockStatus(
        product_id=product_id,
        available_stock=available,
        reserved_stock=reserved,
        total_stock=available + reserved,
        stock_display=display,
        stock_color=color,
    )


def get_stock_overview(db: Session) -> list[StockStatus]:
    """Tum urunlerin stok durumu, urun koduna gore sirali."""
    product_ids = [row.id for row in db.query(Product.id).order_by(Product.code.asc()).all()]
    return [get_stock_status(db, product_id) for product_id in product_ids]
