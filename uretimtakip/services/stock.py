import uuid
import logging

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from uretimtakip.config import settings
from uretimtakip.errors import InsufficientStockError, NotFoundError
from uretimtakip.models.inventory import InventoryRecord
from uretimtakip.models.product import Product
from uretimtakip.models.stock_movement import (
    MOVEMENT_ADJUSTMENT, MOVEMENT_IN, MOVEMENT_OUT, MOVEMENT_TYPES, StockMovement,
)
from uretimtakip.schemas.stock import StockOperation, StockOperationResult
from uretimtakip.services import inventory as inventory_service
from uretimtakip.services.audit import record_stock_event
from uretimtakip.services.reservation import get_stock_status

logger = logging.getLogger(__name__)


def _get_product(db: Session, product_id: uuid.UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError(f"Urun bulunamadi: {product_id}")
    return product


def apply_stock_operation(
    db: Session,
    product_id: uuid.UUID,
    operation: StockOperation,
    quantity: int,
) -> StockOperationResult:
    """
    Siparis akisi disindaki genel stok islemi (elle duzeltmeler vb.).

    - ADD: stoga quantity eklenir
    - REMOVE: stoktan quantity dusulur; siparislere ayrilmamis stok yetersizse
      islem geri alinir ve success=False doner
    - RESERVE / UNRESERVE: stok defterine yazilmaz. Rezerve miktar aktif siparis
      kalemlerinden hesaplandigi icin bu islemler sadece denetim kaydi ve guncel
      stok durumu uretir.
    """
    operation = StockOperation(operation)
    _get_product(db, product_id)

    try:
        current = get_stock_status(db, product_id)

        if operation == StockOperation.REMOVE and current.available_stock < quantity:
            db.rollback()
            logger.warning(
                "Yetersiz stok: urun=%s mevcut=%d istenen=%d",
                product_id, current.available_stock, quantity,
            )
            return StockOperationResult(
                success=False,
                message=f"Yetersiz stok! Mevcut: {current.available_stock}, Istenen: {quantity}",
                stock=current,
            )

        if operation == StockOperation.ADD:
            inventory_service.add_stock(db, product_id, quantity, reference_type="gateway")
        elif operation == StockOperation.REMOVE:
            inventory_service.subtract_stock(db, product_id, quantity, reference_type="gateway")

        db.commit()
    except InsufficientStockError as e:
        # Okuma ile yazma arasinda stok baska bir islemle azalmis
        db.rollback()
        return StockOperationResult(success=False, message=e.detail)
    except Exception:
        db.rollback()
        logger.exception("Stok islemi basarisiz: urun=%s %s %d", product_id, operation.value, quantity)
        raise

    record_stock_event(db, product_id, operation.value, quantity)

    return StockOperationResult(
        success=True,
        message=f"Stok islemi basarili: {operation.value}",
        stock=get_stock_status(db, product_id),
    )


def get_stock_movements(
    db: Session,
    product_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[StockMovement]:
    """
    Stok hareketlerini listele.
    Opsiyonel olarak belirli bir urune filtrelenebilir.
    En yeniden en eskiye siralanir.
    """
    query = db.query(StockMovement)

    if product_id:
        query = query.filter(StockMovement.product_id == product_id)

    return (
        query.order_by(StockMovement.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


# Elle hareket tipi -> (defter fonksiyonu, log etiketi, denetim islemi)
_MANUAL_MOVEMENTS = {
    MOVEMENT_IN: (inventory_service.add_stock, "Giris", "ADD"),
    MOVEMENT_OUT: (inventory_service.subtract_stock, "Cikis", "REMOVE"),
    MOVEMENT_ADJUSTMENT: (inventory_service.set_stock, "Duzeltme", "ADJUST"),
}


def add_stock_movement(
    db: Session,
    product_id: uuid.UUID,
    movement_type: str,
    quantity: int,
    notes: str | None = None,
) -> StockMovement:
    """
    Elle stok hareketi (sayim farki, fire, duzeltme).

    - "in": stoga eklenir
    - "out": stoktan dusulur, stok yetersizse InsufficientStockError
    - "adjustment": stok dogrudan quantity degerine set edilir
    """
    if movement_type not in _MANUAL_MOVEMENTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Gecersiz hareket tipi. Gecerli tipler: {', '.join(MOVEMENT_TYPES)}",
        )
    write, label, operation = _MANUAL_MOVEMENTS[movement_type]
    product = _get_product(db, product_id)

    try:
        movement = write(db, product_id, quantity, reference_type="manual", notes=notes)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Stok hareketi: %s - %s (%d adet)", product.code, label, quantity)
    record_stock_event(db, product_id, operation, quantity)
    db.refresh(movement)
    return movement


def get_low_stock_products(
    db: Session,
    threshold: int | None = None,
) -> list[InventoryRecord]:
    """
    Stoku belirtilen esik degerinin altinda (veya esit) olan urunler.
    Stok miktarina gore artan sirada siralanir.
    """
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD
    return (
        db.query(InventoryRecord)
        .filter(InventoryRecord.quantity <= threshold)
        .order_by(InventoryRecord.quantity.asc())
        .all()
    )
