"""
Stok defteri (inventory ledger).

Her urun icin tek bir tam sayi sayaci tutar. Sayac ilk yazimda olusturulur
(upsert) ve hicbir zaman sifirin altina inemez. Bu modul commit yapmaz:
transaction sinirini cagiran servis belirler.

Her yazim bir StockMovement kaydi birakir (onceki / yeni stok) ve
yazma fonksiyonlari bu kaydi dondurur.
"""

import uuid
import logging

from sqlalchemy.orm import Session

from uretimtakip.errors import InsufficientStockError
from uretimtakip.models.inventory import InventoryRecord
from uretimtakip.models.stock_movement import (
    MOVEMENT_ADJUSTMENT, MOVEMENT_IN, MOVEMENT_OUT, StockMovement,
)

logger = logging.getLogger(__name__)


def _get_record(db: Session, product_id: uuid.UUID, lock: bool = False) -> InventoryRecord | None:
    query = db.query(InventoryRecord).filter(InventoryRecord.product_id == product_id)
    if lock:
        # Ayni urune ayni anda yazan transaction'lar sirayla ilerler
        query = query.with_for_update()
    return query.first()


def get_quantity(db: Session, product_id: uuid.UUID, lock: bool = False) -> int:
    """Urunun satisa hazir stogu. Kayit yoksa 0."""
    record = _get_record(db, product_id, lock=lock)
    if record is None:
        return 0
    return record.quantity or 0


def _write(
    db: Session,
    product_id: uuid.UUID,
    new_stock_fn,
    movement_type: str,
    quantity: int,
    reference_type: str | None,
    reference_id: uuid.UUID | None,
    notes: str | None,
) -> StockMovement:
    record = _get_record(db, product_id, lock=True)
    if record is None:
        record = InventoryRecord(product_id=product_id, quantity=0)
        db.add(record)

    previous_stock = record.quantity or 0
    new_stock = new_stock_fn(previous_stock)
    if new_stock < 0:
        raise InsufficientStockError(available=previous_stock, requested=previous_stock - new_stock)

    record.quantity = new_stock
    movement = StockMovement(
        product_id=product_id,
        movement_type=movement_type,
        quantity=quantity,
        reference_type=reference_type or "manual",
        reference_id=reference_id,
        notes=notes,
        previous_stock=previous_stock,
        new_stock=new_stock,
    )
    db.add(movement)
    db.flush()

    logger.info(
        "Stok guncellendi: urun=%s %s %d (%d -> %d)",
        product_id, movement_type, quantity, previous_stock, new_stock,
    )
    return movement


def add_stock(
    db: Session,
    product_id: uuid.UUID,
    delta: int,
    reference_type: str | None = None,
    reference_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> StockMovement:
    """
    Stoga delta kadar ekle (delta negatif olabilir).
    Sonuc sifirin altina duserse InsufficientStockError firlatir.
    """
    movement_type = MOVEMENT_IN if delta >= 0 else MOVEMENT_OUT
    return _write(
        db, product_id, lambda current: current + delta,
        movement_type, abs(delta), reference_type, reference_id, notes,
    )


def subtract_stock(
    db: Session,
    product_id: uuid.UUID,
    quantity: int,
    reference_type: str | None = None,
    reference_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> StockMovement:
    return add_stock(db, product_id, -quantity, reference_type, reference_id, notes)


def set_stock(
    db: Session,
    product_id: uuid.UUID,
    quantity: int,
    reference_type: str | None = None,
    reference_id: uuid.UUID | None = None,
    notes: str | None = None,
) -> StockMovement:
    """Duzeltme: stok dogrudan quantity degerine set edilir."""
    return _write(
        db, product_id, lambda current: quantity,
        MOVEMENT_ADJUSTMENT, quantity, reference_type, reference_id, notes,
    )
