import uuid
import logging

from sqlalchemy.orm import Session

from uretimtakip.models.audit import StockAudit, OrderAudit

logger = logging.getLogger(__name__)


def record_stock_event(
    db: Session,
    product_id: uuid.UUID,
    operation: str,
    quantity: int,
    order_id: uuid.UUID | None = None,
) -> StockAudit | None:
    """
    Stok islemi denetim kaydi.
    Ana islem commit edildikten sonra cagrilir. Hata olursa sadece loglanir,
    stok islemi geri alinmaz.
    """
    try:
        entry = StockAudit(
            product_id=product_id,
            operation=operation,
            quantity=quantity,
            order_id=order_id,
        )
        db.add(entry)
        db.commit()
        return entry
    except Exception as e:
        db.rollback()
        logger.error("Stok denetim kaydi yazilamadi (%s %s): %s", operation, product_id, e)
        return None


def record_order_event(
    db: Session,
    order_id: uuid.UUID | None,
    event: str,
    details: dict | None = None,
) -> OrderAudit | None:
    """
    Siparis olay kaydi.
    record_stock_event ile ayni kurala uyar: basarisizlik ana islemi etkilemez.
    """
    try:
        entry = OrderAudit(order_id=order_id, event=event, details=details)
        db.add(entry)
        db.commit()
        return entry
    except Exception as e:
        db.rollback()
        logger.error("Siparis denetim kaydi yazilamadi (%s %s): %s", event, order_id, e)
        return None


def get_stock_events(
    db: Session, product_id: uuid.UUID | None = None, limit: int = 50
) -> list[StockAudit]:
    """Son stok denetim kayitlari, en yeniden en eskiye."""
    query = db.query(StockAudit)
    if product_id:
        query = query.filter(StockAudit.product_id == product_id)
    return query.order_by(StockAudit.created_at.desc()).limit(limit).all()


def get_order_events(db: Session, order_id: uuid.UUID, limit: int = 50) -> list[OrderAudit]:
    return (
        db.query(OrderAudit)
        .filter(OrderAudit.order_id == order_id)
        .order_by(OrderAudit.created_at.desc())
        .limit(limit)
        .all()
    )
