import uuid
import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from uretimtakip.config import settings
from uretimtakip.errors import BlockedError, ConcurrentUpdateError, NotFoundError
from uretimtakip.models.customer import Customer
from uretimtakip.models.order import Order, OrderItem
from uretimtakip.models.product import Product
from uretimtakip.schemas.order import OrderCreate
from uretimtakip.services import inventory as inventory_service
from uretimtakip.services.audit import record_order_event
from uretimtakip.services.pricing import unit_price
from uretimtakip.status import HAZIRLANDI, ONAY_BEKLIYOR, PRODUCTION_BLOCKING_STATUSES, status_label

logger = logging.getLogger(__name__)


def _generate_order_code(db: Session, prefix: str) -> str:
    """
    Otomatik siparis kodu olustur.
    Format: SIP-0001, SIP-0002, ... / STK-0001, ...
    """
    count = db.query(func.count(Order.id)).filter(
        Order.order_code.like(f"{prefix}-%")
    ).scalar() or 0
    number = count + 1
    code = f"{prefix}-{number:04d}"
    # Silinmis siparisler yuzunden sayi cakisabilir
    while db.query(Order.id).filter(Order.order_code == code).first():
        number += 1
        code = f"{prefix}-{number:04d}"
    return code


def get_order_by_code(db: Session, order_code: str) -> Order:
    order = db.query(Order).filter(Order.order_code == order_code).first()
    if not order:
        raise NotFoundError(f"Siparis bulunamadi: {order_code}")
    return order


def list_orders(
    db: Session,
    customer_id: uuid.UUID | None = None,
    order_status: str | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[list[Order], int]:
    """
    Siparis listesini sayfalama ile dondur.
    Dondurur: (siparis_listesi, toplam_sayi)
    """
    query = db.query(Order)
    if customer_id:
        query = query.filter(Order.customer_id == customer_id)
    if order_status:
        query = query.filter(Order.status == order_status)

    total = query.count()
    offset = (page - 1) * size
    orders = query.order_by(Order.created_at.desc()).offset(offset).limit(size).all()
    return orders, total


def create_order(db: Session, data: OrderCreate) -> Order:
    """
    Yeni siparis olustur. Tum kalemler "onay_bekliyor" durumunda baslar.
    Birim fiyati verilmeyen kalemler fiyat motoruyla hesaplanir.
    """
    is_stock = data.order_type == "stock_production"
    customer_id = None if is_stock else data.customer_id

    if customer_id is not None:
        customer = db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            raise NotFoundError(f"Musteri bulunamadi: {customer_id}")

    prefix = settings.STOCK_ORDER_PREFIX if is_stock else settings.CUSTOMER_ORDER_PREFIX

    try:
        order = Order(
            order_code=_generate_order_code(db, prefix),
            customer_id=customer_id,
            status=status_label(ONAY_BEKLIYOR),
            notes=data.notes,
        )

        total = Decimal("0.00")
        for item_data in data.items:
            product = db.query(Product).filter(Product.id == item_data.product_id).first()
            if not product:
                raise NotFoundError(f"Urun bulunamadi: {item_data.product_id}")

            price = item_data.unit_price
            if price is None:
                price = unit_price(
                    db, customer_id, product.id, item_data.quantity, item_data.filament_type
                )
            order.items.append(OrderItem(
                product_id=product.id,
                product_code=product.code,
                quantity=item_data.quantity,
                unit_price=price,
                status=ONAY_BEKLIYOR,
            ))
            total += price * item_data.quantity

        order.total_amount = total
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(order)
    logger.info("Siparis olusturuldu: %s (%d kalem)", order.order_code, len(order.items))
    record_order_event(db, order.id, "order_created", {
        "order_code": order.order_code,
        "item_count": len(data.items),
        "total_amount": str(total),
    })
    return order


def delete_order(db: Session, order_id: uuid.UUID) -> dict:
    """
    Siparisi sil.

    Uretimde, uretilmis veya hazirlanmakta olan kalem varsa silme reddedilir.
    "hazirlandi" kalemlerin miktari stoga geri eklenir; diger kalemlerin
    rezerve etkisi kalemler silinince kendiliginden kalkar.
    Dusulmus filament geri yuklenmez.

    Siparis ve kalemleri kilitlenerek ve guncel haliyle yeniden okunur; ayni
    anda yapilan bir durum gecisi ConcurrentUpdateError (409) ile sonuclanir.
    """
    restored = 0
    try:
        order = (
            db.query(Order)
            .filter(Order.id == order_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if not order:
            raise NotFoundError(f"Siparis bulunamadi: {order_id}")
        order_code = order.order_code
        lines = (
            db.query(OrderItem)
            .filter(OrderItem.order_id == order.id)
            .with_for_update()
            .populate_existing()
            .all()
        )

        blocking = [item for item in lines if item.status in PRODUCTION_BLOCKING_STATUSES]
        if blocking:
            raise BlockedError(
                f"Siparis {order_code} silinemez: "
                f"{len(blocking)} kalem uretim veya hazirlik asamasinda"
            )

        for item in lines:
            if item.status == HAZIRLANDI and item.product_id is not None:
                inventory_service.add_stock(
                    db, item.product_id, item.quantity,
                    reference_type="order_delete", reference_id=order.id,
                    notes=f"Siparis {order_code} silindi - hazir urun stoga iade",
                )
                restored += 1
        db.delete(order)
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning("Es zamanli guncelleme, siparis silinemedi: %s", order_id)
        raise ConcurrentUpdateError() from e
    except Exception:
        db.rollback()
        raise

    logger.info("Siparis silindi: %s (%d kalem stoga iade edildi)", order_code, restored)
    record_order_event(db, order_id, "order_deleted", {
        "order_code": order_code,
        "restored_lines": restored,
    })
    return {
        "success": True,
        "message": f"Siparis {order_code} silindi",
        "restored_lines": restored,
    }
