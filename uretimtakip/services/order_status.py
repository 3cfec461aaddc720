"""
Siparis kalemi durum makinesi.

Kalem durumlari sadece ileri gider:
    onay_bekliyor -> uretiliyor -> uretildi -> hazirlaniyor -> hazirlandi

Belirli gecislerde filament deposu ve stok defteri tam olarak bir kez
guncellenir:

- uretiliyor durumuna ilk giriste (stoktan kullan secili degilse) recetedeki
  filamentler bobinlerden dusulur.
- hazirlaniyor / hazirlandi durumuna ilk giriste (veya stoktan kullan ile
  hazirlaniyor'a geciste) stok defteri duzeltilir.

Her gecis tek bir transaction icinde calisir. Herhangi bir adimda hata olursa
tum degisiklikler geri alinir ve hata oldugu gibi cagirana iletilir.
Kalem ve siparis satirlari kilitlenerek okunur; kalemdeki version alani ayni
anda yapilan yazimlari ayrica yakalar.
"""

import uuid
import logging

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from uretimtakip.config import settings
from uretimtakip.errors import ConcurrentUpdateError, InvalidTransitionError, NotFoundError
from uretimtakip.models.order import Order, OrderItem
from uretimtakip.models.product import Product
from uretimtakip.services import filament as filament_service
from uretimtakip.services import inventory as inventory_service
from uretimtakip.services.audit import record_order_event, record_stock_event
from uretimtakip.status import (
    URETILIYOR,
    HAZIRLANIYOR,
    PREPARATION_STATUSES,
    ONAY_BEKLIYOR,
    is_forward,
    resolve_status,
    status_label,
)

logger = logging.getLogger(__name__)


def units_for_batches(product: Product, batch_count: int) -> int:
    """Tabla sayisini adede cevir: kapasite x tabla."""
    return (product.capacity_per_batch or 0) * batch_count


def is_stock_order(order_code: str) -> bool:
    """STK- ile baslayan siparisler musterisiz stok uretim siparisleridir."""
    return order_code.startswith(f"{settings.STOCK_ORDER_PREFIX}-")


def _get_order_for_update(db: Session, order_code: str) -> Order:
    order = (
        db.query(Order)
        .filter(Order.order_code == order_code)
        .with_for_update()
        .first()
    )
    if not order:
        raise NotFoundError(f"Siparis bulunamadi: {order_code}")
    return order


def _get_line_for_update(db: Session, order: Order, line_id: uuid.UUID) -> OrderItem:
    line = (
        db.query(OrderItem)
        .filter(OrderItem.id == line_id, OrderItem.order_id == order.id)
        .with_for_update()
        .first()
    )
    if not line:
        raise NotFoundError(f"Siparis kalemi bulunamadi: {line_id} ({order.order_code})")
    return line


def sync_order_status(db: Session, order: Order) -> bool:
    """
    Tum kalemler ayni durumdaysa o durumun etiketini siparis basligina yaz.
    Kalemler farkli durumlardaysa baslik degismez.
    Dondurur: baslik guncellendi mi
    """
    db.flush()
    statuses = {
        row.status
        for row in db.query(OrderItem.status).filter(OrderItem.order_id == order.id).all()
    }
    if len(statuses) != 1:
        return False

    label = status_label(statuses.pop())
    if order.status != label:
        order.status = label
        logger.info("Siparis durumu guncellendi: %s -> %s", order.order_code, label)
    return True


def _adjust_inventory(
    db: Session,
    order: Order,
    line: OrderItem,
    production_quantity: int,
    skip_production: bool,
    stock_events: list,
) -> None:
    if skip_production:
        # Stoktan kullan: stokta olan kadari dusulur, kalan kisim aktif kalem
        # oldugu surece rezerve hesabinda gorunur
        have = inventory_service.get_quantity(db, line.product_id, lock=True)
        used = min(have, line.quantity)
        if used > 0:
            inventory_service.subtract_stock(
                db, line.product_id, used,
                reference_type="order", reference_id=order.id,
                notes=f"Siparis {order.order_code} - stoktan kullanildi",
            )
            stock_events.append((line.product_id, "REMOVE", used))
        remaining = line.quantity - used
        if remaining > 0:
            logger.info(
                "Stok yetersiz, %d adet rezerve kaldi: %s", remaining, order.order_code
            )
        return

    produced = production_quantity if production_quantity > 0 else line.quantity
    if is_stock_order(order.order_code):
        # Stok uretimi: teslim yok, uretilen her sey stoga girer
        net_change = produced
    else:
        # Musteri siparisi: siparis miktarini asan uretim stokta kalir
        net_change = produced - line.quantity

    if net_change == 0:
        return
    inventory_service.add_stock(
        db, line.product_id, net_change,
        reference_type="order", reference_id=order.id,
        notes=f"Siparis {order.order_code} - uretim {produced} adet, siparis {line.quantity} adet",
    )
    stock_events.append(
        (line.product_id, "ADD" if net_change > 0 else "REMOVE", abs(net_change))
    )


def _apply_transition(
    db: Session,
    order: Order,
    line: OrderItem,
    target: str,
    production_quantity: int,
    skip_production: bool,
    selected_spools: dict[str, uuid.UUID] | None,
    stock_events: list,
) -> str:
    """Tek bir kalemi hedef duruma tasi. Dondurur: onceki durum"""
    current = line.status or ONAY_BEKLIYOR
    if not is_forward(current, target):
        raise InvalidTransitionError(
            f"Geri yonlu durum gecisi yapilamaz: "
            f"{status_label(current)} -> {status_label(target)}"
        )

    line.status = target
    db.flush()

    if line.product_id is None:
        # Urun silinmis: sadece durum yazilir
        return current

    if target == URETILIYOR and current != URETILIYOR and not skip_production:
        actual_quantity = production_quantity if production_quantity > 0 else line.quantity
        filament_service.consume_for_production(
            db, line.product_id, actual_quantity,
            order.id, order.order_code, selected_spools,
        )

    if (
        (target in PREPARATION_STATUSES and current not in PREPARATION_STATUSES)
        or (skip_production and target == HAZIRLANIYOR)
    ):
        _adjust_inventory(db, order, line, production_quantity, skip_production, stock_events)

    return current


def _finish(db: Session, order_id: uuid.UUID, stock_events: list, event: str, details: dict) -> None:
    """Commit sonrasi denetim kayitlari (basarisizlik ana islemi etkilemez)."""
    for product_id, operation, quantity in stock_events:
        record_stock_event(db, product_id, operation, quantity, order_id=order_id)
    record_order_event(db, order_id, event, details)


def transition_order_line(
    db: Session,
    order_code: str,
    line_id: uuid.UUID,
    target_status: str,
    production_quantity: int = 0,
    skip_production: bool = False,
    selected_spools: dict[str, uuid.UUID] | None = None,
) -> dict:
    """
    Bir siparis kalemini yeni duruma tasi.

    - target_status: okunabilir etiket ("Üretimde") veya ic deger ("uretiliyor")
    - production_quantity: uretilen adet, 0 ise kalem miktari kullanilir
    - skip_production: stoktan kullan, filament dusulmez
    - selected_spools: {"PLA-Kirmizi": bobin_id, ...}; verilmeyen filamentler
      icin en dolu bobin secilir

    Dondurur: {"success": True, "message": ...}
    Hata durumunda transaction geri alinir ve hata firlatilir.
    """
    target = resolve_status(target_status, strict=settings.STRICT_STATUS_LABELS)
    stock_events: list = []

    try:
        order = _get_order_for_update(db, order_code)
        line = _get_line_for_update(db, order, line_id)
        order_id = order.id

        previous = _apply_transition(
            db, order, line, target, production_quantity,
            skip_production, selected_spools, stock_events,
        )
        order.production_quantity = production_quantity
        order.skip_production = skip_production
        sync_order_status(db, order)
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning("Es zamanli guncelleme: %s / %s", order_code, line_id)
        raise ConcurrentUpdateError() from e
    except Exception as e:
        db.rollback()
        logger.warning("Durum gecisi geri alindi (%s / %s): %s", order_code, line_id, e)
        raise

    label = status_label(target)
    logger.info("Kalem durumu guncellendi: %s / %s %s -> %s", order_code, line_id, previous, target)
    _finish(db, order_id, stock_events, "item_status_changed", {
        "order_code": order_code,
        "line_id": str(line_id),
        "from": previous,
        "to": target,
        "production_quantity": production_quantity,
        "skip_production": skip_production,
    })
    return {"success": True, "message": f'Urun durumu "{label}" olarak guncellendi'}


def transition_order(
    db: Session,
    order_code: str,
    target_status: str,
    production_quantity: int = 0,
    skip_production: bool = False,
    selected_spools: dict[str, uuid.UUID] | None = None,
) -> dict:
    """
    Siparisin tum kalemlerini ayni duruma tasi.
    Her kalem transition_order_line ile ayni kurallarla islenir; tum kalemler
    tek transaction icindedir, biri basarisiz olursa hicbiri yazilmaz.
    """
    target = resolve_status(target_status, strict=settings.STRICT_STATUS_LABELS)
    stock_events: list = []

    try:
        order = _get_order_for_update(db, order_code)
        order_id = order.id
        lines = (
            db.query(OrderItem)
            .filter(OrderItem.order_id == order.id)
            .order_by(OrderItem.created_at.asc())
            .with_for_update()
            .all()
        )
        if not lines:
            raise NotFoundError(f"Siparis kalemleri bulunamadi: {order_code}")

        for line in lines:
            _apply_transition(
                db, order, line, target, production_quantity,
                skip_production, selected_spools, stock_events,
            )
        order.production_quantity = production_quantity
        order.skip_production = skip_production
        sync_order_status(db, order)
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning("Es zamanli guncelleme: %s", order_code)
        raise ConcurrentUpdateError() from e
    except Exception as e:
        db.rollback()
        logger.warning("Siparis durum gecisi geri alindi (%s): %s", order_code, e)
        raise

    label = status_label(target)
    _finish(db, order_id, stock_events, "order_status_changed", {
        "order_code": order_code,
        "to": target,
        "line_count": len(lines),
        "production_quantity": production_quantity,
        "skip_production": skip_production,
    })
    return {"success": True, "message": f'Siparis durumu "{label}" olarak guncellendi'}
