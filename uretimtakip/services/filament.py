"""
Filament deposu.

Bobinlerin kalan agirligini yonetir. Uretime gecen her kalem icin urun
recetesindeki her filament satiri bir bobinden dusulur ve bir kullanim kaydi
birakir. Dusulen filament hicbir zaman otomatik olarak geri yuklenmez;
bobin agirligi sadece add_filament_stock (satin alma) ile artar.
"""

import uuid
import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from uretimtakip.errors import InsufficientMaterialError, NotFoundError
from uretimtakip.models.filament import FilamentSpool, FilamentUsage, FilamentPurchase
from uretimtakip.models.product import ProductFilament
from uretimtakip.schemas.filament import SpoolCreate, FilamentStockAdd

logger = logging.getLogger(__name__)


def filament_key(filament_type: str, color: str) -> str:
    """Bobin secim anahtari: "{tip}-{renk}" (ornek: "PLA-Kirmizi")."""
    return f"{filament_type}-{color}"


def resolve_spool(
    db: Session,
    filament_type: str,
    color: str,
    selected_spools: dict[str, uuid.UUID] | None = None,
) -> tuple[FilamentSpool, bool]:
    """
    Tip/renk icin kullanilacak bobini sec ve kilitle.

    Cagiran "{tip}-{renk}" anahtariyla bobin verdiyse o kullanilir, yoksa
    kalan agirligi en fazla olan bobin secilir.
    Dondurur: (bobin, otomatik_secildi_mi)
    """
    key = filament_key(filament_type, color)
    spool_id = (selected_spools or {}).get(key)

    if spool_id is not None:
        spool = (
            db.query(FilamentSpool)
            .filter(FilamentSpool.id == spool_id)
            .with_for_update()
            .first()
        )
        if not spool:
            raise NotFoundError(f"Bobin bulunamadi: {spool_id}")
        return spool, False

    spool = (
        db.query(FilamentSpool)
        .filter(FilamentSpool.type == filament_type, FilamentSpool.color == color)
        .order_by(FilamentSpool.remaining_weight.desc())
        .with_for_update()
        .first()
    )
    if not spool:
        raise NotFoundError(f"Filament bulunamadi! {filament_type} {color} stokta yok")
    return spool, True


def consume(
    db: Session,
    spool: FilamentSpool,
    amount: float,
    key: str,
    product_id: uuid.UUID | None,
    order_id: uuid.UUID | None,
    description: str,
) -> FilamentUsage:
    """Bobinden amount gram dus ve kullanim kaydi ekle. Yetersizse hata firlatir."""
    available = float(spool.remaining_weight or 0)
    if available < amount:
        raise InsufficientMaterialError(
            spool_code=spool.code,
            filament_key=key,
            available=available,
            required=amount,
        )

    spool.remaining_weight = available - amount
    usage = FilamentUsage(
        filament_id=spool.id,
        product_id=product_id,
        order_id=order_id,
        amount=amount,
        description=description,
        usage_date=date.today(),
    )
    db.add(usage)
    db.flush()

    logger.info(
        "Filament dusuldu: %s %gg - %gg = %gg",
        spool.code, available, amount, spool.remaining_weight,
    )
    return usage


def consume_for_production(
    db: Session,
    product_id: uuid.UUID,
    quantity: int,
    order_id: uuid.UUID,
    order_code: str,
    selected_spools: dict[str, uuid.UUID] | None = None,
) -> list[FilamentUsage]:
    """
    Urun recetesindeki her filament icin gramaj x miktar kadar dus.

    Herhangi bir satirda yetersizlik olursa hata firlatilir; cagiran
    transaction'i geri alarak onceki satirlarin dusumunu de iptal eder.
    """
    bill_of_material = (
        db.query(ProductFilament)
        .filter(ProductFilament.product_id == product_id)
        .all()
    )

    usages = []
    for row in bill_of_material:
        needed = row.grams_per_unit * quantity
        spool, auto_selected = resolve_spool(
            db, row.filament_type, row.filament_color, selected_spools
        )
        description = f"Siparis {order_code} - {quantity} adet uretim"
        if auto_selected:
            description += " (otomatik)"
        usages.append(consume(
            db, spool, needed,
            filament_key(row.filament_type, row.filament_color),
            product_id, order_id, description,
        ))
    return usages


# ------------------------------------------------------------------
# Bobin yonetimi
# ------------------------------------------------------------------


def create_spool(db: Session, data: SpoolCreate) -> FilamentSpool:
    values = data.model_dump()
    if values["remaining_weight"] is None:
        values["remaining_weight"] = values["total_weight"]
    spool = FilamentSpool(**values)
    db.add(spool)
    db.commit()
    db.refresh(spool)
    logger.info("Bobin olusturuldu: %s (%s)", spool.code, spool.filament_key)
    return spool


def get_spool(db: Session, spool_id: uuid.UUID) -> FilamentSpool:
    spool = db.query(FilamentSpool).filter(FilamentSpool.id == spool_id).first()
    if not spool:
        raise NotFoundError(f"Bobin bulunamadi: {spool_id}")
    return spool


def list_spools(
    db: Session,
    filament_type: str | None = None,
    color: str | None = None,
) -> list[FilamentSpool]:
    """Bobin listesi. Tip ve renge gore filtrelenebilir, koda gore sirali."""
    query = db.query(FilamentSpool)
    if filament_type:
        query = query.filter(FilamentSpool.type == filament_type)
    if color:
        query = query.filter(FilamentSpool.color == color)
    return query.order_by(FilamentSpool.code.asc()).all()


def get_critical_spools(db: Session) -> list[FilamentSpool]:
    """Kalan agirligi kritik seviyenin altinda (veya esit) olan bobinler."""
    return (
        db.query(FilamentSpool)
        .filter(FilamentSpool.remaining_weight <= FilamentSpool.critical_stock)
        .order_by(FilamentSpool.remaining_weight.asc())
        .all()
    )


def add_filament_stock(db: Session, spool_id: uuid.UUID, data: FilamentStockAdd) -> FilamentSpool:
    """
    Bobine satin alma ile stok ekle.
    Kalan ve toplam agirlik artar, gram fiyati son alima gore guncellenir.
    """
    spool = (
        db.query(FilamentSpool)
        .filter(FilamentSpool.id == spool_id)
        .with_for_update()
        .first()
    )
    if not spool:
        raise NotFoundError(f"Bobin bulunamadi: {spool_id}")

    price_per_gram = (data.price / Decimal(str(data.amount))).quantize(Decimal("0.0001"))
    try:
        db.add(FilamentPurchase(
            filament_id=spool.id,
            purchase_date=data.purchase_date,
            amount_gram=data.amount,
            purchase_price=data.price,
            price_per_gram=price_per_gram,
            supplier=data.supplier or "",
            notes=data.notes,
        ))
        spool.remaining_weight = float(spool.remaining_weight or 0) + data.amount
        spool.total_weight = float(spool.total_weight or 0) + data.amount
        spool.price_per_gram = price_per_gram
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(spool)
    logger.info("Bobine stok eklendi: %s +%gg", spool.code, data.amount)
    return spool


def get_filament_usage(
    db: Session,
    filament_id: uuid.UUID | None = None,
    order_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[FilamentUsage]:
    """Filament kullanim gecmisi, en yeniden en eskiye."""
    query = db.query(FilamentUsage)
    if filament_id:
        query = query.filter(FilamentUsage.filament_id == filament_id)
    if order_id:
        query = query.filter(FilamentUsage.order_id == order_id)
    return (
        query.order_by(FilamentUsage.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
