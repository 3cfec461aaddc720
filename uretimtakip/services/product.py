import uuid
import logging

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from uretimtakip.errors import NotFoundError
from uretimtakip.models.product import Product, ProductFilament
from uretimtakip.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


def get_products(
    db: Session, search: str | None = None, page: int = 1, size: int = 20,
) -> tuple[list[Product], int]:
    """
    Urun listesini sayfalama ile dondur.
    Dondurur: (urun_listesi, toplam_sayi)
    """
    query = db.query(Product)
    if search:
        query = query.filter(
            Product.code.ilike(f"%{search}%") | Product.name.ilike(f"%{search}%")
        )

    total = query.count()
    offset = (page - 1) * size
    products = query.order_by(Product.code.asc()).offset(offset).limit(size).all()
    return products, total


def get_product(db: Session, product_id: uuid.UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError(f"Urun bulunamadi: {product_id}")
    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    """Urunu recetesiyle (filament satirlari) birlikte olustur."""
    if db.query(Product.id).filter(Product.code == data.code).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Bu urun kodu zaten kullaniliyor: {data.code}",
        )

    product = Product(**data.model_dump(exclude={"filaments"}))
    for row in data.filaments:
        product.filaments.append(ProductFilament(**row.model_dump()))
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Urun olusturuldu: %s (%d filament)", product.code, len(product.filaments))
    return product


def update_product_weight(
    db: Session, product_id: uuid.UUID, unit_weight_grams: float
) -> Product:
    """Siparislere baglanmis urunlerde degistirilebilen tek alan: adet agirligi."""
    product = get_product(db, product_id)
    old_weight = product.unit_weight_grams
    product.unit_weight_grams = unit_weight_grams
    db.commit()
    db.refresh(product)
    logger.info(
        "Urun agirligi duzeltildi: %s %sg -> %sg", product.code, old_weight, unit_weight_grams
    )
    return product


def delete_product(db: Session, product_id: uuid.UUID) -> None:
    """
    Urunu sil. Stok satiri ve recete birlikte silinir; siparis kalemlerinde
    product_id NULL olur.
    """
    product = get_product(db, product_id)
    code = product.code
    db.delete(product)
    db.commit()
    logger.info("Urun silindi: %s", code)
