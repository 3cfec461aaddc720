"""
Fiyat motoru.

Siparis kalemi icin birim fiyat hesaplar:

- Musterisiz (stok uretim) siparis: 0
- Normal musteri: adet agirligi (gr) x musterinin o filament tipi icin gram fiyati.
  Musteriye ozel fiyat yoksa DEFAULT_PRICE_PER_GRAM kullanilir.
- Toptanci: liste fiyati uzerinden musterinin iskonto orani uygulanir.
"""

import uuid
import logging
from decimal import Decimal

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from uretimtakip.config import settings
from uretimtakip.errors import NotFoundError
from uretimtakip.models.customer import Customer, CustomerFilamentPrice
from uretimtakip.models.product import Product

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def unit_price(
    db: Session,
    customer_id: uuid.UUID | None,
    product_id: uuid.UUID,
    quantity: int,
    filament_type: str | None = None,
) -> Decimal:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError(f"Urun bulunamadi: {product_id}")

    if customer_id is None:
        return Decimal("0.00")

    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise NotFoundError(f"Musteri bulunamadi: {customer_id}")

    if customer.category == "wholesale":
        discount = Decimal(customer.discount_rate or 0) / Decimal(100)
        price = Decimal(product.list_price or 0) * (Decimal(1) - discount)
        return price.quantize(TWO_PLACES)

    if not filament_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Normal musteri icin filament tipi gerekli",
        )

    price_row = db.query(CustomerFilamentPrice).filter(
        CustomerFilamentPrice.customer_id == customer_id,
        CustomerFilamentPrice.filament_type == filament_type,
    ).first()
    if price_row:
        price_per_gram = Decimal(price_row.price_per_gram)
    else:
        logger.warning(
            "%s filament fiyati bulunamadi (musteri=%s), varsayilan %s TL/gr kullaniliyor",
            filament_type, customer_id, settings.DEFAULT_PRICE_PER_GRAM,
        )
        price_per_gram = Decimal(settings.DEFAULT_PRICE_PER_GRAM)

    grams = Decimal(str(product.unit_weight_grams or 0))
    return (grams * price_per_gram).quantize(TWO_PLACES)
