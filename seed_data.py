"""Ornek veri ekleme scripti"""
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from uretimtakip.database import Base, engine
from uretimtakip.models.customer import Customer, CustomerFilamentPrice
from uretimtakip.models.filament import FilamentSpool
from uretimtakip.models.inventory import InventoryRecord
from uretimtakip.models.product import Product, ProductFilament

Base.metadata.create_all(bind=engine)

with Session(engine) as db:
    # 1. Bobinler
    spools_data = [
        ("PLA-KRM-001", "PLA", "Kirmizi", "Elas", 1000, 40),
        ("PLA-KRM-002", "PLA", "Kirmizi", "Elas", 1000, 40),
        ("PLA-SYH-001", "PLA", "Siyah", "Porima", 1000, 40),
        ("PETG-BYZ-001", "PETG", "Beyaz", "Esun", 1000, 50),
        ("PETG-SFF-001", "PETG", "Seffaf", "Esun", 750, 50),
    ]
    for code, ftype, color, brand, weight, critical in spools_data:
        db.add(FilamentSpool(
            code=code, type=ftype, color=color, brand=brand,
            total_weight=weight, remaining_weight=weight, critical_stock=critical,
            price_per_gram=Decimal("0.45"),
        ))
    db.flush()
    print(f"{len(spools_data)} bobin eklendi")

    # 2. Urunler ve receteleri
    products_data = [
        ("ANH-001", "Anahtarlik", 24, 12, "35.00", [("PLA", "Kirmizi", 12)]),
        ("SKS-001", "Saksi", 4, 85, "180.00", [("PETG", "Beyaz", 80), ("PLA", "Siyah", 5)]),
        ("LMB-001", "Lamba Govdesi", 2, 140, "320.00", [("PETG", "Seffaf", 140)]),
        ("FGR-001", "Figur", 8, 30, "90.00", [("PLA", "Siyah", 30)]),
    ]
    product_objs = []
    for code, name, capacity, weight, price, bom in products_data:
        p = Product(
            code=code, name=name, capacity_per_batch=capacity,
            unit_weight_grams=weight, list_price=Decimal(price),
        )
        for ftype, color, grams in bom:
            p.filaments.append(ProductFilament(
                filament_type=ftype, filament_color=color, grams_per_unit=grams,
            ))
        db.add(p)
        product_objs.append(p)
    db.flush()
    print(f"{len(product_objs)} urun eklendi")

    # 3. Baslangic stogu
    for p, qty in zip(product_objs, [40, 6, 0, 12]):
        db.add(InventoryRecord(product_id=p.id, quantity=qty))
    db.flush()

    # 4. Musteriler
    normal = Customer(name="Yildiz Hediyelik", category="normal")
    normal.filament_prices.append(CustomerFilamentPrice(filament_type="PLA", price_per_gram=Decimal("6.50")))
    normal.filament_prices.append(CustomerFilamentPrice(filament_type="PETG", price_per_gram=Decimal("7.25")))
    wholesale = Customer(name="Deniz Toptan", category="wholesale", discount_rate=Decimal("40.00"))
    db.add_all([normal, wholesale])

    db.commit()
    print(f"Ornek veriler eklendi ({date.today().isoformat()})")
