# Tum modelleri buradan import ediyoruz
# Boylece Alembic autogenerate tum tablolari gorebilir
from uretimtakip.models.product import Product, ProductFilament
from uretimtakip.models.inventory import InventoryRecord
from uretimtakip.models.stock_movement import StockMovement
from uretimtakip.models.customer import Customer, CustomerFilamentPrice
from uretimtakip.models.order import Order, OrderItem
from uretimtakip.models.filament import FilamentSpool, FilamentUsage, FilamentPurchase
from uretimtakip.models.audit import StockAudit, OrderAudit

__all__ = [
    "Product", "ProductFilament", "InventoryRecord", "StockMovement",
    "Customer", "CustomerFilamentPrice", "Order", "OrderItem",
    "FilamentSpool", "FilamentUsage", "FilamentPurchase",
    "StockAudit", "OrderAudit",
]
