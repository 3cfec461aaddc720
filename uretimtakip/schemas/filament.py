import uuid
from datetime import datetime, date
from decimal import Decimal

from pydantic import BaseModel, Field, ConfigDict


class SpoolCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    type: str = Field(min_length=1, max_length=50)
    color: str = Field(min_length=1, max_length=50)
    brand: str | None = None
    total_weight: float = Field(gt=0, description="Bobin agirligi (gram)")
    remaining_weight: float | None = Field(default=None, ge=0)
    critical_stock: float = Field(default=0, ge=0)
    price_per_gram: Decimal | None = Field(default=None, ge=0)


class SpoolResponse(BaseModel):
    id: uuid.UUID
    code: str
    type: str
    color: str
    brand: str | None
    total_weight: float
    remaining_weight: float
    critical_stock: float
    price_per_gram: Decimal | None
    is_critical: bool
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class FilamentStockAdd(BaseModel):
    """Bobine stok ekleme (satin alma) schemasi."""
    amount: float = Field(gt=0, description="Eklenen miktar (gram)")
    price: Decimal = Field(gt=0, description="Toplam satin alma fiyati")
    purchase_date: date
    supplier: str | None = None
    notes: str | None = None


class FilamentUsageResponse(BaseModel):
    id: uuid.UUID
    filament_id: uuid.UUID
    product_id: uuid.UUID | None
    order_id: uuid.UUID | None
    amount: float
    description: str | None
    usage_date: date

    model_config = ConfigDict(from_attributes=True)
