import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, ConfigDict


class OrderItemCreate(BaseModel):
    product_id: uuid.UUID
    quantity: int = Field(gt=0)
    # Verilmezse fiyat motoru hesaplar
    unit_price: Decimal | None = Field(default=None, ge=0)
    filament_type: str | None = None


class OrderCreate(BaseModel):
    """
    Siparis olusturma schemasi.
    order_type "stock_production" ise musteri olmaz ve kod STK- ile baslar.
    """
    customer_id: uuid.UUID | None = None
    order_type: str = Field(default="normal", pattern="^(normal|stock_production)$")
    notes: str | None = None
    items: list[OrderItemCreate] = Field(min_length=1)


class OrderItemResponse(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID | None
    product_code: str | None
    quantity: int
    unit_price: Decimal
    status: str

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: uuid.UUID
    order_code: str
    customer_id: uuid.UUID | None
    status: str
    production_quantity: int
    skip_production: bool
    total_amount: Decimal
    notes: str | None
    created_at: datetime
    items: list[OrderItemResponse] = []

    model_config = ConfigDict(from_attributes=True)


class StatusTransitionRequest(BaseModel):
    """
    Durum gecisi istegi.

    - status: okunabilir etiket ("Üretimde") veya ic deger ("uretiliyor")
    - production_quantity: uretilen adet (0 ise kalem miktari kullanilir)
    - batch_count: tabla sayisi; verilirse production_quantity = kapasite x tabla
    - selected_spools: "{tip}-{renk}" -> bobin ID eslesmesi
    """
    status: str = Field(min_length=1)
    production_quantity: int = Field(default=0, ge=0)
    batch_count: int | None = Field(default=None, ge=1)
    skip_production: bool = False
    selected_spools: dict[str, uuid.UUID] | None = None


class TransitionResult(BaseModel):
    success: bool
    message: str
