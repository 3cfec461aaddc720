import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict


class StockOperation(str, Enum):
    ADD = "ADD"              # Stoka ekle (uretim)
    REMOVE = "REMOVE"        # Stoktan cikar (satis/teslim)
    RESERVE = "RESERVE"      # Rezerve et (sadece denetim kaydi)
    UNRESERVE = "UNRESERVE"  # Rezerve iptal (sadece denetim kaydi)


class StockStatus(BaseModel):
    """
    Urunun anlik stok durumu.
    reserved_stock saklanmaz, her okumada aktif siparis kalemlerinden hesaplanir.
    """
    product_id: uuid.UUID
    available_stock: int = 0
    reserved_stock: int = 0
    total_stock: int = 0
    stock_display: str = "Stokta Yok"
    # green / blue / red
    stock_color: str = "red"


class StockOperationRequest(BaseModel):
    operation: StockOperation
    quantity: int = Field(gt=0, description="Miktar (pozitif tam sayi)")


class StockOperationResult(BaseModel):
    success: bool
    message: str
    stock: StockStatus | None = None


class StockMovementCreate(BaseModel):
    """
    Elle stok hareketi olusturma schemasi.
    quantity her zaman pozitif olmali; yonu movement_type belirler.
    """
    product_id: uuid.UUID
    movement_type: str = Field(
        ..., pattern="^(in|out|adjustment)$",
        description="Hareket tipi: in (giris), out (cikis), adjustment (duzeltme)"
    )
    quantity: int = Field(ge=0, description="Miktar (adjustment icin yeni stok degeri)")
    notes: str | None = None


class StockMovementResponse(BaseModel):
    """Stok hareketi yanit schemasi."""
    id: uuid.UUID
    product_id: uuid.UUID
    movement_type: str
    quantity: int
    reference_type: str | None
    reference_id: uuid.UUID | None
    notes: str | None
    previous_stock: int
    new_stock: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
