import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, ConfigDict


class ProductFilamentCreate(BaseModel):
    filament_type: str = Field(min_length=1, max_length=50)
    filament_color: str = Field(min_length=1, max_length=50)
    grams_per_unit: float = Field(gt=0)


class ProductFilamentResponse(BaseModel):
    filament_type: str
    filament_color: str
    grams_per_unit: float

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    capacity_per_batch: int = Field(default=1, ge=1)
    unit_weight_grams: float = Field(default=0, ge=0)
    list_price: Decimal = Field(default=Decimal("0.00"), ge=0)
    filaments: list[ProductFilamentCreate] = []


class ProductWeightUpdate(BaseModel):
    unit_weight_grams: float = Field(ge=0)


class ProductResponse(BaseModel):
    id: uuid.UUID
    code: str
    name: str
    capacity_per_batch: int
    unit_weight_grams: float
    list_price: Decimal
    filaments: list[ProductFilamentResponse] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
