import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Numeric, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from uretimtakip.database import Base


class Product(Base):
    """
    Urun modeli.
    Siparis edilen ve filamentten uretilen baski urunlerini temsil eder.
    Siparisler urune baglandiktan sonra sadece agirlik duzeltilebilir.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    # Urun kodu (ornek: "ANH-001")
    code: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    # Bir tablada (uretim partisi) kac adet basilabildigi
    # Sadece tabla -> adet donusumunde kullanilir
    capacity_per_batch: Mapped[int] = mapped_column(
        Integer, default=1
    )
    # Adet basi urun agirligi (gram), fiyatlamada kullanilir
    unit_weight_grams: Mapped[float] = mapped_column(
        Float, default=0
    )
    # Toptan satis liste fiyati
    list_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Iliskiler
    filaments: Mapped[list["ProductFilament"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )
    inventory: Mapped["InventoryRecord"] = relationship(
        back_populates="product", cascade="all, delete-orphan", uselist=False
    )


class ProductFilament(Base):
    """
    Urun recetesi (bill of material) satiri.
    Bir adet urun icin hangi filamentten kac gram gerektigini tutar.
    Ornek: PLA / Kirmizi / 50 gram
    """

    __tablename__ = "product_filaments"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filament_type: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    filament_color: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    grams_per_unit: Mapped[float] = mapped_column(
        Float, nullable=False
    )

    product: Mapped["Product"] = relationship(back_populates="filaments")
