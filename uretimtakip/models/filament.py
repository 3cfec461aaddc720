import uuid
from datetime import datetime, date
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, Date, ForeignKey, Numeric, Float, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from uretimtakip.database import Base


class FilamentSpool(Base):
    """
    Filament bobini.
    Ayni tip/renkte birden fazla bobin olabilir. Kalan agirlik uretimle azalir,
    sadece kayitli bir satin alma (stok ekleme) ile artar; siparis silinince geri yuklenmez.
    """

    __tablename__ = "filaments"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    # Bobin kodu (ornek: "PLA-KRM-001")
    code: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True
    )
    # Filament tipi (PLA, PETG, ABS ...) ve rengi
    type: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    color: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    brand: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )

    # Agirliklar gram cinsinden
    total_weight: Mapped[float] = mapped_column(
        Float, nullable=False, default=0
    )
    remaining_weight: Mapped[float] = mapped_column(
        Float, nullable=False, default=0
    )
    # Kritik stok seviyesi (gram): kalan agirlik bunun altina inerse uyari
    critical_stock: Mapped[float] = mapped_column(
        Float, default=0
    )
    price_per_gram: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 4), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_filaments_type_color", "type", "color"),
    )

    @property
    def filament_key(self) -> str:
        return f"{self.type}-{self.color}"

    @property
    def is_critical(self) -> bool:
        return self.remaining_weight <= (self.critical_stock or 0)


class FilamentUsage(Base):
    """
    Filament kullanim kaydi.
    Her uretime gecis icin recetedeki her filament satiri basina bir kayit olusur.
    Kayitlar guncellenmez ve silinmez.
    """

    __tablename__ = "filament_usage"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    filament_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("filaments.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    # Siparis silinse bile kullanim kaydi kalir, bu yuzden foreign key yok
    order_id: Mapped[uuid.UUID | None] = mapped_column(
        nullable=True, index=True
    )
    # Kullanilan miktar (gram)
    amount: Mapped[float] = mapped_column(
        Float, nullable=False
    )
    description: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )
    usage_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=date.today
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    filament: Mapped["FilamentSpool"] = relationship()


class FilamentPurchase(Base):
    """Bobine yapilan stok ekleme (satin alma) kaydi."""

    __tablename__ = "filament_purchases"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    filament_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("filaments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    purchase_date: Mapped[date] = mapped_column(
        Date, nullable=False
    )
    amount_gram: Mapped[float] = mapped_column(
        Float, nullable=False
    )
    purchase_price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False
    )
    price_per_gram: Mapped[Decimal] = mapped_column(
        Numeric(10, 4), nullable=False
    )
    supplier: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    filament: Mapped["FilamentSpool"] = relationship()
