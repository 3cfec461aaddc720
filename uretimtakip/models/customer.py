import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from uretimtakip.database import Base


class Customer(Base):
    """
    Musteri modeli.
    Fiyatlama icin kategori (normal / wholesale) ve iskonto bilgisini tasir.
    """

    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    # Musteri kategorisi: "normal" veya "wholesale" (toptanci)
    category: Mapped[str] = mapped_column(
        String(20), default="normal"
    )
    # Toptanci iskonto orani (yuzde, ornek: 60 = %60)
    discount_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("0.00")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    filament_prices: Mapped[list["CustomerFilamentPrice"]] = relationship(
        back_populates="customer", cascade="all, delete-orphan"
    )


class CustomerFilamentPrice(Base):
    """Musteriye ozel filament gram fiyati (ornek: PLA icin 6.50 TL/gr)."""

    __tablename__ = "customer_filament_prices"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filament_type: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    price_per_gram: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False
    )

    customer: Mapped["Customer"] = relationship(back_populates="filament_prices")

    __table_args__ = (
        UniqueConstraint("customer_id", "filament_type", name="uq_customer_filament_type"),
    )
