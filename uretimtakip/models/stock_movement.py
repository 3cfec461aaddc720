import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from uretimtakip.database import Base

MOVEMENT_IN = "in"
MOVEMENT_OUT = "out"
MOVEMENT_ADJUSTMENT = "adjustment"
MOVEMENT_TYPES = (MOVEMENT_IN, MOVEMENT_OUT, MOVEMENT_ADJUSTMENT)


class StockMovement(Base):
    """
    Stok defteri hareketi.
    Stok sayacina yapilan her yazim (uretim fazlasi, stoktan kullanim,
    siparis silme iadesi, elle duzeltme) bir satir birakir.
    Satirlar guncellenmez; sayacin gecmisi previous_stock -> new_stock
    zincirinden okunabilir.
    """

    __tablename__ = "stock_movements"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    # MOVEMENT_TYPES'tan biri; quantity her zaman pozitif, yonu tip belirler
    movement_type: Mapped[str] = mapped_column(
        String(20), nullable=False
    )
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )

    # Hareketin kaynagi:
    #   "order"        -> durum gecisi (reference_id = siparis ID)
    #   "order_delete" -> silinen siparisin hazir kalemleri stoga iade
    #   "gateway"      -> ADD / REMOVE stok islemi
    #   "manual"       -> elle hareket / duzeltme
    reference_type: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    reference_id: Mapped[uuid.UUID | None] = mapped_column(
        nullable=True
    )
    notes: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    previous_stock: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    new_stock: Mapped[int] = mapped_column(
        Integer, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_stock_movements_product_id", "product_id"),
        Index("ix_stock_movements_created_at", "created_at"),
        Index("ix_stock_movements_reference", "reference_type", "reference_id"),
    )
