import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from uretimtakip.database import Base


class StockAudit(Base):
    """
    Stok islem denetim kaydi (ADD / REMOVE / RESERVE / UNRESERVE).
    Urun veya siparis silinse de kayit kalir, bu yuzden foreign key kullanilmaz.
    """

    __tablename__ = "stock_audit"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        nullable=True, index=True
    )
    operation: Mapped[str] = mapped_column(
        String(20), nullable=False
    )
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    order_id: Mapped[uuid.UUID | None] = mapped_column(
        nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class OrderAudit(Base):
    """
    Siparis olay kaydi.
    Ornek olaylar: order_created, item_status_changed, order_deleted
    """

    __tablename__ = "order_audit"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    order_id: Mapped[uuid.UUID | None] = mapped_column(
        nullable=True, index=True
    )
    event: Mapped[str] = mapped_column(
        String(50), nullable=False
    )
    details: Mapped[dict | None] = mapped_column(
        JSON, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
