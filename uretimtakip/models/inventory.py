import uuid
from datetime import datetime

from sqlalchemy import Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from uretimtakip.database import Base


class InventoryRecord(Base):
    """
    Urun stok sayaci.
    Her urun icin en fazla bir satir vardir, ilk stok yazimiyla olusturulur.
    Rezerve miktar burada saklanmaz, her okumada aktif siparis kalemlerinden hesaplanir.
    """

    __tablename__ = "inventory"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    # Satisa hazir stok (adet)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    product: Mapped["Product"] = relationship(back_populates="inventory")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
    )
