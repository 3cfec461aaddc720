import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, ForeignKey, Numeric, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from uretimtakip.database import Base
from uretimtakip.status import ONAY_BEKLIYOR, STATUS_TO_LABEL


class Order(Base):
    """
    Siparis basligi.
    Musteri siparisi (SIP-xxxx) veya musterisiz stok uretim siparisi (STK-xxxx) olabilir.
    Durum alani, tum kalemler ayni durumdaysa o durumun etiketini yansitir.
    """

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    order_code: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True
    )
    # Stok uretim siparislerinde musteri yoktur
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Okunabilir durum etiketi ("Onay Bekliyor", "Üretimde", ...)
    status: Mapped[str] = mapped_column(
        String(30), default=STATUS_TO_LABEL[ONAY_BEKLIYOR]
    )
    # Son durum gecisinin baglami: uretilen miktar ve "stoktan kullan" secimi
    production_quantity: Mapped[int] = mapped_column(
        Integer, default=0
    )
    skip_production: Mapped[bool] = mapped_column(
        Boolean, default=False
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00")
    )
    notes: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    customer: Mapped["Customer"] = relationship()
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan"
    )


class OrderItem(Base):
    """
    Siparis kalemi.
    Durumu sadece durum makinesi (services.order_status) uzerinden degisir.
    version alani iyimser kilit icindir: ayni kalemi ayni anda guncelleyen
    iki istekten ikincisi StaleDataError alir.
    """

    __tablename__ = "order_items"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Urun silinirse kalem kalir, product_id NULL olur
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True
    )
    product_code: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    unit_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00")
    )
    # onay_bekliyor -> uretiliyor -> uretildi -> hazirlaniyor -> hazirlandi
    status: Mapped[str] = mapped_column(
        String(20), default=ONAY_BEKLIYOR, index=True
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    order: Mapped["Order"] = relationship(back_populates="items")
    product: Mapped["Product"] = relationship()

    __mapper_args__ = {"version_id_col": version}
