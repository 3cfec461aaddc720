"""
UretimTakip - Stok Testleri

Test edilen moduller:
    uretimtakip.services.inventory   - Stok defteri (upsert, negatif olamaz)
    uretimtakip.services.reservation - Rezerve hesabi ve stok gosterimi
    uretimtakip.services.stock       - Genel stok islemleri ve hareketler
"""

import uuid

import pytest
from fastapi import HTTPException

from uretimtakip.errors import InsufficientStockError, NotFoundError
from uretimtakip.models import InventoryRecord, StockAudit, StockMovement
from uretimtakip.schemas.stock import StockOperation
from uretimtakip.services import inventory as inventory_service
from uretimtakip.services import reservation as reservation_service
from uretimtakip.services import stock as stock_service
from uretimtakip.status import HAZIRLANDI, HAZIRLANIYOR, URETILIYOR


class TestInventoryLedger:
    """Stok defteri testleri."""

    def test_missing_record_reads_zero(self, db_session, test_product):
        assert inventory_service.get_quantity(db_session, test_product.id) == 0

    def test_add_creates_record(self, db_session, test_product):
        """Kayit yoksa ilk yazimda olusturulmali."""
        movement = inventory_service.add_stock(db_session, test_product.id, 7)
        db_session.commit()

        record = db_session.query(InventoryRecord).filter(
            InventoryRecord.product_id == test_product.id
        ).one()
        assert record.quantity == 7
        assert movement.movement_type == "in"
        assert movement.previous_stock == 0
        assert movement.new_stock == 7
        assert movement.reference_type == "manual"

    def test_negative_delta(self, db_session, test_product, set_stock):
        set_stock(test_product, 10)

        movement = inventory_service.add_stock(db_session, test_product.id, -4)
        db_session.commit()

        assert inventory_service.get_quantity(db_session, test_product.id) == 6
        assert movement.movement_type == "out"
        assert movement.quantity == 4

    def test_cannot_go_below_zero(self, db_session, test_product, set_stock):
        set_stock(test_product, 2)

        with pytest.raises(InsufficientStockError) as exc_info:
            inventory_service.subtract_stock(db_session, test_product.id, 5)
        db_session.rollback()

        assert exc_info.value.available == 2
        assert exc_info.value.requested == 5
        assert inventory_service.get_quantity(db_session, test_product.id) == 2

    def test_set_stock(self, db_session, test_product, set_stock):
        set_stock(test_product, 9)

        movement = inventory_service.set_stock(db_session, test_product.id, 3)
        db_session.commit()

        assert inventory_service.get_quantity(db_session, test_product.id) == 3
        assert movement.movement_type == "adjustment"
        assert movement.previous_stock == 9


class TestReservation:
    """Rezerve stok: aktif kalemler - mevcut stok, asla negatif degil."""

    def test_no_orders(self, db_session, test_product, set_stock):
        set_stock(test_product, 4)

        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.available_stock == 4
        assert status.reserved_stock == 0
        assert status.total_stock == 4
        assert status.stock_display == "Stokta: 4 adet"
        assert status.stock_color == "green"

    def test_active_lines_exceed_stock(self, db_session, test_product, make_order, set_stock):
        set_stock(test_product, 2)
        make_order([(test_product, 3)], code="SIP-0001")
        make_order([(test_product, 4, URETILIYOR)], code="SIP-0002")

        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.available_stock == 0
        assert status.reserved_stock == 5
        assert status.total_stock == 5
        assert status.stock_display == "Rezerve: 5 adet"
        assert status.stock_color == "blue"

    def test_stock_covers_active_lines(self, db_session, test_product, make_order, set_stock):
        """Stok aktif kalemlerden fazlaysa rezerve 0 olmali (negatif degil)."""
        set_stock(test_product, 10)
        make_order([(test_product, 3)])

        assert reservation_service.reserved_stock(db_session, test_product.id) == 0

    def test_available_excludes_ordered_quantity(
        self, db_session, test_product, make_order, set_stock
    ):
        """Stok 50, siparis 20: serbest stok 30, rezerve 0."""
        set_stock(test_product, 50)
        make_order([(test_product, 20)])

        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.available_stock == 30
        assert status.reserved_stock == 0
        assert status.total_stock == 30
        assert status.stock_display == "Stokta: 30 adet"
        assert status.stock_color == "green"

    def test_ready_lines_are_not_reserved(self, db_session, test_product, make_order):
        make_order([(test_product, 3, HAZIRLANDI)], code="SIP-0001")
        make_order([(test_product, 2, HAZIRLANIYOR)], code="SIP-0002")

        assert reservation_service.active_line_quantity(db_session, test_product.id) == 2
        assert reservation_service.reserved_stock(db_session, test_product.id) == 2

    def test_reserved_only(self, db_session, test_product, make_order):
        make_order([(test_product, 3)])

        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.stock_display == "Rezerve: 3 adet"
        assert status.stock_color == "blue"

    def test_out_of_stock(self, db_session, test_product):
        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.stock_display == "Stokta Yok"
        assert status.stock_color == "red"

    def test_read_failure_degrades(self, db_session, test_product, monkeypatch):
        """Sorgu hatasinda hata firlatilmamali, sifirlanmis durum donmeli."""
        def _boom(*args, **kwargs):
            raise RuntimeError("baglanti koptu")

        monkeypatch.setattr(reservation_service.inventory_service, "get_quantity", _boom)

        status = reservation_service.get_stock_status(db_session, test_product.id)

        assert status.available_stock == 0
        assert status.reserved_stock == 0
        assert status.stock_display == "Stokta Yok"

    def test_overview_lists_every_product(self, db_session, test_product, set_stock):
        set_stock(test_product, 1)

        overview = reservation_service.get_stock_overview(db_session)

        assert len(overview) == 1
        assert overview[0].product_id == test_product.id
        assert overview[0].available_stock == 1


class TestStockOperations:
    """ADD / REMOVE / RESERVE / UNRESERVE islemleri."""

    def test_add(self, db_session, test_product):
        result = stock_service.apply_stock_operation(
            db_session, test_product.id, StockOperation.ADD, 5,
        )

        assert result.success is True
        assert result.stock.available_stock == 5
        audit = db_session.query(StockAudit).one()
        assert audit.operation == "ADD"
        assert audit.quantity == 5

    def test_remove(self, db_session, test_product, set_stock):
        set_stock(test_product, 5)

        result = stock_service.apply_stock_operation(
            db_session, test_product.id, StockOperation.REMOVE, 2,
        )

        assert result.success is True
        assert inventory_service.get_quantity(db_session, test_product.id) == 3

    def test_remove_insufficient(self, db_session, test_product, set_stock):
        """Yetersiz stokta islem yapilmamali, success=False donmeli."""
        set_stock(test_product, 5)

        result = stock_service.apply_stock_operation(
            db_session, test_product.id, StockOperation.REMOVE, 10,
        )

        assert result.success is False
        assert result.message == "Yetersiz stok! Mevcut: 5, Istenen: 10"
        assert inventory_service.get_quantity(db_session, test_product.id) == 5
        assert db_session.query(StockAudit).count() == 0

    def test_remove_cannot_take_ordered_stock(
        self, db_session, test_product, make_order, set_stock
    ):
        """Aktif siparislere ayrilan stok elle dusulememeli."""
        set_stock(test_product, 50)
        make_order([(test_product, 20)])

        result = stock_service.apply_stock_operation(
            db_session, test_product.id, StockOperation.REMOVE, 40,
        )

        assert result.success is False
        assert result.message == "Yetersiz stok! Mevcut: 30, Istenen: 40"
        assert inventory_service.get_quantity(db_session, test_product.id) == 50
        assert db_session.query(StockMovement).count() == 0

    def test_reserve_does_not_touch_ledger(self, db_session, test_product, set_stock):
        set_stock(test_product, 5)

        result = stock_service.apply_stock_operation(
            db_session, test_product.id, StockOperation.RESERVE, 3,
        )

        assert result.success is True
        assert inventory_service.get_quantity(db_session, test_product.id) == 5
        assert db_session.query(StockMovement).count() == 0
        assert db_session.query(StockAudit).one().operation == "RESERVE"

    def test_unknown_product(self, db_session):
        with pytest.raises(NotFoundError):
            stock_service.apply_stock_operation(
                db_session, uuid.uuid4(), StockOperation.ADD, 1,
            )


class TestStockMovements:
    """Elle stok hareketi ve hareket listesi."""

    def test_in_and_out(self, db_session, test_product):
        stock_service.add_stock_movement(db_session, test_product.id, "in", 8, notes="Sayim")
        movement = stock_service.add_stock_movement(db_session, test_product.id, "out", 3)

        assert movement.previous_stock == 8
        assert movement.new_stock == 5
        movements = stock_service.get_stock_movements(db_session, product_id=test_product.id)
        assert len(movements) == 2

    def test_out_insufficient(self, db_session, test_product):
        with pytest.raises(InsufficientStockError):
            stock_service.add_stock_movement(db_session, test_product.id, "out", 1)
        assert db_session.query(StockMovement).count() == 0

    def test_adjustment(self, db_session, test_product, set_stock):
        set_stock(test_product, 12)

        movement = stock_service.add_stock_movement(db_session, test_product.id, "adjustment", 4)

        assert movement.new_stock == 4
        assert db_session.query(StockAudit).one().operation == "ADJUST"

    def test_invalid_type(self, db_session, test_product):
        with pytest.raises(HTTPException) as exc_info:
            stock_service.add_stock_movement(db_session, test_product.id, "transfer", 1)
        assert exc_info.value.status_code == 400

    def test_low_stock(self, db_session, test_product, set_stock):
        set_stock(test_product, 2)

        assert len(stock_service.get_low_stock_products(db_session)) == 1
        assert stock_service.get_low_stock_products(db_session, threshold=1) == []
