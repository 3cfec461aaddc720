"""
UretimTakip - Test Yapilandirmasi (conftest.py)

SQLite in-memory veritabani kullanarak PostgreSQL gerektirmeden
servis katmanini ve API endpoint'lerini test etmeye olanak saglar.

Her test fonksiyonu icin temiz bir veritabani olusturulur (function scope).
SQLite "SELECT ... FOR UPDATE" desteklemez; SQLAlchemy bu kilidi SQLite'ta
sessizce atlar, bu yuzden ayni sorgular testlerde de calisir.
"""

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from uretimtakip.database import Base, get_db
from uretimtakip.main import app

# Tum modelleri import et - Base.metadata.create_all icin gerekli
from uretimtakip.models import (
    Customer, CustomerFilamentPrice, FilamentSpool, InventoryRecord,
    Order, OrderItem, Product, ProductFilament,
)
from uretimtakip.status import ONAY_BEKLIYOR, status_label


# ---------------------------------------------------------------------------
# SQLite In-Memory Test Veritabani
# ---------------------------------------------------------------------------

# Tek baglanti (StaticPool): TestClient thread'i ve test ayni in-memory veritabanini gorur
SQLITE_TEST_URL = "sqlite://"

test_engine = create_engine(
    SQLITE_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False,
)


# SQLite varsayilan olarak foreign key constraint'leri uygulamaz
@event.listens_for(test_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db_session():
    """
    Her test icin temiz bir veritabani oturumu olusturur.

    - Tablolari olusturur (create_all)
    - Test bittikten sonra tablolari siler (drop_all)
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    FastAPI TestClient olusturur.
    get_db dependency'sini override ederek test veritabanini kullanir.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_product(db_session):
    """
    Recetesi "PLA / Kirmizi / 50 gr" olan urun.
    Tabla kapasitesi 4 adet.
    """
    product = Product(
        id=uuid.uuid4(),
        code="ANH-001",
        name="Anahtarlik",
        capacity_per_batch=4,
        unit_weight_grams=50,
        list_price=Decimal("100.00"),
    )
    product.filaments.append(ProductFilament(
        filament_type="PLA", filament_color="Kirmizi", grams_per_unit=50,
    ))
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture(scope="function")
def test_spool(db_session):
    """PLA / Kirmizi bobin, kalan 200 gr."""
    spool = FilamentSpool(
        id=uuid.uuid4(),
        code="PLA-KRM-001",
        type="PLA",
        color="Kirmizi",
        total_weight=1000,
        remaining_weight=200,
        critical_stock=50,
    )
    db_session.add(spool)
    db_session.commit()
    db_session.refresh(spool)
    return spool


@pytest.fixture(scope="function")
def test_customer(db_session):
    customer = Customer(id=uuid.uuid4(), name="Yildiz Hediyelik", category="normal")
    customer.filament_prices.append(
        CustomerFilamentPrice(filament_type="PLA", price_per_gram=Decimal("2.00"))
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture(scope="function")
def make_order(db_session):
    """
    Siparis olusturan yardimci fixture.

    Kullanim:
        order = make_order([(product, 2)], code="SIP-0001")
        order = make_order([(product, 2, "hazirlandi")], code="STK-0001")
    """
    def _make(lines, code="SIP-0001", customer_id=None):
        order = Order(
            id=uuid.uuid4(),
            order_code=code,
            customer_id=customer_id,
            status=status_label(ONAY_BEKLIYOR),
        )
        for line in lines:
            product, quantity = line[0], line[1]
            line_status = line[2] if len(line) > 2 else ONAY_BEKLIYOR
            order.items.append(OrderItem(
                id=uuid.uuid4(),
                product_id=product.id,
                product_code=product.code,
                quantity=quantity,
                status=line_status,
            ))
        db_session.add(order)
        db_session.commit()
        db_session.refresh(order)
        return order

    return _make


@pytest.fixture(scope="function")
def set_stock(db_session):
    """Stok satirini dogrudan yazar (test hazirligi icin)."""
    def _set(product, quantity):
        db_session.add(InventoryRecord(product_id=product.id, quantity=quantity))
        db_session.commit()

    return _set


# ---------------------------------------------------------------------------
# Es zamanli istek testleri icin dosya tabanli veritabani
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def concurrent_order(tmp_path):
    """
    Dosya tabanli SQLite uzerinde ayni siparisi goren iki ayri oturum.

    Hazirlik: ANH-001 (PLA / Kirmizi / 50 gr), 200 gr bobin ve tek kalemli
    (1 adet, onay_bekliyor) SIP-0001 siparisi.

    Dondurur: SimpleNamespace(first, second, order_id, line_id, spool_id)
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'uretimtakip.db'}")
    event.listen(engine, "connect", _set_sqlite_pragma)
    Base.metadata.create_all(bind=engine)
    SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    setup = SessionFactory()
    product = Product(id=uuid.uuid4(), code="ANH-001", name="Anahtarlik", capacity_per_batch=4)
    product.filaments.append(ProductFilament(
        filament_type="PLA", filament_color="Kirmizi", grams_per_unit=50,
    ))
    spool = FilamentSpool(
        id=uuid.uuid4(), code="PLA-KRM-001", type="PLA", color="Kirmizi",
        total_weight=1000, remaining_weight=200,
    )
    order = Order(id=uuid.uuid4(), order_code="SIP-0001", status=status_label(ONAY_BEKLIYOR))
    line = OrderItem(
        id=uuid.uuid4(), product_id=product.id, product_code=product.code,
        quantity=1, status=ONAY_BEKLIYOR,
    )
    order.items.append(line)
    setup.add_all([product, spool, order])
    setup.commit()
    ids = SimpleNamespace(order_id=order.id, line_id=line.id, spool_id=spool.id)
    setup.close()

    first, second = SessionFactory(), SessionFactory()
    try:
        yield SimpleNamespace(first=first, second=second, **vars(ids))
    finally:
        first.close()
        second.close()
        engine.dispose()
