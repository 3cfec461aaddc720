from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from uretimtakip.config import settings


def _engine_options(url: str) -> dict:
    """Backend'e gore engine ayarlari."""
    if url.startswith("sqlite"):
        # SQLite baglantisi FastAPI'nin thread pool'unda paylasilir
        return {"connect_args": {"check_same_thread": False}}
    # Uzun sure bos kalan PostgreSQL baglantilari kullanilmadan once yoklanir
    return {"pool_pre_ping": True}


# echo=False: SQL sorgulari "sqlalchemy.engine" logger'i uzerinden yonetiliyor
engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

# Her istek tek transaction: commit / rollback servis katmaninda yapilir.
# autoflush kapali, servisler kilitli okumalardan sonra flush() cagirir.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    """
    Istek basina veritabani oturumu (FastAPI dependency).

    Kullanim:
        @router.get("")
        def endpoint(db: Annotated[Session, Depends(get_db)]):
            ...

    Oturum istek bitince kapanir; commit edilmemis degisiklikler geri alinir.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
