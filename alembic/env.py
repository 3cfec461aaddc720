"""
Alembic migration ortami.

Veritabani adresi alembic.ini yerine uygulama ayarlarindan (.env) okunur.
SQLite ile calisirken ALTER TABLE kisitlari yuzunden batch modu acilir.
"""

import sys
from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# Proje kokunu Python path'e ekle (uretimtakip paketinin import edilebilmesi icin)
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from uretimtakip.config import settings
from uretimtakip.database import Base
import uretimtakip.models  # noqa: F401 - Base.metadata tum tablolari gorsun

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _options(url: str) -> dict:
    # Numeric / Float ayrimi ve kolon tipi degisiklikleri autogenerate'te gorunsun
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """SQL ciktisi uretir, veritabanina baglanmaz (alembic upgrade --sql)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, **_options(str(connection.engine.url)))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
