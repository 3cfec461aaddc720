import logging
import os
from logging.handlers import RotatingFileHandler

from uretimtakip.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Kutuphane logger'lari: uygulama seviyesinden bagimsiz olarak sessize alinir
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _log_dir() -> str:
    if settings.LOG_DIR:
        return settings.LOG_DIR
    # Varsayilan: proje kokundeki logs/ klasoru
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "logs")


def setup_logging() -> None:
    """
    Uygulama loglamasini kurar. main.py import edilirken bir kez cagrilir.

    - Console: LOG_LEVEL ve ustu
    - Dosya: {LOG_DIR}/uretimtakip.log, LOG_MAX_BYTES boyutunda doner,
      LOG_BACKUP_COUNT yedek tutulur

    Stok ve filament yazimlari INFO seviyesinde loglanir; geri alinan durum
    gecisleri WARNING, beklenmeyen hatalar ERROR seviyesindedir.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Test ve reload durumlarinda handler'lar iki kez eklenmesin
    if root_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)
    handlers.append(RotatingFileHandler(
        os.path.join(log_dir, "uretimtakip.log"),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    ))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_level > logging.DEBUG:
        for name, level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Loglama hazir: seviye=%s dizin=%s", settings.LOG_LEVEL.upper(), log_dir
    )
