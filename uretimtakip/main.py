import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from uretimtakip.config import settings
from uretimtakip.logging_config import setup_logging
from uretimtakip.routers import filaments_api, orders_api, products_api, stock_api

# Loglama sistemini baslat (uygulama ayaga kalkmadan once)
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="3D baski atolyesi icin siparis, uretim ve stok takibi",
    version="0.1.0",
)

logger.info("%s uygulamasi baslatiliyor...", settings.APP_NAME)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Servis hatalarini loglayip JSON olarak dondur."""
    logger.warning(
        "HTTP %d hatasi: %s %s - %s", exc.status_code, request.method, request.url, exc.detail
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Yakalanmamis hatalar: logla, 500 dondur."""
    logger.error("Yakalanmamis hata: %s %s", request.method, request.url, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Beklenmeyen bir hata olustu"},
    )


# API Router'lari
app.include_router(products_api.router, prefix="/api/v1/products", tags=["Urunler"])
app.include_router(orders_api.router, prefix="/api/v1/orders", tags=["Siparisler"])
app.include_router(stock_api.router, prefix="/api/v1/stock", tags=["Stok"])
app.include_router(filaments_api.router, prefix="/api/v1/filaments", tags=["Filamentler"])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
