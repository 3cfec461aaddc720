"""
Servis katmani hata siniflari.

Servisler dogrudan HTTPException firlatir; bu siniflar sadece hata turune
isim verir ve dogru HTTP kodunu sabitler. Router'lar ve testler
`status_code` ve `detail` uzerinden kontrol yapabilir.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """Siparis, kalem, urun veya bobin bulunamadi."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InsufficientMaterialError(HTTPException):
    """Secilen bobinde yeterli filament yok."""

    def __init__(self, spool_code: str, filament_key: str, available: float, required: float):
        self.spool_code = spool_code
        self.available = available
        self.required = required
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Yetersiz filament! {spool_code} ({filament_key}): "
                f"Mevcut {available:g}g, Gerekli {required:g}g"
            ),
        )


class InsufficientStockError(HTTPException):
    """Stok sayaci sifirin altina dusecekti."""

    def __init__(self, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Yetersiz stok! Mevcut: {available}, Istenen: {requested}",
        )


class InvalidTransitionError(HTTPException):
    """Taninmayan durum etiketi veya geriye dogru durum gecisi."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class BlockedError(HTTPException):
    """Uretimdeki kalemleri olan siparis uzerinde izin verilmeyen islem."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ConcurrentUpdateError(HTTPException):
    """Ayni kalem baska bir istek tarafindan ayni anda guncellendi."""

    def __init__(self, detail: str = "Kayit baska bir islem tarafindan guncellendi, tekrar deneyin"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
