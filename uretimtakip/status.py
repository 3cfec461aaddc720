"""
Siparis kalemi durumlari ve etiket tablosu.

Kalem durumlari veritabaninda ic degerleriyle (onay_bekliyor, uretiliyor, ...)
saklanir. Siparis basligi ve arayuz ise okunabilir etiketleri kullanir
("Onay Bekliyor", "Üretimde", ...). Donusum tablolari modul yuklenirken bir kez
kurulur ve degistirilemez.
"""

from types import MappingProxyType

from uretimtakip.errors import InvalidTransitionError

ONAY_BEKLIYOR = "onay_bekliyor"
URETILIYOR = "uretiliyor"
URETILDI = "uretildi"
HAZIRLANIYOR = "hazirlaniyor"
HAZIRLANDI = "hazirlandi"

# Ileri yonlu siralama: bir kalem sadece bu listede ileri gidebilir
STATUS_FLOW: tuple[str, ...] = (
    ONAY_BEKLIYOR,
    URETILIYOR,
    URETILDI,
    HAZIRLANIYOR,
    HAZIRLANDI,
)

# Rezerve hesabina giren (henuz teslime hazir olmayan) durumlar
ACTIVE_STATUSES = frozenset({ONAY_BEKLIYOR, URETILIYOR, URETILDI, HAZIRLANIYOR})

# Bu durumlardaki kalemleri olan siparis silinemez
PRODUCTION_BLOCKING_STATUSES = frozenset({URETILIYOR, URETILDI, HAZIRLANIYOR})

# Stok duzeltmesinin tetiklendigi hazirlik durumlari
PREPARATION_STATUSES = frozenset({HAZIRLANIYOR, HAZIRLANDI})

STATUS_TO_LABEL = MappingProxyType({
    ONAY_BEKLIYOR: "Onay Bekliyor",
    URETILIYOR: "Üretimde",
    URETILDI: "Üretildi",
    HAZIRLANIYOR: "Hazırlanıyor",
    HAZIRLANDI: "Hazırlandı",
})

LABEL_TO_STATUS = MappingProxyType({
    "Onay Bekliyor": ONAY_BEKLIYOR,
    "Üretimde": URETILIYOR,
    "Üretiliyor": URETILIYOR,
    "Üretildi": URETILDI,
    "Hazırlanıyor": HAZIRLANIYOR,
    "Hazırlandı": HAZIRLANDI,
    # Ic degerler de kabul edilir
    **{value: value for value in STATUS_FLOW},
})


def resolve_status(label: str, strict: bool = True) -> str:
    """
    Okunabilir etiketi ic duruma cevir.

    strict=False ise taninmayan etiketler "onay_bekliyor" kabul edilir
    (eski sistemin davranisi).
    """
    normalized = (label or "").strip()
    status = LABEL_TO_STATUS.get(normalized)
    if status is not None:
        return status
    if strict:
        raise InvalidTransitionError(f"Gecersiz durum: '{normalized}'")
    return ONAY_BEKLIYOR


def status_label(status: str) -> str:
    return STATUS_TO_LABEL.get(status, STATUS_TO_LABEL[ONAY_BEKLIYOR])


def is_forward(current: str, target: str) -> bool:
    """Hedef durum mevcut durumla ayni veya ondan ileride mi?"""
    return STATUS_FLOW.index(target) >= STATUS_FLOW.index(current)
