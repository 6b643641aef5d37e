# backend/masterdata/status.py
"""
Klasifikasi status siklus pendaftaran MBKM.

Status selalu diturunkan dari tiga kolom (bukti_bayar, laporan, nilai) dan
tidak pernah disimpan. Semua tampilan, filter, statistik, dan export memakai
fungsi di modul ini supaya label yang ditampilkan selalu sama dengan yang
difilter.
"""

from types import MappingProxyType

from django.db.models import Q

SELESAI = "Completed"
MENUNGGU_PENILAIAN = "Awaiting Assessment"
AKTIF = "Active"
MENUNGGU_PEMBAYARAN = "Awaiting Payment"

# urut dari prioritas tertinggi
STATUS_PENDAFTARAN = (SELESAI, MENUNGGU_PENILAIAN, AKTIF, MENUNGGU_PEMBAYARAN)

WARNA_STATUS = MappingProxyType(
    {
        SELESAI: "success",
        AKTIF: "primary",
        MENUNGGU_PENILAIAN: "warning",
        MENUNGGU_PEMBAYARAN: "danger",
    }
)

# slug query string -> label
STATUS_FILTER = MappingProxyType(
    {
        "pending_payment": MENUNGGU_PEMBAYARAN,
        "active": AKTIF,
        "awaiting_assessment": MENUNGGU_PENILAIAN,
        "completed": SELESAI,
    }
)

SLUG_STATUS = MappingProxyType({label: slug for slug, label in STATUS_FILTER.items()})


def ada(value) -> bool:
    """True jika nilai tidak None dan bukan string kosong.

    FieldFile dianggap ada kalau namanya terisi.
    """
    if value is None:
        return False
    if hasattr(value, "name") and not isinstance(value, str):
        value = value.name
        if value is None:
            return False
    if isinstance(value, str):
        return value != ""
    return True


def tentukan_status(bukti_bayar=None, laporan=None, nilai=None) -> str:
    if ada(nilai):
        return SELESAI
    if ada(laporan):
        return MENUNGGU_PENILAIAN
    if ada(bukti_bayar):
        return AKTIF
    return MENUNGGU_PEMBAYARAN


def status_pendaftaran(obj) -> str:
    return tentukan_status(
        bukti_bayar=getattr(obj, "bukti_bayar", None),
        laporan=getattr(obj, "laporan", None),
        nilai=getattr(obj, "nilai", None),
    )


def warna_status(label: str) -> str:
    return WARNA_STATUS.get(label, "secondary")


def status_pembayaran(obj) -> str:
    return "Paid" if ada(getattr(obj, "bukti_bayar", None)) else "Unpaid"


def status_laporan(obj) -> str:
    return "Submitted" if ada(getattr(obj, "laporan", None)) else "Not Submitted"


def status_penilaian(obj) -> str:
    return "Assessed" if ada(getattr(obj, "nilai", None)) else "Not Assessed"


def status_halaman_laporan(obj) -> str:
    if ada(getattr(obj, "nilai", None)):
        return "approved"
    if ada(getattr(obj, "laporan", None)):
        return "submitted"
    return "not_submitted"


def _q_ada(field: str) -> Q:
    return Q(**{f"{field}__isnull": False}) & ~Q(**{field: ""})


def _q_kosong(field: str) -> Q:
    return Q(**{f"{field}__isnull": True}) | Q(**{field: ""})


def q_status(label: str, prefix: str = "") -> Q:
    """
    Filter ORM yang cocok persis dengan baris yang diberi label `label`
    oleh tentukan_status(). `prefix` dipakai kalau filter dijalankan dari
    model lain, misal "pendaftaran__".
    """
    nilai = f"{prefix}nilai"
    laporan = f"{prefix}laporan"
    bukti = f"{prefix}bukti_bayar"

    if label == SELESAI:
        return _q_ada(nilai)
    if label == MENUNGGU_PENILAIAN:
        return _q_kosong(nilai) & _q_ada(laporan)
    if label == AKTIF:
        return _q_kosong(nilai) & _q_kosong(laporan) & _q_ada(bukti)
    if label == MENUNGGU_PEMBAYARAN:
        return _q_kosong(nilai) & _q_kosong(laporan) & _q_kosong(bukti)
    raise ValueError(f"Status tidak dikenal: {label!r}")
