# backend/logbook/kelengkapan.py
"""
Perhitungan kelengkapan entri logbook.

Kelengkapan dihitung dari empat kolom teks (nama kegiatan, tujuan, catatan,
kesimpulan). Nomor minggu tidak ikut dihitung. Dipakai oleh model, view,
statistik, dan export supaya persentase yang tampil selalu sama.
"""

import datetime
from types import MappingProxyType

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

FIELD_WAJIB = ("nama_kegiatan", "tujuan_kegiatan", "catatan", "kesimpulan")

LENGKAP = "Complete"
HAMPIR_LENGKAP = "Nearly Complete"
SEBAGIAN = "Partial"
BELUM_LENGKAP = "Incomplete"

WARNA_KELENGKAPAN = MappingProxyType(
    {
        LENGKAP: "success",
        HAMPIR_LENGKAP: "warning",
        SEBAGIAN: "info",
        BELUM_LENGKAP: "danger",
    }
)

# filter ?kelengkapan= di daftar logbook
FILTER_KELENGKAPAN = MappingProxyType(
    {
        "complete": "Lengkap (100%)",
        "partial": "Sebagian",
        "incomplete": "Belum Lengkap",
    }
)


def terisi(value) -> bool:
    if value is None:
        return False
    return str(value).strip() != ""


def jumlah_terisi(nama_kegiatan=None, tujuan_kegiatan=None, catatan=None, kesimpulan=None) -> int:
    return sum(
        1 for value in (nama_kegiatan, tujuan_kegiatan, catatan, kesimpulan) if terisi(value)
    )


def persentase_kelengkapan(nama_kegiatan=None, tujuan_kegiatan=None, catatan=None, kesimpulan=None) -> int:
    filled = jumlah_terisi(nama_kegiatan, tujuan_kegiatan, catatan, kesimpulan)
    # round half up
    return (filled * 100 + len(FIELD_WAJIB) // 2) // len(FIELD_WAJIB)


def status_kelengkapan(persentase: int) -> str:
    if persentase == 100:
        return LENGKAP
    if persentase >= 75:
        return HAMPIR_LENGKAP
    if persentase >= 50:
        return SEBAGIAN
    return BELUM_LENGKAP


def warna_kelengkapan(label: str) -> str:
    return WARNA_KELENGKAPAN.get(label, "secondary")


def kelengkapan(entry):
    """Kembalikan (persentase, label) untuk objek dengan empat field wajib."""
    persentase = persentase_kelengkapan(
        *(getattr(entry, field, None) for field in FIELD_WAJIB)
    )
    return persentase, status_kelengkapan(persentase)


def cocok_filter_kelengkapan(persentase: int, kunci: str) -> bool:
    if kunci == "complete":
        return persentase == 100
    if kunci == "partial":
        return 0 < persentase < 100
    if kunci == "incomplete":
        return persentase == 0
    return True


def sebagai_tanggal(value):
    """Ubah datetime/str/date menjadi date lokal; None kalau tidak bisa."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
            if parsed is not None:
                return sebagai_tanggal(parsed)
            return parse_date(value)
        except ValueError:
            return None
    return None


def hitung_minggu(mulai, tgl_kegiatan):
    """
    Minggu ke-berapa sebuah kegiatan, dihitung dari tanggal pendaftaran:
    floor(selisih_hari / 7) + 1. Kegiatan sebelum tanggal pendaftaran
    dianggap minggu pertama.
    """
    mulai = sebagai_tanggal(mulai)
    tgl_kegiatan = sebagai_tanggal(tgl_kegiatan)
    if mulai is None or tgl_kegiatan is None:
        return None
    selisih = (tgl_kegiatan - mulai).days
    return max(selisih, 0) // 7 + 1
