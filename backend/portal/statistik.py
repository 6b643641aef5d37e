# backend/portal/statistik.py
"""
Reduksi koleksi pendaftaran / logbook menjadi angka ringkasan.

Semua fungsi di sini murni (tidak menyentuh database) dan menerima iterable
objek apa pun yang punya atribut yang sama dengan model.
"""

from collections import OrderedDict
from decimal import ROUND_HALF_UP, Decimal

from logbook.kelengkapan import kelengkapan, sebagai_tanggal
from masterdata import status as status_rules

LABEL_JENIS_KELAMIN = {"L": "Male", "P": "Female"}


def label_jenis_kelamin(kode) -> str:
    return LABEL_JENIS_KELAMIN.get(kode, "Unknown")


def bulatkan(pembilang, penyebut, digit: int) -> float:
    """pembilang / penyebut dibulatkan half-up; 0 kalau penyebut 0."""
    if not penyebut:
        return 0
    hasil = Decimal(pembilang) / Decimal(penyebut)
    return float(hasil.quantize(Decimal(1).scaleb(-digit), rounding=ROUND_HALF_UP))


def _jenis_kelamin(pendaftaran):
    mahasiswa = getattr(pendaftaran, "mahasiswa", None)
    return getattr(mahasiswa, "jenis_kelamin", None)


def statistik_pendaftaran(items) -> dict:
    items = list(items)
    total = len(items)
    per_status = {label: 0 for label in status_rules.STATUS_PENDAFTARAN}
    per_gender = {"Male": 0, "Female": 0, "Unknown": 0}
    penempatan = set()

    for item in items:
        per_status[status_rules.status_pendaftaran(item)] += 1
        per_gender[label_jenis_kelamin(_jenis_kelamin(item))] += 1
        lokasi = (getattr(item, "lokasi", None) or "").strip()
        if lokasi:
            penempatan.add(lokasi)

    selesai = per_status[status_rules.SELESAI]
    belum_bayar = per_status[status_rules.MENUNGGU_PEMBAYARAN]

    return {
        "total": total,
        "completed": selesai,
        "active": per_status[status_rules.AKTIF],
        "awaiting_assessment": per_status[status_rules.MENUNGGU_PENILAIAN],
        "pending_payment": belum_bayar,
        "male": per_gender["Male"],
        "female": per_gender["Female"],
        "unknown_gender": per_gender["Unknown"],
        "partners": len(penempatan),
        "completion_rate": bulatkan(selesai * 100, total, 2),
        "payment_rate": bulatkan((total - belum_bayar) * 100, total, 2),
    }


def statistik_logbook(entries) -> dict:
    entries = list(entries)
    total = len(entries)
    persentase = [kelengkapan(entry)[0] for entry in entries]

    lengkap = sum(1 for p in persentase if p == 100)
    sebagian = sum(1 for p in persentase if 0 < p < 100)
    kosong = sum(1 for p in persentase if p == 0)

    minggu = {e.minggu for e in entries if getattr(e, "minggu", None) is not None}
    tanggal = [
        t for t in (sebagai_tanggal(getattr(e, "tgl_kegiatan", None)) for e in entries)
        if t is not None
    ]

    return {
        "total_entries": total,
        "completed_entries": lengkap,
        "partial_entries": sebagian,
        "incomplete_entries": kosong,
        "average_completion": bulatkan(sum(persentase), total, 1),
        "completion_rate": bulatkan(lengkap * 100, total, 1),
        "weeks_covered": len(minggu),
        "total_weeks": max(minggu) if minggu else 0,
        "latest_entry": max(tanggal) if tanggal else None,
    }


def ringkasan_jenis_kegiatan(items) -> list:
    ringkasan = OrderedDict()
    for item in sorted(items, key=lambda p: p.jenis_kegiatan or ""):
        baris = ringkasan.setdefault(
            item.jenis_kegiatan,
            {"type": item.jenis_kegiatan, "total": 0, "active": 0, "completed": 0},
        )
        baris["total"] += 1
        label = status_rules.status_pendaftaran(item)
        if label == status_rules.AKTIF:
            baris["active"] += 1
        elif label == status_rules.SELESAI:
            baris["completed"] += 1
    return list(ringkasan.values())
