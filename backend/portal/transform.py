# backend/portal/transform.py
"""
Ubah objek model menjadi dict untuk template, JSON, dan export.
"""

import datetime

from django.utils import timezone
from django.utils.html import strip_tags

from logbook.kelengkapan import FILTER_KELENGKAPAN, kelengkapan, warna_kelengkapan
from masterdata import status as status_rules
from masterdata.models import LokasiPenempatan, PendaftaranMBKM, ProgramStudi

from .cache_utils import ingat
from .statistik import label_jenis_kelamin


def format_waktu(value, fmt="%Y-%m-%d"):
    if not value:
        return None
    if isinstance(value, datetime.datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime(fmt)


def _url_file(field_file):
    return field_file.url if field_file else None


def bersihkan_html(value):
    return strip_tags(value) if value else None


def data_pendaftar(p, peta_lokasi=None, detail=False) -> dict:
    mahasiswa = p.mahasiswa
    status = p.status_pendaftaran
    data = {
        "id": p.pk,
        "nim": mahasiswa.nim,
        "name": mahasiswa.nama_lengkap or "Unknown",
        "study_program": mahasiswa.nama_prodi,
        "academic_year": p.tahun_akademik,
        "semester": p.semester,
        "activity_type": p.jenis_kegiatan,
        "activity_name": p.nama_jenis_kegiatan,
        "placement": p.lokasi,
        "phone": mahasiswa.no_hp,
        "status": status,
        "status_slug": status_rules.SLUG_STATUS[status],
        "status_color": status_rules.warna_status(status),
        "payment_status": status_rules.status_pembayaran(p),
        "report_status": status_rules.status_laporan(p),
        "assessment_status": status_rules.status_penilaian(p),
        "registered_at": format_waktu(p.dibuat_pada),
        "score": p.nilai,
        "gender": label_jenis_kelamin(mahasiswa.jenis_kelamin),
        "is_active": p.aktif,
    }
    if peta_lokasi is not None:
        data["location"] = LokasiPenempatan.kota_dari(p.lokasi, peta_lokasi)

    if detail:
        data.update(
            {
                "email": mahasiswa.email,
                "payment_proof": _url_file(p.bukti_bayar),
                "report_document": _url_file(p.laporan),
                "video_url": p.video_url,
                "decision": p.keputusan,
                "payment_verified": p.pembayaran_terverifikasi,
                "payment_verified_at": format_waktu(p.pembayaran_diverifikasi_pada, "%Y-%m-%d %H:%M:%S"),
                "payment_rejection_reason": p.alasan_penolakan_pembayaran,
                "approved_at": format_waktu(p.disetujui_pada, "%Y-%m-%d %H:%M:%S"),
                "rejected_at": format_waktu(p.ditolak_pada, "%Y-%m-%d %H:%M:%S"),
                "rejection_reason": p.alasan_penolakan,
                "created_at": format_waktu(p.dibuat_pada, "%Y-%m-%d %H:%M:%S"),
                "updated_at": format_waktu(p.diupdate_pada, "%Y-%m-%d %H:%M:%S"),
            }
        )
    return data


def data_logbook(entry, tanpa_html=False) -> dict:
    persentase, label = kelengkapan(entry)
    teks = bersihkan_html if tanpa_html else (lambda value: value)
    return {
        "id": entry.pk,
        "week": entry.minggu,
        "week_name": entry.nama_minggu,
        "activity_date": format_waktu(entry.tgl_kegiatan),
        "activity_date_formatted": entry.tanggal_kegiatan_format,
        "activity_name": teks(entry.nama_kegiatan),
        "activity_objective": teks(entry.tujuan_kegiatan),
        "notes": teks(entry.catatan),
        "conclusion": teks(entry.kesimpulan),
        "summary": entry.ringkasan_kegiatan,
        "completion_status": label,
        "completion_percentage": persentase,
        "completion_color": warna_kelengkapan(label),
        "created_at": format_waktu(entry.dibuat_pada, "%Y-%m-%d %H:%M:%S"),
    }


def data_laporan(p) -> dict:
    return {
        "document_url": _url_file(p.laporan),
        "document_name": p.laporan.name.rsplit("/", 1)[-1] if p.laporan else None,
        "video_url": p.video_url,
        "submission_date": format_waktu(p.diupdate_pada),
        "status": status_rules.status_halaman_laporan(p),
    }


# =========================
# Opsi filter
# =========================

def opsi_tahun_akademik(label_semua="All Academic Years"):
    tahun = ingat(
        "academic_years",
        None,
        lambda: list(
            PendaftaranMBKM.objects.exclude(tahun_akademik="")
            .order_by("-tahun_akademik")
            .values_list("tahun_akademik", flat=True)
            .distinct()
        ),
    )
    return [{"value": "all", "label": label_semua}] + [
        {"value": t, "label": t} for t in tahun
    ]


def opsi_penempatan():
    penempatan = ingat(
        "placements",
        None,
        lambda: list(
            PendaftaranMBKM.objects.exclude(lokasi="")
            .order_by("lokasi")
            .values_list("lokasi", flat=True)
            .distinct()
        ),
    )
    return [{"value": "all", "label": "Semua Penempatan"}] + [
        {"value": p, "label": p} for p in penempatan
    ]


def opsi_jenis_kegiatan():
    return [{"value": "all", "label": "All Activity Types"}] + [
        {"value": value, "label": label}
        for value, label in PendaftaranMBKM.JENIS_KEGIATAN_CHOICES
    ]


def opsi_semester():
    return [{"value": "all", "label": "All Semesters"}] + [
        {"value": value, "label": label}
        for value, label in PendaftaranMBKM.SEMESTER_CHOICES
    ]


def opsi_status():
    return [{"value": "all", "label": "All Statuses"}] + [
        {"value": slug, "label": label}
        for slug, label in status_rules.STATUS_FILTER.items()
    ]


def opsi_prodi():
    prodi = ingat(
        "study_programs",
        None,
        lambda: list(
            ProgramStudi.objects.filter(aktif=True)
            .order_by("nama_prodi")
            .values_list("pk", "nama_prodi")
        ),
    )
    return [{"value": "all", "label": "Semua Program Studi"}] + [
        {"value": pk, "label": nama} for pk, nama in prodi
    ]


def opsi_kelengkapan():
    return [{"value": "all", "label": "Semua Status"}] + [
        {"value": value, "label": label} for value, label in FILTER_KELENGKAPAN.items()
    ]


def opsi_filter_pendaftar():
    return {
        "activity_types": opsi_jenis_kegiatan(),
        "academic_years": opsi_tahun_akademik(),
        "semesters": opsi_semester(),
        "statuses": opsi_status(),
        "study_programs": opsi_prodi(),
    }
