# backend/portal/export.py
"""
Penulisan CSV untuk export data pendaftar, dashboard, dan logbook.

Status dan persentase diambil dari fungsi klasifikasi yang sama dengan yang
dipakai tampilan, sehingga nilai di file sama persis dengan di layar.
"""

import csv
import logging

from django.http import HttpResponse
from django.utils import timezone

from logbook.kelengkapan import kelengkapan

from .transform import bersihkan_html, data_pendaftar, format_waktu

logger = logging.getLogger(__name__)

HEADER_PENDAFTAR = [
    "NIM",
    "Name",
    "Study Program",
    "Academic Year",
    "Semester",
    "Activity Type",
    "Placement",
    "Phone",
    "Status",
    "Payment Status",
    "Report Status",
    "Score",
    "Registered At",
]

HEADER_DASHBOARD = [
    "No",
    "NIM",
    "Nama Mahasiswa",
    "Program Studi",
    "Jenis Kelamin",
    "Tahun Akademik",
    "Semester",
    "Jenis Kegiatan",
    "Penempatan",
    "Lokasi",
    "No. Telepon",
    "Status",
    "Tanggal Daftar",
]

HEADER_LOGBOOK = [
    "NIM",
    "Nama",
    "Program Studi",
    "Tahun Akademik",
    "Minggu",
    "Tanggal Kegiatan",
    "Nama Kegiatan",
    "Tujuan Kegiatan",
    "Catatan",
    "Kesimpulan",
    "Status Kelengkapan",
    "Persentase Kelengkapan",
]


def _writer(output):
    return csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")


def _teks(value):
    return (value or "").replace("\r", " ").replace("\n", " ")


def respons_csv(filename):
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def nama_file_export(prefix):
    return f"{prefix}_{timezone.localtime().strftime('%Y_%m_%d_%H_%M_%S')}.csv"


def tulis_csv_pendaftar(output, pendaftaran):
    writer = _writer(output)
    writer.writerow(HEADER_PENDAFTAR)
    jumlah = 0
    for p in pendaftaran:
        row = data_pendaftar(p)
        writer.writerow(
            [
                row["nim"],
                row["name"],
                row["study_program"],
                row["academic_year"],
                row["semester"],
                row["activity_type"],
                row["placement"],
                row["phone"] or "",
                row["status"],
                row["payment_status"],
                row["report_status"],
                row["score"] or "",
                format_waktu(p.dibuat_pada, "%Y-%m-%d %H:%M:%S"),
            ]
        )
        jumlah += 1
    logger.info("Export %s baris pendaftar", jumlah)
    return jumlah


def tulis_csv_dashboard(output, pendaftaran, peta_lokasi):
    writer = _writer(output)
    writer.writerow(HEADER_DASHBOARD)
    jumlah = 0
    for nomor, p in enumerate(pendaftaran, start=1):
        row = data_pendaftar(p, peta_lokasi=peta_lokasi)
        writer.writerow(
            [
                nomor,
                row["nim"],
                row["name"],
                row["study_program"],
                row["gender"],
                row["academic_year"],
                row["semester"],
                row["activity_name"],
                row["placement"],
                row["location"],
                row["phone"] or "",
                row["status"],
                row["registered_at"],
            ]
        )
        jumlah = nomor
    logger.info("Export %s baris dashboard", jumlah)
    return jumlah


def tulis_csv_logbook(output, pendaftaran):
    writer = _writer(output)
    writer.writerow(HEADER_LOGBOOK)
    jumlah = 0
    for p in pendaftaran:
        for entry in p.logbook_entries.all():
            persentase, label = kelengkapan(entry)
            writer.writerow(
                [
                    p.mahasiswa.nim,
                    p.mahasiswa.nama_lengkap or "Unknown",
                    p.mahasiswa.nama_prodi,
                    p.tahun_akademik,
                    entry.minggu if entry.minggu is not None else "",
                    entry.tgl_kegiatan.isoformat() if entry.tgl_kegiatan else "",
                    _teks(bersihkan_html(entry.nama_kegiatan)),
                    _teks(bersihkan_html(entry.tujuan_kegiatan)),
                    _teks(bersihkan_html(entry.catatan)),
                    _teks(bersihkan_html(entry.kesimpulan)),
                    label,
                    f"{persentase}%",
                ]
            )
            jumlah += 1
    logger.info("Export %s baris logbook", jumlah)
    return jumlah
