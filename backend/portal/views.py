from .views_auth import portal_logout, after_login
from .views_dashboard import (
    dashboard,
    dashboard_by_status,
    dashboard_activity_summary,
    dashboard_export,
)
from .views_pendaftar import (
    pendaftar_list,
    pendaftar_detail,
    pendaftar_logbooks,
    pendaftar_logbook_detail,
    pendaftar_laporan,
    pendaftar_hapus_laporan,
    pendaftar_setujui,
    pendaftar_tolak,
    pendaftar_aktifkan,
    pendaftar_nonaktifkan,
    pendaftar_verifikasi_pembayaran,
    pendaftar_tolak_pembayaran,
    pendaftar_hapus,
    pendaftar_export,
    pendaftar_cari,
    pendaftar_statistik,
    pendaftar_opsi_filter,
)
from .views_logbook import (
    logbook_index,
    logbook_mahasiswa,
    logbook_detail,
    logbook_export,
    logbook_statistik,
    logbook_pdf,
)

__all__ = [
    # Auth
    "portal_logout",
    "after_login",
    # Dashboard
    "dashboard",
    "dashboard_by_status",
    "dashboard_activity_summary",
    "dashboard_export",
    # Pendaftar
    "pendaftar_list",
    "pendaftar_detail",
    "pendaftar_logbooks",
    "pendaftar_logbook_detail",
    "pendaftar_laporan",
    "pendaftar_hapus_laporan",
    "pendaftar_setujui",
    "pendaftar_tolak",
    "pendaftar_aktifkan",
    "pendaftar_nonaktifkan",
    "pendaftar_verifikasi_pembayaran",
    "pendaftar_tolak_pembayaran",
    "pendaftar_hapus",
    "pendaftar_export",
    "pendaftar_cari",
    "pendaftar_statistik",
    "pendaftar_opsi_filter",
    # Logbook
    "logbook_index",
    "logbook_mahasiswa",
    "logbook_detail",
    "logbook_export",
    "logbook_statistik",
    "logbook_pdf",
]
