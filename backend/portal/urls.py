# backend/portal/urls.py
from django.conf import settings
from django.conf.urls.static import static
from django.contrib.auth import views as auth_views
from django.urls import path

from . import views

app_name = "portal"

urlpatterns = [
    # Auth
    path(
        "login/",
        auth_views.LoginView.as_view(template_name="portal/login.html"),
        name="login",
    ),
    path("logout/", views.portal_logout, name="logout"),
    path("after-login/", views.after_login, name="after_login"),

    # Dashboard
    path("", views.dashboard, name="dashboard"),
    path(
        "dashboard/status/<str:status>/",
        views.dashboard_by_status,
        name="dashboard_by_status",
    ),
    path(
        "dashboard/ringkasan-kegiatan/",
        views.dashboard_activity_summary,
        name="dashboard_activity_summary",
    ),
    path("dashboard/export/", views.dashboard_export, name="dashboard_export"),

    # Pendaftar
    path("pendaftar/", views.pendaftar_list, name="pendaftar_list"),
    path("pendaftar/export/", views.pendaftar_export, name="pendaftar_export"),
    path("pendaftar/cari/", views.pendaftar_cari, name="pendaftar_cari"),
    path(
        "pendaftar/statistik/",
        views.pendaftar_statistik,
        name="pendaftar_statistik",
    ),
    path(
        "pendaftar/opsi-filter/",
        views.pendaftar_opsi_filter,
        name="pendaftar_opsi_filter",
    ),
    path("pendaftar/<int:pk>/", views.pendaftar_detail, name="pendaftar_detail"),
    path(
        "pendaftar/<int:pk>/logbook/",
        views.pendaftar_logbooks,
        name="pendaftar_logbooks",
    ),
    path(
        "pendaftar/<int:pk>/logbook/<int:logbook_id>/",
        views.pendaftar_logbook_detail,
        name="pendaftar_logbook_detail",
    ),
    path(
        "pendaftar/<int:pk>/laporan/",
        views.pendaftar_laporan,
        name="pendaftar_laporan",
    ),
    path(
        "pendaftar/<int:pk>/laporan/hapus/",
        views.pendaftar_hapus_laporan,
        name="pendaftar_hapus_laporan",
    ),
    path(
        "pendaftar/<int:pk>/setujui/",
        views.pendaftar_setujui,
        name="pendaftar_setujui",
    ),
    path("pendaftar/<int:pk>/tolak/", views.pendaftar_tolak, name="pendaftar_tolak"),
    path(
        "pendaftar/<int:pk>/aktifkan/",
        views.pendaftar_aktifkan,
        name="pendaftar_aktifkan",
    ),
    path(
        "pendaftar/<int:pk>/nonaktifkan/",
        views.pendaftar_nonaktifkan,
        name="pendaftar_nonaktifkan",
    ),
    path(
        "pendaftar/<int:pk>/pembayaran/verifikasi/",
        views.pendaftar_verifikasi_pembayaran,
        name="pendaftar_verifikasi_pembayaran",
    ),
    path(
        "pendaftar/<int:pk>/pembayaran/tolak/",
        views.pendaftar_tolak_pembayaran,
        name="pendaftar_tolak_pembayaran",
    ),
    path("pendaftar/<int:pk>/hapus/", views.pendaftar_hapus, name="pendaftar_hapus"),

    # Logbook
    path("logbook/", views.logbook_index, name="logbook_index"),
    path("logbook/export/", views.logbook_export, name="logbook_export"),
    path("logbook/statistik/", views.logbook_statistik, name="logbook_statistik"),
    path(
        "logbook/mahasiswa/<int:pk>/",
        views.logbook_mahasiswa,
        name="logbook_mahasiswa",
    ),
    path(
        "logbook/mahasiswa/<int:pk>/pdf/",
        views.logbook_pdf,
        name="logbook_pdf",
    ),
    path("logbook/entri/<int:pk>/", views.logbook_detail, name="logbook_detail"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
