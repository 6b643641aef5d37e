from django.contrib.auth.decorators import login_required
from django.http import Http404, JsonResponse
from django.shortcuts import render

from masterdata import status as status_rules
from masterdata.models import LokasiPenempatan, PendaftaranMBKM

from .cache_utils import ingat
from .export import respons_csv, tulis_csv_dashboard
from .filters import ambil_paginasi, filter_pendaftaran, paginasi, pendaftaran_dasar, query_tanpa_page
from .statistik import ringkasan_jenis_kegiatan, statistik_pendaftaran
from .transform import data_pendaftar, opsi_penempatan, opsi_semester, opsi_tahun_akademik
from .views_auth import _require_admin

FILTER_DASHBOARD = ("search", "academic_year", "placement", "semester")


# =========================
# Helper
# =========================

def _params_dashboard(request):
    return {nama: request.GET.get(nama, "").strip() for nama in FILTER_DASHBOARD}


def _pendaftaran_dashboard(params):
    return filter_pendaftaran(pendaftaran_dasar(), params)


def _peta_lokasi():
    return ingat("peta_lokasi", None, LokasiPenempatan.peta)


def _ringkasan_kegiatan(qs):
    nama = dict(PendaftaranMBKM.JENIS_KEGIATAN_CHOICES)
    ringkasan = ringkasan_jenis_kegiatan(qs)
    for baris in ringkasan:
        baris["name"] = nama.get(baris["type"], baris["type"])
    return ringkasan


# =========================
# Dashboard
# =========================

@login_required
def dashboard(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_dashboard(request)
    qs = _pendaftaran_dashboard(params)

    statistik = ingat("dashboard_statistik", params, lambda: statistik_pendaftaran(qs))
    ringkasan = ingat("dashboard_ringkasan", params, lambda: _ringkasan_kegiatan(qs))

    page, per_page = ambil_paginasi(request.GET)
    halaman, pagination = paginasi(qs, page, per_page)
    peta = _peta_lokasi()

    context = {
        "rows": [data_pendaftar(p, peta_lokasi=peta) for p in halaman],
        "pagination": pagination,
        "statistik": statistik,
        "ringkasan_kegiatan": ringkasan,
        "filters": params,
        "query_tanpa_page": query_tanpa_page(params),
        "opsi": {
            "academic_years": opsi_tahun_akademik("Semua Tahun Akademik"),
            "placements": opsi_penempatan(),
            "semesters": opsi_semester(),
        },
    }
    return render(request, "portal/dashboard.html", context)


@login_required
def dashboard_by_status(request, status: str):
    _, error = _require_admin(request)
    if error:
        return error

    label = status_rules.STATUS_FILTER.get(status, status)
    if label not in status_rules.STATUS_PENDAFTARAN:
        raise Http404("Status tidak dikenal.")

    params = _params_dashboard(request)
    qs = _pendaftaran_dashboard(params).filter(status_rules.q_status(label))
    peta = _peta_lokasi()
    data = [data_pendaftar(p, peta_lokasi=peta) for p in qs]
    return JsonResponse({"status": label, "total": len(data), "data": data})


@login_required
def dashboard_activity_summary(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_dashboard(request)
    qs = _pendaftaran_dashboard(params)
    ringkasan = ingat("dashboard_ringkasan", params, lambda: _ringkasan_kegiatan(qs))
    return JsonResponse({"data": ringkasan})


@login_required
def dashboard_export(request):
    _, error = _require_admin(request)
    if error:
        return error

    qs = _pendaftaran_dashboard(_params_dashboard(request))
    response = respons_csv("data-mahasiswa-mbkm.csv")
    tulis_csv_dashboard(response, qs, _peta_lokasi())
    return response
