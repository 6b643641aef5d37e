from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, render

from logbook.kelengkapan import FILTER_KELENGKAPAN, cocok_filter_kelengkapan
from logbook.models import LogbookEntry

from .cache_utils import ingat
from .export import nama_file_export, respons_csv, tulis_csv_logbook
from .filters import ambil_paginasi, filter_pendaftaran, paginasi, pendaftaran_dasar, query_tanpa_page
from .pdf_utils import render_to_pdf
from .statistik import bulatkan, statistik_logbook
from .transform import data_logbook, data_pendaftar, opsi_kelengkapan, opsi_prodi, opsi_tahun_akademik
from .views_auth import _require_admin

FILTER_LOGBOOK = ("search", "academic_year", "prodi")
JUMLAH_ENTRI_TERBARU = 3


# =========================
# Helper
# =========================

def _params_logbook(request):
    return {nama: request.GET.get(nama, "").strip() for nama in FILTER_LOGBOOK}


def _pendaftaran_terfilter(params):
    return filter_pendaftaran(
        pendaftaran_dasar(), params, termasuk_lokasi_di_pencarian=False
    )


def _entri_dari(pendaftaran_qs):
    return LogbookEntry.objects.filter(pendaftaran__in=pendaftaran_qs.values("pk"))


def _pendaftaran_berlogbook(pendaftaran_qs):
    return (
        pendaftaran_qs.annotate(jumlah_logbook=Count("logbook_entries"))
        .filter(jumlah_logbook__gt=0)
        .order_by("-dibuat_pada", "-id")
        .prefetch_related("logbook_entries")
    )


def _statistik_global(params, pendaftaran_qs):
    return ingat(
        "logbook_statistik_global",
        params,
        lambda: statistik_logbook(_entri_dari(pendaftaran_qs)),
    )


def _ringkasan_logbook(pendaftaran_qs):
    entries = list(_entri_dari(pendaftaran_qs))
    statistik = statistik_logbook(entries)
    jumlah_mahasiswa = len({e.pendaftaran_id for e in entries})
    latest = statistik["latest_entry"]
    return {
        "total_logbooks": statistik["total_entries"],
        "total_students": jumlah_mahasiswa,
        "average_entries_per_student": bulatkan(statistik["total_entries"], jumlah_mahasiswa, 1),
        "completed_logbooks": statistik["completed_entries"],
        "completion_rate": statistik["completion_rate"],
        "latest_entry_date": latest.isoformat() if latest else None,
        "total_weeks_covered": statistik["weeks_covered"],
    }


# =========================
# Logbook
# =========================

@login_required
def logbook_index(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_logbook(request)
    pendaftaran_qs = _pendaftaran_terfilter(params)
    qs = _pendaftaran_berlogbook(pendaftaran_qs)

    page, per_page = ambil_paginasi(request.GET)
    halaman, pagination = paginasi(qs, page, per_page)

    rows = []
    for p in halaman:
        entries = list(p.logbook_entries.all())
        rows.append(
            {
                "registration": data_pendaftar(p),
                "statistics": statistik_logbook(entries),
                "recent": [
                    data_logbook(entry, tanpa_html=True)
                    for entry in entries[:JUMLAH_ENTRI_TERBARU]
                ],
            }
        )

    context = {
        "rows": rows,
        "pagination": pagination,
        "statistik": _statistik_global(params, pendaftaran_qs),
        "filters": params,
        "query_tanpa_page": query_tanpa_page(params),
        "opsi": {
            "academic_years": opsi_tahun_akademik("Semua Tahun Akademik"),
            "study_programs": opsi_prodi(),
        },
    }
    return render(request, "portal/logbook_index.html", context)


@login_required
def logbook_mahasiswa(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = get_object_or_404(pendaftaran_dasar(), pk=pk)
    entries = list(pendaftaran.logbook_entries.order_by("-minggu", "-tgl_kegiatan", "-id"))

    kunci = request.GET.get("kelengkapan", "").strip()
    if kunci in FILTER_KELENGKAPAN:
        tampil = [e for e in entries if cocok_filter_kelengkapan(e.persentase_kelengkapan, kunci)]
    else:
        kunci = ""
        tampil = entries

    context = {
        "pendaftaran": pendaftaran,
        "registration": data_pendaftar(pendaftaran),
        "logbooks": [data_logbook(entry) for entry in tampil],
        "statistik": statistik_logbook(entries),
        "kelengkapan": kunci,
        "opsi_kelengkapan": opsi_kelengkapan(),
    }
    return render(request, "portal/logbook_mahasiswa.html", context)


@login_required
def logbook_detail(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    entry = get_object_or_404(
        LogbookEntry.objects.select_related(
            "pendaftaran", "pendaftaran__mahasiswa", "pendaftaran__mahasiswa__prodi"
        ),
        pk=pk,
    )
    context = {
        "entry": entry,
        "logbook": data_logbook(entry),
        "registration": data_pendaftar(entry.pendaftaran),
    }
    return render(request, "portal/logbook_detail.html", context)


@login_required
def logbook_export(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_logbook(request)
    params["search"] = ""
    qs = (
        _pendaftaran_terfilter(params)
        .filter(logbook_entries__isnull=False)
        .distinct()
        .order_by("mahasiswa__nim", "pk")
        .prefetch_related("logbook_entries")
    )

    response = respons_csv(nama_file_export("mbkm_logbooks"))
    tulis_csv_logbook(response, qs)
    return response


@login_required
def logbook_statistik(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_logbook(request)
    pendaftaran_qs = _pendaftaran_terfilter(params)
    ringkasan = ingat(
        "logbook_ringkasan", params, lambda: _ringkasan_logbook(pendaftaran_qs)
    )
    return JsonResponse(ringkasan)


@login_required
def logbook_pdf(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = get_object_or_404(pendaftaran_dasar(), pk=pk)
    entries = list(pendaftaran.logbook_entries.order_by("minggu", "tgl_kegiatan", "id"))

    context = {
        "pendaftaran": pendaftaran,
        "registration": data_pendaftar(pendaftaran),
        "logbooks": [data_logbook(entry, tanpa_html=True) for entry in entries],
        "statistik": statistik_logbook(entries),
    }
    response = render_to_pdf("portal/logbook_rekap_pdf.html", context)
    if response.status_code == 200:
        response["Content-Disposition"] = (
            f'inline; filename="logbook_{pendaftaran.mahasiswa.nim}.pdf"'
        )
    return response
