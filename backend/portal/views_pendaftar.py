import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from logbook.models import LogbookEntry

from .cache_utils import ingat, invalidasi_cache
from .export import nama_file_export, respons_csv, tulis_csv_pendaftar
from .filters import (
    ambil_paginasi,
    filter_pendaftaran,
    paginasi,
    pendaftaran_dasar,
    q_pencarian,
    query_tanpa_page,
)
from .forms import LaporanUploadForm, PenolakanForm, PersetujuanForm
from .statistik import statistik_logbook, statistik_pendaftaran
from .transform import data_laporan, data_logbook, data_pendaftar, opsi_filter_pendaftar
from .views_auth import _require_admin

logger = logging.getLogger(__name__)

FILTER_PENDAFTAR = ("search", "status", "activity_type", "academic_year", "semester", "prodi")
MAKS_HASIL_CARI = 10


# =========================
# Helper
# =========================

def _params_pendaftar(request):
    return {nama: request.GET.get(nama, "").strip() for nama in FILTER_PENDAFTAR}


def _pendaftar_terfilter(params):
    return filter_pendaftaran(
        pendaftaran_dasar(), params, termasuk_lokasi_di_pencarian=False
    )


def _get_pendaftaran(pk):
    return get_object_or_404(pendaftaran_dasar(), pk=pk)


def _logbooks(pendaftaran):
    return pendaftaran.logbook_entries.order_by("-minggu", "-tgl_kegiatan", "-id")


def _pesan_error_form(request, form):
    for errors in form.errors.values():
        for error in errors:
            messages.error(request, error)


def _ambil_ids(request):
    ids = []
    for value in request.GET.getlist("ids"):
        for bagian in value.split(","):
            bagian = bagian.strip()
            if bagian.isdigit():
                ids.append(int(bagian))
    return ids


# =========================
# Daftar & detail
# =========================

@login_required
def pendaftar_list(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_pendaftar(request)
    qs = _pendaftar_terfilter(params)
    statistik = ingat("pendaftar_statistik", params, lambda: statistik_pendaftaran(qs))

    page, per_page = ambil_paginasi(request.GET)
    halaman, pagination = paginasi(qs, page, per_page)

    context = {
        "rows": [data_pendaftar(p) for p in halaman],
        "pagination": pagination,
        "statistik": statistik,
        "filters": params,
        "query_tanpa_page": query_tanpa_page(params),
        "opsi": opsi_filter_pendaftar(),
    }
    return render(request, "portal/pendaftar_list.html", context)


@login_required
def pendaftar_detail(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    logbooks = list(_logbooks(pendaftaran))

    context = {
        "pendaftaran": pendaftaran,
        "detail": data_pendaftar(pendaftaran, detail=True),
        "logbooks": [data_logbook(entry) for entry in logbooks],
        "statistik_logbook": statistik_logbook(logbooks),
        "form_setujui": PersetujuanForm(),
        "form_tolak": PenolakanForm(),
    }
    return render(request, "portal/pendaftar_detail.html", context)


@login_required
def pendaftar_logbooks(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    logbooks = list(_logbooks(pendaftaran))
    statistik = statistik_logbook(logbooks)
    statistik["latest_entry"] = (
        statistik["latest_entry"].isoformat() if statistik["latest_entry"] else None
    )
    return JsonResponse(
        {
            "registration": data_pendaftar(pendaftaran),
            "data": [data_logbook(entry) for entry in logbooks],
            "statistics": statistik,
        }
    )


@login_required
def pendaftar_logbook_detail(request, pk: int, logbook_id: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    entry = get_object_or_404(LogbookEntry, pk=logbook_id, pendaftaran=pendaftaran)
    return JsonResponse(
        {"registration": data_pendaftar(pendaftaran), "data": data_logbook(entry)}
    )


# =========================
# Laporan akhir
# =========================

@login_required
def pendaftar_laporan(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)

    if request.method == "POST":
        form = LaporanUploadForm(request.POST, request.FILES)
        if form.is_valid():
            pendaftaran.simpan_laporan(
                file_laporan=form.cleaned_data["laporan"],
                video_url=form.cleaned_data.get("video_url") or None,
            )
            invalidasi_cache()
            messages.success(request, "Laporan berhasil diunggah.")
        else:
            _pesan_error_form(request, form)
        return redirect("portal:pendaftar_laporan", pk=pendaftaran.pk)

    context = {
        "pendaftaran": pendaftaran,
        "laporan": data_laporan(pendaftaran),
        "form": LaporanUploadForm(initial={"video_url": pendaftaran.video_url}),
    }
    return render(request, "portal/pendaftar_laporan.html", context)


@login_required
@require_POST
def pendaftar_hapus_laporan(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    if pendaftaran.hapus_laporan():
        invalidasi_cache()
        messages.success(request, "Laporan berhasil dihapus.")
    else:
        messages.error(request, "Pendaftar ini belum mengunggah laporan.")
    return redirect("portal:pendaftar_laporan", pk=pendaftaran.pk)


# =========================
# Aksi admin
# =========================

@login_required
@require_POST
def pendaftar_setujui(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    form = PersetujuanForm(request.POST)
    if form.is_valid():
        pendaftaran.setujui(form.cleaned_data["nilai"])
        invalidasi_cache()
        messages.success(
            request,
            f"Pendaftaran {pendaftaran.mahasiswa.nama_lengkap} disetujui dengan nilai {pendaftaran.nilai}.",
        )
    else:
        _pesan_error_form(request, form)
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_tolak(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    form = PenolakanForm(request.POST)
    if form.is_valid():
        pendaftaran.tolak(form.cleaned_data["alasan"])
        invalidasi_cache()
        messages.success(request, "Pendaftaran berhasil ditolak.")
    else:
        _pesan_error_form(request, form)
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_aktifkan(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    pendaftaran.set_aktif(True)
    invalidasi_cache()
    messages.success(request, "Pendaftaran diaktifkan.")
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_nonaktifkan(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    pendaftaran.set_aktif(False)
    invalidasi_cache()
    messages.success(request, "Pendaftaran dinonaktifkan.")
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_verifikasi_pembayaran(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    if not pendaftaran.bukti_bayar:
        messages.error(request, "Bukti pembayaran belum diunggah.")
        return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)

    pendaftaran.verifikasi_pembayaran()
    invalidasi_cache()
    messages.success(request, "Pembayaran berhasil diverifikasi.")
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_tolak_pembayaran(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    form = PenolakanForm(request.POST)
    if form.is_valid():
        pendaftaran.tolak_pembayaran(form.cleaned_data["alasan"])
        invalidasi_cache()
        messages.success(request, "Bukti pembayaran ditolak.")
    else:
        _pesan_error_form(request, form)
    return redirect("portal:pendaftar_detail", pk=pendaftaran.pk)


@login_required
@require_POST
def pendaftar_hapus(request, pk: int):
    _, error = _require_admin(request)
    if error:
        return error

    pendaftaran = _get_pendaftaran(pk)
    nim = pendaftaran.mahasiswa.nim
    pendaftaran.delete()
    invalidasi_cache()
    logger.info("Pendaftaran %s (NIM %s) dihapus", pk, nim)
    messages.success(request, f"Pendaftaran NIM {nim} berhasil dihapus.")
    return redirect("portal:pendaftar_list")


# =========================
# Export & JSON
# =========================

@login_required
def pendaftar_export(request):
    _, error = _require_admin(request)
    if error:
        return error

    qs = _pendaftar_terfilter(_params_pendaftar(request))
    ids = _ambil_ids(request)
    if ids:
        qs = qs.filter(pk__in=ids)

    response = respons_csv(nama_file_export("mbkm_registrants"))
    tulis_csv_pendaftar(response, qs)
    return response


@login_required
def pendaftar_cari(request):
    _, error = _require_admin(request)
    if error:
        return error

    query = request.GET.get("q", "").strip()
    if not query:
        return JsonResponse({"data": []})

    qs = pendaftaran_dasar().filter(q_pencarian(query, termasuk_lokasi=False))
    data = [
        {
            "id": p.pk,
            "nim": p.mahasiswa.nim,
            "name": p.mahasiswa.nama_lengkap,
            "status": p.status_pendaftaran,
        }
        for p in qs[:MAKS_HASIL_CARI]
    ]
    return JsonResponse({"data": data})


@login_required
def pendaftar_statistik(request):
    _, error = _require_admin(request)
    if error:
        return error

    params = _params_pendaftar(request)
    qs = _pendaftar_terfilter(params)
    statistik = ingat("pendaftar_statistik", params, lambda: statistik_pendaftaran(qs))
    return JsonResponse(statistik)


@login_required
def pendaftar_opsi_filter(request):
    _, error = _require_admin(request)
    if error:
        return error
    return JsonResponse(opsi_filter_pendaftar())

