# backend/portal/filters.py
from urllib.parse import urlencode

from django.conf import settings
from django.core.paginator import Paginator
from django.db.models import Q

from masterdata.models import PendaftaranMBKM
from masterdata.status import STATUS_FILTER, q_status

SEMUA = "all"


def ambil_param(params, nama, default=SEMUA):
    value = params.get(nama, default)
    if value is None:
        return default
    return value.strip() if isinstance(value, str) else value


def ambil_angka(params, nama, default, minimum=1, maksimum=None):
    try:
        value = int(params.get(nama, default))
    except (TypeError, ValueError):
        value = default
    value = max(value, minimum)
    if maksimum is not None:
        value = min(value, maksimum)
    return value


def ambil_paginasi(params):
    default_per_page = getattr(settings, "MBKM_PER_PAGE", 15)
    return (
        ambil_angka(params, "page", 1),
        ambil_angka(params, "per_page", default_per_page, maksimum=100),
    )


def q_pencarian(search, termasuk_lokasi=True):
    q = Q(mahasiswa__nim__icontains=search) | Q(mahasiswa__nama_lengkap__icontains=search)
    if termasuk_lokasi:
        q |= Q(lokasi__icontains=search)
    return q


def filter_pendaftaran(qs, params, termasuk_lokasi_di_pencarian=True):
    """
    Terapkan filter query string ke queryset PendaftaranMBKM.
    Nilai "all" atau kosong berarti filter tidak dipakai.
    """
    search = ambil_param(params, "search", "")
    status = ambil_param(params, "status")
    jenis = ambil_param(params, "activity_type")
    tahun = ambil_param(params, "academic_year")
    semester = ambil_param(params, "semester")
    lokasi = ambil_param(params, "placement")
    prodi = ambil_param(params, "prodi")

    if search:
        qs = qs.filter(q_pencarian(search, termasuk_lokasi_di_pencarian))
    if status in STATUS_FILTER:
        qs = qs.filter(q_status(STATUS_FILTER[status]))
    if jenis not in (SEMUA, ""):
        qs = qs.filter(jenis_kegiatan=jenis)
    if tahun not in (SEMUA, ""):
        qs = qs.filter(tahun_akademik=tahun)
    if semester not in (SEMUA, ""):
        qs = qs.filter(semester=semester)
    if lokasi not in (SEMUA, ""):
        qs = qs.filter(lokasi=lokasi)
    if prodi not in (SEMUA, ""):
        try:
            qs = qs.filter(mahasiswa__prodi_id=int(prodi))
        except ValueError:
            qs = qs.none()
    return qs


def pendaftaran_dasar():
    return PendaftaranMBKM.objects.select_related("mahasiswa", "mahasiswa__prodi")


def paginasi(items, page, per_page):
    """Kembalikan (item halaman ini, info paginasi) dengan Paginator Django."""
    paginator = Paginator(items, per_page)
    halaman = paginator.get_page(page)
    total = paginator.count
    info = {
        "current_page": halaman.number,
        "last_page": paginator.num_pages,
        "per_page": per_page,
        "total": total,
        "from": halaman.start_index() if total else None,
        "to": halaman.end_index() if total else None,
    }
    return list(halaman.object_list), info


def query_tanpa_page(params):
    """Query string filter aktif (tanpa page/per_page) untuk link paginasi."""
    aktif = [(nama, value) for nama, value in params.items() if value not in (SEMUA, "")]
    return urlencode(aktif) + "&" if aktif else ""
