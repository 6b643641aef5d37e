from django.contrib import admin
from django.db.models import Count
from django.utils import timezone

from .models import LokasiPenempatan, Mahasiswa, PendaftaranMBKM, ProgramStudi
from . import status as status_rules

# cache dashboard ada di app portal; update() massal tidak memicu signal
from portal.cache_utils import invalidasi_cache


class PendaftaranInline(admin.TabularInline):
    model = PendaftaranMBKM
    extra = 0
    fields = ("jenis_kegiatan", "lokasi", "tahun_akademik", "semester", "nilai")
    readonly_fields = ("jenis_kegiatan", "lokasi", "tahun_akademik", "semester", "nilai")
    can_delete = False
    show_change_link = True


class StatusPendaftaranFilter(admin.SimpleListFilter):
    title = "Status pendaftaran"
    parameter_name = "status_pendaftaran"

    def lookups(self, request, model_admin):
        return tuple(status_rules.STATUS_FILTER.items())

    def queryset(self, request, queryset):
        label = status_rules.STATUS_FILTER.get(self.value())
        if label:
            return queryset.filter(status_rules.q_status(label))
        return queryset


@admin.action(description="Setujui dengan nilai A (yang belum dinilai)")
def setujui_nilai_a(modeladmin, request, queryset):
    updated = queryset.exclude(status_rules.q_status(status_rules.SELESAI)).update(
        nilai="A",
        keputusan="DISETUJUI",
        disetujui_pada=timezone.now(),
    )
    invalidasi_cache()
    modeladmin.message_user(
        request,
        f"{updated} pendaftaran disetujui dengan nilai A."
    )


@admin.action(description="Verifikasi pembayaran")
def verifikasi_pembayaran(modeladmin, request, queryset):
    updated = queryset.exclude(bukti_bayar="").exclude(bukti_bayar__isnull=True).update(
        pembayaran_terverifikasi=True,
        pembayaran_diverifikasi_pada=timezone.now(),
    )
    invalidasi_cache()
    modeladmin.message_user(
        request,
        f"{updated} pembayaran ditandai terverifikasi."
    )


@admin.register(ProgramStudi)
class ProgramStudiAdmin(admin.ModelAdmin):
    list_display = ("nama_prodi", "aktif", "jumlah_mahasiswa")
    list_filter = ("aktif",)
    search_fields = ("nama_prodi",)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_jumlah=Count("mahasiswa"))

    def jumlah_mahasiswa(self, obj):
        return obj._jumlah
    jumlah_mahasiswa.short_description = "Jml. Mahasiswa"


@admin.register(LokasiPenempatan)
class LokasiPenempatanAdmin(admin.ModelAdmin):
    list_display = ("penempatan", "kota")
    list_filter = ("kota",)
    search_fields = ("penempatan", "kota")


@admin.register(Mahasiswa)
class MahasiswaAdmin(admin.ModelAdmin):
    inlines = [PendaftaranInline]

    list_display = ("nama_lengkap", "nim", "jenis_kelamin", "prodi", "email", "no_hp")
    search_fields = ("nama_lengkap", "nim", "email")
    list_filter = ("jenis_kelamin", "prodi")


@admin.register(PendaftaranMBKM)
class PendaftaranMBKMAdmin(admin.ModelAdmin):
    list_display = (
        "mahasiswa",
        "jenis_kegiatan",
        "lokasi",
        "tahun_akademik",
        "semester",
        "status",
        "nilai",
        "aktif",
        "dibuat_pada",
    )
    list_filter = (
        StatusPendaftaranFilter,
        "jenis_kegiatan",
        "tahun_akademik",
        "semester",
        "aktif",
        "mahasiswa__prodi",
    )
    search_fields = ("mahasiswa__nim", "mahasiswa__nama_lengkap", "lokasi")
    autocomplete_fields = ("mahasiswa",)
    date_hierarchy = "dibuat_pada"
    readonly_fields = ("diupdate_pada",)

    actions = [setujui_nilai_a, verifikasi_pembayaran]

    def status(self, obj):
        return obj.status_pendaftaran
    status.short_description = "Status"
