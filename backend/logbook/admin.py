from django.contrib import admin

from .kelengkapan import FILTER_KELENGKAPAN, cocok_filter_kelengkapan
from .models import LogbookEntry


class KelengkapanFilter(admin.SimpleListFilter):
    title = "Kelengkapan"
    parameter_name = "kelengkapan"

    def lookups(self, request, model_admin):
        return tuple(FILTER_KELENGKAPAN.items())

    def queryset(self, request, queryset):
        if self.value() not in FILTER_KELENGKAPAN:
            return queryset
        # kelengkapan dihitung di Python, bukan kolom database
        ids = [
            entry.pk
            for entry in queryset
            if cocok_filter_kelengkapan(entry.persentase_kelengkapan, self.value())
        ]
        return queryset.filter(pk__in=ids)


@admin.register(LogbookEntry)
class LogbookEntryAdmin(admin.ModelAdmin):
    list_display = (
        "pendaftaran",
        "minggu",
        "tgl_kegiatan",
        "ringkasan_kegiatan",
        "kelengkapan",
    )
    list_filter = (
        KelengkapanFilter,
        "minggu",
        "pendaftaran__tahun_akademik",
    )
    search_fields = (
        "pendaftaran__mahasiswa__nama_lengkap",
        "pendaftaran__mahasiswa__nim",
        "nama_kegiatan",
        "tujuan_kegiatan",
    )
    autocomplete_fields = ("pendaftaran",)
    date_hierarchy = "tgl_kegiatan"
    list_select_related = ("pendaftaran", "pendaftaran__mahasiswa")

    def kelengkapan(self, obj):
        return f"{obj.persentase_kelengkapan}% ({obj.status_kelengkapan})"
    kelengkapan.short_description = "Kelengkapan"
