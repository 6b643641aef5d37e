# backend/logbook/models.py
from django.db import models
from django.utils import timezone
from django.utils.dateformat import format as format_tanggal

from masterdata.models import PendaftaranMBKM

from . import kelengkapan as rules


def rapikan_teks(value):
    """Trim lalu kapitalisasi huruf pertama; None tetap None."""
    if value is None:
        return None
    value = value.strip()
    return value[:1].upper() + value[1:]


class LogbookEntryQuerySet(models.QuerySet):
    def untuk_minggu(self, minggu):
        return self.filter(minggu=minggu)

    def antara(self, mulai, selesai):
        return self.filter(tgl_kegiatan__range=(mulai, selesai))

    def milik_nim(self, nim):
        return self.filter(pendaftaran__mahasiswa__nim=nim)

    def terbaru(self):
        return self.order_by("-minggu", "-tgl_kegiatan", "-id")


class LogbookEntry(models.Model):
    pendaftaran = models.ForeignKey(
        PendaftaranMBKM,
        on_delete=models.CASCADE,
        related_name="logbook_entries",
    )
    minggu = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Kosongkan untuk dihitung otomatis dari tanggal pendaftaran.",
    )
    tgl_kegiatan = models.DateField(null=True, blank=True)
    nama_kegiatan = models.TextField(null=True, blank=True)
    tujuan_kegiatan = models.TextField(null=True, blank=True)
    catatan = models.TextField(null=True, blank=True)
    kesimpulan = models.TextField(null=True, blank=True)

    dibuat_pada = models.DateTimeField(default=timezone.now)

    objects = LogbookEntryQuerySet.as_manager()

    class Meta:
        verbose_name = "Logbook"
        verbose_name_plural = "Logbook"
        ordering = ["-minggu", "-tgl_kegiatan", "-id"]

    def __str__(self) -> str:
        return f"{self.pendaftaran.mahasiswa.nim} - {self.nama_minggu} ({self.status_kelengkapan})"

    def save(self, *args, **kwargs):
        self.nama_kegiatan = rapikan_teks(self.nama_kegiatan)
        self.tujuan_kegiatan = rapikan_teks(self.tujuan_kegiatan)

        if self._state.adding and self.minggu is None and self.pendaftaran_id:
            self.minggu = rules.hitung_minggu(self.pendaftaran.dibuat_pada, self.tgl_kegiatan)

        super().save(*args, **kwargs)

    @property
    def persentase_kelengkapan(self) -> int:
        return rules.kelengkapan(self)[0]

    @property
    def status_kelengkapan(self) -> str:
        return rules.kelengkapan(self)[1]

    @property
    def warna_status(self) -> str:
        return rules.warna_kelengkapan(self.status_kelengkapan)

    @property
    def nama_minggu(self) -> str:
        return f"Week {self.minggu}" if self.minggu is not None else "Week -"

    @property
    def tanggal_kegiatan_format(self) -> str:
        tanggal = rules.sebagai_tanggal(self.tgl_kegiatan)
        return format_tanggal(tanggal, "d F Y") if tanggal else "-"

    @property
    def ringkasan_kegiatan(self) -> str:
        if not self.nama_kegiatan:
            return "No activity recorded"
        if len(self.nama_kegiatan) > 100:
            return self.nama_kegiatan[:100] + "..."
        return self.nama_kegiatan
