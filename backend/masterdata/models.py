# backend/masterdata/models.py
import logging
import os

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from . import status as status_rules

logger = logging.getLogger(__name__)

NAMA_PRODI_TIDAK_DIKENAL = "Program Studi Tidak Dikenal"
KOTA_LAINNYA = "Lainnya"

NILAI_HURUF_CHOICES = [
    ("A", "A"),
    ("A-", "A-"),
    ("B+", "B+"),
    ("B", "B"),
    ("B-", "B-"),
    ("C+", "C+"),
    ("C", "C"),
    ("C-", "C-"),
    ("D+", "D+"),
    ("D", "D"),
    ("E", "E"),
]


def validate_laporan_file(file_obj):
    ext = os.path.splitext(file_obj.name)[1].lower()
    allowed_ext = [".pdf", ".doc", ".docx"]
    if ext not in allowed_ext:
        raise ValidationError("File laporan harus berformat PDF, DOC, atau DOCX.")

    max_size_mb = 10
    if file_obj.size > max_size_mb * 1024 * 1024:
        raise ValidationError(f"Ukuran file maksimal {max_size_mb} MB.")


class ProgramStudi(models.Model):
    nama_prodi = models.CharField(max_length=150)
    aktif = models.BooleanField(
        default=True,
        help_text="Hanya prodi aktif yang muncul di pilihan filter.",
    )

    class Meta:
        verbose_name = "Program Studi"
        verbose_name_plural = "Program Studi"
        ordering = ["nama_prodi"]

    def __str__(self):
        return self.nama_prodi


class LokasiPenempatan(models.Model):
    """Tabel referensi penempatan (teks bebas di pendaftaran) -> kota."""

    penempatan = models.CharField(max_length=255, unique=True)
    kota = models.CharField(max_length=100)

    class Meta:
        verbose_name = "Lokasi Penempatan"
        verbose_name_plural = "Lokasi Penempatan"
        ordering = ["penempatan"]

    def __str__(self):
        return f"{self.penempatan} ({self.kota})"

    @classmethod
    def peta(cls) -> dict:
        return {
            penempatan.strip().lower(): kota
            for penempatan, kota in cls.objects.values_list("penempatan", "kota")
        }

    @staticmethod
    def kota_dari(penempatan, peta: dict) -> str:
        if not penempatan:
            return KOTA_LAINNYA
        return peta.get(penempatan.strip().lower(), KOTA_LAINNYA)


class Mahasiswa(models.Model):
    JENIS_KELAMIN_CHOICES = (
        ("L", "Laki-laki"),
        ("P", "Perempuan"),
    )

    nim = models.CharField("NIM", max_length=20, unique=True)
    nama_lengkap = models.CharField(max_length=150)
    jenis_kelamin = models.CharField(
        max_length=1,
        choices=JENIS_KELAMIN_CHOICES,
        blank=True,
    )
    prodi = models.ForeignKey(
        ProgramStudi,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="mahasiswa",
    )
    email = models.EmailField(blank=True, null=True)
    no_hp = models.CharField("No. HP/WA", max_length=20, blank=True, null=True)

    class Meta:
        verbose_name = "Mahasiswa"
        verbose_name_plural = "Mahasiswa"
        ordering = ["nim"]

    def __str__(self):
        return f"{self.nama_lengkap} ({self.nim})"

    @property
    def nama_prodi(self) -> str:
        return self.prodi.nama_prodi if self.prodi else NAMA_PRODI_TIDAK_DIKENAL


class PendaftaranMBKM(models.Model):
    JENIS_KEGIATAN_CHOICES = [
        ("magang", "Internship/Work Practice"),
        ("penelitian", "Research"),
        ("pertukaran", "Student Exchange"),
        ("kewirausahaan", "Entrepreneurship"),
        ("mengajar", "Teaching in Schools"),
        ("kkn", "Thematic Community Service"),
    ]

    SEMESTER_CHOICES = [
        ("Ganjil", "Ganjil"),
        ("Genap", "Genap"),
    ]

    KEPUTUSAN_CHOICES = [
        ("", "Belum diputuskan"),
        ("DISETUJUI", "Disetujui"),
        ("DITOLAK", "Ditolak"),
    ]

    mahasiswa = models.ForeignKey(
        Mahasiswa,
        on_delete=models.CASCADE,
        related_name="pendaftaran_mbkm",
    )
    jenis_kegiatan = models.CharField(max_length=20, choices=JENIS_KEGIATAN_CHOICES)
    lokasi = models.CharField(
        "Penempatan",
        max_length=255,
        blank=True,
        help_text="Nama instansi/mitra tempat kegiatan.",
    )
    tahun_akademik = models.CharField(max_length=20, help_text="Misal: 2024/2025")
    semester = models.CharField(max_length=10, choices=SEMESTER_CHOICES)

    bukti_bayar = models.FileField(upload_to="bukti_bayar/", null=True, blank=True)
    laporan = models.FileField(
        upload_to="reports/",
        null=True,
        blank=True,
        validators=[validate_laporan_file],
    )
    video_url = models.URLField(blank=True, null=True)
    nilai = models.CharField(max_length=5, null=True, blank=True)

    keputusan = models.CharField(
        max_length=10,
        choices=KEPUTUSAN_CHOICES,
        blank=True,
        default="",
    )
    alasan_penolakan = models.TextField(blank=True)
    aktif = models.BooleanField(default=True)

    pembayaran_terverifikasi = models.BooleanField(default=False)
    pembayaran_diverifikasi_pada = models.DateTimeField(null=True, blank=True)
    alasan_penolakan_pembayaran = models.TextField(blank=True)

    disetujui_pada = models.DateTimeField(null=True, blank=True)
    ditolak_pada = models.DateTimeField(null=True, blank=True)
    dibuat_pada = models.DateTimeField(default=timezone.now)
    diupdate_pada = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Pendaftaran MBKM"
        verbose_name_plural = "Pendaftaran MBKM"
        ordering = ["-dibuat_pada", "-id"]

    def __str__(self):
        return f"{self.mahasiswa.nim} - {self.get_jenis_kegiatan_display()} ({self.tahun_akademik})"

    def save(self, *args, **kwargs):
        self.lokasi = (self.lokasi or "").strip()
        self.tahun_akademik = (self.tahun_akademik or "").strip()
        super().save(*args, **kwargs)

    # --- status turunan ---

    @property
    def status_pendaftaran(self) -> str:
        return status_rules.status_pendaftaran(self)

    @property
    def warna_status(self) -> str:
        return status_rules.warna_status(self.status_pendaftaran)

    @property
    def status_pembayaran(self) -> str:
        return status_rules.status_pembayaran(self)

    @property
    def status_laporan(self) -> str:
        return status_rules.status_laporan(self)

    @property
    def status_penilaian(self) -> str:
        return status_rules.status_penilaian(self)

    @property
    def nama_jenis_kegiatan(self) -> str:
        mapping = dict(self.JENIS_KEGIATAN_CHOICES)
        return mapping.get((self.jenis_kegiatan or "").lower(), self.jenis_kegiatan)

    # --- aksi admin ---

    def setujui(self, nilai="A"):
        self.nilai = nilai
        self.keputusan = "DISETUJUI"
        self.disetujui_pada = timezone.now()
        self.save()
        logger.info("Pendaftaran %s disetujui dengan nilai %s", self.pk, nilai)

    def tolak(self, alasan):
        self.keputusan = "DITOLAK"
        self.alasan_penolakan = alasan
        self.ditolak_pada = timezone.now()
        self.save()
        logger.info("Pendaftaran %s ditolak", self.pk)

    def set_aktif(self, aktif):
        self.aktif = aktif
        self.save()
        logger.info("Pendaftaran %s %s", self.pk, "diaktifkan" if aktif else "dinonaktifkan")

    def verifikasi_pembayaran(self):
        self.pembayaran_terverifikasi = True
        self.pembayaran_diverifikasi_pada = timezone.now()
        self.save()
        logger.info("Pembayaran pendaftaran %s diverifikasi", self.pk)

    def tolak_pembayaran(self, alasan):
        bukti_lama = self.bukti_bayar.name if self.bukti_bayar else None
        storage = self.bukti_bayar.storage
        self.pembayaran_terverifikasi = False
        self.alasan_penolakan_pembayaran = alasan
        self.bukti_bayar = None
        self.save()
        logger.info("Pembayaran pendaftaran %s ditolak", self.pk)
        if bukti_lama:
            hapus_file_tersimpan(storage, bukti_lama)

    def simpan_laporan(self, file_laporan=None, video_url=None):
        with transaction.atomic():
            laporan_lama = self.laporan.name if self.laporan else None
            if file_laporan is not None:
                self.laporan.save(file_laporan.name, file_laporan, save=False)
            if video_url:
                self.video_url = video_url
            self.save()
        if file_laporan is not None and laporan_lama and laporan_lama != self.laporan.name:
            hapus_file_tersimpan(self.laporan.storage, laporan_lama)
        logger.info("Laporan pendaftaran %s diunggah", self.pk)

    def hapus_laporan(self):
        if not self.laporan:
            return False
        laporan_lama = self.laporan.name
        storage = self.laporan.storage
        self.laporan = None
        self.video_url = None
        self.save()
        hapus_file_tersimpan(storage, laporan_lama)
        logger.info("Laporan pendaftaran %s dihapus", self.pk)
        return True


def _hapus_file(storage, name):
    try:
        storage.delete(name)
    except OSError as exc:
        logger.warning("Gagal menghapus file %s: %s", name, exc)


def hapus_file_tersimpan(storage, name):
    """Hapus file dari storage setelah transaksi yang sedang berjalan di-commit."""
    transaction.on_commit(lambda: _hapus_file(storage, name))
