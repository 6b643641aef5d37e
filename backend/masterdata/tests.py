# backend/masterdata/tests.py
import shutil
import tempfile
from types import SimpleNamespace

from django.core.exceptions import ValidationError
from django.core.files.base import ContentFile
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import transaction
from django.test import TestCase, override_settings

from logbook.models import LogbookEntry
from masterdata import status as status_rules
from masterdata.models import (
    KOTA_LAINNYA,
    NAMA_PRODI_TIDAK_DIKENAL,
    LokasiPenempatan,
    Mahasiswa,
    PendaftaranMBKM,
    ProgramStudi,
    validate_laporan_file,
)

TEMP_MEDIA = tempfile.mkdtemp()


def tearDownModule():
    shutil.rmtree(TEMP_MEDIA, ignore_errors=True)


def buat_pendaftaran(nim="2201001", **kwargs):
    mahasiswa, _ = Mahasiswa.objects.get_or_create(
        nim=nim, defaults={"nama_lengkap": f"Mahasiswa {nim}"}
    )
    data = {
        "mahasiswa": mahasiswa,
        "jenis_kegiatan": "magang",
        "lokasi": "PT Telkom Makassar",
        "tahun_akademik": "2024/2025",
        "semester": "Ganjil",
    }
    data.update(kwargs)
    return PendaftaranMBKM.objects.create(**data)


class KlasifikasiStatusTests(TestCase):
    def test_semua_kosong_menunggu_pembayaran(self):
        label = status_rules.tentukan_status()
        self.assertEqual(label, "Awaiting Payment")
        self.assertEqual(status_rules.warna_status(label), "danger")

    def test_bukti_bayar_saja_aktif(self):
        label = status_rules.tentukan_status(bukti_bayar="proof.png")
        self.assertEqual(label, "Active")
        self.assertEqual(status_rules.warna_status(label), "primary")

    def test_bukti_bayar_dan_laporan_menunggu_penilaian(self):
        label = status_rules.tentukan_status(bukti_bayar="proof.png", laporan="report.pdf")
        self.assertEqual(label, "Awaiting Assessment")
        self.assertEqual(status_rules.warna_status(label), "warning")

    def test_nilai_mengalahkan_field_lain(self):
        self.assertEqual(status_rules.tentukan_status(nilai="A"), "Completed")
        self.assertEqual(
            status_rules.tentukan_status(bukti_bayar=None, laporan=None, nilai="A"),
            "Completed",
        )
        self.assertEqual(status_rules.warna_status("Completed"), "success")

    def test_laporan_tanpa_bukti_bayar_tetap_menunggu_penilaian(self):
        self.assertEqual(status_rules.tentukan_status(laporan="report.pdf"), "Awaiting Assessment")

    def test_string_kosong_dianggap_tidak_ada(self):
        self.assertEqual(
            status_rules.tentukan_status(bukti_bayar="", laporan="", nilai=""),
            "Awaiting Payment",
        )

    def test_selalu_salah_satu_dari_empat_label(self):
        nilai_field = (None, "", "x")
        for bukti in nilai_field:
            for laporan in nilai_field:
                for nilai in nilai_field:
                    label = status_rules.tentukan_status(bukti, laporan, nilai)
                    self.assertIn(label, status_rules.STATUS_PENDAFTARAN)
                    # idempoten
                    self.assertEqual(label, status_rules.tentukan_status(bukti, laporan, nilai))

    def test_warna_label_tidak_dikenal(self):
        self.assertEqual(status_rules.warna_status("Unknown"), "secondary")

    def test_status_pendaftaran_dari_objek_apa_pun(self):
        obj = SimpleNamespace(bukti_bayar="proof.png", laporan=None, nilai=None)
        self.assertEqual(status_rules.status_pendaftaran(obj), "Active")
        self.assertEqual(status_rules.status_pembayaran(obj), "Paid")
        self.assertEqual(status_rules.status_laporan(obj), "Not Submitted")
        self.assertEqual(status_rules.status_penilaian(obj), "Not Assessed")
        self.assertEqual(status_rules.status_halaman_laporan(obj), "not_submitted")

    def test_peta_warna_tidak_bisa_diubah(self):
        with self.assertRaises(TypeError):
            status_rules.WARNA_STATUS["Completed"] = "dark"

    def test_q_status_label_tidak_dikenal(self):
        with self.assertRaises(ValueError):
            status_rules.q_status("Draft")


class FilterStatusOrmTests(TestCase):
    def setUp(self):
        kombinasi = [
            {},
            {"bukti_bayar": ""},
            {"bukti_bayar": "bukti_bayar/proof.png"},
            {"bukti_bayar": "bukti_bayar/proof.png", "laporan": ""},
            {"bukti_bayar": "bukti_bayar/proof.png", "laporan": "reports/report.pdf"},
            {"laporan": "reports/report.pdf"},
            {"bukti_bayar": "bukti_bayar/proof.png", "laporan": "reports/report.pdf", "nilai": "A"},
            {"nilai": "B+"},
            {"nilai": "", "laporan": "reports/report.pdf"},
            {"nilai": ""},
        ]
        for nomor, fields in enumerate(kombinasi):
            buat_pendaftaran(nim=f"2201{nomor:03d}", **fields)

    def test_filter_orm_sama_dengan_label_tampilan(self):
        semua = list(PendaftaranMBKM.objects.all())
        for label in status_rules.STATUS_PENDAFTARAN:
            dari_orm = set(
                PendaftaranMBKM.objects.filter(status_rules.q_status(label)).values_list("pk", flat=True)
            )
            dari_tampilan = {p.pk for p in semua if p.status_pendaftaran == label}
            self.assertEqual(dari_orm, dari_tampilan, label)

    def test_jumlah_per_status_sama_dengan_total(self):
        total = sum(
            PendaftaranMBKM.objects.filter(status_rules.q_status(label)).count()
            for label in status_rules.STATUS_PENDAFTARAN
        )
        self.assertEqual(total, PendaftaranMBKM.objects.count())


class ReferensiTests(TestCase):
    def test_nama_prodi_tidak_dikenal(self):
        mhs = Mahasiswa.objects.create(nim="2201999", nama_lengkap="Tanpa Prodi")
        self.assertEqual(mhs.nama_prodi, NAMA_PRODI_TIDAK_DIKENAL)

        prodi = ProgramStudi.objects.create(nama_prodi="Statistika")
        mhs.prodi = prodi
        self.assertEqual(mhs.nama_prodi, "Statistika")

    def test_kota_dari_penempatan(self):
        LokasiPenempatan.objects.create(penempatan="PT Telkom Makassar", kota="Makassar")
        peta = LokasiPenempatan.peta()
        self.assertEqual(LokasiPenempatan.kota_dari("  pt telkom makassar ", peta), "Makassar")
        self.assertEqual(LokasiPenempatan.kota_dari("CV Lain", peta), KOTA_LAINNYA)
        self.assertEqual(LokasiPenempatan.kota_dari("", peta), KOTA_LAINNYA)

    def test_nama_jenis_kegiatan(self):
        p = buat_pendaftaran(jenis_kegiatan="penelitian")
        self.assertEqual(p.nama_jenis_kegiatan, "Research")
        p.jenis_kegiatan = "lainnya"
        self.assertEqual(p.nama_jenis_kegiatan, "lainnya")


class ValidatorLaporanTests(TestCase):
    def test_menolak_ekstensi_yang_tidak_diizinkan(self):
        file_obj = SimpleUploadedFile(
            "laporan.exe", b"dummy", content_type="application/octet-stream"
        )
        with self.assertRaises(ValidationError):
            validate_laporan_file(file_obj)

    def test_menolak_ukuran_lebih_dari_10_mb(self):
        big_content = b"x" * (11 * 1024 * 1024)
        file_obj = SimpleUploadedFile(
            "laporan.pdf", big_content, content_type="application/pdf"
        )
        with self.assertRaises(ValidationError):
            validate_laporan_file(file_obj)

    def test_menerima_docx(self):
        file_obj = SimpleUploadedFile("laporan.DOCX", b"dummy")
        validate_laporan_file(file_obj)


@override_settings(MEDIA_ROOT=TEMP_MEDIA)
class AksiPendaftaranTests(TestCase):
    def setUp(self):
        self.p = buat_pendaftaran()

    def test_setujui_default_nilai_a(self):
        self.p.setujui()
        self.p.refresh_from_db()
        self.assertEqual(self.p.nilai, "A")
        self.assertEqual(self.p.keputusan, "DISETUJUI")
        self.assertIsNotNone(self.p.disetujui_pada)
        self.assertEqual(self.p.status_pendaftaran, "Completed")

    def test_tolak_menyimpan_alasan(self):
        self.p.tolak("Dokumen tidak lengkap")
        self.p.refresh_from_db()
        self.assertEqual(self.p.keputusan, "DITOLAK")
        self.assertEqual(self.p.alasan_penolakan, "Dokumen tidak lengkap")
        self.assertIsNotNone(self.p.ditolak_pada)

    def test_aktif_nonaktif(self):
        self.p.set_aktif(False)
        self.p.refresh_from_db()
        self.assertFalse(self.p.aktif)
        self.p.set_aktif(True)
        self.p.refresh_from_db()
        self.assertTrue(self.p.aktif)

    def test_verifikasi_pembayaran(self):
        self.p.bukti_bayar.save("proof.png", ContentFile(b"img"))
        self.p.verifikasi_pembayaran()
        self.p.refresh_from_db()
        self.assertTrue(self.p.pembayaran_terverifikasi)
        self.assertIsNotNone(self.p.pembayaran_diverifikasi_pada)

    def test_tolak_pembayaran_menghapus_bukti(self):
        self.p.bukti_bayar.save("proof.png", ContentFile(b"img"))
        nama = self.p.bukti_bayar.name
        storage = self.p.bukti_bayar.storage
        self.assertTrue(storage.exists(nama))
        self.assertEqual(self.p.status_pendaftaran, "Active")

        with self.captureOnCommitCallbacks(execute=True):
            self.p.tolak_pembayaran("Bukti buram")
        self.p.refresh_from_db()
        self.assertFalse(self.p.bukti_bayar)
        self.assertFalse(self.p.pembayaran_terverifikasi)
        self.assertEqual(self.p.alasan_penolakan_pembayaran, "Bukti buram")
        self.assertFalse(storage.exists(nama))
        self.assertEqual(self.p.status_pendaftaran, "Awaiting Payment")

    def test_simpan_laporan_mengganti_file_lama(self):
        self.p.simpan_laporan(
            SimpleUploadedFile("laporan1.pdf", b"v1"), video_url="https://youtu.be/abc"
        )
        lama = self.p.laporan.name
        storage = self.p.laporan.storage
        self.assertTrue(storage.exists(lama))
        self.assertEqual(self.p.status_pendaftaran, "Awaiting Assessment")

        with self.captureOnCommitCallbacks(execute=True):
            self.p.simpan_laporan(SimpleUploadedFile("laporan2.pdf", b"v2"))
        self.p.refresh_from_db()
        self.assertNotEqual(self.p.laporan.name, lama)
        self.assertFalse(storage.exists(lama))
        self.assertEqual(self.p.video_url, "https://youtu.be/abc")

    def test_hapus_laporan(self):
        self.assertFalse(self.p.hapus_laporan())

        self.p.simpan_laporan(SimpleUploadedFile("laporan.pdf", b"v1"), video_url="https://youtu.be/abc")
        nama = self.p.laporan.name
        with self.captureOnCommitCallbacks(execute=True):
            self.assertTrue(self.p.hapus_laporan())
        self.p.refresh_from_db()
        self.assertFalse(self.p.laporan)
        self.assertIsNone(self.p.video_url)
        self.assertFalse(self.p.laporan.storage.exists(nama))

    def test_hapus_pendaftaran_cascade_logbook_dan_file(self):
        self.p.bukti_bayar.save("proof.png", ContentFile(b"img"))
        self.p.laporan.save("laporan.pdf", ContentFile(b"pdf"))
        storage = self.p.laporan.storage
        nama_file = [self.p.bukti_bayar.name, self.p.laporan.name]
        LogbookEntry.objects.create(pendaftaran=self.p, minggu=1, nama_kegiatan="Orientasi")

        with self.captureOnCommitCallbacks(execute=True):
            self.p.delete()

        self.assertEqual(LogbookEntry.objects.count(), 0)
        for nama in nama_file:
            self.assertFalse(storage.exists(nama))

    def test_file_tetap_ada_kalau_transaksi_dibatalkan(self):
        self.p.bukti_bayar.save("proof.png", ContentFile(b"img"))
        nama = self.p.bukti_bayar.name
        storage = self.p.bukti_bayar.storage

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(RuntimeError):
                with transaction.atomic():
                    PendaftaranMBKM.objects.get(pk=self.p.pk).tolak_pembayaran("Bukti buram")
                    raise RuntimeError("batal")

        self.assertEqual(callbacks, [])
        self.assertTrue(storage.exists(nama))
        self.p.refresh_from_db()
        self.assertEqual(self.p.bukti_bayar.name, nama)

    def test_hapus_file_menunggu_commit(self):
        self.p.laporan.save("laporan.pdf", ContentFile(b"pdf"))
        nama = self.p.laporan.name
        storage = self.p.laporan.storage

        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            self.p.hapus_laporan()
            self.assertTrue(storage.exists(nama))

        self.assertEqual(len(callbacks), 1)
        callbacks[0]()
        self.assertFalse(storage.exists(nama))


class NormalisasiPendaftaranTests(TestCase):
    def test_lokasi_dan_tahun_akademik_dirapikan_saat_simpan(self):
        p = buat_pendaftaran(lokasi="  PT Maju ", tahun_akademik=" 2024/2025 ")
        p.refresh_from_db()
        self.assertEqual(p.lokasi, "PT Maju")
        self.assertEqual(p.tahun_akademik, "2024/2025")

    def test_lokasi_kosong_tetap_string_kosong(self):
        p = buat_pendaftaran(lokasi="   ")
        p.refresh_from_db()
        self.assertEqual(p.lokasi, "")
