# backend/logbook/tests.py
import datetime
from types import SimpleNamespace

from django.test import TestCase
from django.utils import timezone

from logbook import kelengkapan as rules
from logbook.models import LogbookEntry, rapikan_teks
from masterdata.models import Mahasiswa, PendaftaranMBKM


class KelengkapanTests(TestCase):
    def test_skenario_jumlah_field_terisi(self):
        kasus = [
            (("a", "b", "c", "d"), 100, "Complete"),
            (("a", "b", "c", None), 75, "Nearly Complete"),
            (("a", "b", None, None), 50, "Partial"),
            (("a", None, None, None), 25, "Incomplete"),
            ((None, None, None, None), 0, "Incomplete"),
        ]
        for fields, persentase, label in kasus:
            self.assertEqual(rules.persentase_kelengkapan(*fields), persentase)
            self.assertEqual(rules.status_kelengkapan(persentase), label)

    def test_spasi_saja_dianggap_kosong(self):
        self.assertEqual(rules.jumlah_terisi("  ", "\n\t", "", None), 0)
        self.assertEqual(rules.jumlah_terisi(" x ", "\n\t", "", None), 1)

    def test_persentase_selalu_kelipatan_25(self):
        nilai = (None, "", " ", "isi")
        for a in nilai:
            for b in nilai:
                for c in nilai:
                    for d in nilai:
                        self.assertIn(rules.persentase_kelengkapan(a, b, c, d), (0, 25, 50, 75, 100))

    def test_kelengkapan_dari_objek_mengabaikan_minggu(self):
        entry = SimpleNamespace(
            minggu=None, nama_kegiatan="A", tujuan_kegiatan="B", catatan="", kesimpulan=None
        )
        self.assertEqual(rules.kelengkapan(entry), (50, "Partial"))

    def test_warna_kelengkapan(self):
        self.assertEqual(rules.warna_kelengkapan("Complete"), "success")
        self.assertEqual(rules.warna_kelengkapan("Nearly Complete"), "warning")
        self.assertEqual(rules.warna_kelengkapan("Partial"), "info")
        self.assertEqual(rules.warna_kelengkapan("Incomplete"), "danger")

    def test_filter_kelengkapan(self):
        self.assertTrue(rules.cocok_filter_kelengkapan(100, "complete"))
        self.assertFalse(rules.cocok_filter_kelengkapan(75, "complete"))
        self.assertTrue(rules.cocok_filter_kelengkapan(25, "partial"))
        self.assertFalse(rules.cocok_filter_kelengkapan(0, "partial"))
        self.assertTrue(rules.cocok_filter_kelengkapan(0, "incomplete"))
        self.assertTrue(rules.cocok_filter_kelengkapan(50, "lainnya"))


class HitungMingguTests(TestCase):
    def test_hari_pertama_minggu_satu(self):
        mulai = datetime.date(2025, 1, 6)
        self.assertEqual(rules.hitung_minggu(mulai, datetime.date(2025, 1, 6)), 1)
        self.assertEqual(rules.hitung_minggu(mulai, datetime.date(2025, 1, 12)), 1)
        self.assertEqual(rules.hitung_minggu(mulai, datetime.date(2025, 1, 13)), 2)
        self.assertEqual(rules.hitung_minggu(mulai, datetime.date(2025, 2, 3)), 5)

    def test_sebelum_tanggal_daftar_minggu_satu(self):
        self.assertEqual(
            rules.hitung_minggu(datetime.date(2025, 1, 6), datetime.date(2024, 12, 1)), 1
        )

    def test_tanggal_tidak_lengkap(self):
        self.assertIsNone(rules.hitung_minggu(None, datetime.date(2025, 1, 6)))
        self.assertIsNone(rules.hitung_minggu(datetime.date(2025, 1, 6), None))

    def test_menerima_string_tanggal(self):
        self.assertEqual(rules.hitung_minggu("2025-01-06", "2025-01-20"), 3)


class LogbookEntryModelTests(TestCase):
    def setUp(self):
        mahasiswa = Mahasiswa.objects.create(nim="2201001", nama_lengkap="Andi")
        self.pendaftaran = PendaftaranMBKM.objects.create(
            mahasiswa=mahasiswa,
            jenis_kegiatan="magang",
            lokasi="PT Telkom",
            tahun_akademik="2024/2025",
            semester="Ganjil",
            dibuat_pada=timezone.make_aware(datetime.datetime(2025, 1, 6, 10, 0)),
        )

    def test_minggu_otomatis_saat_dibuat(self):
        entry = LogbookEntry.objects.create(
            pendaftaran=self.pendaftaran,
            tgl_kegiatan=datetime.date(2025, 1, 20),
            nama_kegiatan="Analisis data",
        )
        self.assertEqual(entry.minggu, 3)

    def test_minggu_manual_tidak_ditimpa(self):
        entry = LogbookEntry.objects.create(
            pendaftaran=self.pendaftaran,
            minggu=7,
            tgl_kegiatan=datetime.date(2025, 1, 20),
        )
        self.assertEqual(entry.minggu, 7)

    def test_minggu_tidak_dihitung_ulang_saat_update(self):
        entry = LogbookEntry.objects.create(
            pendaftaran=self.pendaftaran,
            tgl_kegiatan=datetime.date(2025, 1, 20),
        )
        entry.tgl_kegiatan = datetime.date(2025, 3, 1)
        entry.save()
        entry.refresh_from_db()
        self.assertEqual(entry.minggu, 3)

    def test_tanpa_tanggal_minggu_kosong(self):
        entry = LogbookEntry.objects.create(pendaftaran=self.pendaftaran)
        self.assertIsNone(entry.minggu)
        self.assertEqual(entry.nama_minggu, "Week -")
        self.assertEqual(entry.tanggal_kegiatan_format, "-")
        self.assertEqual(entry.persentase_kelengkapan, 0)
        self.assertEqual(entry.status_kelengkapan, "Incomplete")

    def test_teks_dirapikan_saat_simpan(self):
        entry = LogbookEntry.objects.create(
            pendaftaran=self.pendaftaran,
            minggu=1,
            nama_kegiatan="  rapat koordinasi ",
            tujuan_kegiatan="memahami alur kerja",
        )
        entry.refresh_from_db()
        self.assertEqual(entry.nama_kegiatan, "Rapat koordinasi")
        self.assertEqual(entry.tujuan_kegiatan, "Memahami alur kerja")

    def test_rapikan_teks(self):
        self.assertIsNone(rapikan_teks(None))
        self.assertEqual(rapikan_teks("   "), "")
        self.assertEqual(rapikan_teks("abc"), "Abc")

    def test_ringkasan_kegiatan(self):
        entry = LogbookEntry(pendaftaran=self.pendaftaran, nama_kegiatan="x" * 120)
        self.assertEqual(entry.ringkasan_kegiatan, "x" * 100 + "...")
        entry.nama_kegiatan = None
        self.assertEqual(entry.ringkasan_kegiatan, "No activity recorded")
        entry.nama_kegiatan = "Pendek"
        self.assertEqual(entry.ringkasan_kegiatan, "Pendek")

    def test_properti_kelengkapan(self):
        entry = LogbookEntry.objects.create(
            pendaftaran=self.pendaftaran,
            minggu=2,
            nama_kegiatan="A",
            tujuan_kegiatan="B",
            catatan="C",
        )
        self.assertEqual(entry.persentase_kelengkapan, 75)
        self.assertEqual(entry.status_kelengkapan, "Nearly Complete")
        self.assertEqual(entry.warna_status, "warning")
        self.assertEqual(entry.nama_minggu, "Week 2")

    def test_queryset_helper(self):
        LogbookEntry.objects.create(pendaftaran=self.pendaftaran, minggu=1, tgl_kegiatan=datetime.date(2025, 1, 7))
        LogbookEntry.objects.create(pendaftaran=self.pendaftaran, minggu=2, tgl_kegiatan=datetime.date(2025, 1, 14))

        self.assertEqual(LogbookEntry.objects.untuk_minggu(2).count(), 1)
        self.assertEqual(
            LogbookEntry.objects.antara(datetime.date(2025, 1, 1), datetime.date(2025, 1, 10)).count(), 1
        )
        self.assertEqual(LogbookEntry.objects.milik_nim("2201001").count(), 2)
        self.assertEqual(LogbookEntry.objects.terbaru().first().minggu, 2)


class SebagaiTanggalTests(TestCase):
    def test_string_tanggal_tidak_valid_jadi_none(self):
        self.assertIsNone(rules.sebagai_tanggal("2025-13-40T00:00"))
        self.assertIsNone(rules.sebagai_tanggal("2025-02-30"))
        self.assertIsNone(rules.sebagai_tanggal("bukan tanggal"))
        self.assertIsNone(rules.hitung_minggu("2025-01-06", "2025-13-40T00:00"))

    def test_string_datetime_valid(self):
        self.assertEqual(rules.sebagai_tanggal("2025-01-20T08:30"), datetime.date(2025, 1, 20))
