# backend/portal/tests.py
import csv
import datetime
import io
import shutil
import tempfile
from types import SimpleNamespace

from django.contrib.auth.models import User
from django.contrib.messages import get_messages
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from logbook.models import LogbookEntry
from masterdata.models import LokasiPenempatan, Mahasiswa, PendaftaranMBKM, ProgramStudi
from portal.cache_utils import ingat, invalidasi_cache
from portal.export import HEADER_LOGBOOK, HEADER_PENDAFTAR
from portal.statistik import (
    bulatkan,
    ringkasan_jenis_kegiatan,
    statistik_logbook,
    statistik_pendaftaran,
)
from portal.views_logbook import _pendaftaran_berlogbook

TEMP_MEDIA = tempfile.mkdtemp()


def tearDownModule():
    shutil.rmtree(TEMP_MEDIA, ignore_errors=True)


def baca_csv(response):
    rows = list(csv.reader(io.StringIO(response.content.decode("utf-8"))))
    return rows[0], rows[1:]


def registrasi(bukti_bayar=None, laporan=None, nilai=None, jenis_kelamin=None, lokasi=""):
    return SimpleNamespace(
        bukti_bayar=bukti_bayar,
        laporan=laporan,
        nilai=nilai,
        lokasi=lokasi,
        jenis_kegiatan="magang",
        mahasiswa=SimpleNamespace(jenis_kelamin=jenis_kelamin),
    )


def entri(*fields, minggu=None, tgl_kegiatan=None):
    nama, tujuan, catatan, kesimpulan = (list(fields) + [None] * 4)[:4]
    return SimpleNamespace(
        nama_kegiatan=nama,
        tujuan_kegiatan=tujuan,
        catatan=catatan,
        kesimpulan=kesimpulan,
        minggu=minggu,
        tgl_kegiatan=tgl_kegiatan,
    )


class BulatkanTests(TestCase):
    def test_half_up(self):
        self.assertEqual(bulatkan(5, 8, 2), 0.63)
        self.assertEqual(bulatkan(1, 3, 1), 0.3)
        self.assertEqual(bulatkan(200, 3, 1), 66.7)

    def test_penyebut_nol(self):
        self.assertEqual(bulatkan(10, 0, 2), 0)


class StatistikLogbookTests(TestCase):
    def test_rata_rata_100_50_0(self):
        entries = [
            entri("a", "b", "c", "d", minggu=1, tgl_kegiatan=datetime.date(2025, 1, 7)),
            entri("a", "b", minggu=2, tgl_kegiatan=datetime.date(2025, 1, 14)),
            entri(minggu=2),
        ]
        stats = statistik_logbook(entries)
        self.assertEqual(stats["total_entries"], 3)
        self.assertEqual(stats["average_completion"], 50.0)
        self.assertEqual(stats["completed_entries"], 1)
        self.assertEqual(stats["partial_entries"], 1)
        self.assertEqual(stats["incomplete_entries"], 1)
        self.assertEqual(stats["completion_rate"], 33.3)
        self.assertEqual(stats["weeks_covered"], 2)
        self.assertEqual(stats["latest_entry"], datetime.date(2025, 1, 14))

    def test_jumlah_kategori_sama_dengan_total(self):
        entries = [entri("a"), entri("a", "b", "c"), entri(), entri("a", "b", "c", "d"), entri(" ")]
        stats = statistik_logbook(entries)
        self.assertEqual(
            stats["completed_entries"] + stats["partial_entries"] + stats["incomplete_entries"],
            stats["total_entries"],
        )

    def test_koleksi_kosong(self):
        stats = statistik_logbook([])
        self.assertEqual(stats["total_entries"], 0)
        self.assertEqual(stats["average_completion"], 0)
        self.assertEqual(stats["weeks_covered"], 0)
        self.assertIsNone(stats["latest_entry"])


class StatistikPendaftaranTests(TestCase):
    def test_hitung_status_gender_dan_mitra(self):
        items = [
            registrasi(jenis_kelamin="L", lokasi="PT A"),
            registrasi(bukti_bayar="proof.png", jenis_kelamin="P", lokasi="PT A "),
            registrasi(bukti_bayar="proof.png", laporan="report.pdf", jenis_kelamin="P", lokasi="PT B"),
            registrasi(nilai="A", lokasi=""),
        ]
        stats = statistik_pendaftaran(items)
        self.assertEqual(stats["total"], 4)
        self.assertEqual(stats["pending_payment"], 1)
        self.assertEqual(stats["active"], 1)
        self.assertEqual(stats["awaiting_assessment"], 1)
        self.assertEqual(stats["completed"], 1)
        self.assertEqual(
            stats["pending_payment"] + stats["active"] + stats["awaiting_assessment"] + stats["completed"],
            stats["total"],
        )
        self.assertEqual(stats["male"], 1)
        self.assertEqual(stats["female"], 2)
        self.assertEqual(stats["unknown_gender"], 1)
        self.assertEqual(stats["partners"], 2)
        self.assertEqual(stats["completion_rate"], 25.0)
        self.assertEqual(stats["payment_rate"], 75.0)

    def test_koleksi_kosong(self):
        stats = statistik_pendaftaran([])
        self.assertEqual(stats["total"], 0)
        self.assertEqual(stats["completion_rate"], 0)
        self.assertEqual(stats["payment_rate"], 0)

    def test_ringkasan_jenis_kegiatan(self):
        items = [
            registrasi(bukti_bayar="proof.png"),
            registrasi(nilai="A"),
            registrasi(),
        ]
        items[2].jenis_kegiatan = "penelitian"
        ringkasan = ringkasan_jenis_kegiatan(items)
        self.assertEqual(
            ringkasan,
            [
                {"type": "magang", "total": 2, "active": 1, "completed": 1},
                {"type": "penelitian", "total": 1, "active": 0, "completed": 0},
            ],
        )


class CacheTests(TestCase):
    def setUp(self):
        cache.clear()

    def test_ingat_lalu_invalidasi(self):
        panggilan = []

        def hitung():
            panggilan.append(1)
            return len(panggilan)

        self.assertEqual(ingat("contoh", {"a": "1"}, hitung), 1)
        self.assertEqual(ingat("contoh", {"a": "1"}, hitung), 1)
        self.assertEqual(ingat("contoh", {"a": "2"}, hitung), 2)

        invalidasi_cache()
        self.assertEqual(ingat("contoh", {"a": "1"}, hitung), 3)


class PortalViewTestMixin:
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user(
            username="admin", password="test", is_staff=True
        )
        self.user_biasa = User.objects.create_user(username="biasa", password="test")
        self.client.force_login(self.admin)

        self.prodi = ProgramStudi.objects.create(nama_prodi="Statistika")
        self.prodi_lain = ProgramStudi.objects.create(nama_prodi="Matematika")
        LokasiPenempatan.objects.create(penempatan="PT Telkom", kota="Makassar")

        self.belum_bayar = self.buat("2201001", "Andi", jenis_kelamin="L")
        self.aktif = self.buat("2201002", "Budi", bukti_bayar="bukti_bayar/b.png", jenis_kelamin="L")
        self.menunggu_nilai = self.buat(
            "2201003",
            "Citra",
            bukti_bayar="bukti_bayar/c.png",
            laporan="reports/c.pdf",
            jenis_kelamin="P",
            prodi=self.prodi_lain,
            tahun_akademik="2023/2024",
        )
        self.selesai = self.buat("2201004", "Dewi", nilai="A", jenis_kelamin="P", lokasi="CV Maju")

    def buat(self, nim, nama, jenis_kelamin="", prodi=None, **kwargs):
        mahasiswa = Mahasiswa.objects.create(
            nim=nim,
            nama_lengkap=nama,
            jenis_kelamin=jenis_kelamin,
            prodi=prodi or self.prodi,
        )
        data = {
            "mahasiswa": mahasiswa,
            "jenis_kegiatan": "magang",
            "lokasi": "PT Telkom",
            "tahun_akademik": "2024/2025",
            "semester": "Ganjil",
        }
        data.update(kwargs)
        return PendaftaranMBKM.objects.create(**data)

    def pesan(self, response):
        return [str(m) for m in get_messages(response.wsgi_request)]


class AksesPortalTests(PortalViewTestMixin, TestCase):
    def test_anonim_diarahkan_ke_login(self):
        self.client.logout()
        response = self.client.get(reverse("portal:dashboard"))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("portal:login"), response["Location"])

    def test_bukan_admin_ditolak(self):
        self.client.force_login(self.user_biasa)
        for name in ("portal:dashboard", "portal:pendaftar_list", "portal:logbook_index"):
            response = self.client.get(reverse(name))
            self.assertEqual(response.status_code, 403)

    def test_after_login_admin_ke_dashboard(self):
        response = self.client.get(reverse("portal:after_login"))
        self.assertRedirects(response, reverse("portal:dashboard"))

    def test_after_login_bukan_admin(self):
        self.client.force_login(self.user_biasa)
        response = self.client.get(reverse("portal:after_login"))
        self.assertEqual(response.status_code, 403)

    def test_aksi_hanya_post(self):
        response = self.client.get(reverse("portal:pendaftar_setujui", args=[self.aktif.pk]))
        self.assertEqual(response.status_code, 405)


class DashboardViewTests(PortalViewTestMixin, TestCase):
    def test_statistik_dashboard(self):
        response = self.client.get(reverse("portal:dashboard"))
        self.assertEqual(response.status_code, 200)
        stats = response.context["statistik"]
        self.assertEqual(stats["total"], 4)
        self.assertEqual(stats["completed"], 1)
        self.assertEqual(stats["partners"], 2)
        lokasi = {row["nim"]: row["location"] for row in response.context["rows"]}
        self.assertEqual(lokasi["2201001"], "Makassar")
        self.assertEqual(lokasi["2201004"], "Lainnya")

    def test_filter_tahun_akademik(self):
        response = self.client.get(reverse("portal:dashboard"), {"academic_year": "2023/2024"})
        self.assertEqual([row["nim"] for row in response.context["rows"]], ["2201003"])
        self.assertEqual(response.context["statistik"]["total"], 1)

    def test_paginasi(self):
        response = self.client.get(reverse("portal:dashboard"), {"per_page": 3, "page": 2})
        self.assertEqual(len(response.context["rows"]), 1)
        self.assertEqual(response.context["pagination"]["last_page"], 2)
        self.assertEqual(response.context["pagination"]["from"], 4)

    def test_by_status(self):
        response = self.client.get(reverse("portal:dashboard_by_status", args=["active"]))
        data = response.json()
        self.assertEqual(data["status"], "Active")
        self.assertEqual([row["nim"] for row in data["data"]], ["2201002"])

        response = self.client.get(reverse("portal:dashboard_by_status", args=["Completed"]))
        self.assertEqual(response.json()["total"], 1)

        response = self.client.get(reverse("portal:dashboard_by_status", args=["draft"]))
        self.assertEqual(response.status_code, 404)

    def test_ringkasan_kegiatan(self):
        response = self.client.get(reverse("portal:dashboard_activity_summary"))
        data = response.json()["data"]
        self.assertEqual(data[0]["type"], "magang")
        self.assertEqual(data[0]["name"], "Internship/Work Practice")
        self.assertEqual(data[0]["total"], 4)

    def test_export_dashboard(self):
        response = self.client.get(reverse("portal:dashboard_export"))
        self.assertEqual(response["Content-Type"], "text/csv")
        header, rows = baca_csv(response)
        self.assertEqual(header[0], "No")
        self.assertEqual(len(rows), 4)
        status = {row[1]: row[11] for row in rows}
        self.assertEqual(status["2201003"], "Awaiting Assessment")

    def test_filter_penempatan_dan_tahun_dengan_spasi(self):
        self.buat("2201005", "Eka", lokasi="PT Maju ", tahun_akademik=" 2022/2023 ")
        response = self.client.get(reverse("portal:dashboard"))
        penempatan = [o["value"] for o in response.context["opsi"]["placements"][1:]]
        self.assertEqual(penempatan, ["CV Maju", "PT Maju", "PT Telkom"])
        self.assertEqual(response.context["statistik"]["partners"], len(penempatan))

        for value in penempatan:
            response = self.client.get(reverse("portal:dashboard"), {"placement": value})
            self.assertGreater(response.context["statistik"]["total"], 0, value)

        response = self.client.get(reverse("portal:dashboard"), {"placement": "PT Maju "})
        self.assertEqual([row["nim"] for row in response.context["rows"]], ["2201005"])

        tahun = [o["value"] for o in response.context["opsi"]["academic_years"][1:]]
        self.assertIn("2022/2023", tahun)
        response = self.client.get(reverse("portal:dashboard"), {"academic_year": "2022/2023"})
        self.assertEqual([row["nim"] for row in response.context["rows"]], ["2201005"])


class PendaftarViewTests(PortalViewTestMixin, TestCase):
    def test_filter_status_sama_dengan_badge(self):
        for slug, label in (
            ("pending_payment", "Awaiting Payment"),
            ("active", "Active"),
            ("awaiting_assessment", "Awaiting Assessment"),
            ("completed", "Completed"),
        ):
            response = self.client.get(reverse("portal:pendaftar_list"), {"status": slug})
            rows = response.context["rows"]
            self.assertEqual(len(rows), 1, slug)
            self.assertEqual(rows[0]["status"], label)

    def test_filter_pencarian_dan_prodi(self):
        response = self.client.get(reverse("portal:pendaftar_list"), {"search": "citra"})
        self.assertEqual([row["nim"] for row in response.context["rows"]], ["2201003"])

        response = self.client.get(reverse("portal:pendaftar_list"), {"prodi": self.prodi_lain.pk})
        self.assertEqual([row["nim"] for row in response.context["rows"]], ["2201003"])

        response = self.client.get(reverse("portal:pendaftar_list"), {"prodi": "abc"})
        self.assertEqual(response.context["rows"], [])

    def test_detail_dan_logbook(self):
        LogbookEntry.objects.create(pendaftaran=self.aktif, minggu=1, nama_kegiatan="Orientasi")
        LogbookEntry.objects.create(pendaftaran=self.aktif, minggu=2, nama_kegiatan="Analisis")

        response = self.client.get(reverse("portal:pendaftar_detail", args=[self.aktif.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([log["week"] for log in response.context["logbooks"]], [2, 1])

        response = self.client.get(reverse("portal:pendaftar_logbooks", args=[self.aktif.pk]))
        self.assertEqual(response.json()["statistics"]["total_entries"], 2)

    def test_detail_tidak_ada(self):
        response = self.client.get(reverse("portal:pendaftar_detail", args=[9999]))
        self.assertEqual(response.status_code, 404)

    def test_logbook_milik_pendaftar_lain_404(self):
        entry = LogbookEntry.objects.create(pendaftaran=self.selesai, minggu=1)
        url = reverse("portal:pendaftar_logbook_detail", args=[self.aktif.pk, entry.pk])
        self.assertEqual(self.client.get(url).status_code, 404)

        url = reverse("portal:pendaftar_logbook_detail", args=[self.selesai.pk, entry.pk])
        self.assertEqual(self.client.get(url).json()["data"]["id"], entry.pk)

    def test_setujui_default_nilai_a(self):
        response = self.client.post(reverse("portal:pendaftar_setujui", args=[self.aktif.pk]))
        self.assertRedirects(response, reverse("portal:pendaftar_detail", args=[self.aktif.pk]))
        self.aktif.refresh_from_db()
        self.assertEqual(self.aktif.nilai, "A")
        self.assertEqual(self.aktif.status_pendaftaran, "Completed")

    def test_setujui_dengan_nilai(self):
        self.client.post(reverse("portal:pendaftar_setujui", args=[self.aktif.pk]), {"nilai": "B+"})
        self.aktif.refresh_from_db()
        self.assertEqual(self.aktif.nilai, "B+")

    def test_tolak_alasan_terlalu_panjang(self):
        response = self.client.post(
            reverse("portal:pendaftar_tolak", args=[self.aktif.pk]), {"alasan": "x" * 501}
        )
        self.assertEqual(response.status_code, 302)
        self.assertTrue(self.pesan(response))
        self.aktif.refresh_from_db()
        self.assertEqual(self.aktif.keputusan, "")

    def test_tolak(self):
        self.client.post(reverse("portal:pendaftar_tolak", args=[self.aktif.pk]), {"alasan": "Tidak memenuhi syarat"})
        self.aktif.refresh_from_db()
        self.assertEqual(self.aktif.keputusan, "DITOLAK")
        self.assertEqual(self.aktif.alasan_penolakan, "Tidak memenuhi syarat")

    def test_aktifkan_nonaktifkan(self):
        self.client.post(reverse("portal:pendaftar_nonaktifkan", args=[self.aktif.pk]))
        self.aktif.refresh_from_db()
        self.assertFalse(self.aktif.aktif)
        self.client.post(reverse("portal:pendaftar_aktifkan", args=[self.aktif.pk]))
        self.aktif.refresh_from_db()
        self.assertTrue(self.aktif.aktif)

    def test_verifikasi_pembayaran(self):
        self.client.post(reverse("portal:pendaftar_verifikasi_pembayaran", args=[self.aktif.pk]))
        self.aktif.refresh_from_db()
        self.assertTrue(self.aktif.pembayaran_terverifikasi)

        response = self.client.post(
            reverse("portal:pendaftar_verifikasi_pembayaran", args=[self.belum_bayar.pk])
        )
        self.assertIn("Bukti pembayaran belum diunggah.", self.pesan(response))
        self.belum_bayar.refresh_from_db()
        self.assertFalse(self.belum_bayar.pembayaran_terverifikasi)

    @override_settings(MEDIA_ROOT=TEMP_MEDIA)
    def test_tolak_pembayaran(self):
        self.client.post(
            reverse("portal:pendaftar_tolak_pembayaran", args=[self.aktif.pk]),
            {"alasan": "Nominal tidak sesuai"},
        )
        self.aktif.refresh_from_db()
        self.assertFalse(self.aktif.bukti_bayar)
        self.assertEqual(self.aktif.status_pendaftaran, "Awaiting Payment")

    @override_settings(MEDIA_ROOT=TEMP_MEDIA)
    def test_hapus_pendaftaran(self):
        LogbookEntry.objects.create(pendaftaran=self.aktif, minggu=1)
        response = self.client.post(reverse("portal:pendaftar_hapus", args=[self.aktif.pk]))
        self.assertRedirects(response, reverse("portal:pendaftar_list"))
        self.assertFalse(PendaftaranMBKM.objects.filter(pk=self.aktif.pk).exists())
        self.assertEqual(LogbookEntry.objects.count(), 0)

    @override_settings(MEDIA_ROOT=TEMP_MEDIA)
    def test_upload_dan_hapus_laporan(self):
        url = reverse("portal:pendaftar_laporan", args=[self.aktif.pk])
        self.assertEqual(self.client.get(url).context["laporan"]["status"], "not_submitted")

        response = self.client.post(
            url,
            {
                "laporan": SimpleUploadedFile("laporan.pdf", b"%PDF-1.4", content_type="application/pdf"),
                "video_url": "https://youtu.be/abc",
            },
        )
        self.assertRedirects(response, url)
        self.aktif.refresh_from_db()
        self.assertTrue(self.aktif.laporan)
        self.assertEqual(self.aktif.video_url, "https://youtu.be/abc")
        self.assertEqual(self.aktif.status_pendaftaran, "Awaiting Assessment")

        self.client.post(reverse("portal:pendaftar_hapus_laporan", args=[self.aktif.pk]))
        self.aktif.refresh_from_db()
        self.assertFalse(self.aktif.laporan)
        self.assertIsNone(self.aktif.video_url)

    @override_settings(MEDIA_ROOT=TEMP_MEDIA)
    def test_upload_laporan_format_salah(self):
        url = reverse("portal:pendaftar_laporan", args=[self.aktif.pk])
        response = self.client.post(url, {"laporan": SimpleUploadedFile("laporan.exe", b"MZ")})
        self.assertEqual(response.status_code, 302)
        self.assertTrue(self.pesan(response))
        self.aktif.refresh_from_db()
        self.assertFalse(self.aktif.laporan)

    def test_export_status_sama_dengan_layar(self):
        response = self.client.get(reverse("portal:pendaftar_export"))
        self.assertIn("attachment;", response["Content-Disposition"])
        header, rows = baca_csv(response)
        self.assertEqual(header, HEADER_PENDAFTAR)
        kolom_status = header.index("Status")
        dari_csv = {row[0]: row[kolom_status] for row in rows}
        for p in PendaftaranMBKM.objects.all():
            self.assertEqual(dari_csv[p.mahasiswa.nim], p.status_pendaftaran)

    def test_export_pilihan_ids(self):
        ids = f"{self.aktif.pk},{self.selesai.pk}"
        response = self.client.get(reverse("portal:pendaftar_export"), {"ids": ids})
        _, rows = baca_csv(response)
        self.assertEqual(sorted(row[0] for row in rows), ["2201002", "2201004"])

    def test_cari(self):
        response = self.client.get(reverse("portal:pendaftar_cari"), {"q": ""})
        self.assertEqual(response.json(), {"data": []})

        response = self.client.get(reverse("portal:pendaftar_cari"), {"q": "budi"})
        self.assertEqual([row["nim"] for row in response.json()["data"]], ["2201002"])

        for nomor in range(12):
            self.buat(f"2299{nomor:03d}", f"Eka {nomor}")
        response = self.client.get(reverse("portal:pendaftar_cari"), {"q": "2299"})
        self.assertEqual(len(response.json()["data"]), 10)

    def test_opsi_filter(self):
        data = self.client.get(reverse("portal:pendaftar_opsi_filter")).json()
        self.assertEqual(data["statuses"][0]["value"], "all")
        tahun = [opsi["value"] for opsi in data["academic_years"]]
        self.assertEqual(tahun, ["all", "2024/2025", "2023/2024"])

    def test_statistik_diinvalidasi_setelah_aksi(self):
        url = reverse("portal:pendaftar_statistik")
        self.assertEqual(self.client.get(url).json()["completed"], 1)

        self.client.post(reverse("portal:pendaftar_setujui", args=[self.aktif.pk]))
        self.assertEqual(self.client.get(url).json()["completed"], 2)

    def test_statistik_diinvalidasi_manual_setelah_update_massal(self):
        url = reverse("portal:pendaftar_statistik")
        self.assertEqual(self.client.get(url).json()["completed"], 1)

        # update() tidak memicu signal
        PendaftaranMBKM.objects.filter(pk=self.belum_bayar.pk).update(nilai="B")
        self.assertEqual(self.client.get(url).json()["completed"], 1)

        invalidasi_cache()
        self.assertEqual(self.client.get(url).json()["completed"], 2)


class LogbookViewTests(PortalViewTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.aktif.dibuat_pada = timezone.make_aware(datetime.datetime(2025, 1, 6, 9, 0))
        self.aktif.save()
        self.lengkap = LogbookEntry.objects.create(
            pendaftaran=self.aktif,
            tgl_kegiatan=datetime.date(2025, 1, 7),
            nama_kegiatan="<p>Orientasi</p>",
            tujuan_kegiatan="Mengenal tim",
            catatan="Catatan",
            kesimpulan="Baik",
        )
        self.sebagian = LogbookEntry.objects.create(
            pendaftaran=self.aktif,
            tgl_kegiatan=datetime.date(2025, 1, 15),
            nama_kegiatan="Analisis",
            tujuan_kegiatan="Eksplorasi data",
            catatan="Catatan",
        )
        self.kosong = LogbookEntry.objects.create(pendaftaran=self.menunggu_nilai, minggu=1)

    def test_index(self):
        response = self.client.get(reverse("portal:logbook_index"))
        self.assertEqual(response.status_code, 200)
        rows = response.context["rows"]
        self.assertEqual(len(rows), 2)
        baris_aktif = next(row for row in rows if row["registration"]["nim"] == "2201002")
        self.assertEqual(baris_aktif["statistics"]["total_entries"], 2)
        aktivitas = [log["activity_name"] for log in baris_aktif["recent"]]
        self.assertIn("Orientasi", aktivitas)
        self.assertEqual(response.context["statistik"]["total_entries"], 3)

    def test_index_urutan_stabil_antar_halaman(self):
        qs = _pendaftaran_berlogbook(PendaftaranMBKM.objects.all())
        self.assertTrue(qs.ordered)

        nim = []
        for page in (1, 2):
            response = self.client.get(
                reverse("portal:logbook_index"), {"per_page": 1, "page": page}
            )
            nim += [row["registration"]["nim"] for row in response.context["rows"]]
        self.assertEqual(nim, ["2201003", "2201002"])

    def test_index_filter_tahun(self):
        response = self.client.get(reverse("portal:logbook_index"), {"academic_year": "2023/2024"})
        self.assertEqual([row["registration"]["nim"] for row in response.context["rows"]], ["2201003"])

    def test_minggu_otomatis(self):
        self.assertEqual(self.lengkap.minggu, 1)
        self.assertEqual(self.sebagian.minggu, 2)

    def test_logbook_mahasiswa_filter_kelengkapan(self):
        url = reverse("portal:logbook_mahasiswa", args=[self.aktif.pk])
        response = self.client.get(url, {"kelengkapan": "complete"})
        self.assertEqual([log["id"] for log in response.context["logbooks"]], [self.lengkap.pk])

        response = self.client.get(url, {"kelengkapan": "partial"})
        self.assertEqual([log["id"] for log in response.context["logbooks"]], [self.sebagian.pk])

        response = self.client.get(url, {"kelengkapan": "incomplete"})
        self.assertEqual(response.context["logbooks"], [])

        response = self.client.get(url)
        self.assertEqual(len(response.context["logbooks"]), 2)

    def test_detail(self):
        response = self.client.get(reverse("portal:logbook_detail", args=[self.sebagian.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["logbook"]["completion_percentage"], 75)
        self.assertEqual(response.context["logbook"]["completion_status"], "Nearly Complete")

    def test_export_persentase_sama_dengan_layar(self):
        response = self.client.get(reverse("portal:logbook_export"))
        header, rows = baca_csv(response)
        self.assertEqual(header, HEADER_LOGBOOK)
        self.assertEqual(len(rows), 3)
        kolom_nama = header.index("Nama Kegiatan")
        kolom_status = header.index("Status Kelengkapan")
        kolom_persen = header.index("Persentase Kelengkapan")
        per_nama = {row[kolom_nama]: (row[kolom_status], row[kolom_persen]) for row in rows}
        self.assertEqual(per_nama["Orientasi"], ("Complete", "100%"))
        self.assertEqual(per_nama["Analisis"], ("Nearly Complete", "75%"))
        self.assertEqual(per_nama[""], ("Incomplete", "0%"))

    def test_statistik(self):
        data = self.client.get(reverse("portal:logbook_statistik")).json()
        self.assertEqual(data["total_logbooks"], 3)
        self.assertEqual(data["total_students"], 2)
        self.assertEqual(data["average_entries_per_student"], 1.5)
        self.assertEqual(data["completed_logbooks"], 1)
        self.assertEqual(data["completion_rate"], 33.3)
        self.assertEqual(data["latest_entry_date"], "2025-01-15")
        self.assertEqual(data["total_weeks_covered"], 2)

    def test_statistik_berubah_setelah_logbook_baru(self):
        url = reverse("portal:logbook_statistik")
        self.assertEqual(self.client.get(url).json()["total_logbooks"], 3)
        LogbookEntry.objects.create(pendaftaran=self.selesai, minggu=1)
        self.assertEqual(self.client.get(url).json()["total_logbooks"], 4)

    def test_pdf(self):
        response = self.client.get(reverse("portal:logbook_pdf", args=[self.aktif.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertTrue(response.content.startswith(b"%PDF"))
