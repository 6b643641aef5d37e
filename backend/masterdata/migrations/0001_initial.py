import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import masterdata.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LokasiPenempatan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("penempatan", models.CharField(max_length=255, unique=True)),
                ("kota", models.CharField(max_length=100)),
            ],
            options={
                "verbose_name": "Lokasi Penempatan",
                "verbose_name_plural": "Lokasi Penempatan",
                "ordering": ["penempatan"],
            },
        ),
        migrations.CreateModel(
            name="ProgramStudi",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nama_prodi", models.CharField(max_length=150)),
                ("aktif", models.BooleanField(default=True, help_text="Hanya prodi aktif yang muncul di pilihan filter.")),
            ],
            options={
                "verbose_name": "Program Studi",
                "verbose_name_plural": "Program Studi",
                "ordering": ["nama_prodi"],
            },
        ),
        migrations.CreateModel(
            name="Mahasiswa",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nim", models.CharField(max_length=20, unique=True, verbose_name="NIM")),
                ("nama_lengkap", models.CharField(max_length=150)),
                ("jenis_kelamin", models.CharField(blank=True, choices=[("L", "Laki-laki"), ("P", "Perempuan")], max_length=1)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("no_hp", models.CharField(blank=True, max_length=20, null=True, verbose_name="No. HP/WA")),
                (
                    "prodi",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="mahasiswa",
                        to="masterdata.programstudi",
                    ),
                ),
            ],
            options={
                "verbose_name": "Mahasiswa",
                "verbose_name_plural": "Mahasiswa",
                "ordering": ["nim"],
            },
        ),
        migrations.CreateModel(
            name="PendaftaranMBKM",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "jenis_kegiatan",
                    models.CharField(
                        choices=[
                            ("magang", "Internship/Work Practice"),
                            ("penelitian", "Research"),
                            ("pertukaran", "Student Exchange"),
                            ("kewirausahaan", "Entrepreneurship"),
                            ("mengajar", "Teaching in Schools"),
                            ("kkn", "Thematic Community Service"),
                        ],
                        max_length=20,
                    ),
                ),
                ("lokasi", models.CharField(blank=True, help_text="Nama instansi/mitra tempat kegiatan.", max_length=255, verbose_name="Penempatan")),
                ("tahun_akademik", models.CharField(help_text="Misal: 2024/2025", max_length=20)),
                ("semester", models.CharField(choices=[("Ganjil", "Ganjil"), ("Genap", "Genap")], max_length=10)),
                ("bukti_bayar", models.FileField(blank=True, null=True, upload_to="bukti_bayar/")),
                (
                    "laporan",
                    models.FileField(
                        blank=True,
                        null=True,
                        upload_to="reports/",
                        validators=[masterdata.models.validate_laporan_file],
                    ),
                ),
                ("video_url", models.URLField(blank=True, null=True)),
                ("nilai", models.CharField(blank=True, max_length=5, null=True)),
                (
                    "keputusan",
                    models.CharField(
                        blank=True,
                        choices=[("", "Belum diputuskan"), ("DISETUJUI", "Disetujui"), ("DITOLAK", "Ditolak")],
                        default="",
                        max_length=10,
                    ),
                ),
                ("alasan_penolakan", models.TextField(blank=True)),
                ("aktif", models.BooleanField(default=True)),
                ("pembayaran_terverifikasi", models.BooleanField(default=False)),
                ("pembayaran_diverifikasi_pada", models.DateTimeField(blank=True, null=True)),
                ("alasan_penolakan_pembayaran", models.TextField(blank=True)),
                ("disetujui_pada", models.DateTimeField(blank=True, null=True)),
                ("ditolak_pada", models.DateTimeField(blank=True, null=True)),
                ("dibuat_pada", models.DateTimeField(default=django.utils.timezone.now)),
                ("diupdate_pada", models.DateTimeField(auto_now=True)),
                (
                    "mahasiswa",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pendaftaran_mbkm",
                        to="masterdata.mahasiswa",
                    ),
                ),
            ],
            options={
                "verbose_name": "Pendaftaran MBKM",
                "verbose_name_plural": "Pendaftaran MBKM",
                "ordering": ["-dibuat_pada", "-id"],
            },
        ),
    ]
