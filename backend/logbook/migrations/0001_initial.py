import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("masterdata", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LogbookEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "minggu",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Kosongkan untuk dihitung otomatis dari tanggal pendaftaran.",
                        null=True,
                    ),
                ),
                ("tgl_kegiatan", models.DateField(blank=True, null=True)),
                ("nama_kegiatan", models.TextField(blank=True, null=True)),
                ("tujuan_kegiatan", models.TextField(blank=True, null=True)),
                ("catatan", models.TextField(blank=True, null=True)),
                ("kesimpulan", models.TextField(blank=True, null=True)),
                ("dibuat_pada", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "pendaftaran",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="logbook_entries",
                        to="masterdata.pendaftaranmbkm",
                    ),
                ),
            ],
            options={
                "verbose_name": "Logbook",
                "verbose_name_plural": "Logbook",
                "ordering": ["-minggu", "-tgl_kegiatan", "-id"],
            },
        ),
    ]
