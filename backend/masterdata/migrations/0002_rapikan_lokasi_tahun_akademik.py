from django.db import migrations


def rapikan_lokasi_dan_tahun(apps, schema_editor):
    PendaftaranMBKM = apps.get_model("masterdata", "PendaftaranMBKM")
    for p in PendaftaranMBKM.objects.only("pk", "lokasi", "tahun_akademik"):
        lokasi = (p.lokasi or "").strip()
        tahun = (p.tahun_akademik or "").strip()
        if lokasi != p.lokasi or tahun != p.tahun_akademik:
            PendaftaranMBKM.objects.filter(pk=p.pk).update(
                lokasi=lokasi, tahun_akademik=tahun
            )


class Migration(migrations.Migration):

    dependencies = [
        ("masterdata", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(rapikan_lokasi_dan_tahun, migrations.RunPython.noop),
    ]
