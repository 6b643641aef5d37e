# backend/masterdata/signals.py

from django.db.models.signals import post_delete
from django.dispatch import receiver

from .models import PendaftaranMBKM, hapus_file_tersimpan


@receiver(post_delete, sender=PendaftaranMBKM)
def hapus_file_saat_pendaftaran_dihapus(sender, instance, **kwargs):
    """
    Setelah PendaftaranMBKM dihapus (logbook ikut terhapus lewat CASCADE),
    bersihkan file bukti bayar dan laporan dari storage.
    """
    for field_file in (instance.bukti_bayar, instance.laporan):
        if field_file:
            hapus_file_tersimpan(field_file.storage, field_file.name)
