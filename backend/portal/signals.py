# backend/portal/signals.py

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from logbook.models import LogbookEntry
from masterdata.models import LokasiPenempatan, Mahasiswa, PendaftaranMBKM, ProgramStudi

from .cache_utils import invalidasi_cache

MODEL_TERPANTAU = (PendaftaranMBKM, LogbookEntry, Mahasiswa, ProgramStudi, LokasiPenempatan)


@receiver(post_save)
@receiver(post_delete)
def invalidasi_saat_data_berubah(sender, **kwargs):
    """
    Statistik dihitung dari data pendaftaran & logbook; setiap simpan/hapus
    pada model terkait membuat cache lama tidak berlaku.
    """
    if sender in MODEL_TERPANTAU:
        invalidasi_cache()
