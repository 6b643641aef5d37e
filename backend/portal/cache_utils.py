# backend/portal/cache_utils.py
"""
Cache read-through untuk statistik dan opsi filter.

Setiap kunci memuat token generasi. invalidasi_cache() mengganti token itu,
sehingga semua entri lama tidak terjangkau lagi tanpa perlu menghapus per
pola kunci (LocMemCache tidak mendukung penghapusan per pola).
"""

import hashlib
import logging
import uuid
from urllib.parse import urlencode

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

CACHE_PREFIX = "mbkm_"
KUNCI_GENERASI = CACHE_PREFIX + "generasi"


def cache_ttl() -> int:
    return getattr(settings, "MBKM_CACHE_TTL", 300)


def _generasi() -> str:
    token = cache.get(KUNCI_GENERASI)
    if token is None:
        token = uuid.uuid4().hex
        cache.set(KUNCI_GENERASI, token, None)
    return token


def buat_kunci(nama: str, params=None) -> str:
    param_string = urlencode(sorted((params or {}).items()), doseq=True)
    digest = hashlib.md5(param_string.encode("utf-8")).hexdigest()
    return f"{CACHE_PREFIX}{_generasi()}_{nama}_{digest}"


def ingat(nama: str, params, hitung, timeout=None):
    """Ambil dari cache, atau hitung lalu simpan."""
    kunci = buat_kunci(nama, params)
    hasil = cache.get(kunci)
    if hasil is None:
        hasil = hitung()
        cache.set(kunci, hasil, cache_ttl() if timeout is None else timeout)
    return hasil


def invalidasi_cache():
    cache.set(KUNCI_GENERASI, uuid.uuid4().hex, None)
    logger.debug("Cache dashboard MBKM diinvalidasi")
