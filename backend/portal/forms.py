# backend/portal/forms.py
"""
Facade untuk form di aplikasi portal.

Form dikelompokkan per domain:
- forms_pendaftar: aksi admin terhadap pendaftar MBKM
"""

from .forms_pendaftar import LaporanUploadForm, PenolakanForm, PersetujuanForm

__all__ = [
    # pendaftar
    "PersetujuanForm",
    "PenolakanForm",
    "LaporanUploadForm",
]
