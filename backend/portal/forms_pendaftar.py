# backend/portal/forms_pendaftar.py

from django import forms

from masterdata.models import NILAI_HURUF_CHOICES, validate_laporan_file

MAKS_ALASAN = 500


class PersetujuanForm(forms.Form):
    nilai = forms.ChoiceField(
        choices=NILAI_HURUF_CHOICES,
        initial="A",
        required=False,
        widget=forms.Select(attrs={"class": "form-select"}),
    )

    def clean_nilai(self):
        return self.cleaned_data.get("nilai") or "A"


class PenolakanForm(forms.Form):
    """Dipakai untuk tolak pendaftaran maupun tolak bukti pembayaran."""

    alasan = forms.CharField(
        max_length=MAKS_ALASAN,
        widget=forms.Textarea(
            attrs={
                "class": "form-control",
                "rows": 3,
                "placeholder": "Alasan penolakan (maks. 500 karakter)",
            }
        ),
    )

    def clean_alasan(self):
        alasan = self.cleaned_data["alasan"].strip()
        if not alasan:
            raise forms.ValidationError("Alasan penolakan wajib diisi.")
        return alasan


class LaporanUploadForm(forms.Form):
    laporan = forms.FileField(
        validators=[validate_laporan_file],
        widget=forms.ClearableFileInput(attrs={"class": "form-control"}),
        help_text="PDF, DOC, atau DOCX, maksimal 10 MB.",
    )
    video_url = forms.URLField(
        required=False,
        widget=forms.URLInput(
            attrs={"class": "form-control", "placeholder": "https://..."}
        ),
    )
