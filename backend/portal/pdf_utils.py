# backend/portal/pdf_utils.py
import logging

from django.template.loader import get_template
from django.http import HttpResponse
from xhtml2pdf import pisa

logger = logging.getLogger(__name__)


def render_to_pdf(template_src, context_dict):
    template = get_template(template_src)
    html = template.render(context_dict)

    response = HttpResponse(content_type="application/pdf")
    pisa_status = pisa.CreatePDF(html, dest=response)
    if pisa_status.err:
        logger.error("Gagal generate PDF dari template %s", template_src)
        return HttpResponse("Terjadi error saat generate PDF", status=500)
    return response
