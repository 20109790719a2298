import io
from fpdf import FPDF
from fpdf.fonts import FontFace
from typing import Any, Dict

import qrcode

from adcert.core.config import settings

BRAND_GREEN = (0, 104, 55)
LABEL_FILL = (245, 245, 245)


class CertificatePDF(FPDF):
    """Printable approval certificate.

    Expects already-validated certificate data (see ``certificate_pdf_data``);
    the verification link is printed so the holder can be checked online.
    """

    def __init__(self, certificate_data: Dict[str, Any]):
        super().__init__()
        self.certificate_data = certificate_data
        self.set_auto_page_break(auto=True, margin=15)
        self.add_page()

    def header(self):
        self.set_fill_color(*BRAND_GREEN)
        self.rect(0, 0, self.w, 8, style='F')
        self.ln(10)

    def footer(self):
        self.set_y(-20)
        self.set_font('helvetica', 'I', 8)
        self.set_text_color(90, 90, 90)
        self.multi_cell(
            0, 4, f"This certificate is issued by the {settings.REGULATOR_NAME}", align='C')
        self.set_text_color(0, 0, 0)

    def section_header(self, title: str):
        self.set_font('helvetica', 'B', 10)
        self.set_fill_color(*BRAND_GREEN)
        self.set_text_color(255, 255, 255)
        self.cell(0, 6, title, fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.set_fill_color(255, 255, 255)
        self.ln(1)

    def _field_table(self, rows):
        self.set_font('helvetica', '', 10)
        with self.table(col_widths=(50, 140), borders_layout="INTERNAL", line_height=7) as table:
            for label, value in rows:
                row = table.row()
                row.cell(label, style=FontFace(emphasis="B", fill_color=LABEL_FILL))
                row.cell(str(value or ""))
        self.ln(3)

    def generate(self) -> bytes:
        data = self.certificate_data

        self.set_font('helvetica', 'B', 18)
        self.set_text_color(*BRAND_GREEN)
        self.cell(0, 12, 'ADVERTISEMENT APPROVAL CERTIFICATE', align='C',
                  new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.set_font('helvetica', '', 12)
        self.cell(0, 8, f"Certificate No: {data['certificate_number']}", align='C',
                  new_x="LMARGIN", new_y="NEXT")
        self.ln(6)

        self.section_header("Campaign")
        self._field_table([
            ("Campaign", data.get('campaign_title')),
            ("Brand", data.get('brand_name')),
            ("Category", data.get('advert_category')),
            ("Geographic Scope", data.get('geographic_scope')),
        ])

        self.section_header("Advertiser")
        self._field_table([
            ("Name", data.get('advertiser_name')),
            ("Company", data.get('company_name')),
        ])

        self.section_header("Validity")
        self._field_table([
            ("Issued", data.get('issued_at')),
            ("Valid From", data.get('valid_from')),
            ("Valid Until", data.get('valid_until')),
        ])

        self.section_header("Verification")
        self.image(io.BytesIO(render_qr_png(data['verification_url'])), x=self.l_margin, w=40)
        self.set_font('helvetica', '', 9)
        self.multi_cell(0, 5, f"Scan the code or verify this certificate at: {data['verification_url']}")

        return bytes(self.output())


def render_qr_png(payload: str) -> bytes:
    """Encode the verification payload as a PNG QR code."""
    qr = qrcode.QRCode(box_size=8, border=2)
    qr.add_data(payload)
    qr.make(fit=True)
    buffer = io.BytesIO()
    qr.make_image().save(buffer)
    return buffer.getvalue()


def certificate_pdf_data(certificate) -> Dict[str, Any]:
    """Flatten a Certificate (with submission and advertiser loaded) for rendering."""
    submission = certificate.submission
    advertiser = submission.advertiser
    return {
        "certificate_number": certificate.certificate_number,
        "verification_url": certificate.qr_code_data,
        "campaign_title": submission.campaign_title,
        "brand_name": submission.brand_name,
        "advert_category": submission.advert_category.value.upper(),
        "geographic_scope": submission.geographic_scope.value.upper(),
        "advertiser_name": advertiser.full_name if advertiser else None,
        "company_name": advertiser.company_name if advertiser else None,
        "issued_at": certificate.issued_at.strftime('%d %B %Y'),
        "valid_from": certificate.valid_from.strftime('%d %B %Y'),
        "valid_until": certificate.valid_until.strftime('%d %B %Y'),
    }
