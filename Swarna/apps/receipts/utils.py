"""
Utility functions for Receipts module.
"""

from io import BytesIO

from django.conf import settings
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

BRAND_COLOR = colors.HexColor('#92400e')  # Amber
MARGIN = 40
ROW_HEIGHT = 16

GIVEN_COLUMNS = [
    ('Item', 0),
    ('Tag', 120),
    ('Gross', 180),
    ('Stone', 240),
    ('Net', 300),
    ('Touch %', 360),
    ('Final', 420),
    ('Stone Amt', 475),
]

RECEIVED_COLUMNS = [
    ('#', 0),
    ('Received Gold', 60),
    ('Melting %', 200),
    ('Final', 320),
]


def _weight(value):
    return f"{value:.3f}"


class _PdfWriter:
    """Top-down text cursor that starts a new page when it runs out of room."""

    def __init__(self, buffer):
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.width, self.height = A4
        self.y = self.height - MARGIN

    def ensure_room(self, rows=1):
        if self.y - rows * ROW_HEIGHT < MARGIN:
            self.canvas.showPage()
            self.y = self.height - MARGIN

    def line(self, text, x=MARGIN, font="Helvetica", size=10, color=colors.black):
        self.ensure_room()
        self.canvas.setFont(font, size)
        self.canvas.setFillColor(color)
        self.canvas.drawString(x, self.y, text)
        self.y -= ROW_HEIGHT

    def row(self, columns, values, font="Helvetica", size=9):
        self.ensure_room()
        self.canvas.setFont(font, size)
        self.canvas.setFillColor(colors.black)
        for (_, offset), value in zip(columns, values):
            self.canvas.drawString(MARGIN + offset, self.y, str(value))
        self.y -= ROW_HEIGHT

    def rule(self):
        self.ensure_room()
        self.canvas.setStrokeColor(colors.lightgrey)
        self.canvas.line(MARGIN, self.y + ROW_HEIGHT / 2, self.width - MARGIN, self.y + ROW_HEIGHT / 2)
        self.y -= ROW_HEIGHT / 2

    def gap(self):
        self.y -= ROW_HEIGHT / 2


def generate_receipt_pdf(receipt):
    """
    Generate a PDF voucher for a receipt.

    Args:
        receipt: Receipt instance

    Returns:
        BytesIO buffer containing the PDF
    """
    buffer = BytesIO()
    pdf = _PdfWriter(buffer)
    info = receipt.client_info or {}

    # Header
    pdf.canvas.setFont("Helvetica-Bold", 20)
    pdf.canvas.setFillColor(BRAND_COLOR)
    pdf.canvas.drawCentredString(pdf.width / 2, pdf.y, settings.SHOP_NAME)
    pdf.y -= ROW_HEIGHT * 1.5
    pdf.canvas.setFont("Helvetica", 12)
    pdf.canvas.setFillColor(colors.black)
    pdf.canvas.drawCentredString(pdf.width / 2, pdf.y, f"Receipt Voucher {receipt.voucher_id}")
    pdf.y -= ROW_HEIGHT * 1.5

    pdf.line(f"Date: {receipt.issue_date:%d %b %Y}    Metal: {receipt.metal_type}    "
             f"Status: {receipt.get_status_display()}")
    pdf.line(f"Client: {info.get('clientName', '')} ({info.get('shopName', '')})")
    pdf.line(f"Phone: {info.get('phoneNumber', '')}    Address: {info.get('address', '')}")
    pdf.gap()

    # Given items
    pdf.line("Given Items", font="Helvetica-Bold", size=12, color=BRAND_COLOR)
    pdf.row(GIVEN_COLUMNS, [title for title, _ in GIVEN_COLUMNS], font="Helvetica-Bold")
    pdf.rule()
    for item in receipt.given_items.all():
        pdf.row(GIVEN_COLUMNS, [
            item.item_name[:22],
            item.tag,
            _weight(item.gross_wt),
            _weight(item.stone_wt),
            _weight(item.net_wt),
            f"{item.melting_touch:.2f}",
            _weight(item.final_wt),
            f"{item.stone_amt:.2f}",
        ])
    pdf.rule()
    pdf.row(GIVEN_COLUMNS, [
        "Total", "",
        _weight(receipt.total_gross_wt),
        _weight(receipt.total_stone_wt),
        _weight(receipt.total_net_wt),
        "",
        _weight(receipt.total_final_wt),
        f"{receipt.total_stone_amt:.2f}",
    ], font="Helvetica-Bold")
    pdf.gap()

    # Received items
    received = list(receipt.received_items.all())
    if received:
        pdf.line("Received Items", font="Helvetica-Bold", size=12, color=BRAND_COLOR)
        pdf.row(RECEIVED_COLUMNS, [title for title, _ in RECEIVED_COLUMNS], font="Helvetica-Bold")
        pdf.rule()
        for index, item in enumerate(received, start=1):
            pdf.row(RECEIVED_COLUMNS, [
                index,
                _weight(item.received_gold),
                f"{item.melting:.2f}",
                _weight(item.final_wt),
            ])
        pdf.rule()
        pdf.row(RECEIVED_COLUMNS, ["Total", "", "", _weight(receipt.total_received_final_wt)],
                font="Helvetica-Bold")
        pdf.gap()

    # Balance summary
    pdf.line("Balance", font="Helvetica-Bold", size=12, color=BRAND_COLOR)
    pdf.line(f"Opening balance: {_weight(receipt.opening_balance)} g")
    pdf.line(f"Given (fine): {_weight(receipt.total_final_wt)} g    "
             f"Received (fine): {_weight(receipt.total_received_final_wt)} g")
    pdf.line(f"Closing balance: {_weight(receipt.closing_balance)} g", font="Helvetica-Bold")

    pdf.canvas.setFont("Helvetica", 8)
    pdf.canvas.setFillColor(colors.gray)
    pdf.canvas.drawCentredString(pdf.width / 2, MARGIN / 2, f"Generated for voucher {receipt.voucher_id}")

    pdf.canvas.showPage()
    pdf.canvas.save()

    buffer.seek(0)
    return buffer
