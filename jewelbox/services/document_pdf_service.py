"""
Printable documents: inventory tag labels and sale invoices (ReportLab).

Both builders take ORM objects and return PDF bytes; the API layer only sets
the response headers.
"""
from datetime import datetime
from decimal import Decimal
from io import BytesIO
from typing import Any, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from jewelbox.config import settings
from jewelbox.models import InventoryUnit, Sale
from jewelbox.utils.numbers import round_money, round_weight

# Label stock: 90 x 50 mm
TAG_PAGE_SIZE = (90 * mm, 50 * mm)
TAG_MARGIN_MM = 3


def _escape(s: Optional[str]) -> str:
    if not s:
        return ""
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _grams(value) -> str:
    return f"{round_weight(Decimal(str(value or 0)))} g"


def _money(value) -> str:
    return f"{round_money(Decimal(str(value or 0))):,.2f}"


def _fmt_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""


def get_document_styles() -> dict:
    styles = getSampleStyleSheet()
    return {
        "business_name": ParagraphStyle(
            name="BusinessName",
            parent=styles["Normal"],
            fontSize=13,
            fontName="Helvetica-Bold",
            spaceAfter=4,
        ),
        "heading": ParagraphStyle(
            name="DocHeading",
            parent=styles["Heading1"],
            fontSize=14,
            spaceAfter=8,
            alignment=1,
        ),
        "detail": ParagraphStyle(
            name="Detail",
            parent=styles["Normal"],
            fontSize=10,
            leading=12,
        ),
        "tag_number": ParagraphStyle(
            name="TagNumber",
            parent=styles["Normal"],
            fontSize=14,
            leading=16,
            fontName="Helvetica-Bold",
        ),
        "tag_detail": ParagraphStyle(
            name="TagDetail",
            parent=styles["Normal"],
            fontSize=7,
            leading=8.5,
        ),
    }


def _item_label(unit: InventoryUnit) -> str:
    item = unit.item
    if item is None:
        return ""
    if item.abbreviation:
        return f"{item.name} ({item.abbreviation})"
    return item.name


def build_tag_pdf(unit: InventoryUnit, business_name: Optional[str] = None) -> bytes:
    """
    One label for a tagged unit: tag number, item, weights, karat and pieces.
    """
    buf = BytesIO()
    m = TAG_MARGIN_MM * mm
    doc = SimpleDocTemplate(
        buf,
        pagesize=TAG_PAGE_SIZE,
        leftMargin=m,
        rightMargin=m,
        topMargin=m,
        bottomMargin=m,
        title=unit.tag_number,
    )
    st = get_document_styles()
    flow: List[Any] = [
        Paragraph(_escape(business_name or settings.BUSINESS_NAME), st["tag_detail"]),
        Paragraph(_escape(unit.tag_number), st["tag_number"]),
        Paragraph(_escape(_item_label(unit)), st["tag_detail"]),
        Spacer(1, 1 * mm),
    ]
    rows = [
        ["Net", _grams(unit.net_weight), "Karat", f"{unit.karat}K"],
        ["Total", _grams(unit.total_weight), "Pieces", str(unit.pieces)],
        ["Pure", _grams(unit.pure_gold), "", ""],
    ]
    t = Table(rows, colWidths=[12 * mm, 28 * mm, 14 * mm, 20 * mm])
    t.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 7),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    flow.append(t)
    doc.build(flow)
    return buf.getvalue()


def build_sale_invoice_pdf(sale: Sale, business_name: Optional[str] = None) -> bytes:
    """
    A4 invoice: business header, invoice number and date, customer block,
    one row per sold unit (tag, item, karat, net/total weight, price) and the total.
    """
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=sale.invoice_number,
    )
    st = get_document_styles()
    flow: List[Any] = []

    # ----- Header -----
    flow.append(Paragraph(_escape(business_name or settings.BUSINESS_NAME), st["business_name"]))
    flow.append(Spacer(1, 5 * mm))
    flow.append(Paragraph("SALES INVOICE", st["heading"]))
    flow.append(Paragraph(_escape(sale.invoice_number), st["detail"]))
    flow.append(Spacer(1, 4 * mm))

    # ----- Metadata + customer -----
    meta = [
        ("Date:", _fmt_datetime(sale.created_at)),
        ("", ""),
        ("Customer:", sale.customer_name or ""),
    ]
    if sale.customer_phone:
        meta.append(("Phone:", sale.customer_phone))
    mt = Table(meta, colWidths=[40 * mm, 134 * mm])
    mt.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
    ]))
    flow.append(mt)
    flow.append(Spacer(1, 7 * mm))

    # ----- Lines -----
    data = [["#", "Tag", "Item", "Karat", "Net wt", "Total wt", "Price"]]
    for idx, line in enumerate(sale.line_items, start=1):
        unit = line.inventory_unit
        data.append([
            str(idx),
            unit.tag_number if unit else "",
            Paragraph(_escape(_item_label(unit)) if unit else "", st["detail"]),
            f"{unit.karat}K" if unit else "",
            _grams(unit.net_weight) if unit else "",
            _grams(unit.total_weight) if unit else "",
            _money(line.price),
        ])
    data.append(["", "", "", "", "", "Total", _money(sale.total_amount)])
    lt = Table(
        data,
        colWidths=[8 * mm, 22 * mm, 54 * mm, 14 * mm, 24 * mm, 24 * mm, 28 * mm],
        repeatRows=1,
    )
    lt.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTNAME", (-2, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#eeeeee")),
        ("ALIGN", (3, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.grey),
        ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.grey),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    flow.append(lt)

    if sale.notes:
        flow.append(Spacer(1, 6 * mm))
        flow.append(Paragraph(f"<b>Notes:</b> {_escape(sale.notes)}", st["detail"]))

    doc.build(flow)
    return buf.getvalue()
