"""Printable price quote for a unit: one A4 page per payment plan."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .models import PaymentPlanResult, UnitInfo
from .tables import group_schedule, rates_rows, select_plans
from .utils import due_date, format_currency


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteBranding:
    developer: str = "PLDG DEVELOPMENT"
    project: str = "ETLALA"
    tagline: str = "THE PROMISE LIVES HERE"
    footer_lines: Tuple[str, ...] = ("All rights reserved for Bassem Salama", "01116850111")
    currency: str = "EGP"
    file_prefix: str = "PLDG"


def document_reference(issued: datetime) -> str:
    millis = int(issued.timestamp() * 1000)
    return f"QUOTE-{str(millis)[-6:]}"


def quote_filename(unit: UnitInfo, branding: QuoteBranding = QuoteBranding()) -> str:
    price = int(unit.total_price) if float(unit.total_price).is_integer() else unit.total_price
    return f"{branding.file_prefix}_Quote_{price}.pdf"


def _styles():
    base = getSampleStyleSheet()
    return {
        "brand": ParagraphStyle("brand", parent=base["Title"], fontSize=26, leading=30, spaceAfter=0),
        "project": ParagraphStyle("project", parent=base["Normal"], fontSize=14, leading=18, alignment=TA_CENTER),
        "small": ParagraphStyle(
            "small", parent=base["Normal"], fontSize=9, leading=11, alignment=TA_CENTER, textColor=colors.grey
        ),
        "section": ParagraphStyle("section", parent=base["Heading4"], fontSize=11, spaceAfter=4),
        "unit": ParagraphStyle("unit", parent=base["Normal"], fontSize=9, leading=13, textColor=colors.HexColor("#505050")),
        "plan": ParagraphStyle("plan", parent=base["Heading2"], fontSize=14, spaceAfter=2),
        "normal": base["Normal"],
    }


def _unit_lines(unit: UnitInfo, currency: str) -> Tuple[List[str], List[str]]:
    left = [
        f"Total Price: {format_currency(unit.total_price, currency)}",
        f"Unit Type: {unit.unit_type}",
        f"Rooms: {unit.rooms}",
    ]
    right: List[str] = []
    if unit.building and unit.building.strip():
        right.append(f"Building: {escape(unit.building)}")
    if unit.bua > 0:
        right.append(f"BUA: {unit.bua:g} sqm")
    if unit.garden_roof_area > 0:
        right.append(f"Garden/Roof: {unit.garden_roof_area:g} sqm")
    if unit.floor and unit.floor.strip():
        right.append(f"Floor: {escape(unit.floor)}")
    return left, right


def _unit_block(unit: UnitInfo, branding: QuoteBranding, styles) -> Table:
    left, right = _unit_lines(unit, branding.currency)
    block = Table(
        [
            [Paragraph("UNIT SPECIFICATIONS", styles["section"]), ""],
            [
                Paragraph("<br/>".join(left), styles["unit"]),
                Paragraph("<br/>".join(right), styles["unit"]),
            ],
        ],
        colWidths=[91 * mm, 91 * mm],
    )
    block.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#F5F5F5")),
                ("SPAN", (0, 0), (-1, 0)),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 6 * mm),
                ("TOPPADDING", (0, 0), (-1, -1), 4 * mm),
                ("BOTTOMPADDING", (0, -1), (-1, -1), 5 * mm),
            ]
        )
    )
    return block


def schedule_table_rows(plan: PaymentPlanResult, issued: datetime, currency: str = "EGP") -> List[List[str]]:
    """Header, grouped schedule and installment-rate rows of a plan's table."""
    rows = [["Payment Step", "Share %", "Due Date", f"Value ({currency})"]]
    for _, group in group_schedule(plan).iterrows():
        rows.append(
            [
                group["name"],
                f"{group['percentage']:.2f}%",
                due_date(int(group["timing"]), issued.date()),
                format_currency(group["amount"], currency),
            ]
        )
    rates = rates_rows(plan)
    if rates:
        rows.append(["Periodic Installment Rates", "", "", ""])
        for label, value in rates:
            rows.append([label, "", "", format_currency(value, currency)])
    return rows


def _schedule_table(plan: PaymentPlanResult, issued: datetime, currency: str) -> Table:
    rows = schedule_table_rows(plan, issued, currency)
    table = Table(rows, colWidths=[80 * mm, 27 * mm, 35 * mm, 40 * mm], repeatRows=1)
    style = [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BBBBBB")),
        ("BACKGROUND", (0, 0), (-1, 0), colors.black),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ALIGN", (1, 1), (1, -1), "CENTER"),
        ("ALIGN", (3, 1), (3, -1), "RIGHT"),
        ("FONTNAME", (3, 1), (3, -1), "Helvetica-Bold"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if not plan.is_cash:
        rates_header = len(rows) - len(rates_rows(plan)) - 1
        style += [
            ("SPAN", (0, rates_header), (-1, rates_header)),
            ("BACKGROUND", (0, rates_header), (-1, rates_header), colors.HexColor("#F0F0F0")),
            ("FONTNAME", (0, rates_header), (-1, rates_header), "Helvetica-Bold"),
            ("ALIGN", (0, rates_header), (-1, rates_header), "CENTER"),
        ]
    table.setStyle(TableStyle(style))
    return table


def build_quote_pdf(
    unit: UnitInfo,
    plans: Sequence[PaymentPlanResult],
    selected_ids: Iterable[str] = (),
    branding: QuoteBranding = QuoteBranding(),
    issued: Optional[datetime] = None,
) -> bytes:
    """Render the quote and return the PDF bytes.

    Only the selected plans are exported, or every plan when none is selected.

    Raises
    ------
    ValueError
        If the unit has no positive price or there is no plan to export.
    """
    if not unit.is_complete:
        raise ValueError("Cannot export a quote without a positive unit price")
    to_export = select_plans(plans, selected_ids)
    if not to_export:
        raise ValueError("No payment plan to export")

    issued = issued or datetime.now()
    styles = _styles()
    reference = f"Doc Ref: {document_reference(issued)} | Date: {issued.strftime('%d/%m/%Y')}"

    def _footer(canvas, doc):
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(colors.HexColor("#969696"))
        y = 15 * mm
        for line in branding.footer_lines:
            canvas.drawCentredString(A4[0] / 2, y, line)
            y -= 5 * mm
        canvas.restoreState()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4, topMargin=12 * mm, bottomMargin=25 * mm, title=f"{branding.developer} quote"
    )
    story = []
    for index, plan in enumerate(to_export):
        if index > 0:
            story.append(PageBreak())
        story.append(Paragraph(branding.developer, styles["brand"]))
        story.append(Paragraph(branding.project, styles["project"]))
        story.append(Paragraph(branding.tagline, styles["small"]))
        story.append(Paragraph(reference, styles["small"]))
        story.append(Spacer(1, 6 * mm))
        story.append(_unit_block(unit, branding, styles))
        story.append(Spacer(1, 8 * mm))
        story.append(Paragraph(escape(plan.name), styles["plan"]))
        story.append(Paragraph(f"Net Payable: {format_currency(plan.net_price, branding.currency)}", styles["unit"]))
        story.append(Spacer(1, 4 * mm))
        story.append(_schedule_table(plan, issued, branding.currency))
    doc.build(story, onFirstPage=_footer, onLaterPages=_footer)
    logger.info("Built quote %s with %d plan(s)", reference, len(to_export))
    return buffer.getvalue()
