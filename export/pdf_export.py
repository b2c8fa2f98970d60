"""Underwriting requirements checklist PDF."""
from __future__ import annotations
import io
from datetime import date
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.checklist import checklist_progress, filter_by_conditions, filter_by_stage, group_by_category
from core.models import ChecklistProgress, Requirement
from core.presets import CATEGORY_ORDER, DISCLAIMER
from core.utils import checked_ids

ASSUMPTIONS = "Assumptions"
NOT_SPECIFIED = "Not specified"
TABLE_STYLE = TableStyle([('BACKGROUND',(0,0),(-1,0), colors.lightgrey),('BOX',(0,0),(-1,-1),1,colors.black),('INNERGRID',(0,0),(-1,-1),0.5,colors.grey),('VALIGN',(0,0),(-1,-1),'TOP')])


def display_stage(req: Requirement, stage: Optional[str]) -> str:
    """A ``Both`` item shows the stage the document was generated for."""
    if req.stage == "Both":
        return stage or "Both"
    return req.stage


def checklist_rows(requirements: List[Requirement], checked, stage: Optional[str]) -> List[List[str]]:
    done = set(checked_ids(checked))
    rows = [["Status", "Requirement", "Stage", "Required"]]
    for r in requirements:
        rows.append([
            "YES" if r.id in done else "NO",
            r.description,
            display_stage(r, stage),
            "Yes" if r.required else "Optional",
        ])
    return rows


def status_summary(progress: ChecklistProgress) -> str:
    if progress.is_complete:
        return "All requirements have been received. This case is ready for underwriting review."
    if progress.is_required_complete:
        return (f"All required items received ({progress.required_checked}/{progress.required}). "
                f"{progress.outstanding} optional item(s) outstanding.")
    optional_outstanding = progress.outstanding - progress.required_outstanding
    return (f"{progress.required_outstanding} required item(s) and "
            f"{optional_outstanding} optional item(s) outstanding.")


def default_filename(quote_data: Optional[Dict[str, Any]], today: Optional[date] = None) -> str:
    ref = (quote_data or {}).get("reference_number")
    if ref:
        return f"UW_Checklist_{ref}.pdf"
    return f"UW_Checklist_{(today or date.today()).isoformat()}.pdf"


def build_checklist_pdf(
    requirements: List[Requirement],
    checked=None,
    quote_data: Optional[Dict[str, Any]] = None,
    stage: Optional[str] = None,
    show_guidance: bool = False,
    generated: Optional[date] = None,
) -> bytes:
    """Render already-filtered ``requirements`` as an A4 checklist PDF.

    PDF-only items are rendered.  Progress figures leave out the Assumptions
    category, which is informational.
    """

    quote_data = quote_data or {}
    done = set(checked_ids(checked))
    grouped = group_by_category(requirements, CATEGORY_ORDER)
    progress = checklist_progress([r for r in requirements if r.category != ASSUMPTIONS], done)
    generated_on = (generated or date.today()).strftime("%d %b %Y")

    styles = getSampleStyleSheet()
    cell = styles['BodyText']
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36,
                            title="UW Requirements Checklist")
    story = [Paragraph("<b>UW Requirements Checklist</b>", styles['Title'])]
    story.append(Paragraph(f"{escape(stage + ' Stage') if stage else 'All Stages'} | Generated: {generated_on}", styles['Normal']))
    if quote_data.get("reference_number"):
        story.append(Paragraph(f"Reference: {escape(str(quote_data['reference_number']))}", styles['Normal']))
    story.append(Spacer(1, 12))

    borrower = quote_data.get("quote_borrower_name") or quote_data.get("borrower_name") or NOT_SPECIFIED
    summary = Table(
        [["Borrower", "Total Items", "Received", "Outstanding"],
         [str(borrower), str(progress.total), str(progress.checked), str(progress.outstanding)]],
        hAlign='LEFT', colWidths=[200, 100, 100, 100],
    )
    summary.setStyle(TABLE_STYLE)
    story += [summary, Spacer(1, 6)]
    story.append(Paragraph(
        f"{progress.percent_complete}% Complete | {progress.required_checked}/{progress.required} Required Items Received",
        styles['Normal'],
    ))
    story.append(Spacer(1, 12))

    for category, reqs in grouped.items():
        if category == ASSUMPTIONS:
            if stage == "DIP":
                continue
            story.append(Paragraph(f"<b>{escape(category)}</b>", styles['Heading3']))
            for r in reqs:
                story.append(Paragraph(f"<i>&bull; {escape(r.description)}</i>", cell))
            story.append(Spacer(1, 12))
            continue
        n_done = sum(1 for r in reqs if r.id in done)
        story.append(Paragraph(f"<b>{escape(category)}</b> ({n_done}/{len(reqs)})", styles['Heading3']))
        rows = checklist_rows(reqs, done, stage)
        body = [rows[0]]
        for r, row in zip(reqs, rows[1:]):
            text = escape(row[1])
            if show_guidance and r.guidance:
                text += f"<br/><font size=7><i>Note: {escape(r.guidance)}</i></font>"
            body.append([row[0], Paragraph(text, cell), row[2], row[3]])
        t = Table(body, hAlign='LEFT', colWidths=[50, 320, 70, 60], repeatRows=1)
        t.setStyle(TABLE_STYLE)
        story += [t, Spacer(1, 12)]

    story.append(Paragraph("<b>Status Summary</b>", styles['Heading3']))
    story.append(Paragraph(escape(status_summary(progress)), styles['Normal']))
    address = quote_data.get("property_address") or quote_data.get("security_address")
    if address:
        story.append(Paragraph(f"Property: {escape(str(address))}", styles['Normal']))
    story += [Spacer(1, 12), Paragraph(f"<font size=8>{escape(DISCLAIMER)}</font>", styles['Normal'])]
    doc.build(story)
    return buf.getvalue()


def generate_checklist_pdf(
    catalog: List[Requirement],
    checked=None,
    quote_data: Optional[Dict[str, Any]] = None,
    stage: Optional[str] = None,
    show_guidance: bool = False,
    generated: Optional[date] = None,
) -> bytes:
    """Filter the full catalog for ``stage`` and ``quote_data`` and build the PDF."""
    reqs = filter_by_stage(catalog, stage) if stage else catalog
    reqs = filter_by_conditions(reqs, quote_data)
    return build_checklist_pdf(reqs, checked, quote_data, stage, show_guidance, generated)
