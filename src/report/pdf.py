# src/report/pdf.py
from __future__ import annotations
from io import BytesIO
from datetime import datetime
from typing import Any, Mapping, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet

from src.savings.calculator import CalculationMethod, CalculationResult, RECOVERY_RATE
from src.service.num_utils import euros, percent, de_number

def _table_style(header_bold=True):
    return TableStyle([
        ("FONT", (0,0), (-1,0), "Helvetica-Bold" if header_bold else "Helvetica", 10),
        ("FONT", (0,1), (-1,-1), "Helvetica", 9),
        ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
        ("ROWBACKGROUNDS", (0,1), (-1,-1), [colors.whitesmoke, colors.white]),
        ("ALIGN", (1,1), (1,-1), "RIGHT"),
        ("BOX", (0,0), (-1,-1), 0.5, colors.grey),
        ("INNERGRID", (0,0), (-1,-1), 0.25, colors.grey),
        ("BOTTOMPADDING", (0,0), (-1,-1), 6),
        ("TOPPADDING", (0,0), (-1,-1), 6),
    ])

def _steps(result: CalculationResult):
    if result.calculation_method is CalculationMethod.WORKSTATIONS:
        base = f"{de_number(result.workstations)} x {euros(result.cost_per_workstation)}"
    else:
        base = f"{euros(result.monthly_cost)} x 12"
    waste_pct = de_number(result.waste_factor * 100)
    rows = [
        ["Step", "Formula", "Result"],
        ["1. Annual cost", base, euros(result.annual_cost)],
        ["2. Waste factor", f"100% - {de_number(result.utilization)}%", f"{waste_pct}%"],
        ["3. Annual waste", f"{euros(result.annual_cost)} x {waste_pct}%", euros(result.raw_annual_waste)],
        ["   Work model", f"x {result.work_model_multiplier:.2f} ({result.work_model.value})", euros(result.annual_waste)],
        ["4. Recoverable", f"{euros(result.annual_waste)} x {int(RECOVERY_RATE * 100)}%", euros(result.recoverable_savings)],
        ["5. Savings %", "recoverable / annual cost x 100", percent(result.cost_cut_percentage)],
    ]
    return rows

def build_summary_pdf(contact: Mapping[str, Any], result: CalculationResult,
                      generated: Optional[datetime] = None) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=24, leftMargin=24, topMargin=24, bottomMargin=24)
    styles = getSampleStyleSheet(); story = []
    story += [Paragraph("Workspace Savings Analysis — Summary", styles["Title"]), Spacer(1,6)]
    story += [Paragraph(f"Generated: {(generated or datetime.now()):%Y-%m-%d %H:%M}", styles["Normal"]), Spacer(1,12)]
    company = str(contact.get("company") or "—"); location = str(contact.get("location") or "—")
    method = "Workstations" if result.calculation_method is CalculationMethod.WORKSTATIONS else "Office space (m²)"
    meta_tbl = Table([["Company", company, "Location", location],
                      ["Method", method, "Work model", result.work_model.value]],
                     hAlign="LEFT", colWidths=[105,165,105,165])
    meta_tbl.setStyle(_table_style(header_bold=False)); story += [meta_tbl, Spacer(1,12)]
    kpi = [["Metric", "Value"],
           ["Annual cost", euros(result.annual_cost)],
           ["Annual waste", euros(result.annual_waste)],
           ["Monthly waste", euros(result.monthly_waste)],
           ["Potential savings", euros(result.recoverable_savings)],
           ["Cost reduction", percent(result.cost_cut_percentage)]]
    kpi_tbl = Table(kpi, hAlign="LEFT", colWidths=[320,220])
    kpi_tbl.setStyle(_table_style()); story += [Paragraph("Key Figures", styles["Heading2"]), kpi_tbl, Spacer(1,12)]
    steps_tbl = Table(_steps(result), hAlign="LEFT", colWidths=[110,280,150])
    steps_tbl.setStyle(_table_style()); story += [Paragraph("Calculation Breakdown", styles["Heading2"]), steps_tbl]
    doc.build(story); buffer.seek(0); return buffer.getvalue()
