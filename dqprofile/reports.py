# dqprofile/reports.py
"""
Render a QualityReport as a PDF.

Requires: reportlab
"""

from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib import colors

from .engine import QualityReport
from .llm import normalize_insights
from .profiling import profile_dataframe

MAX_TABLE_ROWS = 15


def score_label(score: int) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 70:
        return "Good"
    return "Poor"


def _grid_table(data):
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def generate_pdf_report_bytes(report: QualityReport, insights: Optional[dict] = None, title: str = "Data Quality Report") -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4)
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(escape(title), styles["Title"]))
    story.append(Spacer(1, 12))

    # Summary
    story.append(Paragraph(f"Rows: {report.total_rows}", styles["Normal"]))
    story.append(Paragraph(f"Columns: {report.total_columns}", styles["Normal"]))
    story.append(Paragraph(
        f"Data Quality Score: {report.overall_score} / 100 ({score_label(report.overall_score)})",
        styles["Normal"],
    ))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Score Breakdown", styles["Heading2"]))
    story.append(Spacer(1, 6))
    story.append(_grid_table([
        ["Completeness", "Consistency", "Accuracy", "Validity"],
        [f"{report.completeness}%", f"{report.consistency}%", f"{report.accuracy}%", f"{report.validity}%"],
    ]))
    story.append(Spacer(1, 12))

    # Column profile (first columns only)
    story.append(Paragraph("Column Profiling (truncated)", styles["Heading2"]))
    story.append(Spacer(1, 6))
    profile_df = profile_dataframe(report.column_metrics)
    if profile_df.empty:
        story.append(Paragraph("No columns to profile.", styles["Normal"]))
    else:
        pdf_profile = profile_df.head(MAX_TABLE_ROWS).astype(object).fillna("").astype(str)
        data = [list(pdf_profile.columns)] + pdf_profile.values.tolist()
        story.append(_grid_table(data))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Issues", styles["Heading2"]))
    if not report.issues:
        story.append(Paragraph("No issues detected.", styles["Normal"]))
    else:
        for issue in report.issues:
            text = f"<b>[{issue.severity.value.upper()}]</b> {escape(issue.message)}"
            story.append(Paragraph(text, styles["Normal"]))
            story.append(Spacer(1, 4))

    if insights:
        insights = normalize_insights(insights, report)
        story.append(Spacer(1, 12))
        story.append(Paragraph("Insights", styles["Heading2"]))
        story.append(Paragraph(escape(insights["summary"]), styles["Normal"]))
        for rec in insights["recommendations"]:
            story.append(Paragraph(f"• {escape(rec)}", styles["Normal"]))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
