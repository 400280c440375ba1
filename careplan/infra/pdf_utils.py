import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont

from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.logic.reporting.summary import compute_plan_summary

# Built-in CID font so weekday and service names render without shipping a TTF
JP_FONT = "HeiseiKakuGo-W5"
pdfmetrics.registerFont(UnicodeCIDFont(JP_FONT))


def generate_pdf_for_plan(plan, catalog=DEFAULT_CATALOG):
    """Generate a PDF: one row per weekday plus the monthly services, then the budget summary."""
    summary = compute_plan_summary(plan, catalog)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    for name in ("Title", "Normal"):
        styles[name].fontName = JP_FONT
    level = summary["care_level"]
    elements = [
        Paragraph(f"ケアプラン - {level['name']} (上限 {level['max_units']:,} 単位)", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["曜日", "サービス", "単位/日", "単位/月"]]
    for day, info in summary["days"].items():
        names = ", ".join(s["name"] for s in info["services"]) or "-"
        data.append([day, names, info["units_per_day"], info["monthly_units"]])
    monthly = summary["monthly"]
    data.append(["毎月", ", ".join(s["name"] for s in monthly["services"]) or "-", "", monthly["units"]])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#2563EB")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,-1), JP_FONT),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 16))

    status = "限度額内" if summary["within_limit"] else f"限度額超過 ({summary['overage_units']:,} 単位)"
    elements.append(Paragraph(
        f"合計 {summary['total_units']:,} / {summary['cap']:,} 単位 - {status} - 自己負担額 {summary['cost']:,} 円",
        styles["Normal"],
    ))
    doc.build(elements)
    return buf.getvalue()
