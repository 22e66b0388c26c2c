import logging
from pathlib import Path
from typing import Any, Dict, List

from reportlab.lib import utils
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
)

from dealerdesk.reporting.formatters import DEFAULT_SYMBOL, fmt_label
from dealerdesk.reporting.markdown import ENTITY_ORDER, format_value

log = logging.getLogger("dealerdesk.pdf")


# =====================================================
# DASHBOARD PDF RENDERER (ReportLab)
# =====================================================

class DashboardPDFRenderer:
    """
    Renders the same payload the Markdown report is built from.
    Reportlab's built-in Helvetica has no rupee glyph, so amounts use "Rs.".
    """

    PRIMARY = HexColor("#1f2937")
    BORDER = HexColor("#e5e7eb")
    HEADER_BG = HexColor("#f3f4f6")

    def __init__(self, currency_symbol: str = "Rs. "):
        self.currency_symbol = currency_symbol or DEFAULT_SYMBOL

    def render(self, payload: Dict[str, Any], output_path: Path) -> Path:
        payload = payload if isinstance(payload, dict) else {}

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            rightMargin=40,
            leftMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        story: List[Any] = []

        # -------------------------------------------------
        # STYLES
        # -------------------------------------------------
        def add_style(name, **kwargs):
            if name not in styles:
                styles.add(ParagraphStyle(name=name, **kwargs))

        add_style(
            "DeskTitle",
            fontSize=22,
            alignment=TA_CENTER,
            spaceAfter=18,
            fontName="Helvetica-Bold",
            textColor=self.PRIMARY,
        )
        add_style(
            "DeskSection",
            fontSize=15,
            spaceBefore=18,
            spaceAfter=10,
            fontName="Helvetica-Bold",
        )
        add_style("DeskBody", fontSize=11, leading=15, spaceAfter=6)
        add_style(
            "DeskCaption",
            fontSize=9,
            alignment=TA_CENTER,
            textColor=HexColor("#6b7280"),
            spaceAfter=12,
        )

        # =================================================
        # COVER
        # =================================================
        meta = payload.get("meta", {})
        story.append(Paragraph("Dealership Dashboard", styles["DeskTitle"]))
        story.append(Paragraph(
            f"Generated: {meta.get('generated_on', '-')}<br/>"
            f"dealerdesk v{meta.get('version', '-')}",
            styles["DeskBody"],
        ))
        story.append(Spacer(1, 12))

        # =================================================
        # KPIs + SUMMARIES
        # =================================================
        kpis = payload.get("kpis", {})
        if kpis:
            story.append(Paragraph("Key Metrics", styles["DeskSection"]))
            story.append(self._table(kpis))

        summaries = payload.get("summaries", {})
        for entity in sorted(
            summaries,
            key=lambda e: ENTITY_ORDER.index(e) if e in ENTITY_ORDER else 99,
        ):
            if not summaries[entity]:
                continue
            story.append(Paragraph(fmt_label(entity), styles["DeskSection"]))
            story.append(self._table(summaries[entity]))

        # =================================================
        # CHARTS
        # =================================================
        visuals = sorted(
            payload.get("visuals", []),
            key=lambda v: v.get("importance", 0),
            reverse=True,
        )
        drawable = [v for v in visuals if Path(v.get("path", "")).exists()]
        if drawable:
            story.append(PageBreak())
            story.append(Paragraph("Charts", styles["DeskSection"]))
            for vis in drawable:
                path = Path(vis["path"])
                img = utils.ImageReader(str(path))
                iw, ih = img.getSize()
                w = 6 * inch
                h = min((ih / iw) * w, 4 * inch)
                story.append(Image(str(path), width=w, height=h))
                story.append(Paragraph(vis.get("caption", ""), styles["DeskCaption"]))

        doc.build(story)
        log.info("PDF written: %s", output_path)
        return output_path

    def _table(self, values: Dict[str, Any]) -> Table:
        rows = [["Metric", "Value"]]
        for key, value in values.items():
            rows.append([fmt_label(key), format_value(value, self.currency_symbol)])

        table = Table(rows, colWidths=[4 * inch, 2 * inch])
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.5, self.BORDER),
            ("BACKGROUND", (0, 0), (-1, 0), self.HEADER_BG),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (1, 1), (1, -1), "RIGHT"),
            ("PADDING", (0, 0), (-1, -1), 6),
        ]))
        return table
