from decimal import Decimal
from pathlib import Path
from typing import Any, Dict

from dealerdesk.reporting.formatters import DEFAULT_SYMBOL, fmt_count, fmt_currency, fmt_label

# Sections in the order a sales desk reads them
ENTITY_ORDER = ["enquiry", "order", "price", "shipping", "customer", "model", "color"]


def format_value(value: Any, symbol: str = DEFAULT_SYMBOL) -> str:
    if isinstance(value, Decimal):
        return fmt_currency(value, symbol)
    if isinstance(value, dict):
        return ", ".join(f"{k}: {fmt_count(v)}" for k, v in value.items()) or "-"
    if isinstance(value, (int, float)):
        return fmt_count(value)
    return str(value)


# =====================================================
# DASHBOARD REPORT (MARKDOWN - SOURCE OF TRUTH)
# =====================================================

class DashboardReport:
    """
    Writes the dashboard payload as Markdown.
    Never computes anything; the payload is final.
    """

    name = "dashboard"
    filename = "DealerDesk_Dashboard.md"

    def __init__(self, currency_symbol: str = DEFAULT_SYMBOL):
        self.currency_symbol = currency_symbol

    def build(self, payload: Dict[str, Any], output_dir: Path) -> Path:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        report_path = output_dir / self.filename

        with open(report_path, "w", encoding="utf-8") as f:
            self._write_header(f, payload.get("meta", {}))
            self._write_kpis(f, payload.get("kpis", {}))

            summaries = payload.get("summaries", {})
            for entity in self._sort_entities(summaries.keys()):
                self._write_summary(f, entity, summaries[entity])

            self._write_visuals(f, payload.get("visuals", []), output_dir)
            self._write_footer(f, payload.get("meta", {}))

        return report_path

    # -------------------------------------------------
    # SECTIONS
    # -------------------------------------------------
    def _write_header(self, f, meta: Dict[str, Any]):
        f.write("# Dealership Dashboard\n\n")
        f.write(f"**Generated:** {meta.get('generated_on', '-')}\n\n")
        f.write("---\n\n")

    def _write_kpis(self, f, kpis: Dict[str, Any]):
        if not kpis:
            return
        f.write("## Key Metrics\n\n")
        f.write("| Metric | Value |\n")
        f.write("| :--- | ---: |\n")
        for key, value in kpis.items():
            f.write(f"| {fmt_label(key)} | {format_value(value, self.currency_symbol)} |\n")
        f.write("\n")

    def _write_summary(self, f, entity: str, summary: Dict[str, Any]):
        f.write(f"## {fmt_label(entity)}\n\n")
        if not summary:
            f.write("_No data._\n\n")
            return
        f.write("| Metric | Value |\n")
        f.write("| :--- | ---: |\n")
        for key, value in summary.items():
            f.write(f"| {fmt_label(key)} | {format_value(value, self.currency_symbol)} |\n")
        f.write("\n")

    def _write_visuals(self, f, visuals, output_dir: Path):
        if not visuals:
            return
        f.write("## Charts\n\n")
        for vis in visuals:
            path = Path(vis.get("path", ""))
            try:
                path = path.relative_to(output_dir)
            except ValueError:
                pass
            f.write(f"![{vis.get('caption', '')}]({path.as_posix()})\n")
            f.write(f"> {vis.get('caption', '')}\n\n")

    def _write_footer(self, f, meta: Dict[str, Any]):
        f.write("\n---\n")
        f.write(f"_Generated by **dealerdesk** v{meta.get('version', '-')}_\n")

    # -------------------------------------------------
    # HELPERS
    # -------------------------------------------------
    def _sort_entities(self, entities):
        return sorted(
            entities,
            key=lambda e: ENTITY_ORDER.index(e) if e in ENTITY_ORDER else 99,
        )
