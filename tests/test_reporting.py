from decimal import Decimal
from pathlib import Path

from dealerdesk.reporting.formatters import fmt_count, fmt_currency
from dealerdesk.reporting.kpis import dashboard_kpis
from dealerdesk.reporting.markdown import DashboardReport
from dealerdesk.reporting.orchestrator import generate_report_payload
from dealerdesk.reporting.pdf_renderer import DashboardPDFRenderer


def test_dashboard_kpis(workspace):
    assert dashboard_kpis(workspace) == {
        "total_customers": 3,
        "active_orders": 1,          # ORD-20240114-002 has been delivered
        "pending_enquiries": 1,
        "available_models": 2,       # the Swift's only colour is unavailable
    }


def test_entity_summaries(workspace, today):
    payload = generate_report_payload(workspace, today)
    summaries = payload["summaries"]

    assert summaries["customer"] == {"total": 3}
    assert summaries["enquiry"] == {"total": 2, "pending": 1, "converted": 1}
    assert summaries["order"] == {"total": 2, "pending": 1, "confirmed": 1, "delayed": 0}
    assert summaries["model"] == {"total": 3, "by_fuel_type": {"Hybrid": 1, "Petrol": 2}}
    assert summaries["color"] == {"total": 4, "available": 3, "unavailable": 1, "upcoming": 4}
    assert summaries["shipping"] == {"total": 2, "scheduled": 1, "delivered": 1, "pending": 0}

    price = summaries["price"]
    assert price["total_revenue"] == Decimal("150000")
    assert price["total_pending"] == Decimal("4120000")
    assert price["average_order_value"] == Decimal("2172500")

    assert payload["meta"]["generated_on"] == "2024-02-01"
    assert payload["visuals"] == []


def test_delayed_orders_and_upcoming_colors(workspace, today):
    workspace.manager("order").update(
        "ORD-20240115-001", {"expected_delivery_date": "2024-02-10", "reason_for_delay": "Stock"}
    )
    workspace.manager("color").update("COLOR-001", {"approx_available_date": "2024-01-20"})

    assert workspace.manager("order").summary(today)["delayed"] == 1
    assert workspace.manager("color").summary(today)["upcoming"] == 3


def test_empty_workspace_summaries(small_workspace, today):
    prices = small_workspace.manager("price").summary(today)
    assert prices["average_order_value"] == Decimal("0")
    assert small_workspace.manager("order").summary(today)["delayed"] == 0


def test_formatters():
    assert fmt_currency(Decimal("950")) == "₹950"
    assert fmt_currency(Decimal("1415000")) == "₹14.15 L"
    assert fmt_currency(25_000_000) == "₹2.50 Cr"
    assert fmt_currency(None) == "-"
    assert fmt_currency("n/a") == "-"
    assert fmt_currency(Decimal("150000"), symbol="Rs. ") == "Rs. 1.50 L"
    assert fmt_count(1234) == "1,234"


def test_markdown_report(workspace, tmp_path):
    payload = generate_report_payload(workspace, output_dir=tmp_path)
    path = DashboardReport().build(payload, tmp_path)

    text = Path(path).read_text(encoding="utf-8")
    assert path.name == "DealerDesk_Dashboard.md"
    assert "# Dealership Dashboard" in text
    assert "| Total Customers | 3 |" in text
    assert "| Total Pending | ₹41.20 L |" in text
    assert "(visuals/order_status.png)" in text


def test_charts_written(workspace, tmp_path):
    payload = generate_report_payload(workspace, output_dir=tmp_path)

    names = sorted(Path(v["path"]).name for v in payload["visuals"])
    assert names == ["fuel_type_mix.png", "order_status.png", "receivables.png"]
    assert all(Path(v["path"]).exists() for v in payload["visuals"])


def test_charts_can_be_disabled(workspace, tmp_path):
    payload = generate_report_payload(workspace, output_dir=tmp_path, charts=False)
    assert payload["visuals"] == []
    assert not (tmp_path / "visuals").exists()


def test_pdf_report(workspace, tmp_path):
    payload = generate_report_payload(workspace, output_dir=tmp_path)
    path = DashboardPDFRenderer().render(payload, tmp_path / "out" / "dashboard.pdf")

    assert path.exists()
    assert path.read_bytes()[:4] == b"%PDF"
