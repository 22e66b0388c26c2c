import logging
from pathlib import Path
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

log = logging.getLogger("dealerdesk.visuals")


def lakh_formatter(x, _):
    if abs(x) >= 10_000_000:
        return f"{x/10_000_000:.1f}Cr"
    if abs(x) >= 100_000:
        return f"{x/100_000:.1f}L"
    if abs(x) >= 1_000:
        return f"{x/1_000:.0f}K"
    return f"{int(x)}"


def fuel_type_mix(by_fuel_type: Dict[str, int], output_dir: Path):
    if not by_fuel_type:
        return None

    path = output_dir / "fuel_type_mix.png"
    plt.figure(figsize=(6, 4))
    plt.bar(list(by_fuel_type.keys()), list(by_fuel_type.values()), color="#1f2937")
    plt.ylabel("Models")
    plt.title("Models by Fuel Type")
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def order_status(order_summary: Dict[str, Any], output_dir: Path):
    counts = {
        "Pending": order_summary.get("pending", 0),
        "Confirmed": order_summary.get("confirmed", 0),
        "Delayed": order_summary.get("delayed", 0),
    }
    if not any(counts.values()):
        return None

    path = output_dir / "order_status.png"
    plt.figure(figsize=(6, 4))
    plt.bar(list(counts.keys()), list(counts.values()), color=["#f59e0b", "#10b981", "#ef4444"])
    plt.ylabel("Orders")
    plt.title("Order Pipeline")
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def receivables(price_summary: Dict[str, Any], output_dir: Path):
    received = float(price_summary.get("total_revenue", 0) or 0)
    pending = float(price_summary.get("total_pending", 0) or 0)
    if received == 0 and pending == 0:
        return None

    path = output_dir / "receivables.png"
    plt.figure(figsize=(6, 4))
    plt.bar(["Received", "Balance Due"], [received, pending], color=["#10b981", "#6b7280"])
    plt.title("Receivables")

    ax = plt.gca()
    ax.yaxis.set_major_formatter(FuncFormatter(lakh_formatter))

    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def generate_dashboard_visuals(summaries: Dict[str, Dict[str, Any]], output_dir: Path) -> List[Dict[str, Any]]:
    """
    Render the dashboard charts. Charts with no data are skipped.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    charts = [
        (fuel_type_mix, summaries.get("model", {}).get("by_fuel_type", {}), "Model line-up by fuel type", 0.6),
        (order_status, summaries.get("order", {}), "Order pipeline", 0.9),
        (receivables, summaries.get("price", {}), "Collected vs outstanding amounts", 0.8),
    ]

    visuals = []
    for render, data, caption, importance in charts:
        path = render(data, output_dir)
        if path is None:
            log.debug("%s skipped: no data", render.__name__)
            continue
        visuals.append({"path": str(path), "caption": caption, "importance": importance})

    return visuals
