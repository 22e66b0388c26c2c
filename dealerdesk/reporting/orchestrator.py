import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from dealerdesk.__version__ import __version__
from dealerdesk.reporting.kpis import dashboard_kpis

log = logging.getLogger("dealerdesk.orchestrator")


# =====================================================
# ORCHESTRATOR - SINGLE SOURCE OF TRUTH
# =====================================================

def generate_report_payload(
    workspace,
    today: Optional[date] = None,
    output_dir: Optional[Path] = None,
    charts: bool = True,
) -> Dict[str, Any]:
    """
    Authoritative orchestration layer.

    Responsibilities:
    - Collect dashboard KPIs
    - Collect per-entity summaries
    - Render charts (when an output dir is given)

    Explicitly does NOT format values or write reports.
    """
    today = today or workspace.clock()

    summaries = {}
    for name in workspace.entities():
        summaries[name] = workspace.manager(name).summary(today)
        log.debug("%s summary: %s", name, summaries[name])

    visuals = []
    if charts and output_dir is not None:
        from dealerdesk.reporting.visuals import generate_dashboard_visuals

        visuals = generate_dashboard_visuals(summaries, Path(output_dir) / "visuals")

    return {
        "meta": {
            "generated_on": today.isoformat(),
            "version": __version__,
        },
        "kpis": dashboard_kpis(workspace),
        "summaries": summaries,
        "visuals": visuals,
    }
