"""
dealerdesk CLI
Seeded workspace inspection + dashboard report (Markdown, optional PDF)
"""

import argparse
import logging
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from dealerdesk.__version__ import __version__
from dealerdesk.config.loader import load_config
from dealerdesk.core.errors import DealerDeskError
from dealerdesk.core.pricing import CHARGE_COMPONENTS, DEDUCTIONS, PAYMENTS, calculate_balance

logger = logging.getLogger(__name__)

PRICE_COMPONENTS = CHARGE_COMPONENTS + DEDUCTIONS + PAYMENTS


def amount_arg(value: str) -> Decimal:
    """argparse type for currency flags: a finite, non-negative number."""
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative amount: {value!r}")
    return amount


# -------------------------------------------------
# PROGRAMMATIC ENTRY
# -------------------------------------------------
def run_report(
    workspace,
    config: Dict[str, Any],
    output_dir: Optional[str] = None,
    generate_pdf: bool = False,
) -> Dict[str, Optional[str]]:
    """
    Returns:
        {
            "markdown": <path>,
            "pdf": <path or None>,
            "run_dir": <path>
        }
    """
    from dealerdesk.reporting.markdown import DashboardReport
    from dealerdesk.reporting.orchestrator import generate_report_payload

    report_cfg = config.get("report", {})

    if output_dir:
        run_dir = Path(output_dir)
    else:
        run_dir = Path(config.get("output_dir", "runs")) / datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Run directory: %s", run_dir)

    payload = generate_report_payload(
        workspace,
        output_dir=run_dir,
        charts=report_cfg.get("charts", True),
    )

    md_path = DashboardReport(
        currency_symbol=report_cfg.get("currency_symbol", "₹")
    ).build(payload, run_dir)

    pdf_path = None
    if generate_pdf:
        from dealerdesk.reporting.pdf_renderer import DashboardPDFRenderer

        pdf_path = DashboardPDFRenderer().render(
            payload=payload,
            output_path=run_dir / "DealerDesk_Dashboard.pdf",
        )

    return {
        "markdown": str(md_path),
        "pdf": str(pdf_path) if pdf_path else None,
        "run_dir": str(run_dir),
    }


# -------------------------------------------------
# SUBCOMMANDS
# -------------------------------------------------
def _cmd_entities(workspace, args) -> int:
    for name in workspace.entities():
        manager = workspace.manager(name)
        print(f"{name:<10} {len(manager.store):>4}  {manager.entity.description}")
    return 0


def _cmd_list(workspace, args) -> int:
    from dealerdesk.reporting.utils import records_frame

    manager = workspace.manager(args.entity)
    records = manager.list(args.query)
    if not records:
        print("No records found.")
        return 0

    columns = ["id"] + [c for c in manager.entity.search_fields if c != "id"]
    if manager.entity.statuses:
        columns.append("status")
    print(records_frame(records, columns)[columns].to_string(index=False))
    return 0


def _cmd_options(workspace, args) -> int:
    for option in workspace.manager(args.entity).resolve_options(args.field, args.parent):
        print(f"{option.id}\t{option.label}")
    return 0


def _cmd_price_calc(workspace, args) -> int:
    values = {name: getattr(args, name) for name in PRICE_COMPONENTS}
    breakdown = calculate_balance(values)
    print(f"Total:   {breakdown.total_amount}")
    print(f"Balance: {breakdown.balance_amount}")
    return 0


def _cmd_report(workspace, args, config) -> int:
    result = run_report(
        workspace,
        config,
        output_dir=args.out,
        generate_pdf=args.pdf or bool(config.get("export_pdf")),
    )

    print("\n✅ Report generated")
    print(f"📝 Markdown: {result['markdown']}")
    if result["pdf"]:
        print(f"📄 PDF: {result['pdf']}")
    print(f"📁 Run folder: {result['run_dir']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dealerdesk",
        description=f"dealerdesk v{__version__}",
    )
    parser.add_argument("--config", required=False, help="Path to config YAML")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("entities", help="List entity types and record counts")

    p_list = sub.add_parser("list", help="List records of one entity")
    p_list.add_argument("entity")
    p_list.add_argument("-q", "--query", default=None, help="Case-insensitive search")

    p_opts = sub.add_parser("options", help="Show selectable options for a form field")
    p_opts.add_argument("entity")
    p_opts.add_argument("field")
    p_opts.add_argument("--parent", default=None, help="Parent id narrowing the options")

    p_price = sub.add_parser("price-calc", help="Compute total and balance amounts")
    for name in PRICE_COMPONENTS:
        p_price.add_argument(
            f"--{name.replace('_', '-')}", dest=name, type=amount_arg, default=Decimal("0")
        )

    p_report = sub.add_parser("report", help="Write the dashboard report")
    p_report.add_argument("--out", default=None, help="Output directory")
    p_report.add_argument("--pdf", action="store_true", help="Also export PDF")

    return parser


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"dealerdesk v{__version__}")
        return 0

    if not args.command:
        parser.error("a command is required")

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        logging.basicConfig(format="%(asctime)s [%(levelname)s] %(message)s")
        logger.error("Invalid config: %s", exc)
        return 2

    # ---- LOGGING ----
    level = "DEBUG" if args.verbose else str(config.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # pure calculation, no workspace needed
    if args.command == "price-calc":
        return _cmd_price_calc(None, args)

    from dealerdesk.workspace import DealerWorkspace

    try:
        workspace = DealerWorkspace.from_config(config)

        if args.command == "entities":
            return _cmd_entities(workspace, args)
        if args.command == "list":
            return _cmd_list(workspace, args)
        if args.command == "options":
            return _cmd_options(workspace, args)
        if args.command == "report":
            return _cmd_report(workspace, args, config)
    except (DealerDeskError, KeyError, FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
