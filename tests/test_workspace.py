import logging
from datetime import date

import pytest

from dealerdesk.config.loader import load_config
from dealerdesk.config.workspace_config import build_workspace_config
from dealerdesk.core.errors import RecordNotFoundError, UnknownEntityError
from dealerdesk.data.loader import MappingSeedSource
from dealerdesk.workspace import DealerWorkspace

TODAY = date(2024, 2, 1)


def test_every_entity_has_a_manager(workspace):
    assert workspace.entities() == [
        "customer", "model", "color", "enquiry", "order", "price", "shipping",
    ]
    assert workspace["order"] is workspace.manager("order")
    assert len(workspace.store("shipping")) == 2


def test_unknown_entity(workspace):
    with pytest.raises(UnknownEntityError):
        workspace.manager("invoice")
    with pytest.raises(KeyError):
        workspace.store("invoice")


def test_convert_enquiry(workspace):
    form = workspace.convert_enquiry("ENQ-001")
    assert form.values == {"customer_id": "CUST-001", "enquiry_id": "ENQ-001"}

    for field, value in {
        "order_type": "NEW",
        "payment_type": "CASH",
        "preferred_delivery_location": "Mumbai Showroom",
        "sale_type": "INDIVIDUAL",
        "tentative_delivery_date": "2024-03-01",
        "expected_delivery_date": "2024-03-01",
    }.items():
        form.set(field, value)

    result = form.submit()

    assert result.ok
    assert result.record["model_name"] == "Maruti Suzuki Fronx"
    assert workspace.manager("enquiry").get("ENQ-001")["status"] == "converted"


def test_failed_conversion_leaves_enquiry_pending(workspace):
    form = workspace.convert_enquiry("ENQ-001")
    assert not form.submit().ok
    assert workspace.manager("enquiry").get("ENQ-001")["status"] == "pending"


def test_convert_missing_enquiry(workspace, strict_workspace):
    assert workspace.convert_enquiry("ENQ-404") is None
    with pytest.raises(RecordNotFoundError):
        strict_workspace.convert_enquiry("ENQ-404")


def test_per_entity_policy():
    config = build_workspace_config({"entities": {"order": {"missing_record_policy": "report"}}})
    ws = DealerWorkspace(config=config, clock=lambda: TODAY)

    assert ws.manager("customer").delete("CUST-404") is False
    with pytest.raises(RecordNotFoundError):
        ws.manager("order").delete("ORD-00000000-404")


def test_id_width_from_config(customer_values):
    ws = DealerWorkspace(config=build_workspace_config({"id_width": 5}), clock=lambda: TODAY)
    assert ws.manager("customer").create(customer_values).record["id"] == "CUST-00004"


def test_unknown_seed_sections_are_ignored():
    ws = DealerWorkspace(MappingSeedSource({"widget": [{"id": "W-1"}]}), clock=lambda: TODAY)
    assert all(len(ws.store(name)) == 0 for name in ws.entities())


def test_from_config_uses_seed_path(tmp_path):
    seed = tmp_path / "seed.yaml"
    seed.write_text(
        "customer:\n"
        "  - id: CUST-010\n"
        "    customer_name: Ravi Kumar\n"
        "    mobile_number: '9000000010'\n",
        encoding="utf-8",
    )
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"seed:\n  path: {seed.as_posix()}\n", encoding="utf-8")

    ws = DealerWorkspace.from_config(load_config(str(cfg)), clock=lambda: TODAY)

    assert [r["id"] for r in ws.manager("customer").list()] == ["CUST-010"]
    assert ws.manager("order").list() == []


def test_seed_is_not_shared_between_workspaces(workspace):
    workspace.manager("customer").delete("CUST-001")
    fresh = DealerWorkspace(clock=lambda: TODAY)
    assert "CUST-001" in fresh.store("customer")


def test_startup_logging_follows_host_config(caplog):
    with caplog.at_level(logging.WARNING, logger="dealerdesk"):
        DealerWorkspace(clock=lambda: TODAY)
    assert "Workspace ready" not in caplog.text

    with caplog.at_level(logging.INFO, logger="dealerdesk"):
        DealerWorkspace(clock=lambda: TODAY)
    assert "Workspace ready" in caplog.text

    assert logging.getLogger("dealerdesk.workspace").handlers == []
