import pytest

from dealerdesk.core.references import Option


def test_color_options_narrowed_by_model(small_workspace):
    enquiries = small_workspace.manager("enquiry")

    narrowed = enquiries.resolve_options("color_id", "MODEL-001")
    assert narrowed == [Option("COLOR-001", "A"), Option("COLOR-002", "B")]

    assert [o.label for o in enquiries.resolve_options("color_id", "MODEL-002")] == ["C"]


def test_no_parent_means_all_options(small_workspace):
    enquiries = small_workspace.manager("enquiry")
    assert [o.label for o in enquiries.resolve_options("color_id")] == ["A", "B", "C"]
    assert [o.label for o in enquiries.resolve_options("color_id", "")] == ["A", "B", "C"]


def test_option_labels(workspace):
    orders = workspace.manager("order")
    customers = orders.resolve_options("customer_id")
    assert customers[0] == Option("CUST-001", "John Doe - 9876543210")

    enquiries = orders.resolve_options("enquiry_id")
    assert enquiries[0].label == "ENQ-001 - John Doe (Maruti Suzuki Fronx)"


def test_static_and_choice_options(workspace):
    slots = workspace.manager("shipping").resolve_options("delivery_time_slot")
    assert len(slots) == 5
    assert slots[0] == Option("9:00 AM - 11:00 AM", "9:00 AM - 11:00 AM")

    fuel = workspace.manager("model").resolve_options("fuel_type")
    assert [o.id for o in fuel] == ["Petrol", "Diesel", "Electric", "Hybrid", "CNG"]


def test_unknown_option_field_raises(workspace):
    with pytest.raises(KeyError):
        workspace.manager("customer").resolve_options("customer_name")


def test_snapshot_copies_display_fields(workspace):
    resolver = workspace.resolver
    refs = workspace.manager("price").entity.references

    updates, unresolved = resolver.snapshot(refs, {"order_id": "ORD-20240114-002"})
    assert updates == {"customer_name": "Jane Smith", "model_name": "Maruti Suzuki Baleno"}
    assert unresolved == []


def test_unresolved_reference_is_reported_not_raised(workspace):
    refs = workspace.manager("price").entity.references
    updates, unresolved = workspace.resolver.snapshot(refs, {"order_id": "ORD-00000000-999"})

    assert updates == {"customer_name": "", "model_name": ""}
    assert unresolved == ["order_id"]


def test_empty_optional_key_is_not_unresolved(workspace):
    refs = workspace.manager("order").entity.references
    updates, unresolved = workspace.resolver.snapshot(
        refs, {"customer_id": "CUST-001", "enquiry_id": ""}
    )
    assert updates == {"customer_name": "John Doe", "model_name": ""}
    assert unresolved == []


def test_resolver_is_read_only(workspace):
    before = workspace.store("order").list()
    workspace.manager("price").resolve_options("order_id")
    workspace.resolver.snapshot(
        workspace.manager("price").entity.references, {"order_id": "ORD-20240115-001"}
    )
    assert workspace.store("order").list() == before
