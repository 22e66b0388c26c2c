from datetime import date

import pytest

from dealerdesk.config.workspace_config import WorkspaceConfig
from dealerdesk.data.loader import MappingSeedSource
from dealerdesk.workspace import DealerWorkspace

TODAY = date(2024, 2, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def workspace():
    """Bundled sample data, clock pinned to 2024-02-01."""
    return DealerWorkspace(clock=lambda: TODAY)


@pytest.fixture
def strict_workspace():
    """Same data, unknown ids raise instead of being ignored."""
    return DealerWorkspace(
        config=WorkspaceConfig(missing_record_policy="report"),
        clock=lambda: TODAY,
    )


@pytest.fixture
def color_seed():
    """
    Two models, three colours: A and B belong to M1, C to M2.
    """
    return MappingSeedSource({
        "customer": [
            {"id": "CUST-001", "customer_name": "Asha Rao", "mobile_number": "9000000001"},
        ],
        "model": [
            {"id": "MODEL-001", "model_name": "M1", "variant": "LXI", "fuel_type": "Petrol"},
            {"id": "MODEL-002", "model_name": "M2", "variant": "VXI", "fuel_type": "Diesel"},
        ],
        "color": [
            {"id": "COLOR-001", "color_name": "A", "model_id": "MODEL-001", "is_available": True},
            {"id": "COLOR-002", "color_name": "B", "model_id": "MODEL-001", "is_available": True},
            {"id": "COLOR-003", "color_name": "C", "model_id": "MODEL-002", "is_available": False},
        ],
    })


@pytest.fixture
def small_workspace(color_seed):
    return DealerWorkspace(color_seed, clock=lambda: TODAY)


@pytest.fixture
def customer_values():
    return {
        "customer_name": "Priya Nair",
        "mobile_number": "9123456780",
        "email": "priya@example.com",
        "billing_address": "12 Marine Drive",
        "city": "Kochi",
        "state": "Kerala",
        "district": "Ernakulam",
        "pincode": "682001",
        "pan_number": "",
        "gst_number": "",
        "occupation": "Architect",
        "profession": "Design",
    }


@pytest.fixture
def order_values():
    return {
        "customer_id": "CUST-003",
        "enquiry_id": "none",
        "order_type": "NEW",
        "payment_type": "CASH",
        "preferred_delivery_location": "Bengaluru Showroom",
        "sale_type": "INDIVIDUAL",
        "tentative_delivery_date": "2024-03-01",
        "expected_delivery_date": "2024-03-05",
    }
