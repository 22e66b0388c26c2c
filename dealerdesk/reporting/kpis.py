from typing import Any, Dict

from dealerdesk.reporting.utils import count_where, records_frame


def dashboard_kpis(workspace) -> Dict[str, Any]:
    """
    Headline numbers for the dashboard:

    - total customers
    - active orders: orders without a delivered shipment
    - pending enquiries
    - available models: models with at least one available colour
    """
    customers = workspace.store("customer").list()
    orders = records_frame(workspace.store("order").list(), ["id"])
    enquiries = records_frame(workspace.store("enquiry").list(), ["status"])
    colors = records_frame(workspace.store("color").list(), ["model_id", "is_available"])
    shipping = records_frame(workspace.store("shipping").list(), ["order_id", "status"])

    delivered = set(shipping.loc[shipping["status"] == "delivered", "order_id"].dropna())
    active_orders = int((~orders["id"].isin(delivered)).sum()) if not orders.empty else 0

    available_models = 0
    if not colors.empty:
        stocked = colors.loc[colors["is_available"] == True, "model_id"]  # noqa: E712
        models = {m["id"] for m in workspace.store("model").list()}
        available_models = len(set(stocked.dropna()) & models)

    return {
        "total_customers": len(customers),
        "active_orders": active_orders,
        "pending_enquiries": count_where(enquiries, "status", "pending"),
        "available_models": available_models,
    }
