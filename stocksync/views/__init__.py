"""Data views: ViewState machine, resource lists, mutations, dashboard and alerts."""

from stocksync.views.alerts import AlertPoller, add_stock, stock_alert_view
from stocksync.views.dashboard import STAT_CARDS, Dashboard, display_value
from stocksync.views.mutations import MutationFlow, MutationOutcome
from stocksync.views.notifications import Notification, Notifier
from stocksync.views.resources import (
    Operation,
    Resource,
    get_resource,
    list_resources,
    register_resource,
    resource_view,
)
from stocksync.views.state import (
    DataView,
    Loading,
    Ready,
    Unavailable,
    ViewState,
    endpoint_loader,
)

__all__ = [
    "AlertPoller",
    "Dashboard",
    "DataView",
    "Loading",
    "MutationFlow",
    "MutationOutcome",
    "Notification",
    "Notifier",
    "Operation",
    "Ready",
    "Resource",
    "STAT_CARDS",
    "Unavailable",
    "ViewState",
    "add_stock",
    "display_value",
    "endpoint_loader",
    "get_resource",
    "list_resources",
    "register_resource",
    "resource_view",
    "stock_alert_view",
]
