"""Dashboard stat cards: one DataView per headline number."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from stocksync.api import endpoints
from stocksync.api.endpoints import Endpoint
from stocksync.auth.session import Session
from stocksync.views.notifications import Notifier
from stocksync.errors import FailureKind
from stocksync.views.state import DataView, Loading, Ready, Unavailable, endpoint_loader

PLACEHOLDER = "..."
ERROR_TITLE = "API Error"
UNAVAILABLE = "N/A"


def _format_count(value: Any) -> str:
    return str(value)


def _format_revenue(value: Any) -> str:
    return f"Rs. {float(value):.2f}"


@dataclass(frozen=True)
class StatCard:
    key: str
    title: str
    endpoint: Endpoint
    extract: Callable[[Any], Any]
    fmt: Callable[[Any], str] = _format_count
    max_retries: int | None = None
    retry_delay: float | None = None


STAT_CARDS = (
    StatCard(
        key="categories",
        title="Total Categories",
        endpoint=endpoints.CATEGORY_COUNT,
        extract=lambda count: count,
        max_retries=5,
        retry_delay=1.0,
    ),
    StatCard(
        key="products",
        title="Total Products",
        endpoint=endpoints.PRODUCT_COUNT,
        extract=lambda body: body.totalProductCount,
    ),
    StatCard(
        key="users",
        title="Total Users",
        endpoint=endpoints.USER_COUNT,
        extract=lambda body: body.totalUsers,
    ),
    StatCard(
        key="stock_alerts",
        title="Stock Alerts",
        endpoint=endpoints.REORDER_ALERTS,
        extract=lambda body: body.count,
    ),
    StatCard(
        key="monthly_revenue",
        title="Monthly Revenue",
        endpoint=endpoints.MONTHLY_REVENUE,
        extract=lambda body: body.totalRevenue,
        fmt=_format_revenue,
        max_retries=0,
    ),
)


def display_value(view: DataView, fmt: Callable[[Any], str] = _format_count) -> str:
    """Placeholder while loading, N/A when unavailable, otherwise the formatted value."""
    if isinstance(view.state, Loading):
        return PLACEHOLDER
    if isinstance(view.state, Ready):
        return fmt(view.state.data)
    return UNAVAILABLE


class Dashboard:
    """All stat cards; each one runs its own independent fetch cycle."""

    def __init__(self, session: Session, notifier: Notifier | None = None, cards=STAT_CARDS):
        self.notifier = notifier or Notifier()
        self.cards = tuple(cards)
        self.views: dict[str, DataView] = {
            card.key: DataView(
                name=f"stat.{card.key}",
                session=session,
                loader=endpoint_loader(
                    card.endpoint,
                    transform=card.extract,
                    max_retries=card.max_retries,
                    retry_delay=card.retry_delay,
                ),
                notifier=self.notifier,
                error_title=ERROR_TITLE,
                notify_failures=False,
            )
            for card in self.cards
        }

    async def refresh(self) -> dict[str, str]:
        """Refresh every card, then raise one notification per distinct failure.

        A missing credential only shows as N/A; an expired session hitting all five
        cards yields a single notice.
        """
        states = await asyncio.gather(*(view.refresh() for view in self.views.values()))
        seen: set[str] = set()
        for state in states:
            if not isinstance(state, Unavailable):
                continue
            reason = state.reason
            if reason.kind is FailureKind.NO_CREDENTIAL or not reason.notifies or reason.message in seen:
                continue
            seen.add(reason.message)
            self.notifier.error(ERROR_TITLE, reason.message)
        return self.values()

    def values(self) -> dict[str, str]:
        """Card title -> display string."""
        return {card.title: display_value(self.views[card.key], card.fmt) for card in self.cards}

    async def close(self) -> None:
        for view in self.views.values():
            await view.close()
