"""Stock alerts: the reorder list, the header badge poller and the add-stock action."""

import asyncio

from stocksync.auth.session import Session
from stocksync.auth.token_gate import Sleep
from stocksync.config import ALERT_POLL_INTERVAL_SECONDS
from stocksync.models.data import StockAlert
from stocksync.utils.logger import get_logger
from stocksync.views.mutations import MutationFlow, MutationOutcome
from stocksync.views.notifications import Notifier
from stocksync.views.resources import STOCK_ALERTS, Operation
from stocksync.views.state import DataView, endpoint_loader

logger = get_logger("stocksync.views.alerts")


def stock_alert_view(
    session: Session,
    notifier: Notifier | None = None,
    notify_failures: bool = True,
) -> DataView:
    """View over GET /Sales/reorder-alerts; Ready data is the list of alerts."""
    return DataView(
        name="stock_alerts",
        session=session,
        loader=endpoint_loader(STOCK_ALERTS.list_endpoint, transform=STOCK_ALERTS.list_transform),
        notifier=notifier,
        error_title="Error Fetching Alerts",
        notify_failures=notify_failures,
    )


async def add_stock(flow: MutationFlow, alert: StockAlert, quantity: int | None = None) -> MutationOutcome:
    """PATCH the product's quantity; defaults to the alert's suggested order quantity."""
    flow.open_edit(alert)
    qty = alert.suggestedOrderQty if quantity is None else quantity
    return await flow.submit(Operation.ADD_STOCK, {"quantityToAdd": qty})


class AlertPoller:
    """Refreshes the alert badge on a fixed interval and on demand.

    The only background timer in the client; ``stop()`` cancels it with the hosting view.
    """

    def __init__(
        self,
        view: DataView,
        interval: float = ALERT_POLL_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.view = view
        self.interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self.polls = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def badge_count(self) -> int:
        alerts = self.view.data
        return len(alerts) if alerts else 0

    async def _run(self) -> None:
        logger.info("alert_poller.started", interval=self.interval)
        try:
            while True:
                await self.view.refresh()
                self.polls += 1
                await self._sleep(self.interval)
        except asyncio.CancelledError:
            logger.info("alert_poller.stopped", polls=self.polls)
            raise
        except Exception:
            logger.exception("alert_poller.crashed", polls=self.polls)
            raise

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        self._task = asyncio.create_task(self._run())
        return self._task

    async def open_menu(self) -> int:
        """Opening the notification menu forces a fetch."""
        await self.view.refresh()
        return self.badge_count

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            # already logged by _run when the loop died
            logger.debug("alert_poller.stop_after_crash", error_type=type(e).__name__)
