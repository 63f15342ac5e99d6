"""ViewState machine driving every list and stat display.

States: ``Loading -> Ready(data) | Unavailable(reason)``. Each transition replaces the
displayed state wholesale; ``refresh()`` re-enters ``Loading`` from any state.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Literal

from pydantic import BaseModel

from stocksync.api.client import Success
from stocksync.api.endpoints import Endpoint
from stocksync.auth.session import Session
from stocksync.errors import Failure
from stocksync.utils.logger import get_logger, log_view_step
from stocksync.views.notifications import Notifier

logger = get_logger("stocksync.views.state")


class Loading(BaseModel):
    status: Literal["loading"] = "loading"


class Ready(BaseModel):
    status: Literal["ready"] = "ready"
    data: Any = None


class Unavailable(BaseModel):
    status: Literal["unavailable"] = "unavailable"
    reason: Failure


ViewState = Loading | Ready | Unavailable

Loader = Callable[[Session], Awaitable[Success | Failure]]


def endpoint_loader(
    endpoint: Endpoint,
    transform: Callable[[Any], Any] | None = None,
    max_retries: int | None = None,
    retry_delay: float | None = None,
) -> Loader:
    """Build a loader that GETs ``endpoint`` and optionally reshapes the parsed payload."""

    async def load(session: Session) -> Success | Failure:
        result = await session.get(endpoint, max_retries=max_retries, retry_delay=retry_delay)
        if isinstance(result, Failure) or transform is None:
            return result
        return Success(payload=transform(result.payload), status_code=result.status_code)

    return load


class DataView:
    """One mounted view: runs credential -> fetch -> transition, and tracks its state.

    Overlapping refreshes resolve last-write-wins: only the most recently started
    refresh applies its result. After ``close()`` (unmount) late results are dropped.
    """

    def __init__(
        self,
        name: str,
        session: Session,
        loader: Loader,
        notifier: Notifier | None = None,
        error_title: str = "Error",
        notify_failures: bool = True,
    ):
        self.name = name
        self.session = session
        self._loader = loader
        self.notifier = notifier or Notifier()
        self.error_title = error_title
        self.notify_failures = notify_failures
        self.state: ViewState = Loading()
        self._generation = 0
        self._closed = False
        self._task: asyncio.Task | None = None
        self._listeners: list[Callable[[ViewState], None]] = []

    @property
    def data(self) -> Any:
        """Displayed data, or None unless Ready."""
        return self.state.data if isinstance(self.state, Ready) else None

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Callable[[ViewState], None]) -> None:
        self._listeners.append(listener)

    def _transition(self, state: ViewState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)

    async def refresh(self) -> ViewState:
        """Re-enter Loading and run one full fetch cycle."""
        if self._closed:
            logger.debug("view.refresh.closed", view=self.name)
            return self.state
        self._generation += 1
        generation = self._generation
        self._transition(Loading())
        result = await self._loader(self.session)
        if self._closed:
            logger.debug("view.result.after_close", view=self.name)
            return self.state
        if generation != self._generation:
            logger.debug("view.result.superseded", view=self.name, generation=generation)
            return self.state
        if isinstance(result, Failure):
            self._transition(Unavailable(reason=result))
            log_view_step(self.name, "Unavailable", {"kind": result.kind.value})
            if self.notify_failures and result.notifies:
                self.notifier.error(self.error_title, result.message)
        else:
            self._transition(Ready(data=result.payload))
            log_view_step(self.name, "Ready")
        return self.state

    def mount(self) -> asyncio.Task:
        """Schedule the initial fetch on the running loop; ``close()`` cancels it."""
        self._task = asyncio.create_task(self.refresh())
        return self._task

    async def close(self) -> None:
        """Unmount: cancel the ``mount()`` task (credential retries included) and ignore late results.

        A ``refresh()`` awaited by someone else (a mutation, the alert poller) runs on the
        caller's task and is not cancelled here; its result is dropped when it lands.
        """
        self._closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.debug("view.mount_task.cancelled", view=self.name)
