"""Resolve the bearer credential before an authenticated call.

Right after login the token may not be written yet when a view first asks for it,
so a missing token is retried a bounded number of times with a fixed delay.
"""

import asyncio
from collections.abc import Awaitable, Callable

from stocksync.auth.token_store import CredentialStore, read_token
from stocksync.config import CREDENTIAL_MAX_RETRIES, CREDENTIAL_RETRY_DELAY
from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.auth.token_gate")

Sleep = Callable[[float], Awaitable[None]]


async def resolve_credential(
    store: CredentialStore,
    max_retries: int = CREDENTIAL_MAX_RETRIES,
    retry_delay: float = CREDENTIAL_RETRY_DELAY,
    sleep: Sleep = asyncio.sleep,
) -> str | None:
    """Return the token, or None once ``max_retries`` delayed retries found nothing.

    Performs exactly k sleeps when the token appears on retry k, and never more
    than ``max_retries`` sleeps in total.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    attempt = 0
    while True:
        token = read_token(store)
        if token is not None:
            if attempt:
                logger.debug("token_gate.resolved_after_retry", retries=attempt)
            return token
        if attempt >= max_retries:
            logger.warning("token_gate.unavailable", retries=attempt)
            return None
        attempt += 1
        logger.debug("token_gate.retry", attempt=attempt, delay=retry_delay)
        await sleep(retry_delay)
