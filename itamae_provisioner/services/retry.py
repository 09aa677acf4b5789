"""Bounded retry for the install step."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_delay,
    wait_fixed,
)

from itamae_provisioner.config.settings import DEFAULT_RETRY_SLEEP

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How long to keep retrying and how long to sleep between attempts.

    timeout and sleep are in seconds.
    """

    timeout: float
    sleep: float = DEFAULT_RETRY_SLEEP


async def retry_call(policy: RetryPolicy, func: Callable[[], Awaitable[T]]) -> T:
    """Call func until it succeeds or the policy's timeout elapses.

    Any exception triggers another attempt after policy.sleep seconds.
    Once the timeout has elapsed the last exception is re-raised.
    """
    retrying = AsyncRetrying(
        stop=stop_after_delay(policy.timeout),
        wait=wait_fixed(policy.sleep),
        retry=retry_if_exception_type(Exception),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await func()
