"""Per-domain request spacing."""

import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional

import structlog

from retailcrawl.crawler.utils.normalizer import url_host


logger = structlog.get_logger(__name__)


class RequestThrottle:
    """Enforces a minimum delay between consecutive requests to one domain.

    The first request to a domain goes out immediately. Later requests wait
    until `delay_ms` has elapsed since the previous one, so time spent
    parsing a page counts towards the delay.
    """

    def __init__(
        self,
        default_delay_ms: int = 0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the throttle.

        Args:
            default_delay_ms: Delay used for domains without a custom delay
            sleep: Coroutine used to wait (injectable for tests)
            clock: Monotonic clock in seconds
        """
        self.default_delay_ms = default_delay_ms
        self._sleep = sleep
        self._clock = clock
        self._custom_delays: Dict[str, int] = {}
        self._last_request: Dict[str, float] = {}

    def set_delay(self, domain: str, delay_ms: int) -> None:
        """Set a custom delay for a domain.

        Args:
            domain: Domain name (e.g., "tesco.com")
            delay_ms: Minimum milliseconds between requests
        """
        self._custom_delays[domain.lower().removeprefix("www.")] = delay_ms

    def get_delay_ms(self, url: str) -> int:
        return self._custom_delays.get(url_host(url), self.default_delay_ms)

    async def wait(self, url: str, delay_ms: Optional[int] = None) -> float:
        """Wait until a request to the URL's domain is allowed.

        Args:
            url: URL about to be requested
            delay_ms: Override for this call

        Returns:
            Seconds actually slept
        """
        domain = url_host(url)
        delay = (self.get_delay_ms(url) if delay_ms is None else delay_ms) / 1000
        slept = 0.0

        last = self._last_request.get(domain)
        if last is not None and delay > 0:
            remaining = delay - (self._clock() - last)
            if remaining > 0:
                logger.debug("request_throttled", domain=domain, wait_seconds=round(remaining, 3))
                await self._sleep(remaining)
                slept = remaining

        self._last_request[domain] = self._clock()
        return slept

    def reset(self) -> None:
        self._last_request.clear()
