"""Publisher posting test runs to an HTTP endpoint."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass, field

import aiohttp

from log_test_parser.models.run import TestRun
from log_test_parser.publishers.base import Publisher
from log_test_parser.publishers.http.config import HttpPublisherConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HttpPublisher(Publisher):
    """Posts each test run as JSON.

    Runs are queued by ``publish`` and sent by a background task, so the
    parser never waits on the network. Queued runs are delivered before the
    publisher context exits. Failed requests are logged and not retried.
    """

    config: HttpPublisherConfig
    session: aiohttp.ClientSession = field(repr=False)
    queue: asyncio.Queue[TestRun] = field(default_factory=asyncio.Queue, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: HttpPublisherConfig
    ) -> AsyncGenerator["HttpPublisher", None]:
        """Create publisher with managed session and delivery task."""
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers={"Accept": "application/json"},
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            publisher = cls(config=config, session=session)
            worker = asyncio.create_task(publisher.deliver())
            try:
                yield publisher
                await publisher.queue.join()
            finally:
                worker.cancel()
                with suppress(asyncio.CancelledError):
                    await worker

    def publish(self, test_run: TestRun) -> None:
        """Queue the run for delivery."""
        self.queue.put_nowait(test_run)

    async def deliver(self) -> None:
        """Send queued runs until cancelled."""
        while True:
            test_run = await self.queue.get()
            try:
                await self.send(test_run)
            except Exception:
                log.exception("Failed to publish test run %d", test_run.test_run_id)
            finally:
                self.queue.task_done()

    async def send(self, test_run: TestRun) -> bool:
        """Post one run.

        Returns:
            True when the endpoint accepted the run

        """
        headers: dict[str, str] = {}
        if self.config.token is not None:
            headers["Authorization"] = (
                f"Bearer {self.config.token.get_secret_value()}"
            )

        try:
            async with self.session.post(
                self.config.endpoint,
                json=test_run.model_dump(mode="json"),
                headers=headers,
            ) as response:
                if response.status >= 400:
                    text = await response.text()
                    log.error(
                        "Failed to publish test run %d: %d %s",
                        test_run.test_run_id,
                        response.status,
                        text,
                    )
                    return False
        except (aiohttp.ClientError, TimeoutError) as e:
            log.error("Failed to publish test run %d: %s", test_run.test_run_id, e)
            return False

        log.info("Published '%s'", test_run.name)
        return True
