"""Integration tests for the HTTP publisher."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr
from yarl import URL

from log_test_parser.publishers.http import HttpPublisher, HttpPublisherConfig
from log_test_parser.testing.factories import TestRunFactory

API_BASE_URL = "http://publisher.test/"
TEST_RUNS_URL = f"{API_BASE_URL}test-runs"


@pytest.fixture
def config() -> HttpPublisherConfig:
    """Create test configuration."""
    return HttpPublisherConfig(
        api_base_url=API_BASE_URL,
        token=SecretStr("test-token"),
    )


@pytest.fixture
async def publisher(
    config: HttpPublisherConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[HttpPublisher, None]:
    """Create publisher with managed session."""
    async with HttpPublisher.from_config(config) as impl:
        yield impl


class TestSend:
    """Tests for send."""

    async def test_posts_run_as_json(
        self,
        publisher: HttpPublisher,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Posts the serialized run with bearer token auth."""
        aioresponses.post(TEST_RUNS_URL, status=201)

        accepted = await publisher.send(TestRunFactory.build(test_run_id=3))

        assert accepted is True
        call = aioresponses.requests[("POST", URL(TEST_RUNS_URL))][0]
        payload = call.kwargs["json"]
        assert payload["test_run_id"] == 3
        assert payload["parser_uri"] == "JestTestResultParser/1.0"
        assert payload["name"] == "Jest test run 3 - automatically inferred results"
        assert call.kwargs["headers"]["Authorization"] == "Bearer test-token"

    async def test_logs_rejected_run(
        self,
        publisher: HttpPublisher,
        aioresponses: aioresponses_cls,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Returns False and logs the response when the endpoint fails."""
        aioresponses.post(TEST_RUNS_URL, status=500, body="boom")

        with caplog.at_level(logging.ERROR):
            accepted = await publisher.send(TestRunFactory.build(test_run_id=4))

        assert accepted is False
        assert "Failed to publish test run 4: 500 boom" in caplog.text

    async def test_logs_connection_error(
        self,
        publisher: HttpPublisher,
        aioresponses: aioresponses_cls,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Returns False when the endpoint cannot be reached."""
        aioresponses.post(
            TEST_RUNS_URL, exception=aiohttp.ClientConnectionError("refused")
        )

        with caplog.at_level(logging.ERROR):
            accepted = await publisher.send(TestRunFactory.build(test_run_id=5))

        assert accepted is False
        assert "Failed to publish test run 5: refused" in caplog.text


async def test_delivers_queued_runs_before_exit(
    config: HttpPublisherConfig, aioresponses: aioresponses_cls
) -> None:
    """Sends every published run before the context exits."""
    aioresponses.post(TEST_RUNS_URL, status=201, repeat=True)

    async with HttpPublisher.from_config(config) as publisher:
        publisher.publish(TestRunFactory.build(test_run_id=1))
        publisher.publish(TestRunFactory.build(test_run_id=2))

    calls = aioresponses.requests[("POST", URL(TEST_RUNS_URL))]
    assert [c.kwargs["json"]["test_run_id"] for c in calls] == [1, 2]


async def test_omits_authorization_without_token(
    aioresponses: aioresponses_cls,
) -> None:
    """Sends no authorization header when no token is configured."""
    aioresponses.post(TEST_RUNS_URL, status=201)
    config = HttpPublisherConfig(api_base_url=API_BASE_URL)

    async with HttpPublisher.from_config(config) as publisher:
        await publisher.send(TestRunFactory.build())

    call = aioresponses.requests[("POST", URL(TEST_RUNS_URL))][0]
    assert "Authorization" not in call.kwargs["headers"]


async def test_keeps_delivering_after_unexpected_error(
    config: HttpPublisherConfig, caplog: pytest.LogCaptureFixture
) -> None:
    """Logs a run that fails unexpectedly and still delivers the next one."""

    async def publish_runs() -> None:
        async with HttpPublisher.from_config(config) as publisher:
            publisher.publish(TestRunFactory.build(test_run_id=1))
            publisher.publish(TestRunFactory.build(test_run_id=2))

    with (
        patch.object(
            HttpPublisher,
            "send",
            new_callable=AsyncMock,
            side_effect=[RuntimeError("boom"), True],
        ) as mock_send,
        caplog.at_level(logging.ERROR),
    ):
        await asyncio.wait_for(publish_runs(), timeout=5)

    assert mock_send.await_count == 2
    assert mock_send.await_args.args[0].test_run_id == 2
    assert "Failed to publish test run 1" in caplog.text
