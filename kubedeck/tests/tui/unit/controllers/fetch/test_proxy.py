"""Tests for API base discovery."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from kubedeck.controllers.fetch.proxy import ApiProxy, parse_proxy_address


def fake_executor(output: str | None) -> tuple[MagicMock, MagicMock]:
    """Executor whose proxy process prints ``output`` right away."""
    handle = MagicMock()
    handle.done.return_value = False
    executor = MagicMock()

    async def run_async(cmd: str, args: Any, on_exit: Any = None, on_stdout: Any = None, **_: Any) -> MagicMock:
        if output is not None:
            on_stdout(output)
        return handle

    executor.run_async = run_async
    return executor, handle


class TestParseProxyAddress:
    """Tests for proxy output parsing."""

    def test_address(self) -> None:
        assert parse_proxy_address("Starting to serve on 127.0.0.1:41234\n") == "http://127.0.0.1:41234"

    def test_no_address(self) -> None:
        assert parse_proxy_address("error: unknown flag") is None


class TestApiProxy:
    """Tests for ApiProxy."""

    @pytest.mark.asyncio
    async def test_start_reports_base(self) -> None:
        """The first serving line sets the API base."""
        executor, _ = fake_executor("Starting to serve on 127.0.0.1:45678\n")
        proxy = ApiProxy(executor)

        assert await proxy.start() == "http://127.0.0.1:45678"
        assert proxy.base_url == "http://127.0.0.1:45678"
        assert proxy.running

    @pytest.mark.asyncio
    async def test_start_timeout_stops_process(self) -> None:
        """A silent proxy is stopped and no base is reported."""
        executor, handle = fake_executor(None)
        proxy = ApiProxy(executor)

        assert await proxy.start(timeout=0.01) is None
        handle.terminate.assert_called_once()
        assert not proxy.running
