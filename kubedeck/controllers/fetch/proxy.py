"""API base discovery through ``kubectl proxy``.

``kubectl proxy --port=0`` picks a free port and prints
``Starting to serve on 127.0.0.1:PORT``. The first such line sets the live
API base used for ``{{BASE}}`` substitution.
"""

from __future__ import annotations

import asyncio
import logging
import re

from kubedeck.constants.timeouts import PROXY_START_TIMEOUT
from kubedeck.controllers.process.executor import ProcessExecutor, ProcessHandle

logger = logging.getLogger(__name__)

_SERVING = re.compile(r"Starting to serve on (\S+):(\d+)")


def parse_proxy_address(output: str) -> str | None:
    """Return ``http://host:port`` from proxy output, or None."""
    match = _SERVING.search(output)
    if match is None:
        return None
    host, port = match.groups()
    return f"http://{host}:{port}"


class ApiProxy:
    """Owns a background ``kubectl proxy`` process."""

    def __init__(self, executor: ProcessExecutor) -> None:
        self._executor = executor
        self._handle: ProcessHandle | None = None
        self.base_url: str | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None and not self._handle.done()

    async def start(self, timeout: float = PROXY_START_TIMEOUT) -> str | None:
        """Start the proxy and wait until it reports its address.

        Returns:
            The API base, or None when the proxy did not come up in time.
        """
        loop = asyncio.get_running_loop()
        ready: asyncio.Future[str | None] = loop.create_future()
        buffer: list[str] = []

        def on_stdout(chunk: str) -> None:
            buffer.append(chunk)
            address = parse_proxy_address("".join(buffer))
            if address and not ready.done():
                ready.set_result(address)

        def on_exit(_: str) -> None:
            if not ready.done():
                ready.set_result(None)

        self._handle = await self._executor.run_async(
            "kubectl",
            ["proxy", "--port=0"],
            on_exit=on_exit,
            on_stdout=on_stdout,
        )
        try:
            self.base_url = await asyncio.wait_for(ready, timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("kubectl proxy did not report an address within %ss", timeout)
            self.stop()
            return None
        logger.info("API proxy serving on %s", self.base_url)
        return self.base_url

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.terminate()
            self._handle = None


__all__ = [
    "ApiProxy",
    "parse_proxy_address",
]
